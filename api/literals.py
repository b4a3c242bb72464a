"""API-related constants and literals."""

from core.constants import (
    STREAM_MEDIA_TYPE,
    STREAM_PROTOCOL_HEADER,
    STREAM_PROTOCOL_VERSION,
)

# HTTP Headers
STREAMING_RESPONSE_HEADERS = {
    STREAM_PROTOCOL_HEADER: STREAM_PROTOCOL_VERSION,
    "Cache-Control": "no-cache",
}

# Content Types
CONTENT_TYPE_STREAM = STREAM_MEDIA_TYPE

# API Endpoints
API_PREFIX = "/api"
CHAT_ENDPOINT = "/chat"
API_V1_PREFIX = "/v1"
CONFIG_BASE_PATH = f"{API_V1_PREFIX}/config"
CONFIG_MODEL_ENDPOINT = "/model"
HEALTH_ENDPOINT = "/health"
