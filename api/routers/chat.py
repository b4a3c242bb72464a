"""Research chat router."""

from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from api.dependencies import get_stream_service
from api.literals import (
    API_PREFIX,
    CHAT_ENDPOINT,
    CONTENT_TYPE_STREAM,
    STREAMING_RESPONSE_HEADERS,
)
from api.utils.error_handler import handle_async_api_operation
from core.log import get_logger
from core.models import ChatRequest, ResearchSubmission
from core.services.stream_service import StreamService

logger = get_logger(__name__)

router = APIRouter(prefix=API_PREFIX, tags=["chat"])


@router.post(CHAT_ENDPOINT)
async def chat(
    chat_request: ChatRequest,
    stream_service: StreamService = Depends(get_stream_service),
) -> StreamingResponse:
    """Run the research agents on the latest message and stream the report.

    Args:
        chat_request: Conversation so far; only the last message is used

    Returns:
        Framed record stream with status updates, report text and a
        terminal finish or error record

    Raises:
        HTTPException: If the latest message has no topic
    """

    async def build_submission() -> ResearchSubmission:
        return ResearchSubmission.from_chat_request(chat_request)

    submission = await handle_async_api_operation(
        build_submission, error_message="Invalid research request"
    )
    logger.info(
        f"Research request: topic={submission.topic!r}, files={len(submission.files)}"
    )

    async def generate_stream() -> AsyncGenerator[str, None]:
        async for line in stream_service.stream_research(submission):
            yield line

    return StreamingResponse(
        generate_stream(),
        media_type=CONTENT_TYPE_STREAM,
        headers=STREAMING_RESPONSE_HEADERS,
    )
