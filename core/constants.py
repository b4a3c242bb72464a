"""Application constants and configuration values."""

from typing import Final

# Stream framing: every record is "<tag><separator><json>\n"
STREAM_CHANNEL_TAG: Final[str] = "0"
STREAM_RECORD_SEPARATOR: Final[str] = ":"
STREAM_RECORD_PREFIX: Final[str] = f"{STREAM_CHANNEL_TAG}{STREAM_RECORD_SEPARATOR}"

# Response header advertising the framing version
STREAM_PROTOCOL_HEADER: Final[str] = "X-Vercel-AI-Data-Stream"
STREAM_PROTOCOL_VERSION: Final[str] = "v1"
STREAM_MEDIA_TYPE: Final[str] = "text/plain; charset=utf-8"

DEFAULT_STREAM_QUEUE_SIZE: Final[int] = 64

# Provider defaults
DEFAULT_MODELS: Final[dict[str, str]] = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}
DEFAULT_API_BASE_URLS: Final[dict[str, str]] = {
    "gemini": "https://generativelanguage.googleapis.com/v1beta",
    "openai": "https://api.openai.com/v1",
}

# User-facing messages
PIPELINE_ERROR_MESSAGE: Final[str] = "An error occurred during research analysis."
TRANSPORT_ERROR_MESSAGE: Final[str] = (
    "Failed to process your request. Please try again."
)
ERROR_GLYPH: Final[str] = "❌"

# Status messages emitted while the pipeline runs
STATUS_DOCUMENTS_START: Final[str] = (
    "📄 Document Analyzer: Analyzing {count} uploaded file(s)..."
)
STATUS_DOCUMENTS_DONE: Final[str] = (
    "✅ Document Analyzer: Extracted insights from {count} file(s)"
)
STATUS_DOCUMENTS_FAILED: Final[str] = (
    "⚠️ Document Analyzer: Could not analyze some files, "
    "continuing with web research..."
)
STATUS_RESEARCH_START: Final[str] = (
    "🔍 Researcher Agent: Searching for research papers and articles..."
)
STATUS_RESEARCH_DONE: Final[str] = "✅ Researcher: Found {count} sources"
STATUS_REVIEW_START: Final[str] = (
    "🧐 Reviewer Agent: Analyzing research quality and gaps..."
)
STATUS_REVIEW_DONE: Final[str] = "✅ Reviewer: Analysis complete"
STATUS_SYNTHESIS_START: Final[str] = "🎨 Synthesizer Agent: Creating final report..."

DOCUMENT_ANALYSIS_PLACEHOLDER: Final[str] = (
    "Note: {count} file(s) were uploaded but could not be fully analyzed. "
    "Error: {error}"
)
