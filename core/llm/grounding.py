"""Source URL extraction from grounding metadata."""

from core.log import get_logger
from core.models.external.gemini import GroundingMetadata

logger = get_logger(__name__)


def extract_source_urls(metadata: GroundingMetadata | None) -> list[str]:
    """Collect the URLs referenced by grounding supports.

    Every chunk index of every support is resolved in order; indices that
    point outside the chunk list and chunks without a web URI are skipped.
    The result holds each URL once, in first-seen order.

    Args:
        metadata: Grounding metadata from a search-augmented response

    Returns:
        Deduplicated list of source URLs
    """
    if metadata is None:
        return []

    chunks = metadata.grounding_chunks
    sources: list[str] = []
    for support in metadata.grounding_supports:
        for index in support.grounding_chunk_indices:
            if index < 0 or index >= len(chunks):
                logger.debug(f"Ignoring grounding chunk index {index} out of range")
                continue
            web = chunks[index].web
            if web and web.uri:
                sources.append(web.uri)

    return list(dict.fromkeys(sources))
