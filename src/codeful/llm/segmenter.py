"""Split raw model output into thinking trace and conclusion."""

import structlog

from codeful.llm.models import ParsedResponse

logger = structlog.get_logger()

OPEN_TAG = "<think>"
CLOSE_TAG = "</think>"
NO_CONCLUSION = "No conclusion provided"


def segment(
    raw: str | None,
    open_tag: str = OPEN_TAG,
    close_tag: str = CLOSE_TAG,
) -> ParsedResponse:
    """Separate the thinking segment from the conclusion.

    Uses the first opening tag and the first closing tag after it. The
    conclusion is the text after the closing tag, or the text before the
    opening tag when nothing follows. Without a well-formed tag pair the
    whole response is the conclusion. The conclusion is never empty.

    Args:
        raw: Raw model output. None is treated as an empty string.
        open_tag: Tag that opens the thinking segment.
        close_tag: Tag that closes the thinking segment.

    Returns:
        ParsedResponse with trimmed thinking and conclusion text.
    """
    raw = raw or ""

    start = raw.find(open_tag)
    end = raw.find(close_tag, start + len(open_tag)) if start != -1 else -1

    if start == -1 or end == -1:
        if start != -1 or close_tag in raw:
            logger.debug("segment_unbalanced_tags", length=len(raw))
        return ParsedResponse(conclusion_text=raw.strip() or NO_CONCLUSION)

    thinking = raw[start + len(open_tag):end].strip()
    conclusion = raw[end + len(close_tag):].strip()
    if not conclusion:
        conclusion = raw[:start].strip() or NO_CONCLUSION

    return ParsedResponse(thinking_text=thinking, conclusion_text=conclusion)
