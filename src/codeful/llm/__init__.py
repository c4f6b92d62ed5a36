"""Model API client and response segmentation."""

from codeful.llm.client import ChatClient
from codeful.llm.models import ChatChunk, ParsedResponse
from codeful.llm.segmenter import segment

__all__ = ["ChatClient", "ChatChunk", "ParsedResponse", "segment"]
