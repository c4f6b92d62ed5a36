"""Chat history models and store."""

from codeful.history.models import ChatMessage, ChatRecord
from codeful.history.store import ChatStore, InMemoryChatStore

__all__ = ["ChatMessage", "ChatRecord", "ChatStore", "InMemoryChatStore"]
