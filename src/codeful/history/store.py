"""Chat history store keyed by chat id, with TTL eviction."""

from typing import Protocol

import structlog
from cachetools import TTLCache

from codeful.history.models import ChatMessage, ChatRecord

logger = structlog.get_logger()


class ChatStore(Protocol):
    """Persistence collaborator for chat turns."""

    def get(self, chat_id: str) -> ChatRecord | None: ...

    def get_or_create(self, chat_id: str) -> ChatRecord: ...

    def add_message(self, chat_id: str, message: ChatMessage) -> ChatRecord: ...

    def list_chats(self) -> list[ChatRecord]: ...

    def delete(self, chat_id: str) -> bool: ...

    def clear(self) -> int: ...


class InMemoryChatStore:
    """Keeps chats in memory.

    Each chat (identified by chat_id) gets its own ChatRecord. Chats are
    evicted `ttl` seconds after their last message (reads do not extend
    the TTL) or when `maxsize` is exceeded (LRU eviction).
    """

    def __init__(self, ttl: int = 86400, maxsize: int = 1000) -> None:
        self._cache: TTLCache[str, ChatRecord] = TTLCache(maxsize=maxsize, ttl=ttl)
        logger.info("chat_store_initialized", ttl=ttl, maxsize=maxsize)

    def get(self, chat_id: str) -> ChatRecord | None:
        return self._cache.get(chat_id)

    def get_or_create(self, chat_id: str) -> ChatRecord:
        """Get or create the record for a chat."""
        if chat_id not in self._cache:
            self._cache[chat_id] = ChatRecord(id=chat_id)
            logger.debug("chat_created", chat_id=chat_id)
        return self._cache[chat_id]

    def add_message(self, chat_id: str, message: ChatMessage) -> ChatRecord:
        """Append a message and bump the chat's last activity time."""
        record = self.get_or_create(chat_id)
        record.messages.append(message)
        record.last_message_at = message.timestamp
        # Reassign so the TTL restarts from this write.
        self._cache[chat_id] = record
        logger.debug(
            "chat_message_added",
            chat_id=chat_id,
            is_user=message.is_user,
            message_count=len(record.messages),
        )
        return record

    def list_chats(self) -> list[ChatRecord]:
        """All live chats, most recently active first."""
        return sorted(self._cache.values(), key=lambda r: r.last_message_at, reverse=True)

    def delete(self, chat_id: str) -> bool:
        """Remove a chat. Returns False if it did not exist."""
        if chat_id in self._cache:
            del self._cache[chat_id]
            logger.debug("chat_deleted", chat_id=chat_id)
            return True
        return False

    def clear(self) -> int:
        """Remove every chat. Returns how many were removed."""
        self._cache.expire()
        count = len(self._cache)
        self._cache.clear()
        logger.info("chats_cleared", count=count)
        return count
