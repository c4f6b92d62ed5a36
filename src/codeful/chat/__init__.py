"""Chat module."""

from codeful.chat.service import ChatService, ChatTurn

__all__ = ["ChatService", "ChatTurn"]
