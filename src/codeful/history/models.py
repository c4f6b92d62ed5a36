"""Chat history records."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, computed_field

NEW_CHAT_TITLE = "New Chat"
_TITLE_PREVIEW_LENGTH = 30


def _truncate(text: str, max_length: int) -> str:
    if not text.strip() or len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ChatMessage(BaseModel):
    """One message of a chat. AI messages store the conclusion as content."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    content: str = ""
    is_user: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    thinking_process: str | None = None


class ChatRecord(BaseModel):
    """A chat and its messages in send order."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str = NEW_CHAT_TITLE
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    last_message_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def display_title(self) -> str:
        """Title shown in the chat list; untitled chats use the first prompt."""
        if self.title.strip() and self.title != NEW_CHAT_TITLE:
            return self.title
        if self.messages and self.messages[0].is_user:
            return _truncate(self.messages[0].content, _TITLE_PREVIEW_LENGTH)
        return NEW_CHAT_TITLE

    def find_message(self, message_id: str) -> ChatMessage | None:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None
