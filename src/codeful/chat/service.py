"""Chat turn orchestration: send, segment, record, render."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel

from codeful.config import Settings
from codeful.history.models import ChatMessage
from codeful.history.store import ChatStore
from codeful.llm.models import ParsedResponse
from codeful.llm.segmenter import segment
from codeful.markdown.nodes import CodeBlock
from codeful.markdown.tokenizer import tokenize
from codeful.render.code_block import CodeBlockPresenter, CopyResult
from codeful.render.document import RenderDocument, render

if TYPE_CHECKING:
    from codeful.llm.client import ChatClient

logger = structlog.get_logger()


class ChatTurn(BaseModel):
    """Result of one send: the parsed response and its rendered document."""

    chat_id: str
    prompt: str
    message_id: str
    response: ParsedResponse
    document: RenderDocument


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


class ChatService:
    """Runs chat turns against the model and records them in the store.

    With no client configured the service runs in echo mode and answers
    every prompt with the prompt itself.
    """

    def __init__(
        self,
        settings: Settings,
        store: ChatStore,
        client: ChatClient | None = None,
        presenter: CodeBlockPresenter | None = None,
    ) -> None:
        self._settings = settings
        self._store = store
        self._client = client
        self._presenter = presenter or CodeBlockPresenter()

    @property
    def echo_mode(self) -> bool:
        return self._client is None

    async def send(self, chat_id: str, prompt: str) -> ChatTurn:
        """Send a prompt for a chat and return the rendered turn.

        Client failures do not raise; the error message becomes the raw
        response and goes through the same segmentation and rendering.
        """
        prompt = _capitalize_first(prompt.strip())
        question = ChatMessage(content=prompt, is_user=True)
        self._store.add_message(chat_id, question)

        logger.info(
            "chat_send_start",
            chat_id=chat_id,
            prompt_length=len(prompt),
            echo_mode=self.echo_mode,
        )

        if self._client is None:
            raw = prompt
        else:
            try:
                raw = await self._client.send_prompt(prompt)
            except Exception as e:
                logger.error("chat_send_failed", chat_id=chat_id, error=str(e))
                raw = f"Error: {e}"

        response = segment(
            raw,
            open_tag=self._settings.think_open_tag,
            close_tag=self._settings.think_close_tag,
        )

        reply = ChatMessage(
            content=response.conclusion_text,
            is_user=False,
            thinking_process=response.thinking_text or None,
        )
        if self._store.get(chat_id) is None:
            # Expired while waiting on the model; keep the turn whole.
            logger.warning("chat_expired_during_send", chat_id=chat_id)
            self._store.add_message(chat_id, question)
        self._store.add_message(chat_id, reply)

        logger.info(
            "chat_send_complete",
            chat_id=chat_id,
            has_thinking=bool(response.thinking_text),
            conclusion_length=len(response.conclusion_text),
        )

        return ChatTurn(
            chat_id=chat_id,
            prompt=prompt,
            message_id=reply.id,
            response=response,
            document=render(tokenize(response.conclusion_text)),
        )

    def copy_code(self, chat_id: str, message_id: str, index: int) -> CopyResult | None:
        """Copy the index-th code block of a stored message to the clipboard.

        Returns:
            CopyResult, or None if the chat, message or code block is missing.
        """
        record = self._store.get(chat_id)
        message = record.find_message(message_id) if record else None
        if message is None:
            return None

        code_blocks = [b for b in tokenize(message.content) if isinstance(b, CodeBlock)]
        if not 0 <= index < len(code_blocks):
            return None

        return self._presenter.copy(self._presenter.present(code_blocks[index]))
