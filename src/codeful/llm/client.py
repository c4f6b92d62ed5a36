"""Client for the Groq OpenAI-compatible chat completions API."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import structlog
from openai import AsyncOpenAI

from codeful.config import Settings
from codeful.llm.models import ChatChunk
from codeful.llm.prompts import NO_RESPONSE, SYSTEM_PROMPT

logger = structlog.get_logger()


class ChatClient:
    """Async client that sends one prompt and returns the raw model text.

    The raw text still contains the model's <think> section; splitting it
    is the segmenter's job. Errors from the API propagate to the caller.
    """

    def __init__(self, settings: Settings) -> None:
        self._client = AsyncOpenAI(
            base_url=settings.groq_api_url,
            api_key=settings.groq_api_key,
            timeout=settings.request_timeout,
            default_headers={"User-Agent": "Codeful/1.0"},
        )
        self._model = settings.model_name
        self._max_tokens = settings.max_tokens
        self._temperature = settings.temperature
        self._stream = settings.stream_responses

    def _build_messages(self, prompt: str) -> list[dict]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]

    async def send_prompt(self, prompt: str, stream: bool | None = None) -> str:
        """Send a prompt and return the complete raw response text.

        Args:
            prompt: The user's message.
            stream: Override Settings.stream_responses for this call.

        Returns:
            Raw model output, or "No response received" when empty.
        """
        stream = self._stream if stream is None else stream

        logger.info(
            "llm_request_start",
            model=self._model,
            prompt_length=len(prompt),
            stream=stream,
        )

        try:
            if stream:
                text = await self._send_streaming(prompt)
            else:
                text = await self._send_non_streaming(prompt)
        except Exception:
            logger.error("llm_request_error", model=self._model)
            raise

        return text or NO_RESPONSE

    async def stream_prompt(self, prompt: str) -> AsyncGenerator[ChatChunk, None]:
        """Stream the response as individual chunks.

        The caller is responsible for accumulating text.
        """
        logger.info("llm_stream_start", model=self._model, prompt_length=len(prompt))

        model_emitted = False
        chunk_count = 0

        stream = await self._client.chat.completions.create(
            model=self._model,
            messages=self._build_messages(prompt),
            max_tokens=self._max_tokens,
            temperature=self._temperature,
            stream=True,
        )

        async for chunk in stream:
            chunk_count += 1
            chunk_model = chunk.model if chunk.model else None

            if chunk_model and not model_emitted:
                yield ChatChunk(chunk_type="meta", model=chunk_model)
                model_emitted = True

            for choice in chunk.choices:
                if choice.delta.content:
                    yield ChatChunk(chunk_type="content", text=choice.delta.content)

                if choice.finish_reason:
                    yield ChatChunk(chunk_type="meta", finish_reason=choice.finish_reason)

        logger.info(
            "llm_stream_complete",
            model=self._model,
            total_chunks_received=chunk_count,
        )

    async def _send_streaming(self, prompt: str) -> str:
        """Execute a streaming request and buffer the content deltas."""
        content_parts: list[str] = []
        finish_reason = None

        async for chunk in self.stream_prompt(prompt):
            if chunk.chunk_type == "content" and chunk.text:
                content_parts.append(chunk.text)
            elif chunk.finish_reason:
                finish_reason = chunk.finish_reason

        logger.info(
            "llm_request_complete",
            model=self._model,
            response_length=sum(len(p) for p in content_parts),
            finish_reason=finish_reason,
        )
        return "".join(content_parts)

    async def _send_non_streaming(self, prompt: str) -> str:
        """Execute a single non-streaming request."""
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=self._build_messages(prompt),
            max_tokens=self._max_tokens,
            temperature=self._temperature,
            stream=False,
        )

        if not response.choices:
            logger.warning("llm_response_without_choices", model=response.model)
            return ""

        choice = response.choices[0]
        content = choice.message.content or ""

        logger.info(
            "llm_request_complete",
            model=response.model,
            response_length=len(content),
            finish_reason=choice.finish_reason,
        )
        return content

    async def close(self) -> None:
        await self._client.close()
