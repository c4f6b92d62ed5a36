"""Data models for model API responses."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel


@dataclass(slots=True)
class ChatChunk:
    """A single chunk from a streamed completion."""

    chunk_type: Literal["content", "meta"]
    text: str | None = None
    model: str | None = None
    finish_reason: str | None = None


class ParsedResponse(BaseModel):
    """A raw model response split into thinking trace and conclusion."""

    thinking_text: str = ""
    conclusion_text: str
