"""Block and inline node types produced by the markdown tokenizer."""

from dataclasses import dataclass, field
from typing import ClassVar, Literal, Union

SpanStyle = Literal["plain", "bold", "italic", "bold_italic", "underline", "code"]


@dataclass(frozen=True, slots=True)
class InlineSpan:
    """A run of inline text sharing one formatting treatment."""

    text: str
    style: ClassVar[SpanStyle] = "plain"


@dataclass(frozen=True, slots=True)
class PlainText(InlineSpan):
    style: ClassVar[SpanStyle] = "plain"


@dataclass(frozen=True, slots=True)
class Bold(InlineSpan):
    style: ClassVar[SpanStyle] = "bold"


@dataclass(frozen=True, slots=True)
class Italic(InlineSpan):
    style: ClassVar[SpanStyle] = "italic"


@dataclass(frozen=True, slots=True)
class BoldItalic(InlineSpan):
    style: ClassVar[SpanStyle] = "bold_italic"


@dataclass(frozen=True, slots=True)
class Underline(InlineSpan):
    style: ClassVar[SpanStyle] = "underline"


@dataclass(frozen=True, slots=True)
class InlineCode(InlineSpan):
    style: ClassVar[SpanStyle] = "code"


@dataclass(frozen=True, slots=True)
class Paragraph:
    """A run of consecutive non-blank lines."""

    spans: list[InlineSpan] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Header:
    """An ATX header, level 1 (largest) to 6."""

    level: int
    spans: list[InlineSpan] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """A fenced code block. ``raw_lines`` are kept exactly as written."""

    language: str
    raw_lines: list[str] = field(default_factory=list)


BlockNode = Union[Paragraph, Header, CodeBlock]
