"""Render block nodes into a view-agnostic document model."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from codeful.markdown.nodes import BlockNode, CodeBlock, Header, InlineSpan, Paragraph
from codeful.markdown.tokenizer import tokenize
from codeful.render.code_block import CodeToken, present

PLACEHOLDER_TEXT = "No content"


class StyledRun(BaseModel):
    """A run of text with one style. Line breaks are their own runs."""

    model_config = ConfigDict(frozen=True)

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    code: bool = False
    line_break: bool = False


class TextUnit(BaseModel):
    """A paragraph or header. ``header_level`` is None for paragraphs."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    header_level: int | None = None
    placeholder: bool = False
    runs: list[StyledRun] = Field(default_factory=list)


class CodeUnit(BaseModel):
    """A fenced code block with its label, copy text and highlight tokens."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    language: str
    label: str
    display_text: str
    copy_text: str
    tokens: list[CodeToken] = Field(default_factory=list)


RenderUnit = Annotated[TextUnit | CodeUnit, Field(discriminator="kind")]


class RenderDocument(BaseModel):
    """Ordered render units; the only structure the view layer consumes."""

    model_config = ConfigDict(frozen=True)

    blocks: list[RenderUnit] = Field(default_factory=list)


_STYLE_FLAGS: dict[str, dict[str, bool]] = {
    "plain": {},
    "bold": {"bold": True},
    "italic": {"italic": True},
    "bold_italic": {"bold": True, "italic": True},
    "underline": {"underline": True},
    "code": {"code": True},
}


def _runs(spans: list[InlineSpan]) -> list[StyledRun]:
    runs: list[StyledRun] = []
    for span in spans:
        flags = _STYLE_FLAGS[span.style]
        for i, part in enumerate(span.text.split("\n")):
            if i:
                runs.append(StyledRun(text="\n", line_break=True))
            if part:
                runs.append(StyledRun(text=part, **flags))
    return runs


def _render_block(block: BlockNode) -> TextUnit | CodeUnit:
    if isinstance(block, CodeBlock):
        presentation = present(block)
        return CodeUnit(
            language=presentation.language,
            label=presentation.language_label,
            display_text=presentation.copy_text,
            copy_text=presentation.copy_text,
            tokens=presentation.tokens,
        )
    if isinstance(block, Header):
        return TextUnit(header_level=block.level, runs=_runs(block.spans))
    if isinstance(block, Paragraph):
        return TextUnit(runs=_runs(block.spans))
    raise TypeError(f"Unsupported block node: {type(block).__name__}")


def render(blocks: list[BlockNode]) -> RenderDocument:
    """Render tokenized blocks into a RenderDocument.

    An empty block list renders as a single placeholder text unit, so the
    view always has something to show.
    """
    if not blocks:
        return RenderDocument(
            blocks=[TextUnit(placeholder=True, runs=[StyledRun(text=PLACEHOLDER_TEXT)])]
        )
    return RenderDocument(blocks=[_render_block(block) for block in blocks])


def render_text(text: str) -> RenderDocument:
    """Tokenize and render conclusion text in one call."""
    return render(tokenize(text))
