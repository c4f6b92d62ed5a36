"""Tokenize the markdown subset used in model conclusions.

Block level is a single line-oriented pass: fenced code blocks, ATX
headers (``#`` to ``######``) and paragraphs separated by blank lines.
Inline level recognises code, bold-italic, bold, italic and underline
spans. Neither level raises on malformed input: an unclosed fence is
closed at end of input and unmatched emphasis delimiters stay literal,
so any prefix of a document tokenizes cleanly.
"""

import re
from bisect import bisect_left
from dataclasses import dataclass

from codeful.markdown.nodes import (
    BlockNode,
    Bold,
    BoldItalic,
    CodeBlock,
    Header,
    InlineCode,
    InlineSpan,
    Italic,
    Paragraph,
    PlainText,
    Underline,
)

FENCE = "```"

_HEADER_RE = re.compile(r"^(#{1,6})(?:\s+(.*))?$")
_OPENER_RE = re.compile(r"[`*_<]")


@dataclass(frozen=True, slots=True)
class _InlineRule:
    """One inline construct.

    ``emphasis`` content may not begin with the delimiter character or
    with whitespace, and may not end with whitespace. ``word_bounded``
    constructs are not recognised inside words. ``verbatim`` content ends
    at the first closer, so it can never contain one.
    """

    opener: str
    closer: str
    span: type[InlineSpan]
    emphasis: bool = False
    word_bounded: bool = False
    verbatim: bool = False


# Order is the tie-break when two constructs start at the same position.
_RULES: tuple[_InlineRule, ...] = (
    _InlineRule("`", "`", InlineCode, verbatim=True),
    _InlineRule("***", "***", BoldItalic, emphasis=True),
    _InlineRule("___", "___", BoldItalic, emphasis=True, word_bounded=True),
    _InlineRule("**", "**", Bold, emphasis=True),
    _InlineRule("__", "__", Bold, emphasis=True, word_bounded=True),
    _InlineRule("*", "*", Italic, emphasis=True),
    _InlineRule("_", "_", Italic, emphasis=True, word_bounded=True),
    _InlineRule("<u>", "</u>", Underline),
)


def _is_word(char: str) -> bool:
    return char.isalnum() or char == "_"


def _closer_positions(text: str, rule: _InlineRule) -> list[int]:
    """Ascending start offsets where ``rule`` may close.

    Whether a closer is usable depends only on its own surroundings, so
    the table is built once per text and shared by every opener.
    """
    positions: list[int] = []
    end = len(rule.closer)
    at = text.find(rule.closer)
    while at != -1:
        usable = True
        if rule.emphasis and (at == 0 or text[at - 1].isspace()):
            usable = False
        if rule.word_bounded and at + end < len(text) and _is_word(text[at + end]):
            usable = False
        if usable:
            positions.append(at)
        at = text.find(rule.closer, at + 1)
    return positions


class _InlineScanner:
    """Left-to-right inline scan with per-rule closer tables.

    Each opener costs a binary search instead of a rescan of the rest of
    the line, so a paragraph full of stray delimiters stays cheap.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.closers = [_closer_positions(text, rule) for rule in _RULES]
        self.newlines = [m.start() for m in re.finditer("\n", text)]

    def match_at(self, pos: int) -> tuple[_InlineRule, int] | None:
        for rule, closers in zip(_RULES, self.closers):
            close = self._close_for(rule, closers, pos)
            if close is not None:
                return rule, close
        return None

    def _close_for(self, rule: _InlineRule, closers: list[int], pos: int) -> int | None:
        text = self.text
        if not text.startswith(rule.opener, pos):
            return None
        start = pos + len(rule.opener)
        if start >= len(text):
            return None
        if rule.emphasis and (text[start].isspace() or text[start] == rule.opener[0]):
            return None
        if rule.word_bounded and pos > 0 and _is_word(text[pos - 1]):
            return None

        i = bisect_left(closers, start if rule.verbatim else start + 1)
        if i == len(closers) or closers[i] == start:
            return None
        close = closers[i]

        # Spans never cross a line break.
        j = bisect_left(self.newlines, start)
        if j < len(self.newlines) and self.newlines[j] < close:
            return None
        return close


def tokenize_inline(text: str) -> list[InlineSpan]:
    """Split a block's text into non-overlapping inline spans.

    Matching is leftmost-first; once a construct is consumed its inner
    text is not scanned again. Text between matches becomes PlainText.

    Args:
        text: Paragraph or header text, possibly containing ``\\n``.

    Returns:
        Ordered spans covering ``text``. Empty text gives an empty list.
    """
    spans: list[InlineSpan] = []
    if not text:
        return spans

    scanner = _InlineScanner(text)
    plain_start = 0
    candidate = _OPENER_RE.search(text)
    while candidate:
        pos = candidate.start()
        matched = scanner.match_at(pos)
        if matched is None:
            candidate = _OPENER_RE.search(text, pos + 1)
            continue

        rule, close = matched
        if pos > plain_start:
            spans.append(PlainText(text[plain_start:pos]))
        spans.append(rule.span(text[pos + len(rule.opener):close]))
        plain_start = close + len(rule.closer)
        candidate = _OPENER_RE.search(text, plain_start)

    if plain_start < len(text):
        spans.append(PlainText(text[plain_start:]))
    return spans


def tokenize(text: str) -> list[BlockNode]:
    """Convert conclusion text into an ordered list of block nodes.

    Args:
        text: Markdown-subset text. ``\\r\\n`` and ``\\r`` count as newlines.

    Returns:
        Paragraph, Header and CodeBlock nodes in document order.
    """
    if not text:
        return []

    blocks: list[BlockNode] = []
    paragraph: list[str] = []
    code_lines: list[str] = []
    language = ""
    in_code = False

    def flush_paragraph() -> None:
        if paragraph:
            blocks.append(Paragraph(tokenize_inline("\n".join(paragraph))))
            paragraph.clear()

    for line in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        stripped = line.strip()

        if stripped.startswith(FENCE):
            if in_code:
                blocks.append(CodeBlock(language, list(code_lines)))
                code_lines.clear()
                in_code = False
            else:
                flush_paragraph()
                language = stripped.lstrip("`").strip()
                in_code = True
            continue

        if in_code:
            code_lines.append(line)
            continue

        if not stripped:
            flush_paragraph()
            continue

        header = _HEADER_RE.match(stripped)
        if header:
            flush_paragraph()
            blocks.append(
                Header(len(header.group(1)), tokenize_inline((header.group(2) or "").strip()))
            )
            continue

        paragraph.append(line)

    if in_code:
        blocks.append(CodeBlock(language, list(code_lines)))
    flush_paragraph()

    return blocks
