"""Markdown-subset tokenizer and node types."""

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
from codeful.markdown.tokenizer import tokenize, tokenize_inline

__all__ = [
    "BlockNode",
    "Bold",
    "BoldItalic",
    "CodeBlock",
    "Header",
    "InlineCode",
    "InlineSpan",
    "Italic",
    "Paragraph",
    "PlainText",
    "Underline",
    "tokenize",
    "tokenize_inline",
]
