"""Presentation and clipboard copy for fenced code blocks."""

from collections.abc import Callable

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from codeful.markdown.nodes import CodeBlock

logger = structlog.get_logger()

DEFAULT_LANGUAGE = "code"

ClipboardWriter = Callable[[str], None]


class CodeToken(BaseModel):
    """A highlighted slice of code, typed with a pygments token name."""

    model_config = ConfigDict(frozen=True)

    text: str
    token_type: str


class CodeBlockPresentation(BaseModel):
    """Language label, verbatim copy text and highlight tokens for one code block."""

    language: str
    language_label: str
    copy_text: str
    tokens: list[CodeToken] = Field(default_factory=list)


class CopyResult(BaseModel):
    """Outcome of a copy action, shown to the user as transient feedback."""

    ok: bool
    error: str | None = None


def _lexer_for(language: str) -> Lexer:
    # Lexers must keep surrounding newlines so tokens join back to the raw text.
    options = {"stripnl": False, "ensurenl": False}
    if language and language != DEFAULT_LANGUAGE:
        try:
            return get_lexer_by_name(language, **options)
        except ClassNotFound:
            logger.debug("code_lexer_not_found", language=language)
    return TextLexer(**options)


def highlight_tokens(code: str, language: str) -> list[CodeToken]:
    """Split code into typed tokens for syntax colouring.

    Adjacent tokens of the same type are merged. Unknown or missing
    languages fall back to a single plain text token. The token texts
    always concatenate back to ``code``.
    """
    tokens: list[CodeToken] = []
    for token_type, value in lex(code, _lexer_for(language)):
        if not value:
            continue
        name = str(token_type)
        if tokens and tokens[-1].token_type == name:
            tokens[-1] = CodeToken(text=tokens[-1].text + value, token_type=name)
        else:
            tokens.append(CodeToken(text=value, token_type=name))
    return tokens


def present(node: CodeBlock) -> CodeBlockPresentation:
    """Build the presentation unit for a code block.

    The copy text is the raw fenced content joined with newlines; the
    highlight tokens are derived from it and never alter it.
    """
    language = node.language or DEFAULT_LANGUAGE
    copy_text = "\n".join(node.raw_lines)
    return CodeBlockPresentation(
        language=language,
        language_label=language.upper(),
        copy_text=copy_text,
        tokens=highlight_tokens(copy_text, language),
    )


def system_clipboard(text: str) -> None:
    """Write text to the OS clipboard."""
    import pyperclip

    pyperclip.copy(text)


class CodeBlockPresenter:
    """Presents code blocks and performs copy actions."""

    def __init__(self, clipboard: ClipboardWriter | None = None) -> None:
        self._clipboard = clipboard or system_clipboard

    def present(self, node: CodeBlock) -> CodeBlockPresentation:
        return present(node)

    def copy(self, presentation: CodeBlockPresentation) -> CopyResult:
        """Place the copy text on the clipboard.

        Returns:
            CopyResult with ok=False and the error message on failure.
        """
        try:
            self._clipboard(presentation.copy_text)
        except Exception as e:
            logger.warning(
                "clipboard_copy_failed",
                language=presentation.language,
                error=str(e),
            )
            return CopyResult(ok=False, error=str(e) or type(e).__name__)

        logger.debug(
            "clipboard_copy_complete",
            language=presentation.language,
            length=len(presentation.copy_text),
        )
        return CopyResult(ok=True)
