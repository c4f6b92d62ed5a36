"""Rendering of tokenized conclusions for the view layer."""

from codeful.render.code_block import (
    CodeBlockPresentation,
    CodeBlockPresenter,
    CopyResult,
    present,
)
from codeful.render.document import (
    CodeUnit,
    RenderDocument,
    StyledRun,
    TextUnit,
    render,
    render_text,
)
from codeful.render.reveal import RevealController, RevealState, RevealUnit, start_reveal

__all__ = [
    "CodeBlockPresentation",
    "CodeBlockPresenter",
    "CodeUnit",
    "CopyResult",
    "RenderDocument",
    "RevealController",
    "RevealState",
    "RevealUnit",
    "StyledRun",
    "TextUnit",
    "present",
    "render",
    "render_text",
    "start_reveal",
]
