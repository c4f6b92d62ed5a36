"""Typewriter-style reveal of a completed conclusion.

Each step re-tokenizes and re-renders the revealed prefix from scratch,
so the last snapshot is always identical to rendering the full text.
"""

import asyncio
import math
import re
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass
from enum import Enum

import structlog

from codeful.render.document import RenderDocument, render_text

logger = structlog.get_logger()

_WORD_END_RE = re.compile(r"\S+\s*")
_LINE_END_RE = re.compile(r"[^\n]*\n?")


class RevealUnit(str, Enum):
    """How far one reveal step advances."""

    CHARACTER = "character"
    WORD = "word"
    LINE = "line"


@dataclass(slots=True)
class RevealState:
    """Progress of one reveal. ``revealed`` only ever grows."""

    full_text: str
    revealed: int = 0

    @property
    def done(self) -> bool:
        return self.revealed >= len(self.full_text)


def step_boundaries(text: str, unit: RevealUnit) -> list[int]:
    """Prefix lengths at which a snapshot is emitted, ending at len(text)."""
    if not text:
        return [0]
    if unit is RevealUnit.CHARACTER:
        return list(range(1, len(text) + 1))

    pattern = _WORD_END_RE if unit is RevealUnit.WORD else _LINE_END_RE
    boundaries = [m.end() for m in pattern.finditer(text) if m.end() > m.start()]
    # Whitespace-only text has no word matches.
    if not boundaries or boundaries[-1] != len(text):
        boundaries.append(len(text))
    return boundaries


class RevealController:
    """Drives the reveal of one conclusion for one chat turn.

    The caller consumes ``steps()`` (synchronous) or ``stream()`` (async,
    paced by ``step_delay``) and may stop at any point, either by
    abandoning the iterator or by calling ``cancel()``.
    """

    def __init__(
        self,
        full_text: str,
        step_delay: float = 0.0,
        unit: RevealUnit | str = RevealUnit.CHARACTER,
    ) -> None:
        if step_delay < 0 or not math.isfinite(step_delay):
            raise ValueError(f"step_delay must be a finite number >= 0, got {step_delay}")
        self._state = RevealState(full_text=full_text or "")
        self._step_delay = step_delay
        self._unit = RevealUnit(unit)
        self._cancelled = False

    @property
    def state(self) -> RevealState:
        return self._state

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop emitting snapshots after the current one."""
        if not self._cancelled:
            self._cancelled = True
            logger.debug(
                "reveal_cancelled",
                revealed=self._state.revealed,
                total=len(self._state.full_text),
            )

    def steps(self) -> Iterator[RenderDocument]:
        """Yield one snapshot per step, ending with the full render."""
        text = self._state.full_text
        logger.debug("reveal_started", length=len(text), unit=self._unit.value)

        for boundary in step_boundaries(text, self._unit):
            if self._cancelled:
                return
            if boundary < self._state.revealed:
                continue
            self._state.revealed = boundary
            yield render_text(text[:boundary])

        logger.debug("reveal_complete", length=len(text))

    async def stream(self) -> AsyncIterator[RenderDocument]:
        """Async variant of steps(), sleeping step_delay between snapshots."""
        for snapshot in self.steps():
            yield snapshot
            if self._step_delay and not self._state.done:
                await asyncio.sleep(self._step_delay)


def start_reveal(
    full_text: str,
    step_delay: float = 0.0,
    unit: RevealUnit | str = RevealUnit.CHARACTER,
) -> AsyncIterator[RenderDocument]:
    """Start a reveal on a fresh controller and return its snapshot stream."""
    return RevealController(full_text, step_delay=step_delay, unit=unit).stream()
