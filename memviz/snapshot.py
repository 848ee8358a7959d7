"""Snapshot builder — the single construction path for Steps."""

from __future__ import annotations

from collections.abc import Iterable

from .memory import MemoryState
from .step_types import Step


def build_step(
    highlighted_lines: Iterable[int], description: str, state: MemoryState
) -> Step:
    snap = state.snapshot()
    return Step(
        highlighted_lines=tuple(highlighted_lines),
        description=description,
        stack=snap.stack,
        heap=snap.heap,
        accumulated_output=snap.output,
    )
