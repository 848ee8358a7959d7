"""Step data types for step-by-step memory replay."""

from __future__ import annotations

from dataclasses import dataclass, field

from .memory_types import Frame, HeapBlock


@dataclass(frozen=True)
class Step:
    """A single point-in-time record of the simulated program.

    Holds the source lines relevant to the event, a localized description,
    and deep copies of the stack, heap and accumulated output taken right
    after the event was applied (right before, for function exits).
    """

    highlighted_lines: tuple[int, ...] = ()
    description: str = ""
    stack: list[Frame] = field(default_factory=list)
    heap: list[HeapBlock] = field(default_factory=list)
    accumulated_output: str = ""

    def to_dict(self) -> dict:
        return {
            "lines": list(self.highlighted_lines),
            "desc": self.description,
            "stack": [f.to_dict() for f in self.stack],
            "heap": [b.to_dict() for b in self.heap],
            "stdout": self.accumulated_output,
        }
