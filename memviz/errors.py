"""Exceptions surfaced to callers of the step interpreter."""

from __future__ import annotations


class MemvizError(Exception):
    """Base class for fatal interpretation failures."""


class NoActiveFrameError(MemvizError):
    """A local variable was declared while the call stack was empty."""

    def __init__(self, name: str):
        super().__init__(f"No active frame to allocate local '{name}'")
        self.name = name


class UnrecognizedPayloadError(MemvizError, ValueError):
    """The payload shape does not match any known trace format."""
