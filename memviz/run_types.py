"""Replay pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants


class InterpretMode(str, Enum):
    """Which normalizer the dispatcher should use."""

    CLANG = "clang"
    WASM = "wasm"
    AUTO = "auto"


@dataclass(frozen=True)
class ReplayConfig:
    """Groups replay configuration."""

    locale: str = constants.DEFAULT_LOCALE
