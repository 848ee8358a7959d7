"""Trace normalizers for the supported event formats."""

from __future__ import annotations

from ._base import BaseNormalizer, Normalizer
from .clang import ClangNormalizer
from .wasm import WasmNormalizer
from ..run_types import InterpretMode, ReplayConfig

_NORMALIZER_CLASSES: dict[InterpretMode, type[BaseNormalizer]] = {
    InterpretMode.CLANG: ClangNormalizer,
    InterpretMode.WASM: WasmNormalizer,
}


def get_normalizer(
    mode: InterpretMode | str, config: ReplayConfig = ReplayConfig()
) -> BaseNormalizer:
    """Instantiate the normalizer for an explicit *mode*.

    Raises ``ValueError`` if *mode* names no normalizer (including ``auto``,
    which only the dispatcher can resolve).
    """
    cls = _NORMALIZER_CLASSES.get(InterpretMode(mode))
    if cls is None:
        raise ValueError(f"No normalizer for mode: {InterpretMode(mode).value}")
    return cls(config)


SUPPORTED_FORMATS: tuple[str, ...] = tuple(m.value for m in _NORMALIZER_CLASSES)

__all__ = [
    "BaseNormalizer",
    "Normalizer",
    "ClangNormalizer",
    "WasmNormalizer",
    "get_normalizer",
    "SUPPORTED_FORMATS",
]
