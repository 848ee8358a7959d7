"""Format dispatcher — picks the normalizer for an untyped payload."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from . import constants
from .errors import UnrecognizedPayloadError
from .normalizers import get_normalizer
from .normalizers.clang import is_ast_payload
from .run_types import InterpretMode, ReplayConfig
from .step_types import Step

logger = logging.getLogger(__name__)


def detect_mode(payload: Any) -> InterpretMode:
    """Classify *payload* as a Clang or WASM trace.

    Raises:
        UnrecognizedPayloadError: If the shape matches neither format.
    """
    if isinstance(payload, list):
        first = payload[0] if payload else None
        if isinstance(first, Mapping) and constants.WASM_TAG_FIELD in first:
            return InterpretMode.WASM
        return InterpretMode.CLANG
    if isinstance(payload, Mapping):
        if is_ast_payload(payload):
            return InterpretMode.CLANG
        if isinstance(payload.get(constants.EVENTS_FIELD), list):
            return InterpretMode.CLANG
    raise UnrecognizedPayloadError(
        f"Unrecognized payload format: {type(payload).__name__}"
    )


def interpret(
    payload: Any,
    mode: InterpretMode | str = InterpretMode.AUTO,
    config: ReplayConfig = ReplayConfig(),
) -> list[Step]:
    """Convert a trace payload into an ordered list of Steps.

    Args:
        payload: Clang events (bare or ``{"events": [...]}``), a Clang AST
            JSON dump, or a WASM event list.
        mode: ``clang`` or ``wasm`` to force a normalizer, ``auto`` to detect.
        config: Replay configuration (description locale).

    Returns:
        One Step per event (a single Step for an AST payload).

    Raises:
        UnrecognizedPayloadError: If auto-detection fails.
        NoActiveFrameError: If a local is declared outside any frame.
        ValueError: If *mode* or the configured locale is unknown.
    """
    mode = InterpretMode(mode)
    if mode == InterpretMode.AUTO:
        mode = detect_mode(payload)
        logger.info("Auto-detected %s payload", mode.value)
    normalizer = get_normalizer(mode, config)
    steps = normalizer.normalize(payload)
    logger.info("Produced %d step(s) with %s normalizer", len(steps), mode.value)
    return steps
