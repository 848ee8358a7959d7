"""Composable API functions for the step interpreter.

Each function corresponds to a CLI workflow (default, --recipe, --stats)
but is callable programmatically without argparse.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from . import constants
from .dispatch import detect_mode, interpret
from .errors import UnrecognizedPayloadError
from .event_stats import count_event_kinds
from .normalizers.clang import is_ast_payload
from .recipe import synthesize
from .run_types import InterpretMode, ReplayConfig
from .step_types import Step

logger = logging.getLogger(__name__)

_TAG_FIELDS: dict[InterpretMode, str] = {
    InterpretMode.CLANG: constants.CLANG_TAG_FIELD,
    InterpretMode.WASM: constants.WASM_TAG_FIELD,
}


def load_payload(text: str) -> Any:
    """Parse JSON trace text.

    Raises:
        json.JSONDecodeError: If *text* is not valid JSON.
    """
    return json.loads(text)


def interpret_json(
    text: str,
    mode: InterpretMode | str = InterpretMode.AUTO,
    config: ReplayConfig = ReplayConfig(),
) -> list[Step]:
    """Parse JSON trace text and interpret it into Steps."""
    return interpret(load_payload(text), mode, config)


def synthesize_json(text: str, config: ReplayConfig = ReplayConfig()) -> list[Step]:
    """Parse a JSON recipe and synthesize its Steps."""
    return synthesize(load_payload(text), config)


def dump_steps(steps: list[Step], indent: int | None = 2) -> str:
    """Render Steps in the presentation wire format as JSON text.

    Args:
        steps: Steps produced by ``interpret`` or ``synthesize``.
        indent: JSON indentation; ``None`` for compact output.

    Returns:
        A JSON array of ``{lines, desc, stack, heap, stdout}`` objects.
    """
    return json.dumps(
        [s.to_dict() for s in steps], indent=indent, ensure_ascii=False
    )


def event_stats(
    payload: Any, mode: InterpretMode | str = InterpretMode.AUTO
) -> dict[str, int]:
    """Return event-tag frequency counts for a trace payload.

    An AST payload carries no events and yields an empty dict.
    """
    mode = InterpretMode(mode)
    if mode == InterpretMode.AUTO:
        mode = detect_mode(payload)
    if is_ast_payload(payload):
        return {}
    if isinstance(payload, Mapping):
        events = payload.get(constants.EVENTS_FIELD)
    else:
        events = payload
    if events is None:
        events = []
    if not isinstance(events, list):
        raise UnrecognizedPayloadError(
            f"Expected an event list, got {type(events).__name__}"
        )
    logger.info("Counting %s event kinds over %d event(s)", mode.value, len(events))
    return count_event_kinds(events, _TAG_FIELDS[mode])
