"""Instrumented-call-log (Clang) normalizer.

Accepts either a runtime event stream from custom instrumentation::

    {"type": "function_enter", "fn": "main", "line": 9}
    {"type": "local_alloc", "name": "x", "vtype": "int", "size": 4, "value": 42}
    {"type": "malloc", "sizeBytes": 4, "sym": "p"}
    {"type": "store", "addr": "0x10000000", "bytes": [99, 0, 0, 0]}
    {"type": "printf", "text": "99\\n"}

(bare, or wrapped as ``{"events": [...]}``), or a Clang AST JSON dump,
which is too static to animate and yields a single explanatory step.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .. import constants
from ..events import (
    ClangEventType,
    DeclareLocalEvent,
    FreeEvent,
    FunctionEvent,
    MallocEvent,
    NoteEvent,
    OutputEvent,
    SetLocalEvent,
    StoreEvent,
)
from ..memory import MemoryState, store_into_local
from ..memory_types import to_hex
from ..run_types import ReplayConfig
from ..step_types import Step
from ._base import BaseNormalizer

logger = logging.getLogger(__name__)


def is_ast_payload(payload: Any) -> bool:
    return (
        isinstance(payload, Mapping)
        and payload.get(constants.AST_KIND_FIELD) == constants.AST_ROOT_KIND
    )


class ClangNormalizer(BaseNormalizer):
    """Replays instrumented-call-log events into Steps."""

    FORMAT_NAME = "clang"
    TAG_FIELD = constants.CLANG_TAG_FIELD
    MESSAGE_PREFIX = "clang"
    DEFAULT_VTYPE = constants.CLANG_DEFAULT_VTYPE

    def __init__(self, config: ReplayConfig = ReplayConfig()):
        super().__init__(config)
        self._EVENT_DISPATCH = {
            ClangEventType.FUNCTION_ENTER: (FunctionEvent, self._on_enter),
            ClangEventType.FUNCTION_EXIT: (FunctionEvent, self._on_exit),
            ClangEventType.LOCAL_ALLOC: (DeclareLocalEvent, self._on_declare_local),
            ClangEventType.LOCAL_SET: (SetLocalEvent, self._on_set_local),
            ClangEventType.MALLOC: (MallocEvent, self._on_malloc),
            ClangEventType.FREE: (FreeEvent, self._on_free),
            ClangEventType.STORE: (StoreEvent, self._on_store),
            ClangEventType.PRINTF: (OutputEvent, self._on_output),
            ClangEventType.NOTE: (NoteEvent, self._on_note),
        }

    def normalize(self, payload: Any) -> list[Step]:
        if is_ast_payload(payload):
            logger.info("Clang AST payload: emitting a single explanatory step")
            self._state = MemoryState()
            self._steps = []
            self._state.push_frame(constants.MAIN_FRAME_NAME)
            self._emit([], self._msg("clang.ast"))
            return self._steps
        return super().normalize(payload)

    def _on_store(self, event: StoreEvent):
        addr_text = self._addr_text(event.addr)
        block = self._state.find_live_block(event.addr)
        if block is not None:
            for i, b in enumerate(event.bytes):
                self._state.write_heap_byte(block.address, i, b)
            self._emit(
                event.lines,
                self._msg("clang.store_heap", addr=addr_text, count=len(event.bytes)),
            )
            return

        var = self._state.find_local_by_address(event.addr)
        if var is not None:
            store_into_local(var, event.bytes)
            self._emit(
                event.lines,
                self._msg(
                    "clang.store_local", name=var.name, addr=to_hex(var.address)
                ),
            )
            return

        self._emit(event.lines, self._msg("clang.store", addr=addr_text))
