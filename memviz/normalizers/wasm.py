"""Shim-event-log (WASM) normalizer.

Input is an array of events emitted from a WASM runtime shim::

    {"kind": "call", "fn": "main", "line": 9}
    {"kind": "alloc_local", "name": "x", "vtype": "i32", "size": 4, "value": 42}
    {"kind": "malloc", "size": 4, "sym": "p"}
    {"kind": "store_mem", "addr": "0x10000000", "offset": 0, "byte": 99}
    {"kind": "print", "text": "hello\\n"}
    {"kind": "ret", "fn": "main"}
"""

from __future__ import annotations

from .. import constants
from ..events import (
    DeclareLocalEvent,
    FreeEvent,
    FunctionEvent,
    MallocEvent,
    NoteEvent,
    OutputEvent,
    SetLocalEvent,
    StoreMemEvent,
    WasmEventKind,
)
from ..run_types import ReplayConfig
from ._base import BaseNormalizer


class WasmNormalizer(BaseNormalizer):
    """Replays shim-event-log events into Steps."""

    FORMAT_NAME = "wasm"
    TAG_FIELD = constants.WASM_TAG_FIELD
    MESSAGE_PREFIX = "wasm"
    DEFAULT_VTYPE = constants.WASM_DEFAULT_VTYPE

    def __init__(self, config: ReplayConfig = ReplayConfig()):
        super().__init__(config)
        self._EVENT_DISPATCH = {
            WasmEventKind.CALL: (FunctionEvent, self._on_enter),
            WasmEventKind.RET: (FunctionEvent, self._on_exit),
            WasmEventKind.ALLOC_LOCAL: (DeclareLocalEvent, self._on_declare_local),
            WasmEventKind.SET_LOCAL: (SetLocalEvent, self._on_set_local),
            WasmEventKind.MALLOC: (MallocEvent, self._on_malloc),
            WasmEventKind.FREE: (FreeEvent, self._on_free),
            WasmEventKind.STORE_MEM: (StoreMemEvent, self._on_store_mem),
            WasmEventKind.PRINT: (OutputEvent, self._on_output),
            WasmEventKind.NOTE: (NoteEvent, self._on_note),
        }

    def _on_store_mem(self, event: StoreMemEvent):
        self._state.write_heap_byte(event.addr, event.offset, event.byte)
        self._emit(
            event.lines,
            self._msg(
                "wasm.store_mem",
                addr=self._addr_text(event.addr),
                offset=event.offset,
                byte=event.byte,
            ),
        )
