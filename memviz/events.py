"""Trace event vocabulary — tag enums and pydantic event schemas.

Both trace formats share the same semantic event models; they differ only
in the tag field (``type`` vs ``kind``) and in the tag names.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
)

from . import constants


class ClangEventType(str, Enum):
    """Tags of the instrumented-call-log format (``type`` field)."""

    FUNCTION_ENTER = "function_enter"
    FUNCTION_EXIT = "function_exit"
    LOCAL_ALLOC = "local_alloc"
    LOCAL_SET = "local_set"
    MALLOC = "malloc"
    FREE = "free"
    STORE = "store"
    PRINTF = "printf"
    NOTE = "note"


class WasmEventKind(str, Enum):
    """Tags of the shim-event-log format (``kind`` field)."""

    CALL = "call"
    RET = "ret"
    ALLOC_LOCAL = "alloc_local"
    SET_LOCAL = "set_local"
    MALLOC = "malloc"
    FREE = "free"
    STORE_MEM = "store_mem"
    PRINT = "print"
    NOTE = "note"


def parse_address(raw: Any) -> int | None:
    """Accept ``0x``-prefixed hex strings or plain integers."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip(), 16)
        except ValueError:
            return None
    return None


def _finite_line(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and math.isfinite(raw) and raw.is_integer():
        return int(raw)
    return None


def _nulls_as_zero(raw: Any) -> Any:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [0 if b is None else b for b in raw]
    return raw


def _none_as_empty(raw: Any) -> Any:
    return "" if raw is None else raw


def _none_as_zero(raw: Any) -> Any:
    return 0 if raw is None else raw


def _mask_bytes(data: list[int]) -> list[int]:
    return [b & 0xFF for b in data]


Address = Annotated[int | None, BeforeValidator(parse_address)]
SourceLine = Annotated[int | None, BeforeValidator(_finite_line)]
ByteList = Annotated[
    list[int], BeforeValidator(_nulls_as_zero), AfterValidator(_mask_bytes)
]
Size = Optional[Annotated[int, Field(ge=0)]]
HeapSize = Optional[Annotated[int, Field(ge=0, le=constants.MAX_HEAP_BLOCK_SIZE)]]
Text = Annotated[str, BeforeValidator(_none_as_empty)]
Offset = Annotated[int, BeforeValidator(_none_as_zero)]
Byte = Annotated[
    int, BeforeValidator(_none_as_zero), AfterValidator(lambda b: b & 0xFF)
]


class TraceEvent(BaseModel):
    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, coerce_numbers_to_str=True
    )

    line: SourceLine = None

    @property
    def lines(self) -> list[int]:
        return [self.line] if self.line is not None else []


class FunctionEvent(TraceEvent):
    fn: str | None = None


class DeclareLocalEvent(TraceEvent):
    name: str
    vtype: str | None = None
    size: Size = None
    value: Any = None


class SetLocalEvent(TraceEvent):
    name: str
    value: Any = None


class MallocEvent(TraceEvent):
    size: HeapSize = Field(
        default=None, validation_alias=AliasChoices("sizeBytes", "size")
    )
    sym: str | None = None
    label: str | None = None
    bytes: ByteList | None = None


class FreeEvent(TraceEvent):
    addr: Address = None


class StoreEvent(TraceEvent):
    addr: Address = None
    bytes: ByteList = []


class StoreMemEvent(TraceEvent):
    addr: Address = None
    offset: Offset = 0
    byte: Byte = 0


class OutputEvent(TraceEvent):
    text: Text = ""


class NoteEvent(TraceEvent):
    text: str | None = None
