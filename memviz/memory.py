"""Simulated memory — the mutable state replayed by the normalizers.

Stack and heap are bump allocators: the stack cursor only moves down, the
heap cursor only moves up, and no address is reused within a run.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any

from . import constants
from .errors import NoActiveFrameError
from .memory_types import (
    Frame,
    HeapBlock,
    MemorySnapshot,
    Value,
    Variable,
    coerce_value,
)

logger = logging.getLogger(__name__)


def bytes_from_int_le(n: int, size: int = 4) -> list[int]:
    """Little-endian byte list of the unsigned value of *n*."""
    v = n & ((1 << (8 * size)) - 1)
    return [(v >> (8 * i)) & 0xFF for i in range(size)]


def int_from_bytes_le(data: list[int]) -> int:
    return int.from_bytes(bytes(b & 0xFF for b in data), "little", signed=False)


def str_bytes_with_null(s: str) -> list[int]:
    return [ord(c) & 0xFF for c in s] + [0]


def decode_c_string(data: list[int]) -> list[str]:
    """Characters of *data* up to (not including) the first null byte."""
    chars: list[str] = []
    for b in data:
        if not b:
            break
        chars.append(chr(b))
    return chars


@dataclass
class MemoryState:
    frames: list[Frame] = field(default_factory=list)
    heap: list[HeapBlock] = field(default_factory=list)
    output: str = ""
    stack_cursor: int = constants.STACK_TOP
    heap_cursor: int = constants.HEAP_BASE

    # ── stack ────────────────────────────────────────────────────

    @property
    def current_frame(self) -> Frame | None:
        return self.frames[-1] if self.frames else None

    def push_frame(self, name: str) -> Frame:
        frame = Frame(name=name)
        self.frames.append(frame)
        return frame

    def pop_frame(self) -> Frame | None:
        if not self.frames:
            logger.debug("pop_frame on empty stack ignored")
            return None
        return self.frames.pop()

    def declare_local(
        self, name: str, type: str, size: int, initial_value: Any = 0
    ) -> Variable:
        frame = self.current_frame
        if frame is None:
            raise NoActiveFrameError(name)
        self.stack_cursor -= max(constants.MIN_SLOT_SIZE, size)
        var = Variable(
            name=name,
            type=type,
            address=self.stack_cursor,
            size=size,
            value=coerce_value(initial_value),
        )
        # A re-declaration replaces the live local so names stay unique per frame
        frame.locals = [v for v in frame.locals if v.name != name]
        frame.locals.append(var)
        return var

    def get_local(self, name: str) -> Variable | None:
        frame = self.current_frame
        if frame is None:
            return None
        return next((v for v in frame.locals if v.name == name), None)

    def find_local_by_address(self, address: int | None) -> Variable | None:
        frame = self.current_frame
        if frame is None or address is None:
            return None
        return next((v for v in frame.locals if v.address == address), None)

    def set_local(self, name: str, value: Any) -> Variable | None:
        var = self.get_local(name)
        if var is None:
            logger.debug("set_local: no live local '%s' in current frame", name)
            return None
        var.value = coerce_value(value)
        return var

    # ── heap ─────────────────────────────────────────────────────

    def allocate_heap(self, size: int, label: str = constants.MALLOC_LABEL) -> HeapBlock:
        block = HeapBlock(
            address=self.heap_cursor,
            size=size,
            bytes=[0] * size,
            label=label,
        )
        self.heap.append(block)
        self.heap_cursor += max(constants.MIN_SLOT_SIZE, size)
        return block

    def find_live_block(self, address: int | None) -> HeapBlock | None:
        if address is None:
            return None
        return next(
            (b for b in self.heap if b.address == address and not b.freed), None
        )

    def free_heap(self, address: int | None) -> HeapBlock | None:
        block = self.find_live_block(address)
        if block is None:
            logger.debug("free_heap: no live block at %s", address)
            return None
        block.freed = True
        block.label = constants.FREED_LABEL
        block.bytes = [None] * len(block.bytes)
        return block

    def write_heap_byte(self, address: int | None, offset: int, byte: int) -> bool:
        block = self.find_live_block(address)
        if block is None or not 0 <= offset < block.size:
            return False
        block.bytes[offset] = byte
        return True

    # ── output ───────────────────────────────────────────────────

    def append_output(self, text: str):
        self.output += text

    # ── snapshots ────────────────────────────────────────────────

    def snapshot(self) -> MemorySnapshot:
        return MemorySnapshot(
            stack=copy.deepcopy(self.frames),
            heap=copy.deepcopy(self.heap),
            output=self.output,
        )


def store_into_local(var: Variable, data: list[int]) -> Value:
    """Reinterpret a raw store according to the local's declared type."""
    if var.type.startswith(constants.CHAR_TYPE_PREFIX) and data:
        var.value = decode_c_string(data)
    elif len(data) == 4:
        var.value = int_from_bytes_le(data)
    else:
        var.value = bytes(b & 0xFF for b in data)
    return var.value
