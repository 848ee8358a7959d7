"""Simulated memory — data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from . import constants

# Closed value variant: integer, text, character sequence, raw bytes.
Value = Union[int, str, list[str], bytes]


def to_hex(n: int, pad: int = constants.ADDRESS_HEX_WIDTH) -> str:
    return f"0x{n & 0xFFFFFFFF:0{pad}x}"


def coerce_value(raw: Any) -> Value:
    """Fold an arbitrary trace value into the closed ``Value`` variant."""
    if raw is None:
        return 0
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, str, bytes)):
        return raw
    if isinstance(raw, (list, tuple)):
        if raw and all(isinstance(c, str) and len(c) == 1 for c in raw):
            return list(raw)
        if all(isinstance(b, int) and not isinstance(b, bool) for b in raw):
            if all(0 <= b <= 0xFF for b in raw):
                return bytes(raw)
            # Elements outside 0..255 are kept as comma-joined text
            return ",".join(str(b) for b in raw)
    return str(raw)


def _serialize_value(v: Value) -> Any:
    if isinstance(v, bytes):
        return list(v)
    if isinstance(v, list):
        return list(v)
    return v


@dataclass
class Variable:
    name: str
    type: str
    address: int
    size: int
    value: Value = 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "addr": to_hex(self.address),
            "size": self.size,
            "value": _serialize_value(self.value),
        }


@dataclass
class Frame:
    name: str
    locals: list[Variable] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "locals": [v.to_dict() for v in self.locals]}


@dataclass
class HeapBlock:
    address: int
    size: int
    bytes: list[int | None] = field(default_factory=list)
    freed: bool = False
    label: str = constants.MALLOC_LABEL

    def to_dict(self) -> dict:
        return {
            "addr": to_hex(self.address),
            "size": self.size,
            "bytes": list(self.bytes),
            "freed": self.freed,
            "label": self.label,
        }


@dataclass(frozen=True)
class MemorySnapshot:
    """Deep, independent copy of the simulated memory at one instant."""

    stack: list[Frame]
    heap: list[HeapBlock]
    output: str
