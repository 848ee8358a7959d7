"""BaseNormalizer — format-agnostic event replay infrastructure."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable

from pydantic import ValidationError

from .. import constants
from ..errors import UnrecognizedPayloadError
from ..events import (
    DeclareLocalEvent,
    FreeEvent,
    FunctionEvent,
    MallocEvent,
    NoteEvent,
    OutputEvent,
    SetLocalEvent,
    TraceEvent,
    _finite_line,
)
from ..memory import MemoryState
from ..memory_types import coerce_value, to_hex
from ..messages import Messages, escape_newlines, format_value
from ..run_types import ReplayConfig
from ..snapshot import build_step
from ..step_types import Step

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]


class Normalizer(ABC):
    @abstractmethod
    def normalize(self, payload: Any) -> list[Step]: ...


class BaseNormalizer(Normalizer):
    """Base class for trace normalizers.

    Subclasses populate ``_EVENT_DISPATCH`` with ``tag -> (model, handler)``
    pairs and override the class constants below.  Every event yields exactly
    one Step; unknown tags and events that fail validation yield a
    descriptive Step instead of raising.
    """

    # ── overridable constants ────────────────────────────────────

    FORMAT_NAME: str = ""
    TAG_FIELD: str = ""
    MESSAGE_PREFIX: str = ""
    DEFAULT_VTYPE: str = constants.CLANG_DEFAULT_VTYPE

    # ── init ─────────────────────────────────────────────────────

    def __init__(self, config: ReplayConfig = ReplayConfig()):
        self._config = config
        self._msg = Messages(config.locale)
        self._state = MemoryState()
        self._steps: list[Step] = []
        self._EVENT_DISPATCH: dict[str, tuple[type[TraceEvent], EventHandler]] = {}

    # ── entry point ──────────────────────────────────────────────

    def normalize(self, payload: Any) -> list[Step]:
        self._state = MemoryState()
        self._steps = []
        events = self._extract_events(payload)
        logger.info("Replaying %d %s event(s)", len(events), self.FORMAT_NAME)
        for raw in events:
            self._replay_event(raw)
        return self._steps

    def _extract_events(self, payload: Any) -> list[Any]:
        if payload is None:
            return []
        if isinstance(payload, list):
            return payload
        if isinstance(payload, Mapping):
            events = payload.get(constants.EVENTS_FIELD, [])
            if isinstance(events, list):
                return events
            raise UnrecognizedPayloadError(
                f"Invalid {self.FORMAT_NAME} trace: expected events[]"
            )
        raise UnrecognizedPayloadError(
            f"Invalid {self.FORMAT_NAME} trace: expected an event list, "
            f"got {type(payload).__name__}"
        )

    def _replay_event(self, raw: Any):
        is_mapping = isinstance(raw, Mapping)
        tag = raw.get(self.TAG_FIELD) if is_mapping else None
        lines = self._raw_lines(raw) if is_mapping else []
        entry = self._EVENT_DISPATCH.get(tag) if isinstance(tag, str) else None
        if entry is None:
            logger.warning("Unrecognized %s event: %r", self.FORMAT_NAME, tag)
            self._emit(lines, self._msg("unknown_event", tag=tag))
            return

        model_cls, handler = entry
        try:
            event = model_cls.model_validate(raw)
        except ValidationError as exc:
            logger.warning(
                "Malformed %s event %r: %d validation error(s)",
                self.FORMAT_NAME,
                tag,
                exc.error_count(),
            )
            self._emit(lines, self._msg("malformed_event", tag=tag))
            return

        logger.debug("%s event %s line=%s", self.FORMAT_NAME, tag, event.line)
        handler(event)

    # ── helpers ──────────────────────────────────────────────────

    @staticmethod
    def _raw_lines(raw: Mapping) -> list[int]:
        line = _finite_line(raw.get("line"))
        return [line] if line is not None else []

    def _emit(self, lines: list[int], description: str):
        self._steps.append(build_step(lines, description, self._state))

    def _key(self, name: str) -> str:
        return f"{self.MESSAGE_PREFIX}.{name}"

    def _fn_label(self, event: FunctionEvent) -> str:
        return event.fn or self._msg("function")

    # ── shared handlers ──────────────────────────────────────────

    def _on_enter(self, event: FunctionEvent):
        self._state.push_frame(event.fn or constants.DEFAULT_FRAME_NAME)
        self._emit(event.lines, self._msg(self._key("enter"), fn=self._fn_label(event)))

    def _on_exit(self, event: FunctionEvent):
        # Snapshot before popping so the departing frame is still visible
        self._emit(event.lines, self._msg(self._key("exit"), fn=self._fn_label(event)))
        self._state.pop_frame()

    def _on_declare_local(self, event: DeclareLocalEvent):
        var = self._state.declare_local(
            event.name,
            event.vtype or self.DEFAULT_VTYPE,
            event.size or constants.DEFAULT_LOCAL_SIZE,
            event.value,
        )
        init = (
            self._msg("init_suffix", value=format_value(var.value))
            if event.value is not None
            else ""
        )
        self._emit(
            event.lines,
            self._msg(
                self._key("declare"),
                name=var.name,
                type=var.type,
                size=var.size,
                addr=to_hex(var.address),
                init=init,
            ),
        )

    def _on_set_local(self, event: SetLocalEvent):
        self._state.set_local(event.name, event.value)
        shown = format_value(coerce_value(event.value))
        self._emit(event.lines, self._msg(self._key("set"), name=event.name, value=shown))

    def _on_malloc(self, event: MallocEvent):
        block = self._state.allocate_heap(
            event.size or constants.DEFAULT_MALLOC_SIZE,
            event.label or constants.MALLOC_LABEL,
        )
        for i, b in enumerate((event.bytes or [])[: block.size]):
            self._state.write_heap_byte(block.address, i, b)
        if event.sym:
            # Pointer assignment: p = malloc(...), shown as the hex address
            self._state.set_local(event.sym, to_hex(block.address))
        self._emit(
            event.lines,
            self._msg(
                self._key("malloc"),
                size=block.size,
                addr=to_hex(block.address),
                label=block.label,
            ),
        )

    def _on_free(self, event: FreeEvent):
        self._state.free_heap(event.addr)
        self._emit(
            event.lines, self._msg(self._key("free"), addr=self._addr_text(event.addr))
        )

    def _on_output(self, event: OutputEvent):
        self._state.append_output(event.text)
        self._emit(
            event.lines,
            self._msg(self._key("output"), text=escape_newlines(event.text)),
        )

    def _on_note(self, event: NoteEvent):
        self._emit(event.lines, event.text or self._msg("note"))

    @staticmethod
    def _addr_text(address: int | None) -> str:
        return to_hex(address) if address is not None else "?"
