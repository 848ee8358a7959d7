"""Pure functions for computing statistics over trace event lists."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from typing import Any

from memviz import constants


def count_event_kinds(events: list[Any], tag_field: str) -> dict[str, int]:
    """Return a frequency map of event tags in the given event list.

    Args:
        events: Raw trace events.
        tag_field: The discriminant field (``type`` or ``kind``).

    Returns:
        A dict mapping tag strings to their occurrence counts.  Events
        without a string tag are counted under ``"<missing>"``.
        Empty dict for an empty input list.
    """
    return dict(Counter(_tag_of(ev, tag_field) for ev in events))


def _tag_of(event: Any, tag_field: str) -> str:
    if isinstance(event, Mapping):
        tag = event.get(tag_field)
        if isinstance(tag, str):
            return tag
    return constants.MISSING_TAG
