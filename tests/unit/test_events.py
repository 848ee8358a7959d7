"""Tests for event schemas and their lenient field parsing."""

import pytest
from pydantic import ValidationError

from memviz import constants
from memviz.events import (
    ClangEventType,
    DeclareLocalEvent,
    MallocEvent,
    OutputEvent,
    StoreEvent,
    StoreMemEvent,
    TraceEvent,
    WasmEventKind,
    parse_address,
)


class TestParseAddress:
    def test_hex_string(self):
        assert parse_address("0x10000000") == 0x10000000

    def test_hex_without_prefix(self):
        assert parse_address("ff") == 0xFF

    def test_integer(self):
        assert parse_address(4096) == 4096

    @pytest.mark.parametrize("raw", [None, True, "zzz", 1.5, [1]])
    def test_unparseable_is_none(self, raw):
        assert parse_address(raw) is None


class TestLines:
    @pytest.mark.parametrize(
        "raw,expected",
        [(3, [3]), (4.0, [4]), (None, []), ("5", []), (float("nan"), []), (True, [])],
    )
    def test_only_finite_numbers_highlight(self, raw, expected):
        assert TraceEvent.model_validate({"line": raw}).lines == expected


class TestEventModels:
    def test_malloc_accepts_both_size_spellings(self):
        assert MallocEvent.model_validate({"sizeBytes": 8}).size == 8
        assert MallocEvent.model_validate({"size": 6}).size == 6

    def test_negative_size_is_rejected(self):
        with pytest.raises(ValidationError):
            MallocEvent.model_validate({"sizeBytes": -1})

    def test_store_bytes_null_as_zero_and_masked(self):
        event = StoreEvent.model_validate({"addr": "0x10", "bytes": [None, 300]})
        assert event.bytes == [0, 44]

    def test_store_mem_defaults(self):
        event = StoreMemEvent.model_validate({"addr": "0x10", "offset": None})
        assert (event.offset, event.byte) == (0, 0)

    def test_output_text_none_is_empty(self):
        assert OutputEvent.model_validate({"text": None}).text == ""

    def test_numbers_in_text_fields_become_strings(self):
        assert OutputEvent.model_validate({"text": 42}).text == "42"
        assert DeclareLocalEvent.model_validate({"name": 5}).name == "5"

    def test_heap_size_is_capped(self):
        with pytest.raises(ValidationError):
            MallocEvent.model_validate({"sizeBytes": constants.MAX_HEAP_BLOCK_SIZE + 1})

    def test_declare_local_requires_name(self):
        with pytest.raises(ValidationError):
            DeclareLocalEvent.model_validate({"vtype": "int"})

    def test_extra_fields_are_ignored(self):
        event = DeclareLocalEvent.model_validate({"name": "x", "type": "local_alloc", "extra": 1})
        assert event.name == "x"


class TestTagEnums:
    def test_formats_cover_the_same_operations(self):
        assert len(ClangEventType) == len(WasmEventKind) == 9

    def test_tags_compare_equal_to_strings(self):
        assert ClangEventType.STORE == "store"
        assert WasmEventKind.STORE_MEM == "store_mem"
