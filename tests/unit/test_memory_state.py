"""Tests for MemoryState — the simulated stack, heap and output buffer."""

import pytest

from memviz import constants
from memviz.errors import NoActiveFrameError
from memviz.memory import (
    MemoryState,
    bytes_from_int_le,
    decode_c_string,
    int_from_bytes_le,
    store_into_local,
    str_bytes_with_null,
)
from memviz.memory_types import Variable, coerce_value, to_hex


class TestStack:
    def test_push_and_pop_frames(self):
        state = MemoryState()
        state.push_frame("main")
        state.push_frame("helper")
        assert [f.name for f in state.frames] == ["main", "helper"]
        state.pop_frame()
        assert [f.name for f in state.frames] == ["main"]

    def test_pop_on_empty_stack_is_noop(self):
        state = MemoryState()
        assert state.pop_frame() is None
        assert state.frames == []

    def test_declare_local_on_empty_stack_raises(self):
        state = MemoryState()
        with pytest.raises(NoActiveFrameError, match="x"):
            state.declare_local("x", "int", 4, 1)

    def test_stack_addresses_grow_downward_with_min_slot(self):
        state = MemoryState()
        state.push_frame("main")
        a = state.declare_local("a", "int", 4, 0)
        b = state.declare_local("b", "char", 1, 0)
        c = state.declare_local("c", "double", 8, 0)
        assert a.address == constants.STACK_TOP - 4
        assert b.address == constants.STACK_TOP - 8
        assert c.address == constants.STACK_TOP - 16

    def test_locals_keep_declaration_order(self):
        state = MemoryState()
        state.push_frame("main")
        for name in ("z", "y", "x"):
            state.declare_local(name, "int", 4, 0)
        assert [v.name for v in state.current_frame.locals] == ["z", "y", "x"]

    def test_redeclaring_a_name_replaces_the_live_local(self):
        state = MemoryState()
        state.push_frame("main")
        first = state.declare_local("x", "int", 4, 1)
        second = state.declare_local("x", "int", 4, 2)
        locals_ = state.current_frame.locals
        assert len(locals_) == 1
        assert locals_[0].value == 2
        assert second.address != first.address

    def test_shadowing_across_frames_is_allowed(self):
        state = MemoryState()
        state.push_frame("main")
        state.declare_local("x", "int", 4, 1)
        state.push_frame("f")
        state.declare_local("x", "int", 4, 2)
        assert state.frames[0].locals[0].value == 1
        assert state.frames[1].locals[0].value == 2

    def test_set_local_only_searches_top_frame(self):
        state = MemoryState()
        state.push_frame("main")
        state.declare_local("x", "int", 4, 1)
        state.push_frame("f")
        assert state.set_local("x", 99) is None
        assert state.frames[0].locals[0].value == 1

    def test_set_local_overwrites_value(self):
        state = MemoryState()
        state.push_frame("main")
        state.declare_local("x", "int", 4, 1)
        state.set_local("x", 7)
        assert state.get_local("x").value == 7

    def test_set_local_without_frame_is_noop(self):
        state = MemoryState()
        assert state.set_local("x", 1) is None

    def test_push_then_pop_restores_frames_and_new_locals_get_fresh_addresses(self):
        state = MemoryState()
        state.push_frame("main")
        x = state.declare_local("x", "int", 4, 0)
        state.push_frame("f")
        state.pop_frame()
        assert [f.name for f in state.frames] == ["main"]
        assert state.frames[0].locals[0].address == x.address
        y = state.declare_local("y", "int", 4, 0)
        assert y.address < x.address

    def test_find_local_by_address(self):
        state = MemoryState()
        state.push_frame("main")
        v = state.declare_local("v", "int", 4, 0)
        assert state.find_local_by_address(v.address) is v
        assert state.find_local_by_address(0x1234) is None
        assert state.find_local_by_address(None) is None


class TestHeap:
    def test_allocations_bump_upward(self):
        state = MemoryState()
        a = state.allocate_heap(4)
        b = state.allocate_heap(10)
        c = state.allocate_heap(1)
        assert a.address == constants.HEAP_BASE
        assert b.address == constants.HEAP_BASE + 4
        assert c.address == constants.HEAP_BASE + 14

    def test_allocation_is_zero_initialized(self):
        block = MemoryState().allocate_heap(3, "buf")
        assert block.bytes == [0, 0, 0]
        assert block.label == "buf"
        assert block.freed is False

    def test_addresses_never_repeat_after_free(self):
        state = MemoryState()
        seen = set()
        for _ in range(5):
            block = state.allocate_heap(4)
            assert block.address not in seen
            seen.add(block.address)
            state.free_heap(block.address)

    def test_free_marks_block_and_erases_bytes(self):
        state = MemoryState()
        block = state.allocate_heap(4)
        state.write_heap_byte(block.address, 0, 7)
        state.free_heap(block.address)
        assert block.freed is True
        assert block.label == constants.FREED_LABEL
        assert block.bytes == [None, None, None, None]

    def test_free_unknown_address_is_noop(self):
        state = MemoryState()
        block = state.allocate_heap(4)
        assert state.free_heap(0xDEAD) is None
        assert block.freed is False

    def test_double_free_is_noop(self):
        state = MemoryState()
        block = state.allocate_heap(4)
        state.free_heap(block.address)
        assert state.free_heap(block.address) is None
        assert block.freed is True

    def test_write_heap_byte_within_bounds(self):
        state = MemoryState()
        block = state.allocate_heap(4)
        assert state.write_heap_byte(block.address, 2, 0xAB)
        assert block.bytes == [0, 0, 0xAB, 0]

    def test_write_heap_byte_out_of_bounds_is_noop(self):
        state = MemoryState()
        block = state.allocate_heap(4)
        assert not state.write_heap_byte(block.address, 4, 1)
        assert not state.write_heap_byte(block.address, -1, 1)
        assert block.bytes == [0, 0, 0, 0]

    def test_write_after_free_is_noop(self):
        state = MemoryState()
        block = state.allocate_heap(2)
        state.free_heap(block.address)
        assert not state.write_heap_byte(block.address, 0, 5)
        assert block.bytes == [None, None]


class TestOutputAndSnapshot:
    def test_output_accumulates(self):
        state = MemoryState()
        state.append_output("a")
        state.append_output("b\n")
        assert state.output == "ab\n"

    def test_snapshot_is_independent_of_live_state(self):
        state = MemoryState()
        state.push_frame("main")
        state.declare_local("x", "int", 4, 1)
        block = state.allocate_heap(4)
        snap = state.snapshot()

        state.set_local("x", 2)
        state.write_heap_byte(block.address, 0, 9)
        state.push_frame("f")

        assert len(snap.stack) == 1
        assert snap.stack[0].locals[0].value == 1
        assert snap.heap[0].bytes == [0, 0, 0, 0]


class TestByteHelpers:
    def test_to_hex_pads_to_eight_digits(self):
        assert to_hex(0x10) == "0x00000010"
        assert to_hex(constants.STACK_TOP) == "0x7fffe000"

    def test_bytes_from_int_le(self):
        assert bytes_from_int_le(0x01020304) == [4, 3, 2, 1]
        assert bytes_from_int_le(-1, 2) == [0xFF, 0xFF]

    def test_int_from_bytes_le(self):
        assert int_from_bytes_le([99, 0, 0, 0]) == 99
        assert int_from_bytes_le([0xFF, 0xFF, 0xFF, 0xFF]) == 0xFFFFFFFF

    def test_str_bytes_with_null(self):
        assert str_bytes_with_null("hi") == [104, 105, 0]

    def test_decode_c_string_stops_at_null(self):
        assert decode_c_string([104, 105, 0, 120]) == ["h", "i"]


class TestStoreIntoLocal:
    def _var(self, type_):
        return Variable(name="v", type=type_, address=0x100, size=4)

    def test_char_type_becomes_character_sequence(self):
        var = self._var("char[8]")
        store_into_local(var, [104, 105, 0, 0])
        assert var.value == ["h", "i"]

    def test_four_bytes_become_unsigned_int(self):
        var = self._var("int")
        store_into_local(var, [0, 1, 0, 0])
        assert var.value == 256

    def test_other_lengths_stay_raw(self):
        var = self._var("short")
        store_into_local(var, [1, 2])
        assert var.value == b"\x01\x02"


class TestCoerceValue:
    def test_variant_members_pass_through(self):
        assert coerce_value(5) == 5
        assert coerce_value("s") == "s"
        assert coerce_value(["a", "b"]) == ["a", "b"]
        assert coerce_value(b"\x00") == b"\x00"

    def test_none_and_bool(self):
        assert coerce_value(None) == 0
        assert coerce_value(True) == 1

    def test_byte_range_int_list_becomes_bytes(self):
        assert coerce_value([1, 255, 0]) == b"\x01\xff\x00"

    def test_wide_int_list_is_kept_intact_as_text(self):
        assert coerce_value([100, 200, 300]) == "100,200,300"
        assert coerce_value([-1, 2]) == "-1,2"

    def test_other_values_become_text(self):
        assert coerce_value(2.5) == "2.5"
        assert coerce_value({"a": 1}) == "{'a': 1}"
