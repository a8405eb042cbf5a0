"""Instruction store: build, lookup, iteration and alignment."""

import pytest

from asmedit.core.catalog import FunctionCatalog, FunctionEntry
from asmedit.core.errors import InvariantViolation
from asmedit.core.store import InstructionStore

from conftest import PROGRAM


def test_build_decodes_each_function(store):
    assert list(store.values(0)) == [
        ("55", "push rbp"),
        ("48 89 e5", "mov rbp, rsp"),
        ("5d", "pop rbp"),
        ("c3", "ret"),
    ]
    assert list(store.values(1)) == [("55", "push rbp"), ("c3", "ret")]


def test_build_only_feeds_the_function_slice(catalog, disassembler):
    InstructionStore.build(catalog, PROGRAM, disassembler)
    assert disassembler.calls == [b'\x55\x48\x89\xe5\x5d\xc3', b'\x55\xc3']


def test_columns_are_aligned_after_build(store):
    for function_id in range(len(store)):
        assert len(store.byte_texts(function_id)) == len(store.asm_texts(function_id))


def test_get_returns_pair(store):
    assert store.get(0, 1) == ("48 89 e5", "mov rbp, rsp")


def test_get_out_of_range_is_not_found(store):
    assert store.get(0, 4) is None
    assert store.get(0, -1) is None


def test_get_unknown_function_is_not_found(store):
    assert store.get(7, 0) is None


def test_values_of_unknown_function_is_empty(store):
    assert list(store.values(7)) == []


def test_values_is_restartable(store):
    values = store.values(1)
    assert list(values) == list(values)


def test_values_reflects_later_edits(store):
    values = store.values(1)
    store.set_byte_text(1, 0, "90")
    assert next(iter(values)) == ("90", "push rbp")


def test_row_count(store):
    assert store.row_count(0) == 4
    assert store.row_count(1) == 2
    assert store.row_count(9) == 0


def test_function_bytes_concatenates_slots(store):
    assert store.function_bytes(0) == b'\x55\x48\x89\xe5\x5d\xc3'


def test_setters_change_only_their_column(store):
    store.set_byte_text(1, 1, "90")
    store.set_asm_text(1, 0, "nop")
    assert store.get(1, 0) == ("55", "nop")
    assert store.get(1, 1) == ("90", "ret")


def test_setter_out_of_range_is_invariant_violation(store):
    with pytest.raises(InvariantViolation):
        store.set_byte_text(0, 4, "90")
    with pytest.raises(InvariantViolation):
        store.set_asm_text(3, 0, "nop")


def test_undecodable_tail_is_not_stored(disassembler):
    catalog = FunctionCatalog.from_entries([FunctionEntry('f', 0, 3)], 3)
    store = InstructionStore.build(catalog, b'\x55\xcc\xc3', disassembler)
    assert list(store.values(0)) == [("55", "push rbp")]


def test_misaligned_tables_are_rejected():
    with pytest.raises(InvariantViolation):
        InstructionStore([["55", "c3"]], [["push rbp"]])


def test_tables_for_different_function_counts_are_rejected():
    with pytest.raises(InvariantViolation):
        InstructionStore([["55"]], [])
