"""Editing session: end-to-end edit, tick and write scenarios."""

from asmedit.core.catalog import FunctionEntry
from asmedit.core.navigation import Column, Direction, Mode
from asmedit.core.session import EditorSession
from asmedit.core.sync import INVALID_INSTRUCTION

from conftest import MAIN_OFFSET, PROGRAM, StaticAnalyzer


def start_editing(session, column, row=0, cursor=0):
    navigator = session.navigator
    navigator.select_column(column)
    navigator.selection.row = row
    navigator.selection.cursor = cursor
    assert navigator.enter_edit()


def test_load_builds_catalog_and_store(session):
    assert session.catalog.names() == ['main', 'helper']
    assert session.store.row_count(0) == 4
    assert session.store.row_count(1) == 2
    assert not session.modified


def test_initial_status_line(session):
    assert session.status_line() == "Mode: Viewing  Column: Function"


def test_hex_edit_reassembles_on_tick(session):
    start_editing(session, Column.HEX, row=3, cursor=0)
    session.navigator.delete_forward()
    session.navigator.delete_forward()
    for ch in "90":
        session.navigator.insert_char(ch)

    assert session.tick() == 1
    assert session.store.asm_text(0, 3) == "nop"
    assert session.modified


def test_disasm_edit_reassembles_on_tick(session):
    start_editing(session, Column.DISASM, row=0, cursor=0)
    session.navigator.cursor_end()
    for _ in range(len("push rbp")):
        session.navigator.backspace()
    for ch in "nop":
        session.navigator.insert_char(ch)

    session.tick()

    assert session.store.byte_text(0, 0) == "90"


def test_partial_mnemonic_keeps_hex(session):
    start_editing(session, Column.DISASM, row=3, cursor=3)
    session.navigator.backspace()
    session.tick()

    assert session.store.asm_text(0, 3) == "re"
    assert session.store.byte_text(0, 3) == "c3"


def test_undecodable_hex_marks_disasm_invalid(session):
    start_editing(session, Column.HEX, row=3, cursor=2)
    session.navigator.backspace()
    session.navigator.backspace()
    session.navigator.insert_char('f')
    session.navigator.insert_char('f')
    session.tick()

    assert session.store.asm_text(0, 3) == INVALID_INSTRUCTION


def test_tick_does_nothing_while_viewing(session):
    session.store.set_byte_text(0, 0, "90")
    assert session.tick() == 0
    assert session.store.asm_text(0, 0) == "push rbp"


def test_tick_without_edits_does_nothing(session, disassembler):
    start_editing(session, Column.HEX)
    calls = len(disassembler.calls)
    assert session.tick() == 0
    assert len(disassembler.calls) == calls


def test_cancel_edit_reconciles_pending_edits(session):
    start_editing(session, Column.HEX, row=0, cursor=0)
    session.navigator.delete_forward()
    session.navigator.delete_forward()
    session.navigator.insert_char('9')
    session.navigator.insert_char('0')

    session.cancel_edit()

    assert session.mode is Mode.VIEWING
    assert session.store.asm_text(0, 0) == "nop"


def test_cursor_hop_while_editing_keeps_edit_mode(session):
    start_editing(session, Column.HEX, row=0, cursor=2)
    session.navigator.move_cursor(Direction.RIGHT)

    assert session.column is Column.DISASM
    assert session.mode is Mode.EDITING


def test_edit_then_write(session, binary):
    start_editing(session, Column.HEX, row=0, cursor=0)
    session.navigator.delete_forward()
    session.navigator.delete_forward()
    session.navigator.insert_char('9')
    session.navigator.insert_char('0')
    session.cancel_edit()

    assert session.write() == []
    assert not session.modified
    assert binary.read_bytes()[MAIN_OFFSET] == 0x90


def test_find_function_selects_match(session):
    session.navigator.select_column(Column.HEX)
    session.navigator.selection.row = 2

    result = session.find_function("help", 'text')

    assert result.name == 'helper'
    assert session.navigator.selection.function == 1
    assert session.navigator.selection.row == 0


def test_find_function_without_match_keeps_selection(session):
    assert session.find_function("zzz", 'text') is None
    assert session.navigator.selection.function == 0


def test_empty_binary_session(tmp_path, disassembler, assembler):
    path = tmp_path / "empty.bin"
    path.write_bytes(PROGRAM)

    session = EditorSession.load(str(path), StaticAnalyzer([]), disassembler, assembler)

    assert len(session.catalog) == 0
    assert not session.navigator.select_column(Column.HEX)
    assert session.tick() == 0
    assert session.write() == []
    assert path.read_bytes() == PROGRAM


def test_invalid_analyzer_entries_are_dropped(tmp_path, disassembler, assembler):
    path = tmp_path / "program.bin"
    path.write_bytes(PROGRAM)
    entries = [
        FunctionEntry('main', MAIN_OFFSET, 6),
        FunctionEntry('beyond', len(PROGRAM) + 10, 4),
    ]

    session = EditorSession.load(str(path), StaticAnalyzer(entries), disassembler, assembler)

    assert session.catalog.names() == ['main']


def test_find_function_moves_cursor_to_start_of_cell(session):
    navigator = session.navigator
    navigator.select_column(Column.DISASM)
    navigator.next_row()
    navigator.cursor_end()

    session.find_function("help", 'text')

    assert navigator.selection.cursor == 0
    navigator.move_cursor(Direction.RIGHT)
    assert navigator.selection.column is Column.DISASM
    assert navigator.selection.cursor == 1


def test_find_previous_repeats_last_search(session):
    session.find_function("e", 'text')
    assert session.navigator.selection.function == 1

    session.navigator.select_column(Column.HEX)
    session.navigator.cursor_end()
    result = session.find_previous()

    assert result.name == 'helper'
    assert session.navigator.selection.function == 1
    assert session.navigator.selection.row == 0
    assert session.navigator.selection.cursor == 0


def test_find_previous_without_search_keeps_selection(session):
    assert session.find_previous() is None
    assert session.navigator.selection.function == 0
