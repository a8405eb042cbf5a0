"""Key dispatch, driven against a stand-in for the curses window manager."""

import curses

import pytest

from asmedit.core.navigation import Column, Mode
from asmedit.ui.input_handler import ESCAPE, InputHandler


class StubWindowManager:
    def __init__(self, session):
        self.session = session
        self.input_handler = None
        self.dialog_window = None
        self.messages = []

    def set_status(self, message):
        self.messages.append(message)


@pytest.fixture
def handler(session):
    return InputHandler(StubWindowManager(session))


def press(handler, keys):
    for key in keys:
        ch = ord(key) if isinstance(key, str) else key
        assert handler.handle_input(ch)
        handler.session.tick()


def test_column_keys(handler):
    press(handler, ['d'])
    assert handler.session.column is Column.DISASM
    press(handler, ['s'])
    assert handler.session.column is Column.HEX
    press(handler, ['a'])
    assert handler.session.column is Column.FUNCTION


def test_arrow_keys_move_rows(handler):
    press(handler, [curses.KEY_DOWN])
    assert handler.session.navigator.selection.function == 1
    press(handler, [curses.KEY_UP, curses.KEY_UP])
    assert handler.session.navigator.selection.function == 1


def test_type_into_hex_cell(handler):
    press(handler, ['s', curses.KEY_DOWN, curses.KEY_DOWN, curses.KEY_DOWN, 'e'])
    assert handler.session.mode is Mode.EDITING

    press(handler, [curses.KEY_DC, curses.KEY_DC, '9', '0'])
    assert handler.session.store.asm_text(0, 3) == "nop"

    press(handler, [ESCAPE])
    assert handler.session.mode is Mode.VIEWING


def test_command_letters_are_text_while_editing(handler):
    press(handler, ['d', curses.KEY_DOWN, curses.KEY_DOWN, curses.KEY_DOWN, 'e', curses.KEY_END, 'q'])
    assert handler.session.store.asm_text(0, 3) == "retq"
    assert handler.session.mode is Mode.EDITING


def test_backspace_while_editing(handler):
    press(handler, ['d', 'e', curses.KEY_END, curses.KEY_BACKSPACE])
    assert handler.session.store.asm_text(0, 0) == "push rb"


def test_search_dialog_selects_function(handler):
    press(handler, ['/', 'h', 'e', 'l', '\n'])
    assert handler.search_mode
    assert handler.session.navigator.selection.function == 1

    press(handler, [ESCAPE])
    assert not handler.search_mode


def test_search_tab_cycles_type(handler):
    press(handler, ['/', '\t'])
    assert handler.search_type == 'text'


def test_write_reports_saved(handler, binary):
    press(handler, ['w'])
    assert handler.window_manager.messages[-1] == f"Saved: {binary}"


def test_write_failure_is_reported(handler, binary):
    binary.unlink()
    press(handler, ['w'])
    assert handler.window_manager.messages[-1].startswith("Error:")


def test_quit(handler):
    assert not handler.handle_input(ord('q'))


def test_previous_match_key(handler):
    press(handler, ['/', 'e', '\n', ESCAPE, 'N'])
    assert handler.session.navigator.selection.function == 1
    assert handler.window_manager.messages[-1] == "Found: helper"
