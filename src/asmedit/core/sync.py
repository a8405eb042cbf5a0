"""
Keeps the byte text and instruction text of an edited slot in agreement.
"""

import logging
from typing import Dict, Final, Protocol, Tuple

from ..utils.hex_utils import from_hex_string, is_valid_hex_string, to_hex_string
from .errors import AssemblyError
from .navigation import Column
from .store import Decoder, InstructionStore

logger = logging.getLogger(__name__)

INVALID_INSTRUCTION: Final[str] = "INVALID"


class Encoder(Protocol):
    def assemble(self, text: str) -> bytes:
        ...


def decode_first(byte_text: str, disassembler: Decoder) -> str:
    """
    Instruction text for a cell's byte text.

    Only the first decoded instruction is used, whether or not it consumes
    every byte. Returns the INVALID sentinel if nothing decodes.
    """

    decoded = disassembler.disassemble(from_hex_string(byte_text))
    if not decoded:
        return INVALID_INSTRUCTION

    return decoded[0][1]


class Synchronizer:
    """
    Recomputes the peer cell of an edited Hex or Disasm cell.

    Hex edits are disassembled into the Disasm cell. Disasm edits are
    assembled into the Hex cell; text the assembler rejects leaves the Hex
    cell as it was. For each cell the source text last reconciled and the peer
    text it left behind are remembered, so a repeat call skips the engines
    while neither has changed.
    """

    def __init__(self, store: InstructionStore, disassembler: Decoder, assembler: Encoder) -> None:
        self.store = store
        self.disassembler = disassembler
        self.assembler = assembler
        self._reconciled: Dict[Tuple[int, int, Column], Tuple[str, str]] = {}

    def resync(self, function_id: int, row: int, column: Column, force: bool = False) -> bool:
        """
        Reconcile one slot from the given column.

        Args:
            function_id: Function the slot belongs to
            row: Slot index
            column: Column that was edited
            force: Reconcile even if the source text has not changed

        Returns:
            True if the engines were consulted
        """

        if not column.editable:
            return False

        source = self._text(function_id, row, column)

        key = (function_id, row, column)
        if not force and self._reconciled.get(key) == (source, self._text(function_id, row, column.peer)):
            return False

        if column is Column.HEX:
            self._hex_to_disasm(function_id, row, source)
        else:
            self._disasm_to_hex(function_id, row, source)

        self._reconciled[key] = (source, self._text(function_id, row, column.peer))
        return True

    def resync_function(self, function_id: int, column: Column, force: bool = False) -> int:
        """Reconcile every slot of a function from one column. Returns the number reconciled."""

        return sum(
            self.resync(function_id, row, column, force)
            for row in range(self.store.row_count(function_id))
        )

    def _text(self, function_id: int, row: int, column: Column) -> str:
        if column is Column.HEX:
            return self.store.byte_text(function_id, row)
        return self.store.asm_text(function_id, row)

    def _hex_to_disasm(self, function_id: int, row: int, byte_text: str) -> None:
        if not is_valid_hex_string(byte_text):
            logger.debug("Function %d row %d: %r is not well-formed byte text", function_id, row, byte_text)

        asm_text = decode_first(byte_text, self.disassembler)
        if asm_text == INVALID_INSTRUCTION:
            logger.debug("Function %d row %d: %r does not decode", function_id, row, byte_text)

        self.store.set_asm_text(function_id, row, asm_text)

    def _disasm_to_hex(self, function_id: int, row: int, asm_text: str) -> None:
        try:
            encoded = self.assembler.assemble(asm_text)
        except AssemblyError as e:
            logger.debug("Function %d row %d: %s", function_id, row, e)
            return

        self.store.set_byte_text(function_id, row, to_hex_string(encoded))
