"""
Per-function storage of the byte text and instruction text of every slot.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Protocol, Tuple

from ..utils.hex_utils import from_hex_string, to_hex_string
from .catalog import FunctionCatalog
from .errors import InvariantViolation

logger = logging.getLogger(__name__)


class Decoder(Protocol):
    def disassemble(self, data: bytes) -> List[Tuple[bytes, str]]:
        ...


class FunctionValues:
    """Restartable view over the (byte text, asm text) pairs of one function."""

    def __init__(self, byte_texts: List[str], asm_texts: List[str]) -> None:
        self._byte_texts = byte_texts
        self._asm_texts = asm_texts

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return zip(self._byte_texts, self._asm_texts)

    def __len__(self) -> int:
        return len(self._byte_texts)


class InstructionStore:
    """
    Two index-aligned text sequences per function, keyed by function id.

    Slot i of ``byte_texts[id]`` and slot i of ``asm_texts[id]`` always
    describe the same instruction. Slots are created once by ``build`` and are
    never added, removed or reordered afterwards; only their text changes.
    """

    def __init__(self, byte_texts: List[List[str]], asm_texts: List[List[str]]) -> None:
        if len(byte_texts) != len(asm_texts):
            raise InvariantViolation("Byte and asm tables cover different functions")

        self._byte_texts = byte_texts
        self._asm_texts = asm_texts
        self.check_alignment()

    @classmethod
    def build(cls, catalog: FunctionCatalog, program: bytes, disassembler: Decoder) -> 'InstructionStore':
        """Decode every catalogued function from the program bytes."""

        byte_texts: List[List[str]] = []
        asm_texts: List[List[str]] = []

        for function in catalog:
            decoded = disassembler.disassemble(program[function.offset:function.end])
            byte_texts.append([to_hex_string(consumed) for consumed, _ in decoded])
            asm_texts.append([text for _, text in decoded])

            decoded_size = sum(len(consumed) for consumed, _ in decoded)
            if decoded_size != function.size:
                logger.warning(
                    "%s: decoded %d of %d bytes", function.name, decoded_size, function.size
                )

        logger.info("Built instruction store for %d functions", len(byte_texts))
        return cls(byte_texts, asm_texts)

    def __len__(self) -> int:
        return len(self._byte_texts)

    def has_function(self, function_id: int) -> bool:
        return 0 <= function_id < len(self._byte_texts)

    def get(self, function_id: int, row: int) -> Optional[Tuple[str, str]]:
        """Return the (byte text, asm text) pair at a slot, or None if there is none."""

        if not self.has_function(function_id):
            return None

        if not 0 <= row < len(self._byte_texts[function_id]):
            return None

        return self._byte_texts[function_id][row], self._asm_texts[function_id][row]

    def values(self, function_id: int) -> Iterable[Tuple[str, str]]:
        """Iterate the slots of a function in instruction order; empty if unknown."""

        if not self.has_function(function_id):
            return FunctionValues([], [])

        return FunctionValues(self._byte_texts[function_id], self._asm_texts[function_id])

    def row_count(self, function_id: int) -> int:
        if not self.has_function(function_id):
            return 0

        return len(self._byte_texts[function_id])

    def byte_text(self, function_id: int, row: int) -> str:
        self._check_slot(function_id, row)
        return self._byte_texts[function_id][row]

    def asm_text(self, function_id: int, row: int) -> str:
        self._check_slot(function_id, row)
        return self._asm_texts[function_id][row]

    def byte_texts(self, function_id: int) -> List[str]:
        """Copy of the byte column of a function."""

        self._check_function(function_id)
        return list(self._byte_texts[function_id])

    def asm_texts(self, function_id: int) -> List[str]:
        """Copy of the asm column of a function."""

        self._check_function(function_id)
        return list(self._asm_texts[function_id])

    def set_byte_text(self, function_id: int, row: int, text: str) -> None:
        self._check_slot(function_id, row)
        self._byte_texts[function_id][row] = text

    def set_asm_text(self, function_id: int, row: int, text: str) -> None:
        self._check_slot(function_id, row)
        self._asm_texts[function_id][row] = text

    def function_bytes(self, function_id: int) -> bytes:
        """Concatenated bytes of every slot of a function, in slot order."""

        self._check_function(function_id)
        return b''.join(from_hex_string(text) for text in self._byte_texts[function_id])

    def check_alignment(self) -> None:
        """Raise InvariantViolation if any function's two columns differ in length."""

        for function_id, (hex_column, asm_column) in enumerate(zip(self._byte_texts, self._asm_texts)):
            if len(hex_column) != len(asm_column):
                raise InvariantViolation(
                    f"Function {function_id} has {len(hex_column)} byte slots "
                    f"but {len(asm_column)} asm slots"
                )

    def _check_function(self, function_id: int) -> None:
        if not self.has_function(function_id):
            raise InvariantViolation(f"Function {function_id} is not in the instruction store")

    def _check_slot(self, function_id: int, row: int) -> None:
        self._check_function(function_id)
        if not 0 <= row < len(self._byte_texts[function_id]):
            raise InvariantViolation(
                f"Row {row} out of range for function {function_id} "
                f"with {len(self._byte_texts[function_id])} instructions"
            )
