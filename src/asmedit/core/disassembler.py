"""
Instruction decoding using Capstone.
"""

import logging
from typing import Dict, Final, List, Optional, Tuple

from capstone import (
    Cs, CsError, CS_ARCH_X86, CS_MODE_16, CS_MODE_32, CS_MODE_64,
    CS_OPT_SYNTAX_ATT, CS_OPT_SYNTAX_INTEL
)

from ..config import EditorConfig

logger = logging.getLogger(__name__)

CS_MODES: Final[Dict[str, int]] = {
    '16': CS_MODE_16,
    '32': CS_MODE_32,
    '64': CS_MODE_64,
}

# Capstone has no NASM printer; its Intel output is the closest match.
CS_SYNTAXES: Final[Dict[str, int]] = {
    'intel': CS_OPT_SYNTAX_INTEL,
    'nasm': CS_OPT_SYNTAX_INTEL,
    'att': CS_OPT_SYNTAX_ATT,
}

DecodedInstruction = Tuple[bytes, str]


class Disassembler:
    """Decodes byte sequences into (consumed bytes, instruction text) pairs."""

    def __init__(self, config: EditorConfig = EditorConfig()) -> None:
        self.address = config.disassemble_address
        self.cs = Cs(CS_ARCH_X86, CS_MODES[config.mode])
        self.cs.syntax = CS_SYNTAXES[config.syntax]

    def disassemble(self, data: bytes, address: Optional[int] = None) -> List[DecodedInstruction]:
        """
        Decode instructions from the start of data until it is exhausted.

        Decoding stops at the first byte sequence Capstone cannot decode, so
        an undecodable input produces an empty list.

        Args:
            data: Raw instruction bytes
            address: Address of the first byte, defaults to the configured one

        Returns:
            Decoded instructions in order
        """

        if address is None:
            address = self.address

        try:
            return [
                (bytes(insn.bytes), format_instruction(insn.mnemonic, insn.op_str))
                for insn in self.cs.disasm(bytes(data), address)
            ]
        except CsError as e:
            logger.debug("Capstone failed on %d bytes: %s", len(data), e)
            return []


def format_instruction(mnemonic: str, op_str: str) -> str:
    """Join a mnemonic and its operands the way the disasm column shows them."""

    return f"{mnemonic} {op_str}".strip()
