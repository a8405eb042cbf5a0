"""
Instruction encoding using Keystone.
"""

import logging
from typing import Dict, Final, Optional

from keystone import (
    Ks, KsError, KS_ARCH_X86, KS_MODE_16, KS_MODE_32, KS_MODE_64,
    KS_OPT_SYNTAX_ATT, KS_OPT_SYNTAX_INTEL, KS_OPT_SYNTAX_NASM
)

from ..config import EditorConfig
from .errors import AssemblyError

logger = logging.getLogger(__name__)

KS_MODES: Final[Dict[str, int]] = {
    '16': KS_MODE_16,
    '32': KS_MODE_32,
    '64': KS_MODE_64,
}

KS_SYNTAXES: Final[Dict[str, int]] = {
    'intel': KS_OPT_SYNTAX_INTEL,
    'nasm': KS_OPT_SYNTAX_NASM,
    'att': KS_OPT_SYNTAX_ATT,
}


class Assembler:
    """Encodes a single line of instruction text into bytes."""

    def __init__(self, config: EditorConfig = EditorConfig()) -> None:
        self.address = config.assemble_address
        self.ks = Ks(KS_ARCH_X86, KS_MODES[config.mode])
        self.ks.syntax = KS_SYNTAXES[config.syntax]

    def assemble(self, text: str, address: Optional[int] = None) -> bytes:
        """
        Assemble one instruction.

        Args:
            text: Instruction text such as "push rbp"
            address: Address the instruction is assembled at, defaults to the
                configured one

        Returns:
            The encoded bytes

        Raises:
            AssemblyError: If Keystone rejects the text or emits nothing
        """

        if address is None:
            address = self.address

        if not text.strip():
            raise AssemblyError(text, "empty instruction")

        try:
            encoding, _ = self.ks.asm(text, address)
        except KsError as e:
            raise AssemblyError(text, str(e)) from e

        if not encoding:
            raise AssemblyError(text, "no bytes produced")

        return bytes(encoding)
