"""
Session configuration for the editor.
"""

import argparse
from dataclasses import dataclass
from typing import Dict, Final, Optional, Tuple

SUPPORTED_TARGETS: Final[Dict[str, Tuple[str, ...]]] = {
    'x86': ('16', '32', '64'),
}
SUPPORTED_SYNTAXES: Final[Tuple[str, ...]] = ('intel', 'nasm', 'att')


@dataclass(frozen=True)
class EditorConfig:
    """Settings fixed for the lifetime of one editing session."""

    binary: str = ""
    arch: str = 'x86'
    mode: str = '64'
    syntax: str = 'intel'
    tick_ms: int = 100
    disassemble_address: int = 0x0
    assemble_address: int = 0x1000
    log_level: str = 'WARNING'
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        modes = SUPPORTED_TARGETS.get(self.arch)
        if modes is None:
            raise ValueError(f"Unsupported architecture: {self.arch}")
        if self.mode not in modes:
            raise ValueError(f"Unsupported mode {self.mode} for {self.arch}")
        if self.syntax not in SUPPORTED_SYNTAXES:
            raise ValueError(f"Unsupported syntax: {self.syntax}")
        if self.tick_ms <= 0:
            raise ValueError("Tick interval must be positive")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'EditorConfig':
        """Build a config from parsed command line arguments."""

        return cls(
            binary=args.file,
            arch=args.arch,
            mode=args.mode,
            syntax=args.syntax,
            tick_ms=args.tick,
            log_level=args.log_level,
            log_file=args.log_file,
        )
