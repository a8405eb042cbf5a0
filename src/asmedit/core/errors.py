"""
Exception types raised by the editor core.
"""

from typing import List, Optional


class AsmEditError(Exception):
    """Base class for all editor errors."""


class InvariantViolation(AsmEditError):
    """
    The catalog and instruction store no longer agree.

    Raised when a function id is missing from the store or a row index is out
    of range after bounds checks should have prevented it. The session cannot
    continue; the host should log it and shut down cleanly.
    """


class AssemblyError(AsmEditError):
    """The assembler rejected a line of instruction text."""

    def __init__(self, text: str, reason: str = "") -> None:
        message = f"Cannot assemble {text!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.text = text
        self.reason = reason


class WriteBackError(AsmEditError, OSError):
    """Writing functions back to the binary failed part way through."""

    def __init__(self, path: str, written: List[str], failed: Optional[str], cause: OSError) -> None:
        super().__init__(f"Failed to write {failed or 'binary'} to {path}: {cause}")
        self.path = path
        self.written = written
        self.failed = failed
        self.cause = cause
