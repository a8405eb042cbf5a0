"""
Core package for keeping byte text and instruction text in sync.

This package implements the function catalog, the instruction store that
holds the two index-aligned text columns of every function, the navigation
state machine, the synchronizer that re-derives one column from the other,
and the writer that puts edited bytes back into the binary.
"""

from .catalog import Function, FunctionCatalog, FunctionEntry
from .errors import AsmEditError, AssemblyError, InvariantViolation, WriteBackError
from .navigation import Column, Direction, Mode, Navigator, Selection, cursor_transition
from .session import EditorSession
from .store import InstructionStore
from .sync import INVALID_INSTRUCTION, Synchronizer
from .writer import SizeDrift, write_back

__all__ = [
    'Function',
    'FunctionCatalog',
    'FunctionEntry',
    'AsmEditError',
    'AssemblyError',
    'InvariantViolation',
    'WriteBackError',
    'Column',
    'Direction',
    'Mode',
    'Navigator',
    'Selection',
    'cursor_transition',
    'EditorSession',
    'InstructionStore',
    'INVALID_INSTRUCTION',
    'Synchronizer',
    'SizeDrift',
    'write_back',
]
