"""
Catalog of the functions discovered in a binary.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import InvariantViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionEntry:
    """A function as reported by the boundary analyzer."""
    name: str
    offset: int
    size: int


@dataclass(frozen=True)
class Function:
    """A catalogued function with a stable integer id."""
    id: int
    name: str
    offset: int
    size: int

    @property
    def end(self) -> int:
        """File offset one past the last byte of the function."""
        return self.offset + self.size


class FunctionCatalog:
    """Immutable, ordered list of functions built once at load time."""

    def __init__(self, functions: Iterable[Function] = ()) -> None:
        self._functions = tuple(functions)
        self._by_name: Dict[str, Function] = {}
        for function in self._functions:
            self._by_name.setdefault(function.name, function)

    @classmethod
    def from_entries(cls, entries: Iterable[FunctionEntry], binary_size: int) -> 'FunctionCatalog':
        """
        Build a catalog from analyzer output.

        Entries with a negative offset, a non-positive size, or a region that
        runs past the end of the binary are dropped.
        """

        functions: List[Function] = []
        for entry in entries:
            if entry.offset < 0 or entry.size <= 0 or entry.offset + entry.size > binary_size:
                logger.warning(
                    "Dropping function %s at 0x%x (size %d): outside binary of %d bytes",
                    entry.name, entry.offset, entry.size, binary_size
                )
                continue

            functions.append(Function(len(functions), entry.name, entry.offset, entry.size))

        logger.info("Catalogued %d functions", len(functions))
        return cls(functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[Function]:
        return iter(self._functions)

    def __getitem__(self, index: int) -> Function:
        if not 0 <= index < len(self._functions):
            raise InvariantViolation(
                f"Function row {index} out of range for catalog of {len(self._functions)}"
            )

        return self._functions[index]

    def by_name(self, name: str) -> Optional[Function]:
        """Look up a function by name."""

        return self._by_name.get(name)

    def names(self) -> List[str]:
        """Function names in catalog order."""

        return [function.name for function in self._functions]
