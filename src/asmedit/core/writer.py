"""
Writes edited functions back into the binary in place.
"""

import logging
from dataclasses import dataclass
from typing import List

from .catalog import Function, FunctionCatalog
from .errors import WriteBackError
from .store import InstructionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeDrift:
    """A function whose current bytes no longer match its original size."""
    function: Function
    original_size: int
    written_size: int

    @property
    def overflow(self) -> int:
        """Bytes written past the end of the function, 0 if it shrank."""
        return max(0, self.written_size - self.original_size)


def write_back(path: str, catalog: FunctionCatalog, store: InstructionStore) -> List[SizeDrift]:
    """
    Write every function's current bytes at its original file offset.

    Functions are not resized: shorter output leaves the old tail bytes in
    place and longer output overwrites whatever follows the function. Offsets
    are never recomputed.

    Args:
        path: Binary to modify in place
        catalog: Functions to write, in catalog order
        store: Source of each function's byte text

    Returns:
        The functions whose written length differs from their size

    Raises:
        WriteBackError: If the file cannot be opened or a write fails.
            Functions written before the failure stay written.
    """

    drifts: List[SizeDrift] = []
    written: List[str] = []

    try:
        f = open(path, 'r+b')
    except OSError as e:
        raise WriteBackError(path, written, None, e) from e

    with f:
        for function in catalog:
            data = store.function_bytes(function.id)
            try:
                f.seek(function.offset)
                f.write(data)
                f.flush()
            except OSError as e:
                raise WriteBackError(path, written, function.name, e) from e

            written.append(function.name)
            if len(data) != function.size:
                drifts.append(SizeDrift(function, function.size, len(data)))
                logger.warning(
                    "%s: wrote %d bytes over a %d byte function at 0x%x",
                    function.name, len(data), function.size, function.offset
                )

    logger.info("Wrote %d functions to %s", len(written), path)
    return drifts
