"""
Function-boundary analysis backed by radare2.
"""

import logging
from typing import Any, Dict, List, Optional

import r2pipe

from .catalog import FunctionEntry

logger = logging.getLogger(__name__)


class R2FunctionAnalyzer:
    """Discovers functions with radare2, which also handles stripped binaries."""

    ANALYSIS_COMMAND = 'aaa'
    LIST_COMMAND = 'aflj'

    def __init__(self, flags: Optional[List[str]] = None) -> None:
        self.flags = flags if flags is not None else ['-2']

    def analyze(self, path: str) -> List[FunctionEntry]:
        """
        Run the analysis and return functions with file offsets.

        Args:
            path: Path to the binary

        Returns:
            Functions in the order radare2 lists them, or an empty list if
            radare2 is unavailable or its output cannot be parsed
        """

        try:
            r2 = r2pipe.open(path, flags=self.flags)
        except Exception as e:
            logger.error("Could not start radare2 on %s: %s", path, e)
            return []

        try:
            r2.cmd(self.ANALYSIS_COMMAND)
            listing = r2.cmdj(self.LIST_COMMAND)
            if not isinstance(listing, list):
                logger.error("Unexpected %s output for %s", self.LIST_COMMAND, path)
                return []

            entries = []
            for item in listing:
                entry = self._parse_entry(r2, item)
                if entry is not None:
                    entries.append(entry)

            return entries
        except Exception as e:
            logger.error("Function analysis of %s failed: %s", path, e)
            return []
        finally:
            try:
                r2.quit()
            except Exception:
                logger.debug("radare2 did not shut down cleanly", exc_info=True)

    def _parse_entry(self, r2: Any, item: Dict[str, Any]) -> Optional[FunctionEntry]:
        """Convert one aflj record, translating its address to a file offset."""

        name = item.get('name')
        address = item.get('addr', item.get('offset'))
        size = item.get('size')
        if not isinstance(name, str) or not isinstance(address, int) or not isinstance(size, int):
            logger.debug("Skipping malformed function record: %r", item)
            return None

        physical = r2.cmd(f"?p {address}").strip()
        try:
            offset = int(physical, 16)
        except ValueError:
            logger.warning("No file offset for %s at 0x%x", name, address)
            return None

        return FunctionEntry(name, offset, size)
