"""
An editing session over one binary.
"""

import logging
from typing import List, Optional, Protocol

from ..utils.search import FunctionSearch, SearchResult
from .catalog import Function, FunctionCatalog, FunctionEntry
from .navigation import Column, Mode, Navigator
from .store import Decoder, InstructionStore
from .sync import Encoder, Synchronizer
from .writer import SizeDrift, write_back

logger = logging.getLogger(__name__)


class Analyzer(Protocol):
    def analyze(self, path: str) -> List[FunctionEntry]:
        ...


class EditorSession:
    """
    Owns the catalog, instruction store, navigator and synchronizer of one binary.

    All state is mutated from the single event loop that drives the session:
    one input event or tick is handled completely before the next.
    """

    def __init__(self, path: str, catalog: FunctionCatalog, store: InstructionStore,
                 disassembler: Decoder, assembler: Encoder) -> None:
        self.path = path
        self.catalog = catalog
        self.store = store
        self.navigator = Navigator(catalog, store)
        self.synchronizer = Synchronizer(store, disassembler, assembler)
        self.search = FunctionSearch(catalog.names())
        self.modified = False

    @classmethod
    def load(cls, path: str, analyzer: Analyzer, disassembler: Decoder,
             assembler: Encoder) -> 'EditorSession':
        """Read a binary, discover its functions and decode them."""

        with open(path, 'rb') as f:
            program = f.read()

        catalog = FunctionCatalog.from_entries(analyzer.analyze(path), len(program))
        if not len(catalog):
            logger.warning("No functions found in %s", path)

        store = InstructionStore.build(catalog, program, disassembler)
        return cls(path, catalog, store, disassembler, assembler)

    @property
    def mode(self) -> Mode:
        return self.navigator.mode

    @property
    def column(self) -> Column:
        return self.navigator.selection.column

    def current_function(self) -> Function:
        return self.navigator.current_function()

    def tick(self) -> int:
        """
        Reconcile the cells edited since the last tick.

        Runs only while editing in an instruction column. Returns the number
        of cells that were actually recomputed.
        """

        if self.mode is not Mode.EDITING or not self.column.editable:
            return 0

        edits = self.navigator.take_pending_edits()
        if edits:
            self.modified = True

        return sum(
            self.synchronizer.resync(function_id, row, column)
            for function_id, row, column in edits
        )

    def cancel_edit(self) -> None:
        """Leave edit mode after reconciling anything still pending."""

        self.tick()
        self.navigator.cancel_edit()

    def write(self) -> List[SizeDrift]:
        """
        Write all functions back to the binary.

        Raises:
            WriteBackError: The session stays usable and the write may be retried
        """

        drifts = write_back(self.path, self.catalog, self.store)
        self.modified = False
        return drifts

    def find_function(self, query: str, search_type: str = 'fuzzy',
                      case_sensitive: bool = False) -> Optional[SearchResult]:
        """Select the next function whose name matches query."""

        result = self.search.find_next(query, self.navigator.selection.function,
                                       search_type, case_sensitive)
        if result is not None:
            self.navigator.select_function(result.row)

        return result

    def find_previous(self) -> Optional[SearchResult]:
        """Select the previous function matching the last search."""

        result = self.search.find_previous(self.navigator.selection.function)
        if result is not None:
            self.navigator.select_function(result.row)

        return result

    def function_matches(self, query: str, search_type: str = 'fuzzy',
                         case_sensitive: bool = False) -> List[SearchResult]:
        return self.search.find_all(query, search_type, case_sensitive)

    def status_line(self) -> str:
        return f"Mode: {self.mode.value}  Column: {self.column.value}"
