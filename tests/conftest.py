"""Shared fixtures: table-driven engines and a small two-function binary."""

from typing import Dict, List, Tuple

import pytest

from asmedit.core.catalog import FunctionCatalog, FunctionEntry
from asmedit.core.errors import AssemblyError
from asmedit.core.session import EditorSession
from asmedit.core.store import InstructionStore

ENCODINGS: Dict[bytes, str] = {
    b'\x55': 'push rbp',
    b'\x48\x89\xe5': 'mov rbp, rsp',
    b'\x5d': 'pop rbp',
    b'\xc3': 'ret',
    b'\x90': 'nop',
    b'\x31\xc0': 'xor eax, eax',
}

# main: push rbp; mov rbp, rsp; pop rbp; ret
# helper: push rbp; ret
PROGRAM = (
    b'\xcc\xcc'
    + b'\x55\x48\x89\xe5\x5d\xc3'
    + b'\xcc\xcc'
    + b'\x55\xc3'
    + b'\xcc\xcc'
)
MAIN_OFFSET = 2
HELPER_OFFSET = 10


class TableDisassembler:
    """Decodes only the instructions in ENCODINGS, longest match first."""

    def __init__(self) -> None:
        self.calls: List[bytes] = []

    def disassemble(self, data: bytes) -> List[Tuple[bytes, str]]:
        self.calls.append(bytes(data))
        result = []
        pos = 0
        while pos < len(data):
            for size in (3, 2, 1):
                chunk = bytes(data[pos:pos + size])
                if len(chunk) == size and chunk in ENCODINGS:
                    result.append((chunk, ENCODINGS[chunk]))
                    pos += size
                    break
            else:
                break
        return result


class TableAssembler:
    """Encodes only the instruction texts in ENCODINGS."""

    def __init__(self) -> None:
        self.calls: List[str] = []
        self._table = {text: data for data, text in ENCODINGS.items()}

    def assemble(self, text: str) -> bytes:
        self.calls.append(text)
        if text not in self._table:
            raise AssemblyError(text, "unknown instruction")
        return self._table[text]


class StaticAnalyzer:
    def __init__(self, entries: List[FunctionEntry]) -> None:
        self.entries = entries

    def analyze(self, path: str) -> List[FunctionEntry]:
        return list(self.entries)


ENTRIES = [
    FunctionEntry('main', MAIN_OFFSET, 6),
    FunctionEntry('helper', HELPER_OFFSET, 2),
]


@pytest.fixture
def disassembler():
    return TableDisassembler()


@pytest.fixture
def assembler():
    return TableAssembler()


@pytest.fixture
def catalog():
    return FunctionCatalog.from_entries(ENTRIES, len(PROGRAM))


@pytest.fixture
def store(catalog, disassembler):
    return InstructionStore.build(catalog, PROGRAM, disassembler)


@pytest.fixture
def binary(tmp_path):
    path = tmp_path / "program.bin"
    path.write_bytes(PROGRAM)
    return path


@pytest.fixture
def session(binary, disassembler, assembler):
    return EditorSession.load(str(binary), StaticAnalyzer(ENTRIES), disassembler, assembler)
