from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, Sequence

from foh.domain.common.cells import CellValue
from foh.domain.records.entities import GenericRecord


class TableHandle(Protocol):
    """Live view of one named table; rows and columns are 1-based, row 1 is the header."""

    @property
    def name(self) -> str: ...

    def read_all(self) -> list[list[CellValue]]: ...

    def read_records(self) -> list[GenericRecord]: ...

    def read_cell(self, row: int, col: int) -> CellValue: ...

    def write_cell(self, row: int, col: int, value: CellValue) -> None: ...

    def append_row(self, values: Sequence[CellValue]) -> int: ...

    def row_count(self) -> int: ...


class TabularStore(Protocol):
    def find_table(self, name: str) -> TableHandle | None: ...

    def get_table(self, name: str) -> TableHandle: ...

    def get_or_create_table(self, name: str, headers: Sequence[str]) -> TableHandle: ...

    def exclusive(self) -> AbstractContextManager[None]: ...

    def ping(self) -> bool: ...


class TableNotFoundError(Exception):
    def __init__(self, name: str) -> None:
        super().__init__(f'Table not found: "{name}"')
        self.name = name
