from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Sequence

from foh.application.ports.store import TableHandle, TableNotFoundError, TabularStore
from foh.domain.common.cells import EMPTY, CellValue
from foh.domain.records.entities import GenericRecord, zip_records


class InMemoryTable(TableHandle):
    def __init__(self, name: str, rows: list[list[CellValue]] | None = None) -> None:
        self._name = name
        self._rows: list[list[CellValue]] = [list(row) for row in rows or []]

    @property
    def name(self) -> str:
        return self._name

    def read_all(self) -> list[list[CellValue]]:
        width = max((len(row) for row in self._rows), default=0)
        return [list(row) + [EMPTY] * (width - len(row)) for row in self._rows]

    def read_records(self) -> list[GenericRecord]:
        return zip_records(self.read_all())

    def read_cell(self, row: int, col: int) -> CellValue:
        _check_position(row, col)
        if row > len(self._rows):
            return EMPTY
        values = self._rows[row - 1]
        if col > len(values):
            return EMPTY
        return values[col - 1]

    def write_cell(self, row: int, col: int, value: CellValue) -> None:
        _check_position(row, col)
        while len(self._rows) < row:
            self._rows.append([])
        values = self._rows[row - 1]
        while len(values) < col:
            values.append(EMPTY)
        values[col - 1] = value

    def append_row(self, values: Sequence[CellValue]) -> int:
        self._rows.append(list(values))
        return len(self._rows)

    def row_count(self) -> int:
        return len(self._rows)


class InMemoryTabularStore(TabularStore):
    def __init__(self) -> None:
        self._tables: dict[str, InMemoryTable] = {}
        self._lock = threading.RLock()

    def add_table(self, name: str, rows: list[list[CellValue]]) -> InMemoryTable:
        table = InMemoryTable(name, rows)
        self._tables[name] = table
        return table

    def find_table(self, name: str) -> InMemoryTable | None:
        return self._tables.get(name)

    def get_table(self, name: str) -> InMemoryTable:
        table = self.find_table(name)
        if table is None:
            raise TableNotFoundError(name)
        return table

    def get_or_create_table(self, name: str, headers: Sequence[str]) -> InMemoryTable:
        table = self.find_table(name)
        if table is None:
            table = self.add_table(name, [list(headers)])
        return table

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._lock:
            yield

    def ping(self) -> bool:
        return True


def _check_position(row: int, col: int) -> None:
    if row < 1 or col < 1:
        raise ValueError(f"cell position must be 1-based, got row={row} col={col}")
