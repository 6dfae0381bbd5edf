from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from typing import Iterator, Sequence

from sqlalchemy import Engine, func, select, text
from sqlalchemy.orm import Session

from foh.application.ports.store import TableHandle, TableNotFoundError, TabularStore
from foh.domain.common.cells import EMPTY, CellValue
from foh.domain.records.entities import GenericRecord, zip_records
from foh.infrastructure.db.cell_codec import decode_cell, encode_cell
from foh.infrastructure.db.models.sheet import Base, CellModel, SheetModel
from foh.infrastructure.db.session import get_engine

_SCHEMA_READY: set[Engine] = set()
_SCHEMA_LOCK = threading.Lock()

# Requests against the store run one at a time within this process.
_STORE_LOCK = threading.RLock()


def ensure_schema(engine: Engine) -> None:
    with _SCHEMA_LOCK:
        if engine in _SCHEMA_READY:
            return
        Base.metadata.create_all(engine)
        _SCHEMA_READY.add(engine)


class SqlAlchemyTable(TableHandle):
    def __init__(self, engine: Engine, sheet_id: int, name: str) -> None:
        self._engine = engine
        self._sheet_id = sheet_id
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def read_all(self) -> list[list[CellValue]]:
        statement = (
            select(CellModel)
            .where(CellModel.sheet_id == self._sheet_id)
            .order_by(CellModel.row_index, CellModel.col_index)
        )
        with Session(self._engine) as session:
            cells = list(session.execute(statement).scalars().all())

        if not cells:
            return []
        height = max(cell.row_index for cell in cells)
        width = max(cell.col_index for cell in cells)
        grid: list[list[CellValue]] = [[EMPTY] * width for _ in range(height)]
        for cell in cells:
            grid[cell.row_index - 1][cell.col_index - 1] = decode_cell(cell.kind, cell.value)
        return grid

    def read_records(self) -> list[GenericRecord]:
        return zip_records(self.read_all())

    def read_cell(self, row: int, col: int) -> CellValue:
        _check_position(row, col)
        with Session(self._engine) as session:
            cell = session.get(CellModel, (self._sheet_id, row, col))
            if cell is None:
                return EMPTY
            return decode_cell(cell.kind, cell.value)

    def write_cell(self, row: int, col: int, value: CellValue) -> None:
        _check_position(row, col)
        kind, raw = encode_cell(value)
        with Session(self._engine) as session:
            cell = session.get(CellModel, (self._sheet_id, row, col))
            if cell is None:
                session.add(
                    CellModel(
                        sheet_id=self._sheet_id,
                        row_index=row,
                        col_index=col,
                        kind=kind,
                        value=raw,
                    )
                )
            else:
                cell.kind = kind
                cell.value = raw
            session.commit()

    def append_row(self, values: Sequence[CellValue]) -> int:
        with Session(self._engine) as session:
            row = self._last_row(session) + 1
            # an appended row always occupies at least its first cell
            for col, value in enumerate(values or [EMPTY], start=1):
                kind, raw = encode_cell(value)
                session.add(
                    CellModel(
                        sheet_id=self._sheet_id,
                        row_index=row,
                        col_index=col,
                        kind=kind,
                        value=raw,
                    )
                )
            session.commit()
        return row

    def row_count(self) -> int:
        with Session(self._engine) as session:
            return self._last_row(session)

    def _last_row(self, session: Session) -> int:
        statement = select(func.coalesce(func.max(CellModel.row_index), 0)).where(
            CellModel.sheet_id == self._sheet_id
        )
        return int(session.execute(statement).scalar_one())


class SqlAlchemyTabularStore(TabularStore):
    def __init__(self, engine: Engine | None = None, workbook: str | None = None) -> None:
        self._engine = engine or get_engine()
        self._workbook = workbook or os.getenv("STORE_ID", "default")
        ensure_schema(self._engine)

    def find_table(self, name: str) -> SqlAlchemyTable | None:
        statement = select(SheetModel.id).where(
            SheetModel.workbook == self._workbook,
            SheetModel.name == name,
        )
        with Session(self._engine) as session:
            sheet_id = session.execute(statement).scalar_one_or_none()
        if sheet_id is None:
            return None
        return SqlAlchemyTable(self._engine, sheet_id, name)

    def get_table(self, name: str) -> SqlAlchemyTable:
        table = self.find_table(name)
        if table is None:
            raise TableNotFoundError(name)
        return table

    def get_or_create_table(self, name: str, headers: Sequence[str]) -> SqlAlchemyTable:
        table = self.find_table(name)
        if table is not None:
            return table

        with Session(self._engine) as session:
            sheet = SheetModel(workbook=self._workbook, name=name)
            session.add(sheet)
            session.flush()
            for col, header in enumerate(headers, start=1):
                kind, raw = encode_cell(header)
                session.add(
                    CellModel(sheet_id=sheet.id, row_index=1, col_index=col, kind=kind, value=raw)
                )
            session.commit()
            sheet_id = sheet.id
        return SqlAlchemyTable(self._engine, sheet_id, name)

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with _STORE_LOCK:
            yield

    def ping(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception:
            return False


def _check_position(row: int, col: int) -> None:
    if row < 1 or col < 1:
        raise ValueError(f"cell position must be 1-based, got row={row} col={col}")
