from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class SheetModel(Base):
    __tablename__ = "sheets"
    __table_args__ = (UniqueConstraint("workbook", "name", name="uq_sheets_workbook_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    workbook: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class CellModel(Base):
    __tablename__ = "sheet_cells"

    sheet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("sheets.id", ondelete="CASCADE"),
        primary_key=True,
    )
    row_index: Mapped[int] = mapped_column(Integer, primary_key=True)
    col_index: Mapped[int] = mapped_column(Integer, primary_key=True)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
