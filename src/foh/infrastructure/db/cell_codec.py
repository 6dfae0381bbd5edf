from __future__ import annotations

from datetime import datetime, timezone

from foh.domain.common.cells import CellValue, to_datetime

KIND_TEXT = "text"
KIND_INT = "int"
KIND_FLOAT = "float"
KIND_BOOL = "bool"
KIND_DATETIME = "datetime"


class CellDecodeError(Exception):
    pass


def encode_cell(value: CellValue | None) -> tuple[str, str]:
    if value is None:
        return KIND_TEXT, ""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return KIND_BOOL, "true" if value else "false"
    if isinstance(value, int):
        return KIND_INT, str(value)
    if isinstance(value, float):
        return KIND_FLOAT, repr(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return KIND_DATETIME, value.isoformat()
    return KIND_TEXT, str(value)


def decode_cell(kind: str, raw: str) -> CellValue:
    if kind == KIND_TEXT:
        return raw
    if kind == KIND_INT:
        return int(raw)
    if kind == KIND_FLOAT:
        return float(raw)
    if kind == KIND_BOOL:
        return raw == "true"
    if kind == KIND_DATETIME:
        moment = to_datetime(raw)
        if moment is None:
            raise CellDecodeError(f"invalid datetime cell: {raw!r}")
        return moment
    raise CellDecodeError(f"unknown cell kind: {kind!r}")
