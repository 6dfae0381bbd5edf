from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Union

CellValue = Union[str, int, float, bool, datetime]

EMPTY: CellValue = ""


def is_blank(value: object) -> bool:
    if value is None:
        return True
    return str(value).strip() == ""


# spreadsheet exports write dates as month/day/year text
_SHEET_FORMATS = ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y %H:%M", "%m/%d/%Y")


def _parse_sheet_text(raw: str) -> datetime | None:
    for fmt in _SHEET_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return None


def to_datetime(value: object) -> datetime | None:
    """Read a timestamp cell; anything unparseable is treated as missing.

    Accepts datetimes, ISO-8601 text and month/day/year text. Naive values
    are taken as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    iso = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        parsed = _parse_sheet_text(raw)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_number(value: object) -> float:
    """Numeric reading of a cell; blanks and non-numbers count as 0."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = "" if value is None else str(value).strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def iso_timestamp(moment: datetime) -> str:
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")
