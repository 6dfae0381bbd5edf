from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum, IntEnum
from typing import Sequence

from foh.domain.common.cells import (
    EMPTY,
    CellValue,
    is_blank,
    iso_timestamp,
    round_half_up,
    to_datetime,
)
from foh.domain.common.ids import EntryId, RowNumber, TableName

WAITLIST_TABLE = TableName("Waitlist")

WAITLIST_HEADERS: tuple[str, ...] = (
    "TimeIn",
    "Name",
    "Phone",
    "Party",
    "Notes",
    "Status",
    "TimeSeated",
    "WaitMin",
    "SmsOptIn",
    "FutureTexts",
    "Spice",
)

FIRST_DATA_ROW = 2


class WaitlistColumn(IntEnum):
    TIME_IN = 1
    NAME = 2
    PHONE = 3
    PARTY = 4
    NOTES = 5
    STATUS = 6
    TIME_SEATED = 7
    WAIT_MIN = 8
    SMS_OPT_IN = 9
    FUTURE_TEXTS = 10
    SPICE = 11


class WaitlistStatus(str, Enum):
    WAITING = "Waiting"
    NOTIFIED = "Notified"
    SEATED = "Seated"


class SpiceLevel(str, Enum):
    NO_SPICE = "No Spice"
    MILD = "Mild"
    SPICY = "Spicy"
    TURBO_HOT = "Turbo Hot"


_SPICE_ALIASES: dict[str, SpiceLevel] = {
    "turbo hot": SpiceLevel.TURBO_HOT,
    "turbohot": SpiceLevel.TURBO_HOT,
    "spicy": SpiceLevel.SPICY,
    "mild": SpiceLevel.MILD,
}

_WHITESPACE = re.compile(r"\s+")


def normalize_spice_level(raw: str | None) -> SpiceLevel:
    key = _WHITESPACE.sub(" ", (raw or "").lower()).strip()
    return _SPICE_ALIASES.get(key, SpiceLevel.NO_SPICE)


def is_seated(status: object) -> bool:
    return str(status or "").strip().lower() == WaitlistStatus.SEATED.value.lower()


def is_still_waiting(status: object) -> bool:
    return str(status or "").strip().lower() in {
        WaitlistStatus.WAITING.value.lower(),
        WaitlistStatus.NOTIFIED.value.lower(),
    }


def elapsed_minutes(start: datetime, end: datetime) -> int:
    return max(0, round_half_up((end - start).total_seconds() / 60))


def entry_id_for(time_in: datetime | None, name: object, phone: object) -> EntryId:
    stamp = iso_timestamp(time_in) if time_in is not None else ""
    fingerprint = f"{stamp}|{'' if name is None else name}|{'' if phone is None else phone}"
    return EntryId(hashlib.sha1(fingerprint.encode("utf-8")).hexdigest()[:12])


def _cell(values: Sequence[CellValue], column: WaitlistColumn) -> CellValue:
    index = column - 1
    if index < len(values):
        return values[index]
    return EMPTY


def _wait_minutes_cell(value: CellValue) -> int | None:
    if isinstance(value, bool) or is_blank(value):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class WaitlistEntry:
    row: RowNumber
    time_in: datetime | None
    name: CellValue
    phone: CellValue
    party: CellValue
    notes: CellValue
    status: str
    time_seated: datetime | None
    wait_minutes: int | None
    sms_opt_in: CellValue
    future_texts: CellValue
    spice_level: CellValue

    @classmethod
    def create(
        cls,
        *,
        row: RowNumber,
        now: datetime,
        name: str,
        phone: str,
        party: str,
        notes: str,
        sms_opt_in: str,
        future_texts: str,
        spice_level: SpiceLevel,
    ) -> WaitlistEntry:
        return cls(
            row=row,
            time_in=now,
            name=name,
            phone=phone,
            party=party,
            notes=notes,
            status=WaitlistStatus.WAITING.value,
            time_seated=None,
            wait_minutes=None,
            sms_opt_in=sms_opt_in,
            future_texts=future_texts,
            spice_level=spice_level.value,
        )

    @classmethod
    def from_row(cls, row: RowNumber, values: Sequence[CellValue]) -> WaitlistEntry:
        status = _cell(values, WaitlistColumn.STATUS)
        return cls(
            row=row,
            time_in=to_datetime(_cell(values, WaitlistColumn.TIME_IN)),
            name=_cell(values, WaitlistColumn.NAME),
            phone=_cell(values, WaitlistColumn.PHONE),
            party=_cell(values, WaitlistColumn.PARTY),
            notes=_cell(values, WaitlistColumn.NOTES),
            status="" if status is None else str(status),
            time_seated=to_datetime(_cell(values, WaitlistColumn.TIME_SEATED)),
            wait_minutes=_wait_minutes_cell(_cell(values, WaitlistColumn.WAIT_MIN)),
            sms_opt_in=_cell(values, WaitlistColumn.SMS_OPT_IN),
            future_texts=_cell(values, WaitlistColumn.FUTURE_TEXTS),
            spice_level=_cell(values, WaitlistColumn.SPICE),
        )

    @property
    def entry_id(self) -> EntryId:
        return entry_id_for(self.time_in, self.name, self.phone)

    @property
    def has_name(self) -> bool:
        return bool(self.name)

    def to_row(self) -> list[CellValue]:
        return [
            self.time_in if self.time_in is not None else EMPTY,
            self.name,
            self.phone,
            self.party,
            self.notes,
            self.status,
            self.time_seated if self.time_seated is not None else EMPTY,
            self.wait_minutes if self.wait_minutes is not None else EMPTY,
            self.sms_opt_in,
            self.future_texts,
            self.spice_level,
        ]

    def seat(self, now: datetime) -> WaitlistEntry:
        """Fill in seating time; the first seating time wins and the wait freezes there."""
        seated_at = self.time_seated or now
        wait = elapsed_minutes(self.time_in, seated_at) if self.time_in else self.wait_minutes
        return replace(
            self,
            time_seated=seated_at,
            wait_minutes=wait,
        )

    def rolled_forward(self, now: datetime) -> WaitlistEntry | None:
        """Recompute derived columns, or None when the row is not eligible."""
        if self.time_in is None:
            return None
        if is_still_waiting(self.status):
            return replace(self, wait_minutes=elapsed_minutes(self.time_in, now))
        if is_seated(self.status):
            return self.seat(now)
        return None
