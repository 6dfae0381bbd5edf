from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Sequence

from foh.domain.common.cells import CellValue, to_number
from foh.domain.common.ids import TableName

GenericRecord = dict[str, CellValue]

EVERY_DAY = "Every Day"

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class RecordField:
    param: str
    default: str = ""


@dataclass(frozen=True)
class RecordTable:
    """An append-only auxiliary table with a fixed default header."""

    name: TableName
    headers: tuple[str, ...]
    fields: tuple[RecordField, ...]
    saved_message: str | None = None

    def __post_init__(self) -> None:
        # the first header is the server timestamp
        if len(self.headers) != len(self.fields) + 1:
            raise ValueError(f"{self.name}: headers must be timestamp + one per field")

    def row_from(self, params: Mapping[str, Any], timestamp: str) -> list[CellValue]:
        return [timestamp] + [str(params.get(f.param) or f.default) for f in self.fields]


SHOUTOUTS = RecordTable(
    name=TableName("Shoutouts"),
    headers=("Timestamp", "Staff", "Reasons", "Message", "From"),
    fields=(
        RecordField("staff"),
        RecordField("reasons"),
        RecordField("message"),
        RecordField("from", "Anonymous"),
    ),
    saved_message="Shoutout saved!",
)

FEEDBACK = RecordTable(
    name=TableName("Feedback"),
    headers=("Timestamp", "Rating", "Text", "Categories", "From", "Email", "Sentiment"),
    fields=(
        RecordField("rating"),
        RecordField("text"),
        RecordField("categories"),
        RecordField("from", "Anonymous"),
        RecordField("email"),
        RecordField("sentiment", "neutral"),
    ),
    saved_message="Feedback saved!",
)

CHAT_LOGS = RecordTable(
    name=TableName("ChatLogs"),
    headers=("Timestamp", "Question", "Sentiment"),
    fields=(RecordField("question"), RecordField("sentiment", "neutral")),
)

LEADS = RecordTable(
    name=TableName("Leads"),
    headers=(
        "Timestamp",
        "Contact Name",
        "Role",
        "Email",
        "Phone",
        "Restaurant",
        "City",
        "Cuisine",
        "Capacity",
        "Biggest Pain",
        "Plan",
    ),
    fields=(
        RecordField("contactName"),
        RecordField("contactRole"),
        RecordField("email"),
        RecordField("phone"),
        RecordField("restaurantName"),
        RecordField("city"),
        RecordField("cuisineType"),
        RecordField("seatingCapacity"),
        RecordField("biggestPain"),
        RecordField("plan", "Professional"),
    ),
    saved_message="Lead captured!",
)

# Provisioned by hand in the store; never auto-created.
SPECIALS_TABLE = TableName("Specials")
SPECIALS_HEADERS: tuple[str, ...] = (
    "Day",
    "Icon",
    "Name",
    "Description",
    "Price",
    "OrigPrice",
    "Savings",
    "Type",
    "Availability",
)

VIPS_TABLE = TableName("VIPs")
VIPS_HEADERS: tuple[str, ...] = ("Name", "Visits", "LastVisit", "Favorite", "TotalSpent")

INVENTORY_TABLE = TableName("Live Update")
INVENTORY_HEADERS: tuple[str, ...] = ("Item", "Status", "Price", "LastUpdated")


def weekday_name(day: date) -> str:
    return _WEEKDAYS[day.weekday()]


def runs_on(day_cell: CellValue, weekday: str) -> bool:
    day = str(day_cell).strip()
    return day == weekday or day == EVERY_DAY


def zip_records(rows: Sequence[Sequence[CellValue]]) -> list[GenericRecord]:
    if len(rows) < 2:
        return []
    headers = [str(header).lower() for header in rows[0]]
    return [
        {header: row[index] if index < len(row) else "" for index, header in enumerate(headers)}
        for row in rows[1:]
    ]


def rank_by_visits(records: Sequence[GenericRecord]) -> list[GenericRecord]:
    # sorted() is stable, so ties keep their table order
    return sorted(records, key=lambda record: to_number(record.get("visits")), reverse=True)
