from __future__ import annotations

from datetime import datetime, timezone

from foh.application.ports.store import TabularStore
from foh.domain.common.cells import CellValue
from foh.domain.records.entities import (
    EVERY_DAY,
    INVENTORY_HEADERS,
    INVENTORY_TABLE,
    SPECIALS_HEADERS,
    SPECIALS_TABLE,
    VIPS_HEADERS,
    VIPS_TABLE,
)
from foh.domain.waitlist.entities import WAITLIST_HEADERS, WAITLIST_TABLE
from foh.infrastructure.store.factory import get_tabular_store


def _inventory_rows(now: datetime) -> list[list[CellValue]]:
    return [
        ["Snow Crab", "Available", "Market", now],
        ["Dungeness Crab", "Limited", "39.99", now],
        ["Crawfish", "Sold Out", "14.99/lb", now],
        ["Shrimp", "Available", "16.99", now],
    ]


_SPECIALS_ROWS: list[list[CellValue]] = [
    [
        "Monday", "🦀", "Crab Legs Monday", "1 lb snow crab, corn, potato",
        "29.99", "36.99", "7.00", "Combo", "Dinner",
    ],
    [
        "Tuesday", "🦐", "Shrimp Tuesday", "1 lb head-on shrimp",
        "15.99", "19.99", "4.00", "Combo", "All Day",
    ],
    [
        "Friday", "🦞", "Lobster Friday", "Whole lobster with two sides",
        "34.99", "44.99", "10.00", "Plate", "Dinner",
    ],
    [
        EVERY_DAY, "🌽", "Corn & Potato Add-on", "Two corn, two potatoes",
        "4.99", "6.99", "2.00", "Side", "All Day",
    ],
]

_VIP_ROWS: list[list[CellValue]] = [
    ["Dana R.", 42, "2026-10-12", "Turbo Hot King Crab", 1840.5],
    ["Marcus T.", 17, "2026-10-03", "Cajun Shrimp", 610],
    ["Priya S.", 29, "2026-10-15", "Garlic Butter Snow Crab", 1120],
]


def _provision(
    store: TabularStore,
    name: str,
    headers: tuple[str, ...],
    rows: list[list[CellValue]],
) -> bool:
    if store.find_table(name) is not None:
        return False
    table = store.get_or_create_table(name, headers)
    for row in rows:
        table.append_row(row)
    return True


def main() -> None:
    store = get_tabular_store()
    now = datetime.now(timezone.utc)
    with store.exclusive():
        plan = [
            (WAITLIST_TABLE, WAITLIST_HEADERS, []),
            (INVENTORY_TABLE, INVENTORY_HEADERS, _inventory_rows(now)),
            (SPECIALS_TABLE, SPECIALS_HEADERS, _SPECIALS_ROWS),
            (VIPS_TABLE, VIPS_HEADERS, _VIP_ROWS),
        ]
        for name, headers, rows in plan:
            created = _provision(store, name, headers, rows)
            print(f"{name}: {'created' if created else 'already present'}")

    print("seed complete")


if __name__ == "__main__":
    main()
