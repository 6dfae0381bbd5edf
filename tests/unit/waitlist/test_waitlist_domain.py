from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from foh.domain.common.ids import RowNumber
from foh.domain.waitlist.entities import (
    SpiceLevel,
    WaitlistEntry,
    elapsed_minutes,
    entry_id_for,
    normalize_spice_level,
)

ARRIVED = datetime(2026, 10, 16, 18, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (" TURBO   HOT ", SpiceLevel.TURBO_HOT),
        ("turbohot", SpiceLevel.TURBO_HOT),
        ("Spicy", SpiceLevel.SPICY),
        ("\tmild\n", SpiceLevel.MILD),
        ("weird", SpiceLevel.NO_SPICE),
        ("", SpiceLevel.NO_SPICE),
        (None, SpiceLevel.NO_SPICE),
        ("extra spicy", SpiceLevel.NO_SPICE),
    ],
)
def test_spice_level_normalization(raw: str | None, expected: SpiceLevel) -> None:
    assert normalize_spice_level(raw) == expected


def test_spice_level_normalization_is_idempotent() -> None:
    for level in SpiceLevel:
        assert normalize_spice_level(level.value) == level


def test_elapsed_minutes_rounds_half_up_and_never_goes_negative() -> None:
    assert elapsed_minutes(ARRIVED, ARRIVED + timedelta(minutes=12, seconds=29)) == 12
    assert elapsed_minutes(ARRIVED, ARRIVED + timedelta(minutes=12, seconds=30)) == 13
    assert elapsed_minutes(ARRIVED, ARRIVED - timedelta(minutes=5)) == 0


def test_waiting_entry_rolls_forward_to_now() -> None:
    entry = WaitlistEntry.from_row(
        RowNumber(2), [ARRIVED, "Sam", "555", "2", "", "Waiting", "", 3, "Yes", "No", "Mild"]
    )
    rolled = entry.rolled_forward(ARRIVED + timedelta(minutes=25))
    assert rolled is not None
    assert rolled.wait_minutes == 25
    assert rolled.time_seated is None


def test_seated_entry_keeps_first_seat_time() -> None:
    seated_at = ARRIVED + timedelta(minutes=18)
    entry = WaitlistEntry.from_row(
        RowNumber(2), [ARRIVED, "Sam", "555", "2", "", "seated", seated_at, 18, "Yes", "No", ""]
    )
    rolled = entry.rolled_forward(ARRIVED + timedelta(hours=2))
    assert rolled is not None
    assert rolled.time_seated == seated_at
    assert rolled.wait_minutes == 18


def test_entry_without_time_in_or_with_other_status_is_not_rolled() -> None:
    no_time_in = WaitlistEntry.from_row(RowNumber(2), ["", "Sam", "", "", "", "Waiting"])
    cancelled = WaitlistEntry.from_row(RowNumber(3), [ARRIVED, "Ana", "", "", "", "Left"])
    assert no_time_in.rolled_forward(ARRIVED) is None
    assert cancelled.rolled_forward(ARRIVED) is None


def test_time_in_accepts_iso_strings() -> None:
    entry = WaitlistEntry.from_row(RowNumber(2), ["2026-10-16T18:00:00.000Z", "Sam"])
    assert entry.time_in == ARRIVED


def test_entry_id_is_stable_across_status_changes() -> None:
    waiting = WaitlistEntry.from_row(RowNumber(2), [ARRIVED, "Sam", "555", "", "", "Waiting"])
    seated = WaitlistEntry.from_row(RowNumber(5), [ARRIVED, "Sam", "555", "", "", "Seated"])
    assert waiting.entry_id == seated.entry_id == entry_id_for(ARRIVED, "Sam", "555")
    assert entry_id_for(ARRIVED, "Sam", "556") != waiting.entry_id


def test_create_and_to_row_follow_column_order() -> None:
    entry = WaitlistEntry.create(
        row=RowNumber(2),
        now=ARRIVED,
        name="Sam",
        phone="555-0100",
        party="4",
        notes="booth",
        sms_opt_in="Yes",
        future_texts="No",
        spice_level=SpiceLevel.SPICY,
    )
    assert entry.to_row() == [
        ARRIVED,
        "Sam",
        "555-0100",
        "4",
        "booth",
        "Waiting",
        "",
        "",
        "Yes",
        "No",
        "Spicy",
    ]


@pytest.mark.parametrize(
    "raw",
    ["10/16/2026 18:00:00", "10/16/2026 18:00", " 10/16/2026 18:00:00 "],
)
def test_time_in_accepts_spreadsheet_date_text(raw: str) -> None:
    entry = WaitlistEntry.from_row(RowNumber(2), [raw, "Sam", "", "", "", "Waiting"])
    assert entry.time_in == ARRIVED
    rolled = entry.rolled_forward(ARRIVED + timedelta(minutes=7))
    assert rolled is not None
    assert rolled.wait_minutes == 7


def test_unparseable_time_in_is_treated_as_missing() -> None:
    entry = WaitlistEntry.from_row(
        RowNumber(2), ["16th of October", "Sam", "", "", "", "Waiting"]
    )
    assert entry.time_in is None
    assert entry.rolled_forward(ARRIVED) is None
