from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from foh.application.ports.publisher import NullEventPublisher
from foh.application.ports.store import TableNotFoundError
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.dispatcher import ActionDispatcher
from foh.domain.waitlist.entities import WAITLIST_HEADERS, WAITLIST_TABLE
from foh.infrastructure.db.repositories.tabular_store import SqlAlchemyTabularStore

ARRIVED = datetime(2026, 10, 16, 18, 0, tzinfo=timezone.utc)


def test_cells_keep_their_types(sql_store) -> None:
    table = sql_store.get_or_create_table("Mixed", ["Text", "Int", "Float", "Bool", "When"])
    row = table.append_row(["crab", 42, 8.5, True, ARRIVED])

    assert row == 2
    assert table.read_all()[1] == ["crab", 42, 8.5, True, ARRIVED]
    assert table.read_cell(2, 5) == ARRIVED


def test_get_or_create_is_idempotent(sql_store) -> None:
    first = sql_store.get_or_create_table("Leads", ["Timestamp", "Plan"])
    first.append_row(["t", "Pro"])

    second = sql_store.get_or_create_table("Leads", ["Other"])

    assert second.read_all() == [["Timestamp", "Plan"], ["t", "Pro"]]
    assert second.row_count() == 2


def test_missing_table(sql_store) -> None:
    assert sql_store.find_table("Waitlist") is None
    with pytest.raises(TableNotFoundError):
        sql_store.get_table("Waitlist")


def test_ragged_rows_are_padded_and_writes_grow_the_grid(sql_store) -> None:
    table = sql_store.get_or_create_table("Waitlist", ["TimeIn", "Name", "Phone"])
    table.append_row([ARRIVED, "Sam"])

    table.write_cell(4, 2, "Ana")
    table.write_cell(2, 2, "Sammy")

    assert table.row_count() == 4
    assert table.read_all() == [
        ["TimeIn", "Name", "Phone"],
        [ARRIVED, "Sammy", ""],
        ["", "", ""],
        ["", "Ana", ""],
    ]
    assert table.read_cell(3, 1) == ""


def test_workbooks_are_isolated(sql_engine) -> None:
    SqlAlchemyTabularStore(engine=sql_engine, workbook="north").get_or_create_table(
        "VIPs", ["Name"]
    )
    south = SqlAlchemyTabularStore(engine=sql_engine, workbook="south")
    assert south.find_table("VIPs") is None


def test_ping(sql_store) -> None:
    assert sql_store.ping() is True


@pytest.mark.parametrize("row", ["1002", "2000000000"])
def test_waitlist_update_past_the_end_leaves_sql_table_intact(sql_store, row: str) -> None:
    table = sql_store.get_or_create_table(WAITLIST_TABLE, WAITLIST_HEADERS)
    table.append_row([ARRIVED, "Sam", "555", "2", "", "Waiting", "", "", "Yes", "No", "Mild"])
    dispatcher = ActionDispatcher(
        store=sql_store,
        publisher=NullEventPublisher(),
        trace_ctx=TraceContext(trace_id=None, request_id=None),
        clock=lambda: ARRIVED,
    )

    rejected = dispatcher.dispatch(
        {"action": "updateWaitlistStatus", "row": row, "status": "Seated"}
    )

    assert rejected.success is False
    assert rejected.error == "Invalid row"
    assert table.row_count() == 2
    listed = dispatcher.dispatch({"action": "getWaitlist"})
    assert [entry.name for entry in listed.data] == ["Sam"]
