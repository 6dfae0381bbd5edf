from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Sequence

from foh.application.dto.requests import WaitlistSignupRequest, WaitlistStatusRequest
from foh.application.dto.responses import WaitlistEntryCreatedResponse, WaitlistEntryResponse
from foh.application.mappers.event_envelope import (
    WAITLIST_CHANNEL,
    serialize_entry_added_event,
    serialize_status_changed_event,
)
from foh.application.mappers.waitlist_mapper import to_waitlist_entry_response
from foh.application.metrics.waitlist_lifecycle import (
    record_entry_added,
    record_recomputed_rows,
    record_seated_wait,
    record_status_update,
)
from foh.application.ports.publisher import EventPublisher
from foh.application.ports.store import TableHandle, TabularStore
from foh.application.use_cases.context import Clock, TraceContext, utc_now
from foh.domain.common.cells import CellValue
from foh.domain.common.ids import RowNumber
from foh.domain.waitlist.entities import (
    FIRST_DATA_ROW,
    WAITLIST_TABLE,
    WaitlistColumn,
    WaitlistEntry,
    is_seated,
)

logger = logging.getLogger(__name__)


class InvalidInputError(Exception):
    pass


class EntryNotFoundError(Exception):
    pass


def parse_row(raw: object) -> RowNumber:
    if raw is None:
        raise InvalidInputError("Invalid row")
    try:
        number = float(str(raw).strip())
    except ValueError:
        raise InvalidInputError("Invalid row") from None
    if not math.isfinite(number) or not number.is_integer() or number < FIRST_DATA_ROW:
        raise InvalidInputError("Invalid row")
    return RowNumber(int(number))


def _entries(rows: Sequence[Sequence[CellValue]]) -> list[WaitlistEntry]:
    return [
        WaitlistEntry.from_row(RowNumber(index), values)
        for index, values in enumerate(rows[1:], start=FIRST_DATA_ROW)
    ]


def _publish(publisher: EventPublisher, message: str) -> None:
    try:
        publisher.publish(channel=WAITLIST_CHANNEL, message=message)
    except Exception:
        logger.warning("waitlist_event_publish_failed", exc_info=True)


class AddToWaitlist:
    def __init__(
        self,
        store: TabularStore,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._publisher = publisher
        self._clock = clock

    def execute(
        self,
        request: WaitlistSignupRequest,
        trace_ctx: TraceContext,
    ) -> WaitlistEntryCreatedResponse:
        table = self._store.get_table(WAITLIST_TABLE)
        now = self._clock()
        pending = WaitlistEntry.create(
            row=RowNumber(0),
            now=now,
            name=request.name,
            phone=request.phone,
            party=request.party_size,
            notes=request.notes,
            sms_opt_in=request.sms_opt_in,
            future_texts=request.future_texts,
            spice_level=request.spice_level,
        )
        entry = replace(pending, row=RowNumber(table.append_row(pending.to_row())))

        record_entry_added(request.spice_level.value)
        _publish(
            self._publisher,
            serialize_entry_added_event(
                occurred_at=now,
                entry=entry,
                trace_id=trace_ctx.trace_id,
                request_id=trace_ctx.request_id,
            ),
        )
        return WaitlistEntryCreatedResponse(row=int(entry.row), entryId=str(entry.entry_id))


class UpdateWaitlistStatus:
    """Set a party's status by row; seating stamps the seat time once and freezes the wait.

    The row number is the only key the waitlist has. When the caller also sends
    the ``entryId`` it read alongside that row, a row that has shifted since the
    read is located again by id instead of overwriting whoever now sits there.
    """

    def __init__(
        self,
        store: TabularStore,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._publisher = publisher
        self._clock = clock

    def execute(self, request: WaitlistStatusRequest, trace_ctx: TraceContext) -> None:
        row = parse_row(request.row)
        table = self._store.get_table(WAITLIST_TABLE)
        rows = table.read_all()

        # a row past the end is only meaningful as a stale position to relocate
        if row > len(rows) and not request.entry_id:
            raise InvalidInputError("Invalid row")

        current = WaitlistEntry.from_row(row, rows[row - 1] if row <= len(rows) else [])
        if request.entry_id and current.entry_id != request.entry_id:
            current = self._locate(rows, request.entry_id)
            logger.info(
                "waitlist_row_relocated",
                extra={"requested_row": row, "row": current.row},
            )
            row = current.row

        table.write_cell(row, WaitlistColumn.STATUS, request.status)
        updated = replace(current, status=request.status)

        if is_seated(request.status):
            updated = updated.seat(self._clock())
            if current.time_seated is None:
                table.write_cell(row, WaitlistColumn.TIME_SEATED, updated.time_seated)
            # no arrival time, no wait to compute
            if current.time_in is not None and updated.wait_minutes is not None:
                table.write_cell(row, WaitlistColumn.WAIT_MIN, updated.wait_minutes)
                record_seated_wait(updated.wait_minutes)

        record_status_update(request.status)
        _publish(
            self._publisher,
            serialize_status_changed_event(
                occurred_at=self._clock(),
                entry=updated,
                previous_status=current.status,
                trace_id=trace_ctx.trace_id,
                request_id=trace_ctx.request_id,
            ),
        )

    def _locate(self, rows: Sequence[Sequence[CellValue]], entry_id: str) -> WaitlistEntry:
        for entry in _entries(rows):
            if entry.entry_id == entry_id:
                return entry
        raise EntryNotFoundError(f"Waitlist entry not found: {entry_id}")


class GetWaitlist:
    def __init__(self, store: TabularStore, clock: Clock = utc_now) -> None:
        self._store = store
        self._clock = clock

    def execute(self) -> list[WaitlistEntryResponse]:
        table = self._store.get_table(WAITLIST_TABLE)
        entries = self._roll_forward(table)
        return [to_waitlist_entry_response(entry) for entry in entries if entry.has_name]

    def _roll_forward(self, table: TableHandle) -> list[WaitlistEntry]:
        """Rewrite wait minutes for every live row; seated rows missing a seat time get one."""
        now = self._clock()
        entries: list[WaitlistEntry] = []
        touched = 0
        for entry in _entries(table.read_all()):
            rolled = entry.rolled_forward(now)
            if rolled is None:
                entries.append(entry)
                continue
            if entry.time_seated is None and rolled.time_seated is not None:
                table.write_cell(entry.row, WaitlistColumn.TIME_SEATED, rolled.time_seated)
            table.write_cell(entry.row, WaitlistColumn.WAIT_MIN, rolled.wait_minutes)
            touched += 1
            entries.append(rolled)

        record_recomputed_rows(touched)
        return entries
