from __future__ import annotations

from datetime import timezone, tzinfo

from foh.application.dto.requests import Params
from foh.application.ports.store import TabularStore
from foh.application.use_cases.context import Clock, utc_now
from foh.domain.common.cells import iso_timestamp
from foh.domain.records.entities import (
    SPECIALS_TABLE,
    VIPS_TABLE,
    GenericRecord,
    RecordTable,
    rank_by_visits,
    runs_on,
    weekday_name,
    zip_records,
)


class AddRecord:
    def __init__(self, store: TabularStore, clock: Clock = utc_now) -> None:
        self._store = store
        self._clock = clock

    def execute(self, record_table: RecordTable, params: Params) -> str | None:
        table = self._store.get_or_create_table(record_table.name, record_table.headers)
        table.append_row(record_table.row_from(params, iso_timestamp(self._clock())))
        return record_table.saved_message


class GetRecords:
    def __init__(self, store: TabularStore) -> None:
        self._store = store

    def execute(self, table_name: str) -> list[GenericRecord]:
        table = self._store.find_table(table_name)
        if table is None:
            return []
        return table.read_records()


class GetSpecials:
    def __init__(
        self,
        store: TabularStore,
        clock: Clock = utc_now,
        restaurant_tz: tzinfo = timezone.utc,
    ) -> None:
        self._store = store
        self._clock = clock
        self._restaurant_tz = restaurant_tz

    def execute(self) -> list[GenericRecord]:
        table = self._store.find_table(SPECIALS_TABLE)
        if table is None or table.row_count() < 2:
            return []

        today = weekday_name(self._clock().astimezone(self._restaurant_tz).date())
        rows = table.read_all()
        todays_rows = [row for row in rows[1:] if runs_on(row[0], today)]
        return zip_records([rows[0], *todays_rows])


class GetVIPs:
    def __init__(self, store: TabularStore) -> None:
        self._store = store

    def execute(self) -> list[GenericRecord]:
        return rank_by_visits(GetRecords(self._store).execute(VIPS_TABLE))
