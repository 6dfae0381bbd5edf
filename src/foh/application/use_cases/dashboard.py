from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from foh.application.dto.responses import DashboardStatsResponse
from foh.application.ports.store import TabularStore
from foh.domain.common.cells import to_number
from foh.domain.records.entities import CHAT_LOGS, FEEDBACK, SHOUTOUTS
from foh.domain.waitlist.entities import WAITLIST_TABLE, WaitlistColumn, is_seated

_RATING_COLUMN = 2


class GetDashboardStats:
    """Headline counts for the owner dashboard; every figure falls back to 0 on its own."""

    def __init__(self, store: TabularStore) -> None:
        self._store = store

    def execute(self) -> DashboardStatsResponse:
        total_feedback, avg_rating = self._feedback()
        total_waitlist, seated = self._waitlist()
        return DashboardStatsResponse(
            totalChats=self._data_rows(CHAT_LOGS.name),
            totalShoutouts=self._data_rows(SHOUTOUTS.name),
            totalFeedback=total_feedback,
            avgRating=avg_rating,
            totalWaitlist=total_waitlist,
            seated=seated,
        )

    def _data_rows(self, name: str) -> int:
        table = self._store.find_table(name)
        if table is None:
            return 0
        return max(table.row_count() - 1, 0)

    def _feedback(self) -> tuple[int, float]:
        table = self._store.find_table(FEEDBACK.name)
        if table is None or table.row_count() < 2:
            return 0, 0.0

        ratings = [
            to_number(row[_RATING_COLUMN - 1]) if len(row) >= _RATING_COLUMN else 0.0
            for row in table.read_all()[1:]
        ]
        if not ratings:
            return 0, 0.0
        average = Decimal(repr(sum(ratings) / len(ratings)))
        return len(ratings), float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    def _waitlist(self) -> tuple[int, int]:
        table = self._store.find_table(WAITLIST_TABLE)
        if table is None or table.row_count() < 2:
            return 0, 0

        rows = table.read_all()[1:]
        status_index = WaitlistColumn.STATUS - 1
        seated = sum(
            1 for row in rows if len(row) > status_index and is_seated(row[status_index])
        )
        return len(rows), seated
