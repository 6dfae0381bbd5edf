from __future__ import annotations

from prometheus_client import Counter, Histogram

from foh.domain.waitlist.entities import is_seated, is_still_waiting

ACTIONS_TOTAL = Counter(
    "foh_actions_total",
    "Total number of dispatched actions by outcome.",
    ["action", "outcome"],
)

WAITLIST_ENTRIES_ADDED_TOTAL = Counter(
    "foh_waitlist_entries_added_total",
    "Total number of parties added to the waitlist.",
    ["spice_level"],
)

WAITLIST_STATUS_UPDATES_TOTAL = Counter(
    "foh_waitlist_status_updates_total",
    "Total number of waitlist status updates by status class.",
    ["status"],
)

WAITLIST_WAIT_MINUTES = Histogram(
    "foh_waitlist_wait_minutes",
    "Minutes between arrival and seating.",
    buckets=(5, 10, 15, 20, 30, 45, 60, 90, 120),
)

WAITLIST_RECOMPUTED_ROWS_TOTAL = Counter(
    "foh_waitlist_recomputed_rows_total",
    "Total number of rows rewritten by the rolling wait recompute.",
)


def _status_class(status: str) -> str:
    if is_seated(status):
        return "seated"
    if is_still_waiting(status):
        return status.strip().lower()
    return "other"


def record_action(action: str, outcome: str) -> None:
    ACTIONS_TOTAL.labels(action=action, outcome=outcome).inc()


def record_entry_added(spice_level: str) -> None:
    WAITLIST_ENTRIES_ADDED_TOTAL.labels(spice_level=spice_level).inc()


def record_status_update(status: str) -> None:
    WAITLIST_STATUS_UPDATES_TOTAL.labels(status=_status_class(status)).inc()


def record_seated_wait(minutes: int) -> None:
    WAITLIST_WAIT_MINUTES.observe(max(minutes, 0))


def record_recomputed_rows(count: int) -> None:
    if count:
        WAITLIST_RECOMPUTED_ROWS_TOTAL.inc(count)
