from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from foh.domain.waitlist.entities import WaitlistEntry

WAITLIST_CHANNEL = "events:waitlist"


def _serialize_event(
    *,
    event_type: str,
    occurred_at: datetime,
    payload: dict[str, Any],
    trace_id: str | None,
    request_id: str | None,
) -> str:
    envelope = {
        "event_id": str(uuid4()),
        "event_type": event_type,
        "occurred_at": occurred_at.isoformat(),
        "request_id": request_id,
        "trace_id": trace_id,
        "payload": payload,
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False, default=str)


def _entry_payload(entry: WaitlistEntry) -> dict[str, Any]:
    return {
        "row": int(entry.row),
        "entryId": str(entry.entry_id),
        "name": entry.name,
        "party": entry.party,
        "status": entry.status,
        "spiceLevel": entry.spice_level,
        "waitMin": entry.wait_minutes,
        "timeIn": entry.time_in.isoformat() if entry.time_in else None,
        "timeSeated": entry.time_seated.isoformat() if entry.time_seated else None,
    }


def serialize_entry_added_event(
    *,
    occurred_at: datetime,
    entry: WaitlistEntry,
    trace_id: str | None,
    request_id: str | None,
) -> str:
    return _serialize_event(
        event_type="waitlist.entry_added",
        occurred_at=occurred_at,
        payload=_entry_payload(entry),
        trace_id=trace_id,
        request_id=request_id,
    )


def serialize_status_changed_event(
    *,
    occurred_at: datetime,
    entry: WaitlistEntry,
    previous_status: str,
    trace_id: str | None,
    request_id: str | None,
) -> str:
    payload = _entry_payload(entry)
    payload["previousStatus"] = previous_status
    return _serialize_event(
        event_type="waitlist.status_changed",
        occurred_at=occurred_at,
        payload=payload,
        trace_id=trace_id,
        request_id=request_id,
    )
