from __future__ import annotations

from foh.application.dto.responses import WaitlistEntryResponse
from foh.domain.waitlist.entities import WaitlistEntry


def to_waitlist_entry_response(entry: WaitlistEntry) -> WaitlistEntryResponse:
    return WaitlistEntryResponse(
        row=int(entry.row),
        entryId=str(entry.entry_id),
        name=entry.name,
        phone=entry.phone,
        party=entry.party,
        specialNotes=entry.notes,
        status=entry.status,
        spiceLevel=entry.spice_level or "",
        waitMin=entry.wait_minutes or 0,
        timeIn=entry.time_in,
        timeSeated=entry.time_seated,
    )
