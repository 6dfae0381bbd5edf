from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class Envelope(BaseModel):
    success: bool
    data: Any = None
    message: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, *, data: Any = None, message: str | None = None) -> Envelope:
        fields: dict[str, Any] = {"success": True}
        if data is not None:
            fields["data"] = data
        if message is not None:
            fields["message"] = message
        return cls(**fields)

    @classmethod
    def fail(cls, error: str) -> Envelope:
        return cls(success=False, error=error)

    def to_json(self) -> str:
        # only the keys each outcome sets are emitted
        return self.model_dump_json(exclude_unset=True)


class WaitlistEntryResponse(BaseModel):
    row: int
    entryId: str
    name: Any
    phone: Any
    party: Any
    specialNotes: Any
    status: str
    spiceLevel: Any
    waitMin: int
    timeIn: datetime | None = None
    timeSeated: datetime | None = None


class WaitlistEntryCreatedResponse(BaseModel):
    row: int
    entryId: str


class InventoryItemResponse(BaseModel):
    item: Any
    status: Any
    price: Any
    lastUpdated: Any


class DashboardStatsResponse(BaseModel):
    totalChats: int
    totalShoutouts: int
    totalFeedback: int
    avgRating: float
    totalWaitlist: int
    seated: int
