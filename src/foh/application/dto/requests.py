from __future__ import annotations

from typing import Mapping, Sequence

from pydantic import BaseModel

from foh.domain.waitlist.entities import SpiceLevel, normalize_spice_level

Params = Mapping[str, str]


def pick(params: Params, keys: Sequence[str], fallback: str) -> str:
    """First non-blank value among the accepted aliases, trimmed."""
    for key in keys:
        value = params.get(key)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    return fallback


class WaitlistSignupRequest(BaseModel):
    name: str
    phone: str
    party_size: str
    notes: str
    sms_opt_in: str
    future_texts: str
    spice_level: SpiceLevel

    @classmethod
    def from_params(cls, params: Params) -> WaitlistSignupRequest:
        raw_spice = pick(params, ["spiceLevel", "spice", "spice_level", "heat", "heatLevel"], "")
        return cls(
            name=pick(params, ["name", "fullName"], ""),
            phone=pick(params, ["phone", "phoneNumber", "tel"], ""),
            party_size=pick(params, ["partySize", "party", "size"], ""),
            notes=pick(params, ["specialNotes", "notes", "note"], ""),
            sms_opt_in=pick(params, ["smsConsent", "optIn"], "Yes"),
            future_texts=pick(params, ["marketingOptIn", "futureTextAlerts"], "No"),
            spice_level=normalize_spice_level(raw_spice),
        )


class WaitlistStatusRequest(BaseModel):
    row: str | None
    status: str
    entry_id: str | None = None

    @classmethod
    def from_params(cls, params: Params) -> WaitlistStatusRequest:
        entry_id = pick(params, ["entryId", "id"], "")
        return cls(
            row=params.get("row"),
            status=str(params.get("status") or "").strip(),
            entry_id=entry_id or None,
        )
