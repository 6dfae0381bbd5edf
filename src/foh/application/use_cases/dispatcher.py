from __future__ import annotations

import logging
from datetime import timezone, tzinfo
from functools import partial
from typing import Callable

from foh.application.dto.requests import Params, WaitlistSignupRequest, WaitlistStatusRequest
from foh.application.dto.responses import Envelope
from foh.application.metrics.waitlist_lifecycle import record_action
from foh.application.ports.publisher import EventPublisher
from foh.application.ports.store import TableNotFoundError, TabularStore
from foh.application.use_cases.context import Clock, TraceContext, utc_now
from foh.application.use_cases.dashboard import GetDashboardStats
from foh.application.use_cases.inventory import GetInventory
from foh.application.use_cases.records import AddRecord, GetRecords, GetSpecials, GetVIPs
from foh.application.use_cases.waitlist import (
    AddToWaitlist,
    EntryNotFoundError,
    GetWaitlist,
    InvalidInputError,
    UpdateWaitlistStatus,
)
from foh.domain.records.entities import CHAT_LOGS, FEEDBACK, LEADS, SHOUTOUTS, RecordTable

logger = logging.getLogger(__name__)

Handler = Callable[[Params], Envelope]

_EXPECTED_ERRORS = (InvalidInputError, EntryNotFoundError, TableNotFoundError)

_ADD_ACTIONS: dict[str, RecordTable] = {
    "addShoutout": SHOUTOUTS,
    "addFeedback": FEEDBACK,
    "logChat": CHAT_LOGS,
    "addLead": LEADS,
}

_GET_ACTIONS: dict[str, RecordTable] = {
    "getShoutouts": SHOUTOUTS,
    "getFeedback": FEEDBACK,
    "getChatLogs": CHAT_LOGS,
    "getLeads": LEADS,
}


class ActionDispatcher:
    """Single entry point: maps an action name to a handler and always answers with an envelope."""

    def __init__(
        self,
        store: TabularStore,
        publisher: EventPublisher,
        trace_ctx: TraceContext,
        *,
        clock: Clock = utc_now,
        restaurant_tz: tzinfo = timezone.utc,
    ) -> None:
        self._store = store
        self._publisher = publisher
        self._trace_ctx = trace_ctx
        self._clock = clock
        self._restaurant_tz = restaurant_tz

        self._handlers: dict[str, Handler] = {
            "addToWaitlist": self._add_to_waitlist,
            "updateWaitlistStatus": self._update_waitlist_status,
            "getWaitlist": self._get_waitlist,
            "getInventory": self._get_inventory,
            "getSpecials": self._get_specials,
            "getVIPs": self._get_vips,
            "getDashboardStats": self._get_dashboard_stats,
        }
        for action, record_table in _ADD_ACTIONS.items():
            self._handlers[action] = partial(self._add_record, record_table)
        for action, record_table in _GET_ACTIONS.items():
            self._handlers[action] = partial(self._get_records, record_table)

    @property
    def actions(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def dispatch(self, params: Params) -> Envelope:
        action = str(params.get("action") or "").strip()
        handler = self._handlers.get(action)
        if handler is None:
            record_action("unknown", "rejected")
            logger.warning("unknown_action", extra={"action": action})
            return Envelope.fail(f"Unknown action: {action}")

        try:
            with self._store.exclusive():
                envelope = handler(params)
        except _EXPECTED_ERRORS as exc:
            record_action(action, "rejected")
            logger.warning("action_rejected", extra={"action": action, "error": str(exc)})
            return Envelope.fail(str(exc))
        except Exception as exc:
            record_action(action, "error")
            logger.exception("action_failed", extra={"action": action})
            return Envelope.fail(str(exc) or exc.__class__.__name__)

        record_action(action, "ok")
        logger.info("action_complete", extra={"action": action})
        return envelope

    def _add_to_waitlist(self, params: Params) -> Envelope:
        created = AddToWaitlist(self._store, self._publisher, self._clock).execute(
            WaitlistSignupRequest.from_params(params),
            trace_ctx=self._trace_ctx,
        )
        return Envelope.ok(data=created)

    def _update_waitlist_status(self, params: Params) -> Envelope:
        UpdateWaitlistStatus(self._store, self._publisher, self._clock).execute(
            WaitlistStatusRequest.from_params(params),
            trace_ctx=self._trace_ctx,
        )
        return Envelope.ok()

    def _get_waitlist(self, params: Params) -> Envelope:
        return Envelope.ok(data=GetWaitlist(self._store, self._clock).execute())

    def _get_inventory(self, params: Params) -> Envelope:
        return Envelope.ok(data=GetInventory(self._store).execute())

    def _add_record(self, record_table: RecordTable, params: Params) -> Envelope:
        message = AddRecord(self._store, self._clock).execute(record_table, params)
        return Envelope.ok(message=message)

    def _get_records(self, record_table: RecordTable, params: Params) -> Envelope:
        return Envelope.ok(data=GetRecords(self._store).execute(record_table.name))

    def _get_specials(self, params: Params) -> Envelope:
        specials = GetSpecials(self._store, self._clock, self._restaurant_tz).execute()
        return Envelope.ok(data=specials)

    def _get_vips(self, params: Params) -> Envelope:
        return Envelope.ok(data=GetVIPs(self._store).execute())

    def _get_dashboard_stats(self, params: Params) -> Envelope:
        return Envelope.ok(data=GetDashboardStats(self._store).execute())
