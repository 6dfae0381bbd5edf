from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from foh.application.use_cases.dashboard import GetDashboardStats
from foh.domain.records.entities import CHAT_LOGS, FEEDBACK, SHOUTOUTS
from foh.domain.waitlist.entities import WAITLIST_HEADERS, WAITLIST_TABLE
from foh.infrastructure.store.memory_store import InMemoryTabularStore

T0 = datetime(2026, 10, 16, 18, 0, tzinfo=timezone.utc)


def test_dashboard_stats_default_to_zero_without_tables() -> None:
    stats = GetDashboardStats(InMemoryTabularStore()).execute()
    assert stats.model_dump() == {
        "totalChats": 0,
        "totalShoutouts": 0,
        "totalFeedback": 0,
        "avgRating": 0.0,
        "totalWaitlist": 0,
        "seated": 0,
    }


def test_dashboard_stats_count_each_table_independently() -> None:
    store = InMemoryTabularStore()
    store.add_table(CHAT_LOGS.name, [list(CHAT_LOGS.headers), ["t", "q1", "neutral"], ["t", "q2", ""]])
    store.add_table(SHOUTOUTS.name, [list(SHOUTOUTS.headers)])
    store.add_table(
        FEEDBACK.name,
        [
            list(FEEDBACK.headers),
            ["t", "5", "", "", "", "", ""],
            ["t", 4, "", "", "", "", ""],
            ["t", "n/a", "", "", "", "", ""],
            ["t", "4", "", "", "", "", ""],
        ],
    )
    store.add_table(
        WAITLIST_TABLE,
        [
            list(WAITLIST_HEADERS),
            [T0, "Sam", "", "", "", "Seated"],
            [T0, "Ana", "", "", "", "waiting"],
            [T0, "Lee", "", "", "", "SEATED"],
        ],
    )

    stats = GetDashboardStats(store).execute()

    assert stats.totalChats == 2
    assert stats.totalShoutouts == 0
    assert stats.totalFeedback == 4
    # (5 + 4 + 0 + 4) / 4 = 3.25
    assert stats.avgRating == 3.3
    assert stats.totalWaitlist == 3
    assert stats.seated == 2


def test_avg_rating_serializes_as_json_number() -> None:
    store = InMemoryTabularStore()
    store.add_table(FEEDBACK.name, [list(FEEDBACK.headers), ["t", "4", "", "", "", "", ""]])

    body = json.loads(GetDashboardStats(store).execute().model_dump_json())

    assert body["avgRating"] == 4.0
    assert isinstance(body["avgRating"], float)
