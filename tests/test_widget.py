# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import unittest
from datetime import datetime, timedelta, timezone
from unittest import mock

import httpx

from sixeats.config import Settings
from sixeats.meals.storage import MealStateStore, MemoryDefaults
from sixeats.widget.center import WIDGET_KIND, WidgetCenter
from sixeats.widget.intents import RefreshIntent, ToggleMealIntent
from sixeats.widget.timeline import WidgetEntry, build_timeline, placeholder, snapshot


class TestWidgetTimeline(unittest.TestCase):
    def setUp(self) -> None:
        self.now = datetime(2024, 6, 1, 12, 0)
        self.store = MealStateStore(MemoryDefaults(), clock=lambda: self.now)

    def test_entries_every_fifteen_minutes_for_two_hours(self) -> None:
        timeline = build_timeline(self.store, self.now, interval_min=15, window_min=120, reload_min=120)
        self.assertEqual(len(timeline.entries), 8)
        self.assertEqual(timeline.entries[0].date, self.now)
        self.assertEqual(timeline.entries[-1].date, self.now + timedelta(minutes=105))
        self.assertEqual(timeline.reload_after, self.now + timedelta(hours=2))

    def test_missing_last_eat_defaults_to_an_hour_ago(self) -> None:
        timeline = build_timeline(self.store, self.now, interval_min=15, window_min=120, reload_min=120)
        self.assertEqual(timeline.entries[0].elapsed_label(), "1h 0m")
        self.assertEqual(timeline.entries[2].elapsed_label(), "1h 30m")

    def test_entries_carry_store_state(self) -> None:
        self.store.toggle_meal("Lunch")
        self.store.toggle_meal("Breakfast")
        timeline = build_timeline(self.store, self.now + timedelta(minutes=5), interval_min=15, window_min=120, reload_min=120)
        for entry in timeline.entries:
            self.assertEqual(entry.checked_items, ["Breakfast", "Lunch"])
            self.assertEqual(entry.last_eat_date, self.now)
        self.assertEqual(timeline.entries[1].elapsed(), (0, 20))

    def test_naive_stored_timestamp_is_read_as_local_time(self) -> None:
        stored = datetime(2024, 1, 2, 8, 0)
        now = stored.astimezone() + timedelta(hours=2, minutes=5)
        store = MealStateStore(MemoryDefaults({"lastEatDate": stored.isoformat()}), clock=lambda: now)
        timeline = build_timeline(store, now, interval_min=15, window_min=120, reload_min=120)
        self.assertEqual(timeline.entries[0].elapsed_label(), "2h 5m")

    def test_aware_entry_against_naive_now(self) -> None:
        last = datetime(2024, 1, 2, 8, 0).astimezone(timezone.utc)
        entry = WidgetEntry(date=datetime(2024, 1, 2, 9, 30), last_eat_date=last)
        self.assertEqual(entry.elapsed_label(), "1h 30m")

    def test_zero_interval_is_clamped(self) -> None:
        timeline = build_timeline(self.store, self.now, interval_min=0, window_min=5, reload_min=120)
        self.assertEqual([e.date for e in timeline.entries], [self.now + timedelta(minutes=m) for m in range(5)])

    def test_zero_interval_setting_is_clamped(self) -> None:
        with mock.patch.dict(os.environ, {"SIXEATS_TIMELINE_INTERVAL_MIN": "0"}):
            self.assertEqual(Settings().timeline_interval_min, 1)

    def test_elapsed_floors_partial_minutes(self) -> None:
        entry = WidgetEntry(
            date=self.now,
            last_eat_date=self.now - timedelta(hours=3, minutes=7, seconds=59),
        )
        self.assertEqual(entry.elapsed_label(), "3h 7m")

    def test_placeholder_and_snapshot(self) -> None:
        self.assertEqual(placeholder(self.now).checked_items, ["Breakfast", "Snack 1"])
        self.assertEqual(placeholder(self.now).elapsed_label(), "0h 0m")
        self.assertEqual(snapshot(self.now).checked_items, ["Breakfast"])
        self.assertEqual(snapshot(self.now).elapsed_label(), "1h 0m")


class TestWidgetCenter(unittest.TestCase):
    def test_generation_increments_per_kind(self) -> None:
        center = WidgetCenter()
        self.assertEqual(center.generation(), 0)
        self.assertEqual(center.reload_timelines(), 1)
        self.assertEqual(center.reload_timelines(WIDGET_KIND), 2)
        self.assertEqual(center.reload_timelines("Other"), 1)
        self.assertEqual(center.generation(WIDGET_KIND), 2)

    def test_notifies_configured_url(self) -> None:
        center = WidgetCenter("http://widget.local/reload", timeout=0.5)
        response = httpx.Response(204, request=httpx.Request("POST", "http://widget.local/reload"))
        with mock.patch("sixeats.widget.center.httpx.post", return_value=response) as post:
            center.reload_timelines()
        post.assert_called_once_with(
            "http://widget.local/reload",
            json={"kind": WIDGET_KIND, "generation": 1},
            timeout=0.5,
        )

    def test_notification_failure_is_logged_not_raised(self) -> None:
        center = WidgetCenter("http://widget.local/reload")
        with mock.patch("sixeats.widget.center.httpx.post", side_effect=httpx.ConnectError("refused")):
            with self.assertLogs("sixeats.widget.center", level="WARNING"):
                self.assertEqual(center.reload_timelines(), 1)


class TestWidgetIntents(unittest.TestCase):
    def test_toggle_intent_updates_store_and_reloads(self) -> None:
        store = MealStateStore(MemoryDefaults(), clock=lambda: datetime(2024, 6, 1, 19, 0))
        center = WidgetCenter()
        self.assertEqual(ToggleMealIntent("Dinner").perform(store, center), 1)
        self.assertEqual(store.load_checked_items(), {"Dinner"})
        self.assertEqual(center.generation(), 1)

    def test_refresh_intent_only_reloads(self) -> None:
        center = WidgetCenter()
        self.assertEqual(RefreshIntent().perform(center), 1)


if __name__ == "__main__":
    unittest.main()
