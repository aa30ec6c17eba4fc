# -*- coding: utf-8 -*-
"""Widget timeline provider — render-ahead entries for "time since you last ate"."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from ..config import settings
from ..meals.models import ordered_items
from ..meals.storage import MealStateStore


def _align(value: datetime, reference: datetime) -> datetime:
    """Give ``value`` the same awareness as ``reference``; naive means local time."""
    if reference.tzinfo is not None and value.tzinfo is None:
        return value.astimezone(reference.tzinfo)
    if reference.tzinfo is None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class WidgetEntry(BaseModel):
    date: datetime = Field(..., description="When this entry becomes current")
    last_eat_date: datetime
    checked_items: List[str] = []

    def elapsed(self) -> Tuple[int, int]:
        total_minutes = max(int((self.date - _align(self.last_eat_date, self.date)).total_seconds() / 60), 0)
        return total_minutes // 60, total_minutes % 60

    def elapsed_label(self) -> str:
        hours, minutes = self.elapsed()
        return f"{hours}h {minutes}m"


class WidgetTimeline(BaseModel):
    entries: List[WidgetEntry]
    reload_after: datetime = Field(..., description="Ask for a new timeline after this instant")


def placeholder(now: datetime) -> WidgetEntry:
    return WidgetEntry(date=now, last_eat_date=now, checked_items=["Breakfast", "Snack 1"])


def snapshot(now: datetime) -> WidgetEntry:
    # Gallery preview; never touches storage so it stays fast.
    return WidgetEntry(date=now, last_eat_date=now - timedelta(hours=1), checked_items=["Breakfast"])


def build_timeline(
    store: MealStateStore,
    now: datetime,
    *,
    interval_min: Optional[int] = None,
    window_min: Optional[int] = None,
    reload_min: Optional[int] = None,
) -> WidgetTimeline:
    """Read the store once and fan it out into entries over the upcoming window."""
    interval = max(interval_min if interval_min is not None else settings.timeline_interval_min, 1)
    window = window_min if window_min is not None else settings.timeline_window_min
    reload_after = reload_min if reload_min is not None else settings.timeline_reload_min

    last_eat = store.load_last_eat_timestamp()
    last_eat = _align(last_eat, now) if last_eat is not None else now - timedelta(hours=1)
    checked = ordered_items(store.load_checked_items())

    entries = [
        WidgetEntry(
            date=now + timedelta(minutes=offset),
            last_eat_date=last_eat,
            checked_items=checked,
        )
        for offset in range(0, window, interval)
    ]
    return WidgetTimeline(entries=entries, reload_after=now + timedelta(minutes=reload_after))
