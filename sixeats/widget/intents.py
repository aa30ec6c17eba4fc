# -*- coding: utf-8 -*-
"""Widget intents — actions a tap on the widget performs."""

from __future__ import annotations

from dataclasses import dataclass

from ..meals.storage import MealStateStore
from .center import WIDGET_KIND, WidgetCenter


@dataclass
class ToggleMealIntent:
    """Toggle a meal item and restart the timer, then redraw the widget."""

    meal_item: str

    def perform(self, store: MealStateStore, center: WidgetCenter) -> int:
        store.toggle_meal(self.meal_item)
        return center.reload_timelines(WIDGET_KIND)


@dataclass
class RefreshIntent:
    """Redraw the widget so the timer is current."""

    def perform(self, center: WidgetCenter) -> int:
        return center.reload_timelines(WIDGET_KIND)
