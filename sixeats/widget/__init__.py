# -*- coding: utf-8 -*-
"""
Widget module
"""

from .center import WIDGET_KIND, WidgetCenter, get_widget_center
from .intents import RefreshIntent, ToggleMealIntent
from .timeline import WidgetEntry, WidgetTimeline, build_timeline, placeholder, snapshot

__all__ = [
    'WIDGET_KIND',
    'WidgetCenter',
    'get_widget_center',
    'RefreshIntent',
    'ToggleMealIntent',
    'WidgetEntry',
    'WidgetTimeline',
    'build_timeline',
    'placeholder',
    'snapshot',
]
