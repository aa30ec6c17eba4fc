# -*- coding: utf-8 -*-
"""Widget reload signal.

``reload_timelines`` is fire-and-forget: it bumps a per-kind generation the
renderer polls, and optionally notifies an external renderer over HTTP.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Dict

import httpx

from ..config import settings

logger = logging.getLogger(__name__)

WIDGET_KIND = "SixEatsWidget"


class WidgetCenter:
    def __init__(self, reload_url: str | None = None, timeout: float = 2.0) -> None:
        self.reload_url = reload_url
        self.timeout = timeout
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def generation(self, kind: str = WIDGET_KIND) -> int:
        with self._lock:
            return self._generations.get(kind, 0)

    def reload_timelines(self, kind: str = WIDGET_KIND) -> int:
        with self._lock:
            generation = self._generations.get(kind, 0) + 1
            self._generations[kind] = generation
        logger.info("Reload requested for widget %s (generation %s)", kind, generation)
        if self.reload_url:
            self._notify(kind, generation)
        return generation

    def _notify(self, kind: str, generation: int) -> None:
        try:
            resp = httpx.post(
                self.reload_url,
                json={"kind": kind, "generation": generation},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Widget reload notification to %s failed: %s", self.reload_url, exc)


@lru_cache(maxsize=1)
def get_widget_center() -> WidgetCenter:
    return WidgetCenter(settings.widget_reload_url, settings.widget_reload_timeout)
