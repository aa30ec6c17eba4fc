# -*- coding: utf-8 -*-
"""Meals — shared daily meal state, stored as JSON in the app-group namespace.

The host app and the widget each build their own ``MealStateStore`` over the
same app-group directory. Each key lives in its own file that is replaced
atomically, but a read-modify-write of one key from two processes at once is
last-writer-wins.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .models import MEAL_ITEMS, MealState, ordered_items

from ..config import settings

logger = logging.getLogger(__name__)

LAST_EAT_DATE_KEY = "lastEatDate"
CHECKED_ITEMS_KEY = "checkedItems"
LAST_RESET_DATE_KEY = "lastResetDate"


class StorageUnavailable(RuntimeError):
    """The shared namespace cannot be opened, read or written."""


class InvalidMealItem(ValueError):
    """Raised for a label outside the meal vocabulary when running strict."""

    def __init__(self, item: str) -> None:
        super().__init__(f"Unknown meal item: {item!r}")
        self.item = item


class SharedDefaults:
    """Minimal key-value interface over a shared namespace."""

    def get(self, key: str) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryDefaults(SharedDefaults):
    """In-process namespace, used by tests and previews."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class FileDefaults(SharedDefaults):
    """One JSON file per key inside the app-group directory.

    Writes to different keys never touch the same file, so two processes
    only race when they write the same key.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def open(cls, suite_name: str, data_root: Path | None = None) -> "FileDefaults":
        name = (suite_name or "").strip()
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise StorageUnavailable(f"Invalid app group identifier: {suite_name!r}")
        root = data_root or settings.data_root
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot create shared namespace at {root}: {exc}") from exc
        if not os.access(root, os.R_OK | os.W_OK):
            raise StorageUnavailable(f"Shared namespace at {root} is not accessible")
        return cls(root / name)

    def _key_path(self, key: str) -> Path:
        return self.path / f"{key}.json"

    def get(self, key: str) -> Any:
        fp = self._key_path(key)
        if not fp.exists():
            return None
        try:
            return json.loads(fp.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageUnavailable(f"Cannot read {fp}: {exc}") from exc

    def set(self, key: str, value: Any) -> None:
        fp = self._key_path(key)
        try:
            self.path.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=self.path)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(value, fh, ensure_ascii=False)
                os.replace(tmp, fp)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageUnavailable(f"Cannot write {fp}: {exc}") from exc

    def remove(self, key: str) -> None:
        fp = self._key_path(key)
        try:
            fp.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot remove {fp}: {exc}") from exc


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _to_iso(value: datetime) -> str:
    return value.isoformat()


def _parse_iso(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _same_day(a: datetime, b: datetime) -> bool:
    """Calendar-date comparison in the timezone of ``b``."""
    if a.tzinfo is not None and b.tzinfo is not None:
        a = a.astimezone(b.tzinfo)
    return a.date() == b.date()


class MealStateStore:
    """Which meals were eaten today, and when the user last ate.

    ``defaults`` is ``None`` when the shared namespace could not be opened;
    every operation then degrades to an empty result or a no-op.
    """

    def __init__(
        self,
        defaults: SharedDefaults | None,
        *,
        clock: Callable[[], datetime] | None = None,
        strict: bool = True,
    ) -> None:
        self.defaults = defaults
        self.clock = clock or _local_now
        self.strict = strict

    def load_checked_items(self) -> set[str]:
        if self.defaults is None:
            logger.warning("Unable to access app group storage")
            return set()
        try:
            self._check_and_reset_if_new_day()
            return self._read_items()
        except StorageUnavailable as exc:
            logger.warning("Unable to load checked items: %s", exc)
            return set()

    def load_last_eat_timestamp(self) -> Optional[datetime]:
        if self.defaults is None:
            logger.warning("Unable to access app group storage")
            return None
        try:
            return _parse_iso(self.defaults.get(LAST_EAT_DATE_KEY))
        except StorageUnavailable as exc:
            logger.warning("Unable to load last eat date: %s", exc)
            return None

    def toggle_meal(self, item: str) -> None:
        if self.strict and item not in MEAL_ITEMS:
            raise InvalidMealItem(item)
        if self.defaults is None:
            logger.warning("Unable to access app group storage, toggle of %s dropped", item)
            return
        try:
            self._check_and_reset_if_new_day()
            items = self._read_items()
            if item in items:
                items.discard(item)
            else:
                items.add(item)
            self.defaults.set(CHECKED_ITEMS_KEY, ordered_items(items))
            if item in items:
                # The timer restarts only once the meal is stored as checked.
                self.defaults.set(LAST_EAT_DATE_KEY, _to_iso(self.clock()))
        except StorageUnavailable as exc:
            logger.warning("Unable to save toggle of %s: %s", item, exc)

    def snapshot(self) -> MealState:
        return MealState(
            checked_items=ordered_items(self.load_checked_items()),
            last_eat_date=self.load_last_eat_timestamp(),
        )

    def reset(self) -> None:
        """Forget everything, as if the namespace had never been written."""
        if self.defaults is None:
            return
        try:
            for key in (LAST_EAT_DATE_KEY, CHECKED_ITEMS_KEY, LAST_RESET_DATE_KEY):
                self.defaults.remove(key)
        except StorageUnavailable as exc:
            logger.warning("Unable to reset meal state: %s", exc)

    def _read_items(self) -> set[str]:
        raw = self.defaults.get(CHECKED_ITEMS_KEY) if self.defaults is not None else None
        if not isinstance(raw, list):
            return set()
        return {str(i) for i in raw if isinstance(i, str)}

    def _check_and_reset_if_new_day(self) -> None:
        if self.defaults is None:
            return
        now = self.clock()
        last_reset = _parse_iso(self.defaults.get(LAST_RESET_DATE_KEY))
        if last_reset is None:
            # First run: a missing record does not mean the items are stale.
            self.defaults.set(LAST_RESET_DATE_KEY, _to_iso(now))
            return
        if not _same_day(last_reset, now):
            self.defaults.set(CHECKED_ITEMS_KEY, [])
            self.defaults.set(LAST_RESET_DATE_KEY, _to_iso(now))
            logger.info("Reset checked items for new calendar day %s", now.date().isoformat())


def open_store(
    app_group: str | None = None,
    data_root: Path | None = None,
    *,
    clock: Callable[[], datetime] | None = None,
) -> MealStateStore:
    """Build a store over the configured app group, degrading if it cannot be opened."""
    try:
        defaults: SharedDefaults | None = FileDefaults.open(app_group or settings.app_group, data_root)
    except StorageUnavailable as exc:
        logger.warning("Shared namespace unavailable: %s", exc)
        defaults = None
    return MealStateStore(defaults, clock=clock, strict=settings.strict_meal_items)


@lru_cache(maxsize=1)
def get_store() -> MealStateStore:
    """Per-process store used by the HTTP routers."""
    return open_store()
