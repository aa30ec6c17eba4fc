from __future__ import annotations

import os
from pathlib import Path
from typing import List


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip() in {"1", "true", "True", "yes"}


class Settings:
    """Centralized configuration for the SixEats host app and widget."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        # ---- Shared namespace (app group) ----
        self.data_root: Path = Path(
            os.environ.get("SIXEATS_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_group: str = os.environ.get("SIXEATS_APP_GROUP") or "group.com.example.SixEats"
        # Reject labels outside the six known meals instead of storing them as-is.
        self.strict_meal_items: bool = _env_bool("SIXEATS_STRICT_MEAL_ITEMS", True)

        # ---- Widget timeline ----
        self.timeline_interval_min: int = max(
            int(os.environ.get("SIXEATS_TIMELINE_INTERVAL_MIN") or "15"), 1
        )
        self.timeline_window_min: int = int(
            os.environ.get("SIXEATS_TIMELINE_WINDOW_MIN") or "120"
        )
        self.timeline_reload_min: int = int(
            os.environ.get("SIXEATS_TIMELINE_RELOAD_MIN") or "120"
        )
        self.widget_reload_url: str | None = os.environ.get("SIXEATS_WIDGET_RELOAD_URL") or None
        self.widget_reload_timeout: float = float(
            os.environ.get("SIXEATS_WIDGET_RELOAD_TIMEOUT") or "2"
        )

        self.log_level: str = (os.environ.get("SIXEATS_LOG_LEVEL") or "INFO").upper()

        cors = os.environ.get("SIXEATS_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
