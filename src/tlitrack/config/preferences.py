"""User preferences management - stored as JSON file."""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from tlitrack.config.paths import get_data_dir
from tlitrack.config.settings import DEFAULT_POLL_INTERVAL, EngineConfig


PREFS_FILENAME = "preferences.json"


@dataclass
class Preferences:
    """User preferences with defaults."""

    log_directory: Optional[str] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    excluded_pages: list[int] = field(default_factory=lambda: sorted(EngineConfig().excluded_pages))
    pickup_label: str = EngineConfig.pickup_label
    sort_label: str = EngineConfig.sort_label
    primary_item_id: str = EngineConfig.primary_item_id

    def engine_config(self) -> EngineConfig:
        return EngineConfig.create(
            excluded_pages=self.excluded_pages,
            pickup_label=self.pickup_label,
            sort_label=self.sort_label,
            primary_item_id=self.primary_item_id,
        )


def get_prefs_path(data_dir: Optional[Path] = None) -> Path:
    """Get the path to the preferences file."""
    return get_data_dir(data_dir) / PREFS_FILENAME


def load_preferences(data_dir: Optional[Path] = None) -> Preferences:
    """Load preferences from file, returning defaults if missing or corrupt."""
    prefs_path = get_prefs_path(data_dir)
    defaults = Preferences()

    if prefs_path.exists():
        try:
            with open(prefs_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Preferences(
                log_directory=data.get("log_directory"),
                poll_interval=float(data.get("poll_interval", defaults.poll_interval)),
                excluded_pages=[int(p) for p in data.get("excluded_pages", defaults.excluded_pages)],
                pickup_label=data.get("pickup_label", defaults.pickup_label),
                sort_label=data.get("sort_label", defaults.sort_label),
                primary_item_id=str(data.get("primary_item_id", defaults.primary_item_id)),
            )
        except (json.JSONDecodeError, OSError, TypeError, ValueError, AttributeError):
            pass

    return defaults


def save_preferences(prefs: Preferences, data_dir: Optional[Path] = None) -> bool:
    """Save preferences to file."""
    prefs_path = get_prefs_path(data_dir)

    try:
        prefs_path.parent.mkdir(parents=True, exist_ok=True)
        with open(prefs_path, "w", encoding="utf-8") as f:
            json.dump(asdict(prefs), f, indent=2, ensure_ascii=False)
        return True
    except OSError:
        return False


def update_preference(key: str, value: Any, data_dir: Optional[Path] = None) -> bool:
    """Update a single preference and save."""
    prefs = load_preferences(data_dir)

    if hasattr(prefs, key):
        setattr(prefs, key, value)
        return save_preferences(prefs, data_dir)

    return False


def get_preference(key: str, default: Any = None, data_dir: Optional[Path] = None) -> Any:
    """Get a single preference value."""
    prefs = load_preferences(data_dir)
    return getattr(prefs, key, default)
