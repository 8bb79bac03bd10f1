"""FastAPI dependency injection utilities.

Provides shared dependencies for API routes, configured by app factory.
"""

from pathlib import Path
from typing import Optional

from tlitrack.config.settings import Settings
from tlitrack.core.engine import LootEngine
from tlitrack.storage import SessionStore


def get_settings() -> Settings:
    """Replaced by create_app() via dependency_overrides."""
    raise NotImplementedError("Settings not configured")


def get_engine() -> LootEngine:
    """Replaced by create_app() via dependency_overrides."""
    raise NotImplementedError("Engine not configured")


def get_store() -> SessionStore:
    """Replaced by create_app() via dependency_overrides."""
    raise NotImplementedError("Session store not configured")


def get_log_path() -> Optional[Path]:
    """
    Replaced by create_app() via dependency_overrides.

    Resolved per request, so a log found after startup is picked up.
    """
    raise NotImplementedError("Log path not configured")
