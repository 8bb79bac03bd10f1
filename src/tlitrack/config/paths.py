"""Data and resource path resolution."""

import os
from pathlib import Path
from typing import Optional

DATA_DIR_ENV = "TLITRACK_DATA_DIR"


def get_data_dir(override: Optional[Path] = None) -> Path:
    """
    Get the data directory for sessions, preferences and the app log.

    Resolution order: explicit override, $TLITRACK_DATA_DIR,
    %LOCALAPPDATA%/TLITracker, ~/.tlitrack.

    Returns:
        Path to data directory (created if needed)
    """
    if override is not None:
        data_dir = Path(override)
    elif os.environ.get(DATA_DIR_ENV):
        data_dir = Path(os.environ[DATA_DIR_ENV])
    elif os.environ.get("LOCALAPPDATA"):
        data_dir = Path(os.environ["LOCALAPPDATA"]) / "TLITracker"
    else:
        data_dir = Path.home() / ".tlitrack"

    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_static_dir() -> Path:
    """Get the directory containing static web files."""
    return Path(__file__).resolve().parent.parent / "web" / "static"
