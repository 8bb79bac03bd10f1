"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from tlitrack.config.settings import EngineConfig, Settings
from tlitrack.core.engine import LootEngine
from tlitrack.data.items import ItemNameResolver
from tlitrack.parser.patterns import FE_CONFIG_BASE_ID


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep preferences, sessions and the app log out of the real home dir."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("TLITRACK_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture
def resolver():
    """Small fake item table."""
    return ItemNameResolver(
        {
            FE_CONFIG_BASE_ID: "Flame Elementium",
            "200100": "Ember",
            "100200": "Flame Sand",
        }
    )


@pytest.fixture
def engine(resolver):
    return LootEngine(EngineConfig(), resolver)


@pytest.fixture
def write_log(tmp_path):
    """Write lines to a temporary UE_game.log and return its path."""

    def _write(lines) -> Path:
        log_path = tmp_path / "UE_game.log"
        log_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return log_path

    return _write


@pytest.fixture
def settings_for(isolated_data_dir):
    """Settings pointing at a given log, without auto-detection."""

    def _settings(log_path) -> Settings:
        return Settings(log_path=log_path, data_dir=isolated_data_dir, auto_detect=False)

    return _settings
