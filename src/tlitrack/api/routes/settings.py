"""Settings API routes."""

from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException, Request

from tlitrack.api.dependencies import get_settings
from tlitrack.api.schemas import (
    LogDirectoryValidateRequest,
    LogDirectoryValidateResponse,
    SettingResponse,
    SettingUpdateRequest,
)
from tlitrack.config.preferences import get_preference, load_preferences, update_preference
from tlitrack.config.settings import Settings, validate_game_directory

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _parse_pages(value: str) -> list[int]:
    return sorted({int(p) for p in value.replace(",", " ").split()})


def _parse_interval(value: str) -> float:
    interval = float(value)
    if interval <= 0:
        raise ValueError("poll_interval must be positive")
    return interval


def _parse_label(value: str) -> str:
    value = value.strip()
    if not value or any(c.isspace() for c in value):
        raise ValueError("label must be a single token")
    return value


# Whitelist of preferences writable via API, with their parsers
SETTING_PARSERS: dict[str, Callable[[str], Any]] = {
    "log_directory": lambda v: v.strip() or None,
    "poll_interval": _parse_interval,
    "excluded_pages": _parse_pages,
    "pickup_label": _parse_label,
    "sort_label": _parse_label,
    "primary_item_id": _parse_label,
}

LOG_NOT_FOUND = (
    "Log file not found. You can point to the game folder, the Logs folder, "
    "or the UE_game.log file directly."
)


@router.get("", response_model=list[SettingResponse])
def list_settings(settings: Settings = Depends(get_settings)) -> list[SettingResponse]:
    """All saved preferences. Engine settings apply on restart."""
    prefs = load_preferences(settings.data_dir)
    return [SettingResponse(key=key, value=getattr(prefs, key)) for key in SETTING_PARSERS]


@router.get("/{key}", response_model=SettingResponse)
def get_setting(key: str, settings: Settings = Depends(get_settings)) -> SettingResponse:
    """Get a single preference."""
    if key not in SETTING_PARSERS:
        raise HTTPException(status_code=403, detail="Setting not accessible")
    return SettingResponse(key=key, value=get_preference(key, data_dir=settings.data_dir))


@router.put("/{key}", response_model=SettingResponse)
def update_setting(
    key: str,
    body: SettingUpdateRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
) -> SettingResponse:
    """
    Update a single preference.

    A new log_directory must resolve to a log file and takes effect
    immediately; the other preferences apply on restart.
    """
    if key not in SETTING_PARSERS:
        raise HTTPException(status_code=403, detail="Setting not modifiable")

    try:
        value = SETTING_PARSERS[key](body.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid value for {key}: {e}")

    if key == "log_directory" and value is not None:
        is_valid, log_path = validate_game_directory(value)
        if not is_valid:
            raise HTTPException(status_code=400, detail=LOG_NOT_FOUND)
        settings.log_path = log_path
        monitor = request.app.state.monitor
        if monitor is not None:
            monitor.set_log_path(log_path)

    if not update_preference(key, value, settings.data_dir):
        raise HTTPException(status_code=500, detail="Could not save preferences")
    return SettingResponse(key=key, value=value)


@router.post("/log-directory/validate", response_model=LogDirectoryValidateResponse)
def validate_log_directory(body: LogDirectoryValidateRequest) -> LogDirectoryValidateResponse:
    """Check that a path resolves to the game log file."""
    is_valid, log_path = validate_game_directory(body.path)
    if is_valid:
        return LogDirectoryValidateResponse(valid=True, log_path=str(log_path))
    return LogDirectoryValidateResponse(valid=False, error=LOG_NOT_FOUND)
