"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class LootItem(BaseModel):
    """Net change of one item since the last inventory sort."""

    config_base_id: str
    item_name: str
    delta: int
    current: int  # Sum of live stacks


class LootResponse(BaseModel):
    """Loot gained since the last inventory sort."""

    items: list[LootItem]
    total_events: int
    primary_item_id: str
    primary_delta: int


class InventoryItem(BaseModel):
    """One live inventory slot."""

    page_id: int
    slot_id: int
    config_base_id: str
    item_name: str
    num: int
    is_init: bool


class ZoneResponse(BaseModel):
    """Most recently entered zone."""

    zone: Optional[str] = None


class GamePathResponse(BaseModel):
    """Detected game installation and log file."""

    game_path: Optional[str] = None
    log_path: Optional[str] = None
    log_found: bool


class StatusResponse(BaseModel):
    """Server status."""

    status: str
    version: str
    log_path: Optional[str] = None
    log_found: bool
    monitor_running: bool
    last_error: Optional[str] = None


class DropItemModel(BaseModel):
    """A manually recorded drop."""

    name: str
    quantity: int
    value: float


class SessionResponse(BaseModel):
    """A recorded farming session."""

    id: str
    map: str
    notes: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    drops: list[DropItemModel]
    is_active: bool
    total_value: float
    duration_minutes: Optional[float] = None
    profit_per_minute: Optional[float] = None


class StartSessionRequest(BaseModel):
    """Request to start a session."""

    map: str
    notes: Optional[str] = None


class EndSessionRequest(BaseModel):
    """Request to end a session (active session if omitted)."""

    session: Optional[str] = None


class DropRequest(BaseModel):
    """Request to record a drop (active session if omitted)."""

    name: str
    quantity: Optional[int] = None
    value: float
    session: Optional[str] = None


class MapRunResponse(BaseModel):
    """Loot gained during one map visit."""

    map_name: str
    start: datetime
    end: Optional[datetime] = None
    duration_seconds: float
    total_items: int
    loot_gained: dict[str, int]


class TrackerResponse(BaseModel):
    """Live session tracker state."""

    active: bool
    started_at: Optional[datetime] = None
    elapsed_seconds: float
    primary_item_id: str
    primary_total: int
    primary_per_hour: float
    total_items: int
    cumulative_loot: dict[str, int]
    current_zone: Optional[str] = None
    runs: list[MapRunResponse]


class SettingResponse(BaseModel):
    """A single saved preference."""

    key: str
    value: Any = None


class SettingUpdateRequest(BaseModel):
    """Request to update a preference (pages as "100,101")."""

    value: str


class LogDirectoryValidateRequest(BaseModel):
    """Request to validate a game directory."""

    path: str


class LogDirectoryValidateResponse(BaseModel):
    """Result of log directory validation."""

    valid: bool
    log_path: Optional[str] = None
    error: Optional[str] = None
