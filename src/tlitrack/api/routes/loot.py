"""Loot, inventory and zone API routes."""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from tlitrack.api.dependencies import get_engine, get_log_path
from tlitrack.api.schemas import (
    GamePathResponse,
    InventoryItem,
    LootItem,
    LootResponse,
    ZoneResponse,
)
from tlitrack.config.settings import LOG_FILE_NAME, get_game_path_for_log
from tlitrack.core.engine import LootEngine
from tlitrack.parser.log_reader import LogUnavailableError

router = APIRouter(prefix="/api", tags=["loot"])


def _require_log(log_path: Optional[Path]) -> Path:
    if log_path is None:
        raise HTTPException(status_code=404, detail=f"{LOG_FILE_NAME} not found")
    return log_path


@router.get("/loot", response_model=LootResponse)
def get_loot(
    log_path: Optional[Path] = Depends(get_log_path),
    engine: LootEngine = Depends(get_engine),
) -> LootResponse:
    """Loot gained since the last inventory sort."""
    try:
        summary = engine.parse_loot(_require_log(log_path))
    except LogUnavailableError as e:
        raise HTTPException(status_code=404, detail=str(e))

    primary_id = engine.config.primary_item_id
    return LootResponse(
        items=[LootItem(**item.to_dict()) for item in summary.items],
        total_events=summary.total_events,
        primary_item_id=primary_id,
        primary_delta=summary.delta_for(primary_id),
    )


@router.get("/inventory", response_model=list[InventoryItem])
def get_inventory(
    log_path: Optional[Path] = Depends(get_log_path),
    engine: LootEngine = Depends(get_engine),
) -> list[InventoryItem]:
    """Current inventory, one entry per live slot."""
    try:
        records = engine.parse_inventory(_require_log(log_path))
    except LogUnavailableError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [InventoryItem(**record.to_dict()) for record in records]


@router.get("/zone", response_model=ZoneResponse)
def get_zone(
    log_path: Optional[Path] = Depends(get_log_path),
    engine: LootEngine = Depends(get_engine),
) -> ZoneResponse:
    """Most recently entered zone."""
    try:
        zone = engine.detect_zone(_require_log(log_path))
    except LogUnavailableError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ZoneResponse(zone=zone)


@router.get("/game-path", response_model=GamePathResponse)
def get_game_path(log_path: Optional[Path] = Depends(get_log_path)) -> GamePathResponse:
    """Detected game installation and log file."""
    game_path = get_game_path_for_log(log_path) if log_path else None
    return GamePathResponse(
        game_path=str(game_path) if game_path else None,
        log_path=str(log_path) if log_path else None,
        log_found=log_path is not None and log_path.exists(),
    )
