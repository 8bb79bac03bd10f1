"""Live session tracker API routes."""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from tlitrack.api.dependencies import get_engine, get_log_path
from tlitrack.api.schemas import TrackerResponse
from tlitrack.core.engine import LootEngine
from tlitrack.parser.log_reader import LogUnavailableError

router = APIRouter(prefix="/api/tracker", tags=["tracker"])


def _state(request: Request) -> TrackerResponse:
    with request.app.state.tracker_lock:
        return TrackerResponse(**request.app.state.tracker.to_dict())


@router.get("", response_model=TrackerResponse)
def get_tracker(request: Request) -> TrackerResponse:
    """Current session totals, primary resource rate and map runs."""
    return _state(request)


@router.post("/start", response_model=TrackerResponse)
def start_tracker(
    request: Request,
    log_path: Optional[Path] = Depends(get_log_path),
    engine: LootEngine = Depends(get_engine),
) -> TrackerResponse:
    """Start tracking; loot already in the log is not counted."""
    monitor = request.app.state.monitor
    scan = monitor.latest if monitor is not None else None
    if scan is None:
        try:
            scan = engine.scan(log_path)
        except LogUnavailableError as e:
            raise HTTPException(status_code=404, detail=str(e))

    with request.app.state.tracker_lock:
        request.app.state.tracker.start(
            scan.loot, zone=scan.zone, baseline_index=scan.baseline_index
        )
    return _state(request)


@router.post("/refresh", response_model=TrackerResponse)
def refresh_tracker(
    request: Request,
    log_path: Optional[Path] = Depends(get_log_path),
    engine: LootEngine = Depends(get_engine),
) -> TrackerResponse:
    """Rescan the log now and fold the result into the session."""
    try:
        scan = engine.scan(log_path)
    except LogUnavailableError as e:
        raise HTTPException(status_code=404, detail=str(e))

    with request.app.state.tracker_lock:
        request.app.state.tracker.update(
            scan.loot, zone=scan.zone, baseline_index=scan.baseline_index
        )
    return _state(request)


@router.post("/stop", response_model=TrackerResponse)
def stop_tracker(request: Request) -> TrackerResponse:
    """Stop tracking and close the current run."""
    with request.app.state.tracker_lock:
        request.app.state.tracker.stop()
    return _state(request)
