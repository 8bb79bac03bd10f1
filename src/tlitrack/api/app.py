"""FastAPI application factory."""

import threading
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from tlitrack.api import dependencies
from tlitrack.api.routes import loot, overlay, sessions, tracker
from tlitrack.api.routes import settings as settings_routes
from tlitrack.api.schemas import StatusResponse
from tlitrack.config.paths import get_static_dir
from tlitrack.config.settings import Settings, find_log_file
from tlitrack.core.engine import LootEngine
from tlitrack.core.models import ScanResult
from tlitrack.core.session_tracker import SessionTracker
from tlitrack.data.items import build_resolver
from tlitrack.monitor import LogMonitor
from tlitrack.storage import SessionStore
from tlitrack.version import __version__


def create_app(
    settings: Settings,
    engine: Optional[LootEngine] = None,
    store: Optional[SessionStore] = None,
    monitor: Optional[LogMonitor] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (log path, data dir)
        engine: Parsing engine (built from settings.engine if None)
        store: Session store (settings.sessions_path if None)
        monitor: Background log monitor feeding the live tracker, if any

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="TLI Tracker API",
        description="Torchlight Infinite loot and inventory tracker",
        version=__version__,
    )

    # CORS middleware for local overlays
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    engine = engine or LootEngine(settings.engine, build_resolver(settings.items_file))
    store = store or SessionStore(settings.sessions_path)

    app.dependency_overrides[dependencies.get_settings] = lambda: settings
    app.dependency_overrides[dependencies.get_engine] = lambda: engine
    app.dependency_overrides[dependencies.get_store] = lambda: store

    def current_log_path() -> Optional[Path]:
        # The monitor owns the path once running; otherwise keep looking
        if monitor is not None:
            return monitor.log_path
        if settings.log_path is None and settings.auto_detect:
            settings.log_path = find_log_file()
        return settings.log_path

    app.dependency_overrides[dependencies.get_log_path] = current_log_path

    app.include_router(loot.router)
    app.include_router(sessions.router)
    app.include_router(tracker.router)
    app.include_router(settings_routes.router)
    app.include_router(overlay.router)

    app.state.settings = settings
    app.state.monitor = monitor
    app.state.tracker = SessionTracker(primary_item_id=settings.engine.primary_item_id)
    app.state.tracker_lock = threading.Lock()

    if monitor is not None:
        def on_scan(result: ScanResult) -> None:
            with app.state.tracker_lock:
                app.state.tracker.update(
                    result.loot, zone=result.zone, baseline_index=result.baseline_index
                )

        monitor.add_listener(on_scan)

    @app.get("/api/status", response_model=StatusResponse, tags=["status"])
    def get_status() -> StatusResponse:
        """Get server status."""
        log_path = current_log_path()
        last_error = monitor.last_error if monitor is not None else None
        return StatusResponse(
            status="ok",
            version=__version__,
            log_path=str(log_path) if log_path else None,
            log_found=log_path is not None and log_path.exists(),
            monitor_running=monitor is not None and monitor.is_running,
            last_error=str(last_error) if last_error else None,
        )

    # Mount static files (must be last to not override API routes)
    static_dir = get_static_dir()
    if static_dir.exists():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app
