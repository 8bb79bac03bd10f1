"""CLI commands."""

import argparse
import json
import signal
import sys
import threading
import webbrowser
from pathlib import Path
from typing import Optional

from tlitrack.config.logging import setup_logging
from tlitrack.config.settings import LOG_FILE_NAME, Settings
from tlitrack.core.engine import LootEngine
from tlitrack.core.models import InventoryRecord, LootSummary, ScanResult
from tlitrack.core.session_tracker import SessionTracker
from tlitrack.data.inventory import page_name
from tlitrack.data.items import build_resolver
from tlitrack.parser.log_reader import LogUnavailableError
from tlitrack.storage import SessionError, SessionStore


def _load_settings(args: argparse.Namespace) -> Settings:
    return Settings.from_args(
        log_path=getattr(args, "file", None),
        data_dir=args.data_dir,
        items_file=args.items,
    )


def _build_engine(settings: Settings) -> LootEngine:
    return LootEngine(settings.engine, build_resolver(settings.items_file))


def _print_loot(summary: LootSummary, primary_item_id: str) -> None:
    if not summary.items:
        print("No loot since the last inventory sort.")
        return
    print(f"{'Item':<32} {'ID':>10} {'Delta':>8} {'Current':>8}")
    for item in summary.items:
        sign = "+" if item.delta > 0 else ""
        print(f"{item.item_name:<32} {item.config_base_id:>10} {sign + str(item.delta):>8} {item.current:>8}")
    print(f"\n{summary.total_events} events, primary: {summary.delta_for(primary_item_id):+d}")


def _print_inventory(records: list[InventoryRecord]) -> None:
    if not records:
        print("Inventory is empty (sort inventory in-game to sync).")
        return
    for record in records:
        print(
            f"  [{page_name(record.page_id):<9} {record.slot_id:>3}] "
            f"{record.num:>6} x {record.item_name} ({record.config_base_id})"
        )


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize local data storage."""
    settings = _load_settings(args)
    path = SessionStore(settings.sessions_path).ensure()
    print(f"Storage initialized at {path}")
    if settings.log_path:
        print(f"Game log: {settings.log_path}")
    else:
        print(f"Warning: {LOG_FILE_NAME} not found")
    return 0


def _engine_command(args: argparse.Namespace) -> Optional[tuple[Settings, LootEngine]]:
    settings = _load_settings(args)
    try:
        engine = _build_engine(settings)
    except (OSError, ValueError) as e:
        print(f"Error: Could not load item table: {e}")
        return None
    return settings, engine


def cmd_loot(args: argparse.Namespace) -> int:
    """Show loot gained since the last inventory sort."""
    loaded = _engine_command(args)
    if loaded is None:
        return 1
    settings, engine = loaded

    try:
        summary = engine.parse_loot(settings.log_path)
    except LogUnavailableError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_loot(summary, engine.config.primary_item_id)
    return 0


def cmd_inventory(args: argparse.Namespace) -> int:
    """Show the reconstructed inventory."""
    loaded = _engine_command(args)
    if loaded is None:
        return 1
    settings, engine = loaded

    try:
        records = engine.parse_inventory(settings.log_path)
    except LogUnavailableError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False))
    else:
        _print_inventory(records)
    return 0


def cmd_zone(args: argparse.Namespace) -> int:
    """Show the most recently entered zone."""
    loaded = _engine_command(args)
    if loaded is None:
        return 1
    settings, engine = loaded

    try:
        zone = engine.detect_zone(settings.log_path)
    except LogUnavailableError as e:
        print(f"Error: {e}")
        return 1

    print(zone or "Unknown")
    return 0


def _store(args: argparse.Namespace) -> SessionStore:
    settings = Settings.from_args(data_dir=args.data_dir)
    return SessionStore(settings.sessions_path)


def cmd_start_session(args: argparse.Namespace) -> int:
    """Start a new farming session."""
    try:
        session = _store(args).start(args.map, args.notes)
    except SessionError as e:
        print(f"Error: {e}")
        return 1
    print(f"Session started: {session.id}")
    return 0


def cmd_add_drop(args: argparse.Namespace) -> int:
    """Add a drop to a session (defaults to the active session)."""
    if args.quantity < 1:
        print("Error: Quantity must be at least 1")
        return 1
    try:
        session = _store(args).add_drop(args.name, args.value, args.quantity, args.session)
    except SessionError as e:
        print(f"Error: {e}")
        return 1
    print(f"Drop added to session {session.id}")
    return 0


def cmd_end_session(args: argparse.Namespace) -> int:
    """End a session (defaults to the active session)."""
    try:
        session, ended_now = _store(args).end(args.session)
    except SessionError as e:
        print(f"Error: {e}")
        return 1
    if ended_now:
        print(f"Session ended: {session.id}")
    else:
        print(f"Session already ended: {session.id}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List sessions."""
    try:
        sessions = _store(args).load()
    except SessionError as e:
        print(f"Error: {e}")
        return 1

    if not sessions:
        print("No sessions found.")
        return 0

    for session in sessions:
        status = "active" if session.is_active else "ended"
        print(f"{session.id} | {session.map} | {status} | drops: {len(session.drops)}")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    """Show summary for a session (defaults to the active session)."""
    try:
        session = _store(args).get(args.session)
    except SessionError as e:
        print(f"Error: {e}")
        return 1

    print(f"Session: {session.id}")
    print(f"Map: {session.map}")
    if session.notes:
        print(f"Notes: {session.notes}")
    print(f"Drops: {len(session.drops)}")
    print(f"Total value: {session.total_value():.2f}")
    minutes = session.duration_minutes()
    if minutes is not None:
        print(f"Duration: {minutes:.2f} minutes")
    ppm = session.profit_per_minute()
    if ppm is not None:
        print(f"Profit/min: {ppm:.2f}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Export sessions to a JSON file."""
    try:
        count = _store(args).export(Path(args.out))
    except (SessionError, OSError) as e:
        print(f"Error: {e}")
        return 1
    print(f"Exported {count} sessions to {args.out}")
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    """Track a session live in the console."""
    from tlitrack.monitor import LogMonitor

    loaded = _engine_command(args)
    if loaded is None:
        return 1
    settings, engine = loaded
    logger = setup_logging(data_dir=settings.data_dir)

    tracker = SessionTracker(primary_item_id=engine.config.primary_item_id)

    def on_scan(result: ScanResult) -> None:
        if not tracker.is_active:
            tracker.start(result.loot, zone=result.zone, baseline_index=result.baseline_index)
            logger.info(f"Session started in {result.zone or 'unknown zone'}")
            return
        previous_zone = tracker.current_zone
        diff = tracker.update(result.loot, zone=result.zone, baseline_index=result.baseline_index)
        for config_id, change in diff.items():
            print(f"  {change:+d} {engine.resolver.resolve(config_id)}")
        if result.zone and result.zone != previous_zone:
            print(f"\n=== Entered: {result.zone} ===")
        if diff:
            print(
                f"  [{tracker.primary_total:+d} primary, "
                f"{tracker.primary_per_hour():.0f}/hr, {tracker.total_items} items]"
            )

    monitor = LogMonitor(
        engine,
        settings.log_path,
        poll_interval=args.interval or settings.poll_interval,
        on_scan=on_scan,
    )

    stop_event = threading.Event()

    def signal_handler(sig, frame):
        stop_event.set()

    signal.signal(signal.SIGINT, signal_handler)

    logger.info(f"Watching {settings.log_path or LOG_FILE_NAME} (Ctrl+C to stop)")
    monitor.start()
    try:
        stop_event.wait()
    finally:
        monitor.stop()
        tracker.stop()
        logger.info(
            f"Session total: {tracker.primary_total:+d} primary, {tracker.total_items} items, "
            f"{len(tracker.runs)} runs"
        )
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the web server with a background log monitor."""
    from tlitrack.version import __version__

    settings = _load_settings(args)
    logger = setup_logging(data_dir=settings.data_dir)
    logger.info(f"TLI Tracker v{__version__} starting...")

    # Import here to avoid loading FastAPI when not needed
    import uvicorn

    from tlitrack.api.app import create_app
    from tlitrack.monitor import LogMonitor

    try:
        engine = _build_engine(settings)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load item table: {e}")
        return 1

    if settings.log_path:
        logger.info(f"Game log: {settings.log_path}")
    else:
        logger.warning(f"{LOG_FILE_NAME} not found - start Torchlight Infinite with logging enabled")

    monitor = LogMonitor(engine, settings.log_path, poll_interval=settings.poll_interval)
    app = create_app(settings, engine=engine, monitor=monitor)
    monitor.start()

    url = f"http://{args.host}:{args.port}"
    logger.info(f"Web UI running on {url}")
    if not args.no_browser:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()

    try:
        uvicorn.run(app, host=args.host, port=args.port, log_level="warning")
    finally:
        monitor.stop()
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tlitrack",
        description="Torchlight: Infinite farming tracker",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        help="Data directory for sessions and preferences",
    )
    parser.add_argument(
        "--items",
        type=str,
        help="Item name table (JSON object of ConfigBaseId -> name)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("init", help="Initialize local data storage")

    for name, help_text in (
        ("loot", "Show loot gained since the last inventory sort"),
        ("inventory", "Show the reconstructed inventory"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "file",
            type=str,
            nargs="?",
            help="Log file or game directory (auto-detects if not specified)",
        )
        sub.add_argument("--json", action="store_true", help="Print JSON")

    zone_parser = subparsers.add_parser("zone", help="Show the current zone")
    zone_parser.add_argument(
        "file",
        type=str,
        nargs="?",
        help="Log file or game directory (auto-detects if not specified)",
    )

    start_parser = subparsers.add_parser("start-session", help="Start a new farming session")
    start_parser.add_argument("--map", type=str, required=True, help="Map name")
    start_parser.add_argument("--notes", type=str, help="Free-form notes")

    drop_parser = subparsers.add_parser("add-drop", help="Add a drop to a session")
    drop_parser.add_argument("--name", type=str, required=True, help="Item name")
    drop_parser.add_argument("--quantity", type=int, default=1, help="Quantity (default: 1)")
    drop_parser.add_argument("--value", type=float, required=True, help="Value per unit")
    drop_parser.add_argument("--session", type=str, help="Session id (default: active session)")

    end_parser = subparsers.add_parser("end-session", help="End a session")
    end_parser.add_argument("--session", type=str, help="Session id (default: active session)")

    subparsers.add_parser("list", help="List sessions")

    summary_parser = subparsers.add_parser("summary", help="Show a session summary")
    summary_parser.add_argument("--session", type=str, help="Session id (default: active session)")

    export_parser = subparsers.add_parser("export", help="Export sessions to a JSON file")
    export_parser.add_argument("--out", type=str, required=True, help="Output file")

    watch_parser = subparsers.add_parser("watch", help="Track a session live in the console")
    watch_parser.add_argument(
        "file",
        type=str,
        nargs="?",
        help="Log file or game directory (auto-detects if not specified)",
    )
    watch_parser.add_argument(
        "--interval",
        type=float,
        help="Rescan interval in seconds",
    )

    serve_parser = subparsers.add_parser("serve", help="Start web server")
    serve_parser.add_argument(
        "file",
        type=str,
        nargs="?",
        help="Log file or game directory (auto-detects if not specified)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run server on (default: 8000)",
    )
    serve_parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    serve_parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "init": cmd_init,
        "loot": cmd_loot,
        "inventory": cmd_inventory,
        "zone": cmd_zone,
        "start-session": cmd_start_session,
        "add-drop": cmd_add_drop,
        "end-session": cmd_end_session,
        "list": cmd_list,
        "summary": cmd_summary,
        "export": cmd_export,
        "watch": cmd_watch,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func is None:
        print(f"Unknown command: {args.command}")
        return 1

    return cmd_func(args)


if __name__ == "__main__":
    sys.exit(main())
