"""
Log monitor - re-run the engine on a fixed cadence and on file changes.

File-change notifications come from watchdog. Notifications and timer
ticks are coalesced: at most one scan runs at a time, and triggers that
arrive during a scan collapse into a single follow-up scan.
"""

import threading
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from tlitrack.config.logging import get_logger
from tlitrack.config.settings import DEFAULT_POLL_INTERVAL, find_log_file
from tlitrack.core.engine import LootEngine
from tlitrack.core.models import ScanResult
from tlitrack.parser.log_reader import LogUnavailableError

logger = get_logger("monitor")


class LogFileHandler(FileSystemEventHandler):
    """Wakes the monitor when the watched log file changes."""

    def __init__(self, log_path: Path, on_change: Callable[[], None]) -> None:
        self.log_path = log_path
        self.on_change = on_change

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        # Watchdog watches the directory; ignore sibling files
        if Path(str(event.src_path)).name != self.log_path.name:
            return
        self.on_change()


class LogMonitor:
    """
    Periodically rescan the game log.

    Each scan is a full, self-contained recomputation, so a superseded
    result can simply be replaced by the next one.
    """

    def __init__(
        self,
        engine: LootEngine,
        log_path: Optional[Path],
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        on_scan: Optional[Callable[[ScanResult], None]] = None,
        on_error: Optional[Callable[[LogUnavailableError], None]] = None,
        watch_file: bool = True,
        auto_detect: bool = True,
    ) -> None:
        """
        Args:
            engine: Engine used for every scan
            log_path: Game log (re-detected on each scan while None)
            poll_interval: Seconds between timer-driven scans
            on_scan: Called with every successful result
            on_error: Called when the log cannot be read
            watch_file: Also scan on filesystem notifications
            auto_detect: Try to locate the log while log_path is None
        """
        self.engine = engine
        self.log_path = log_path
        self.poll_interval = poll_interval
        self._listeners: list[Callable[[ScanResult], None]] = [on_scan] if on_scan else []
        self._on_error = on_error
        self._watch_file = watch_file
        self._auto_detect = auto_detect

        self.latest: Optional[ScanResult] = None
        self.last_error: Optional[LogUnavailableError] = None
        self.scan_count = 0

        self._state_lock = threading.Lock()
        self._scanning = False
        self._pending = False

        self._wake = threading.Event()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._observer: Optional[Observer] = None

    def add_listener(self, listener: Callable[[ScanResult], None]) -> None:
        """Register a callback for every successful scan."""
        self._listeners.append(listener)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def set_log_path(self, log_path: Optional[Path]) -> None:
        """Switch to another log file and rescan on the next wakeup."""
        if log_path == self.log_path:
            return
        logger.info(f"Log path changed: {log_path}")
        self._stop_watcher()
        self.log_path = log_path
        self.last_error = None
        if self.is_running:
            self._start_watcher()
        self.notify_change()

    def notify_change(self) -> None:
        """Request a scan from the monitor thread (non-blocking)."""
        self._wake.set()

    def trigger(self) -> bool:
        """
        Scan now on the calling thread.

        Returns:
            True if this call ran the scan(s), False if a scan was already
            in flight (a follow-up scan is then queued on that thread)
        """
        with self._state_lock:
            if self._scanning:
                self._pending = True
                return False
            self._scanning = True

        try:
            while True:
                self._scan_once()
                with self._state_lock:
                    if not self._pending:
                        self._scanning = False
                        return True
                    self._pending = False
        except BaseException:
            with self._state_lock:
                self._scanning = False
                self._pending = False
            raise

    def _scan_once(self) -> None:
        if self.log_path is None and self._auto_detect:
            self.log_path = find_log_file()
            if self.log_path is not None:
                logger.info("Log found: %s", self.log_path)
                if self.is_running:
                    self._start_watcher()

        try:
            result = self.engine.scan(self.log_path)
        except LogUnavailableError as e:
            if self.last_error is None or str(self.last_error) != str(e):
                logger.warning(str(e))
            self.last_error = e
            if self._on_error:
                self._on_error(e)
            return

        self.last_error = None
        self.latest = result
        self.scan_count += 1
        for listener in list(self._listeners):
            listener(result)

    def _start_watcher(self) -> None:
        if not self._watch_file or self._observer is not None or self.log_path is None:
            return
        if not self.log_path.parent.exists():
            return
        try:
            observer = Observer()
            observer.schedule(
                LogFileHandler(self.log_path, self.notify_change),
                str(self.log_path.parent),
                recursive=False,
            )
            observer.daemon = True
            observer.start()
        except OSError as e:
            # Timer-driven scans still work
            logger.warning(f"Failed to start file watcher: {e}")
            return
        self._observer = observer
        logger.info(f"Watching: {self.log_path}")

    def _stop_watcher(self) -> None:
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=2)
            self._observer = None

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.trigger()
            except Exception:
                logger.exception("Log scan failed")
            self._wake.wait(self.poll_interval)
            self._wake.clear()

    def start(self) -> None:
        """Start the background monitor thread."""
        if self.is_running:
            return
        self._stop.clear()
        self._start_watcher()
        self._thread = threading.Thread(target=self._run, name="tlitrack-monitor", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the monitor thread and file watcher."""
        self._stop.set()
        self._wake.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        self._stop_watcher()
