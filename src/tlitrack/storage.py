"""Session persistence - sessions.json in the data directory."""

import json
import uuid
from pathlib import Path
from typing import Optional

from tlitrack.config.logging import get_logger
from tlitrack.core.models import DropItem, Session, utc_now

logger = get_logger("storage")


class SessionError(Exception):
    """Base class for session bookkeeping errors."""


class SessionNotFoundError(SessionError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class NoActiveSessionError(SessionError):
    def __init__(self) -> None:
        super().__init__("No active session found. Specify a session id.")


class StorageError(SessionError):
    """sessions.json exists but cannot be read or decoded."""


class SessionStore:
    """
    Load and save sessions as ``{"sessions": [...]}``.

    The whole file is rewritten on every change; sessions are few and small.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def ensure(self) -> Path:
        """Create the data file if it does not exist."""
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write({"sessions": []})
        return self.path

    def load(self) -> list[Session]:
        self.ensure()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [Session.from_dict(s) for s in data.get("sessions", [])]
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e

    def save(self, sessions: list[Session]) -> None:
        self.ensure()
        self._write({"sessions": [s.to_dict() for s in sessions]})

    def _write(self, data: dict) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @staticmethod
    def resolve_session_id(sessions: list[Session], requested: Optional[str] = None) -> str:
        """Explicit id if given, otherwise the active session."""
        if requested:
            return requested
        for session in sessions:
            if session.is_active:
                return session.id
        raise NoActiveSessionError()

    @staticmethod
    def _find(sessions: list[Session], session_id: str) -> Session:
        for session in sessions:
            if session.id == session_id:
                return session
        raise SessionNotFoundError(session_id)

    def get(self, session_id: Optional[str] = None) -> Session:
        sessions = self.load()
        return self._find(sessions, self.resolve_session_id(sessions, session_id))

    def start(self, map_name: str, notes: Optional[str] = None) -> Session:
        sessions = self.load()
        session = Session(
            id=str(uuid.uuid4()),
            map=map_name,
            notes=notes,
            start_time=utc_now(),
        )
        sessions.append(session)
        self.save(sessions)
        logger.info("Session started: %s (%s)", session.id, map_name)
        return session

    def add_drop(
        self,
        name: str,
        value: float,
        quantity: int = 1,
        session_id: Optional[str] = None,
    ) -> Session:
        sessions = self.load()
        session = self._find(sessions, self.resolve_session_id(sessions, session_id))
        session.drops.append(DropItem(name=name, quantity=quantity, value=value))
        self.save(sessions)
        return session

    def end(self, session_id: Optional[str] = None) -> tuple[Session, bool]:
        """
        End a session.

        Returns:
            Tuple of (session, ended_now); ended_now is False if it had
            already ended
        """
        sessions = self.load()
        session = self._find(sessions, self.resolve_session_id(sessions, session_id))
        if not session.is_active:
            return session, False
        session.end_time = utc_now()
        self.save(sessions)
        logger.info("Session ended: %s", session.id)
        return session, True

    def export(self, out_path: Path) -> int:
        """Write all sessions as a JSON array. Returns the session count."""
        sessions = self.load()
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump([s.to_dict() for s in sessions], f, indent=2, ensure_ascii=False)
        return len(sessions)
