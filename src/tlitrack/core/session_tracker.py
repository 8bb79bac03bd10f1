"""Session tracker - fold successive loot snapshots into session totals."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from tlitrack.core.models import LootSummary
from tlitrack.data.zones import is_hub_zone
from tlitrack.parser.patterns import FE_CONFIG_BASE_ID


@dataclass
class MapRun:
    """Loot gained while in a single map."""

    map_name: str
    start: datetime
    end: Optional[datetime] = None
    loot_gained: dict[str, int] = field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        return self.end is None

    def duration_seconds(self, now: Optional[datetime] = None) -> float:
        end = self.end or now or datetime.now()
        return (end - self.start).total_seconds()

    @property
    def total_items(self) -> int:
        return sum(self.loot_gained.values())

    def to_dict(self, now: Optional[datetime] = None) -> dict:
        return {
            "map_name": self.map_name,
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end else None,
            "duration_seconds": round(self.duration_seconds(now), 1),
            "total_items": self.total_items,
            "loot_gained": dict(self.loot_gained),
        }


def diff_snapshots(previous: dict[str, int], current: dict[str, int]) -> dict[str, int]:
    """
    Difference between two item -> delta snapshots.

    An id missing from ``current`` (its net delta went back to zero or a
    new sort reset the baseline) contributes ``-previous``.

    Returns:
        Non-zero differences, keyed by item id
    """
    diff: dict[str, int] = {}
    for config_id in list(current) + [c for c in previous if c not in current]:
        change = current.get(config_id, 0) - previous.get(config_id, 0)
        if change != 0:
            diff[config_id] = change
    return diff


class SessionTracker:
    """
    Track loot across polls for the lifetime of a session.

    The engine only reports loot since the last inventory sort; the
    tracker turns consecutive reports into a running session total. When
    the sort baseline moves, the engine's deltas restart from zero, so the
    previous snapshot is dropped instead of being subtracted.
    """

    def __init__(self, primary_item_id: str = FE_CONFIG_BASE_ID) -> None:
        self.primary_item_id = primary_item_id
        self.started_at: Optional[datetime] = None
        self.cumulative_loot: dict[str, int] = {}
        self.runs: list[MapRun] = []
        self._prev_snapshot: dict[str, int] = {}
        self._baseline_index: Optional[int] = None
        self._current_zone: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.started_at is not None

    @property
    def current_zone(self) -> Optional[str]:
        return self._current_zone

    @property
    def current_run(self) -> Optional[MapRun]:
        if self.runs and self.runs[-1].is_active:
            return self.runs[-1]
        return None

    def start(
        self,
        summary: Optional[LootSummary] = None,
        zone: Optional[str] = None,
        now: Optional[datetime] = None,
        baseline_index: Optional[int] = None,
    ) -> None:
        """
        Start a new session.

        Args:
            summary: Latest engine output; loot already in it is not counted
            zone: Current zone, starts a run if it is a map
            now: Start time (defaults to now)
            baseline_index: Baseline the summary was computed from
        """
        now = now or datetime.now()
        self.started_at = now
        self.cumulative_loot = {}
        self.runs = []
        self._prev_snapshot = summary.as_snapshot() if summary else {}
        self._baseline_index = baseline_index
        self._current_zone = None
        self._enter_zone(zone, now)

    def stop(self, now: Optional[datetime] = None) -> None:
        """End the session and close any open run."""
        run = self.current_run
        if run is not None:
            run.end = now or datetime.now()
        self.started_at = None
        self._prev_snapshot = {}
        self._baseline_index = None
        self._current_zone = None

    def update(
        self,
        summary: LootSummary,
        zone: Optional[str] = None,
        now: Optional[datetime] = None,
        baseline_index: Optional[int] = None,
    ) -> dict[str, int]:
        """
        Fold a new engine snapshot into the session.

        Args:
            summary: Latest engine output
            zone: Current zone display name
            now: Poll time (defaults to now)
            baseline_index: Baseline the summary was computed from; a
                change means the player sorted their inventory

        Returns:
            The per-item change since the previous snapshot
        """
        if not self.is_active:
            return {}
        now = now or datetime.now()

        if baseline_index is not None:
            if self._baseline_index is not None and baseline_index != self._baseline_index:
                self._prev_snapshot = {}
            self._baseline_index = baseline_index

        # Loot picked up before the zone change belongs to the old run
        snapshot = summary.as_snapshot()
        diff = diff_snapshots(self._prev_snapshot, snapshot)
        self._prev_snapshot = snapshot

        run = self.current_run
        for config_id, change in diff.items():
            self.cumulative_loot[config_id] = self.cumulative_loot.get(config_id, 0) + change
            if run is not None:
                run.loot_gained[config_id] = run.loot_gained.get(config_id, 0) + change

        if zone is not None and zone != self._current_zone:
            self._enter_zone(zone, now)

        return diff

    def _enter_zone(self, zone: Optional[str], now: datetime) -> None:
        if zone is None:
            return
        run = self.current_run
        if run is not None:
            run.end = now
        self._current_zone = zone
        if not is_hub_zone(zone):
            self.runs.append(MapRun(map_name=zone, start=now))

    def elapsed_seconds(self, now: Optional[datetime] = None) -> float:
        if self.started_at is None:
            return 0.0
        return ((now or datetime.now()) - self.started_at).total_seconds()

    @property
    def total_items(self) -> int:
        return sum(self.cumulative_loot.values())

    @property
    def primary_total(self) -> int:
        return self.cumulative_loot.get(self.primary_item_id, 0)

    def primary_per_hour(self, now: Optional[datetime] = None) -> float:
        """Primary resource gained per hour (0.0 for sessions under a second)."""
        secs = self.elapsed_seconds(now)
        if secs < 1.0:
            return 0.0
        return self.primary_total / secs * 3600.0

    def to_dict(self, now: Optional[datetime] = None) -> dict:
        now = now or datetime.now()
        return {
            "active": self.is_active,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "elapsed_seconds": round(self.elapsed_seconds(now), 1),
            "primary_item_id": self.primary_item_id,
            "primary_total": self.primary_total,
            "primary_per_hour": round(self.primary_per_hour(now), 1),
            "total_items": self.total_items,
            "cumulative_loot": dict(self.cumulative_loot),
            "current_zone": self._current_zone,
            "runs": [r.to_dict(now) for r in self.runs],
        }
