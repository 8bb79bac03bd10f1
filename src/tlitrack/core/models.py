"""Core domain models - dataclasses with no I/O dependencies."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional, Union

from tlitrack.data.zones import get_zone_display_name


@dataclass(frozen=True)
class SlotKey:
    """Unique identifier for an inventory slot."""

    page_id: int
    slot_id: int

    def __str__(self) -> str:
        return f"({self.page_id}, {self.slot_id})"


@dataclass
class SlotState:
    """Current contents of an inventory slot."""

    config_base_id: str
    num: int
    is_init: bool = False  # True if last written by an InitBagData snapshot


# Parsed event types


@dataclass(frozen=True)
class SlotSet:
    """A slot now holds ``num`` units of ``config_base_id``."""

    page_id: int
    slot_id: int
    config_base_id: str
    num: int  # Absolute stack count
    is_init: bool = False  # True for InitBagData (snapshot), False for Modfy (change)

    @property
    def key(self) -> SlotKey:
        return SlotKey(self.page_id, self.slot_id)


@dataclass(frozen=True)
class SlotClear:
    """A slot became empty (RemoveBagItem)."""

    page_id: int
    slot_id: int

    @property
    def key(self) -> SlotKey:
        return SlotKey(self.page_id, self.slot_id)


@dataclass(frozen=True)
class ContextMarker:
    """ItemChange context marker (start/end of block)."""

    proto_name: str  # e.g., "PickItems"
    is_start: bool  # True for start, False for end


@dataclass(frozen=True)
class MapChange:
    """Zone transition completed."""

    zone_path: str  # e.g., "/Game/Art/Maps/02KD/KD_YuanSuKuangDong000/KD_YuanSuKuangDong000"

    @property
    def display_name(self) -> str:
        """Final path segment."""
        return get_zone_display_name(self.zone_path)


# Closed union of everything the classifier can produce
LogEvent = Union[SlotSet, SlotClear, ContextMarker, MapChange]


# Engine output


@dataclass
class LootRecord:
    """Net change of one item since the last inventory sort."""

    config_base_id: str
    item_name: str
    delta: int  # Positive = gain, negative = loss
    current: int  # Sum of live stacks holding this item

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class InventoryRecord:
    """One live inventory slot."""

    page_id: int
    slot_id: int
    config_base_id: str
    item_name: str
    num: int
    is_init: bool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class LootSummary:
    """Loot gained since the last inventory sort."""

    items: list[LootRecord] = field(default_factory=list)
    total_events: int = 0

    def delta_for(self, config_base_id: str) -> int:
        """Net delta for a single item id (0 if absent)."""
        return sum(i.delta for i in self.items if i.config_base_id == config_base_id)

    def as_snapshot(self) -> dict[str, int]:
        """Item id -> delta mapping, as consumed by session tracking."""
        return {i.config_base_id: i.delta for i in self.items}

    def to_dict(self) -> dict:
        return {
            "items": [i.to_dict() for i in self.items],
            "total_events": self.total_events,
        }


@dataclass
class ReplayResult:
    """Raw state produced by replaying log lines."""

    slots: dict[SlotKey, SlotState]
    deltas: dict[str, int]  # Insertion-ordered accumulator
    total_events: int


@dataclass
class ScanResult:
    """Every view derived from a single read of the log."""

    loot: LootSummary
    inventory: list[InventoryRecord]
    zone: Optional[str]
    baseline_index: int


# Manual session bookkeeping


@dataclass
class DropItem:
    """A manually recorded drop."""

    name: str
    quantity: int
    value: float

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "DropItem":
        return cls(
            name=data["name"],
            quantity=int(data.get("quantity", 1)),
            value=float(data["value"]),
        )


@dataclass
class Session:
    """A farming session recorded by the user."""

    id: str
    map: str
    start_time: datetime
    notes: Optional[str] = None
    end_time: Optional[datetime] = None
    drops: list[DropItem] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    def total_value(self) -> float:
        return sum(d.value * d.quantity for d in self.drops)

    def duration_minutes(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds() / 60.0

    def profit_per_minute(self) -> Optional[float]:
        minutes = self.duration_minutes()
        if minutes is None or minutes <= 0:
            return None
        return self.total_value() / minutes

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "map": self.map,
            "notes": self.notes,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "drops": [d.to_dict() for d in self.drops],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        end_time = data.get("end_time")
        return cls(
            id=data["id"],
            map=data["map"],
            notes=data.get("notes"),
            start_time=_parse_ts(data["start_time"]),
            end_time=_parse_ts(end_time) if end_time else None,
            drops=[DropItem.from_dict(d) for d in data.get("drops", [])],
        )


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_ts(value: str) -> datetime:
    # Accept the "Z" suffix written by other tools
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
