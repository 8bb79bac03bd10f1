"""State replayer - fold log events into slot state and loot deltas."""

from typing import Iterable, Optional

from tlitrack.core.models import (
    ContextMarker,
    InventoryRecord,
    LogEvent,
    LootRecord,
    LootSummary,
    ReplayResult,
    SlotClear,
    SlotKey,
    SlotSet,
    SlotState,
)
from tlitrack.data.items import ItemNameResolver
from tlitrack.parser.log_parser import LineClassifier
from tlitrack.parser.patterns import PICK_ITEMS_LABEL


class StateReplayer:
    """
    Replay events from a baseline forward.

    Slot state follows every SlotSet/SlotClear (last write wins). Deltas
    are accumulated per item only while a pickup block is open, so sorting,
    vendoring and stash moves never count as loot.
    """

    def __init__(
        self,
        classifier: Optional[LineClassifier] = None,
        pickup_label: str = PICK_ITEMS_LABEL,
    ) -> None:
        self.classifier = classifier or LineClassifier()
        self.pickup_label = pickup_label
        self.reset()

    def reset(self) -> None:
        """Clear all replay state."""
        self._slots: dict[SlotKey, SlotState] = {}
        self._deltas: dict[str, int] = {}
        self._total_events = 0
        self._in_pickup = False

    @property
    def in_pickup(self) -> bool:
        return self._in_pickup

    def process_event(self, event: LogEvent) -> Optional[int]:
        """
        Apply one event.

        Returns:
            The delta attributed to loot, or None if the event was not counted
        """
        if isinstance(event, SlotSet):
            if event.is_init:
                # Snapshot: baseline only, never a delta
                self._slots[event.key] = SlotState(event.config_base_id, event.num, True)
                return None
            return self._apply_modify(event)

        if isinstance(event, SlotClear):
            return self._apply_remove(event)

        if isinstance(event, ContextMarker):
            # Other ProtoNames (sell, stash, sort...) leave the flag alone
            if event.proto_name == self.pickup_label:
                self._in_pickup = event.is_start
            return None

        # MapChange is tracked separately
        return None

    def _apply_modify(self, event: SlotSet) -> Optional[int]:
        old_state = self._slots.get(event.key)

        # A slot that now holds a different item has no continuity:
        # the whole new stack counts as arrived
        prev_num = 0
        if old_state is not None and old_state.config_base_id == event.config_base_id:
            prev_num = old_state.num

        self._slots[event.key] = SlotState(event.config_base_id, event.num, False)

        delta = event.num - prev_num
        if not self._in_pickup or delta == 0:
            return None
        self._add(event.config_base_id, delta)
        return delta

    def _apply_remove(self, event: SlotClear) -> Optional[int]:
        old_state = self._slots.pop(event.key, None)
        if old_state is None or not self._in_pickup:
            return None
        self._add(old_state.config_base_id, -old_state.num)
        return -old_state.num

    def _add(self, config_base_id: str, delta: int) -> None:
        self._deltas[config_base_id] = self._deltas.get(config_base_id, 0) + delta
        self._total_events += 1

    def result(self) -> ReplayResult:
        """Snapshot of the current state (copies, safe to keep)."""
        return ReplayResult(
            slots=dict(self._slots),
            deltas=dict(self._deltas),
            total_events=self._total_events,
        )

    def replay(self, lines: Iterable[str]) -> ReplayResult:
        """
        Replay lines from scratch.

        Args:
            lines: Log lines starting at the baseline

        Returns:
            Final slot state, delta accumulator and counted event total
        """
        self.reset()
        for line in lines:
            event = self.classifier.classify(line)
            if event is not None:
                self.process_event(event)
        return self.result()


def current_totals(slots: dict[SlotKey, SlotState]) -> dict[str, int]:
    """Sum live stacks per item."""
    totals: dict[str, int] = {}
    for state in slots.values():
        totals[state.config_base_id] = totals.get(state.config_base_id, 0) + state.num
    return totals


def build_loot_summary(result: ReplayResult, resolver: ItemNameResolver) -> LootSummary:
    """
    Turn a replay result into loot records.

    Net-zero items are dropped. Records are ordered by absolute delta,
    largest first, ties keeping first-seen order.
    """
    totals = current_totals(result.slots)
    items = [
        LootRecord(
            config_base_id=config_id,
            item_name=resolver.resolve(config_id),
            delta=delta,
            current=totals.get(config_id, 0),
        )
        for config_id, delta in result.deltas.items()
        if delta != 0
    ]
    items.sort(key=lambda r: abs(r.delta), reverse=True)
    return LootSummary(items=items, total_events=result.total_events)


def build_inventory_records(
    result: ReplayResult, resolver: ItemNameResolver
) -> list[InventoryRecord]:
    """Live slots ordered by (page, slot)."""
    return [
        InventoryRecord(
            page_id=key.page_id,
            slot_id=key.slot_id,
            config_base_id=state.config_base_id,
            item_name=resolver.resolve(state.config_base_id),
            num=state.num,
            is_init=state.is_init,
        )
        for key, state in sorted(
            result.slots.items(), key=lambda kv: (kv[0].page_id, kv[0].slot_id)
        )
    ]
