"""Loot engine - derive loot, inventory and zone views from the game log."""

from itertools import islice
from pathlib import Path
from typing import Optional, Sequence

from tlitrack.config.logging import get_logger
from tlitrack.config.settings import EngineConfig
from tlitrack.core.baseline import find_baseline_index
from tlitrack.core.models import (
    InventoryRecord,
    LootSummary,
    MapChange,
    ScanResult,
)
from tlitrack.core.replayer import (
    StateReplayer,
    build_inventory_records,
    build_loot_summary,
)
from tlitrack.data.items import ItemNameResolver
from tlitrack.parser.log_parser import LineClassifier
from tlitrack.parser.log_reader import read_log_lines
from tlitrack.parser.patterns import LEVEL_EVENT_MARKER

logger = get_logger("engine")


class LootEngine:
    """
    Stateless facade over classifier, baseline locator and replayer.

    Every call re-reads the log and recomputes from the last inventory
    sort, so a missed or garbled event heals at the next sort.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        resolver: Optional[ItemNameResolver] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.resolver = resolver or ItemNameResolver()
        self.classifier = LineClassifier(self.config.excluded_pages)

    def _replay_from_baseline(self, lines: Sequence[str]):
        start = find_baseline_index(lines, self.classifier, self.config.sort_label)
        # Fresh replayer per call: no state leaks between scans
        replayer = StateReplayer(self.classifier, self.config.pickup_label)
        result = replayer.replay(islice(lines, start, None))
        logger.debug(
            "Replayed %d of %d lines from baseline %d: %d slots, %d loot events",
            len(lines) - start,
            len(lines),
            start,
            len(result.slots),
            result.total_events,
        )
        return start, result

    # Line-level API

    def loot_from_lines(self, lines: Sequence[str]) -> LootSummary:
        _, result = self._replay_from_baseline(lines)
        return build_loot_summary(result, self.resolver)

    def inventory_from_lines(self, lines: Sequence[str]) -> list[InventoryRecord]:
        _, result = self._replay_from_baseline(lines)
        return build_inventory_records(result, self.resolver)

    def zone_from_lines(self, lines: Sequence[str]) -> Optional[str]:
        """
        Display name of the most recently entered zone.

        Searches the whole log, independent of the sort baseline.
        """
        for i in range(len(lines) - 1, -1, -1):
            if LEVEL_EVENT_MARKER not in lines[i]:
                continue
            event = self.classifier.classify(lines[i])
            if isinstance(event, MapChange):
                return event.display_name
        return None

    def scan_lines(self, lines: Sequence[str]) -> ScanResult:
        start, result = self._replay_from_baseline(lines)
        return ScanResult(
            loot=build_loot_summary(result, self.resolver),
            inventory=build_inventory_records(result, self.resolver),
            zone=self.zone_from_lines(lines),
            baseline_index=start,
        )

    # File-level API (raise LogUnavailableError on I/O failure)

    def parse_loot(self, log_path: Optional[Path]) -> LootSummary:
        return self.loot_from_lines(read_log_lines(log_path))

    def parse_inventory(self, log_path: Optional[Path]) -> list[InventoryRecord]:
        return self.inventory_from_lines(read_log_lines(log_path))

    def detect_zone(self, log_path: Optional[Path]) -> Optional[str]:
        return self.zone_from_lines(read_log_lines(log_path))

    def scan(self, log_path: Optional[Path]) -> ScanResult:
        """Read the log once and derive every view from it."""
        return self.scan_lines(read_log_lines(log_path))
