"""Log line parser - converts raw lines to typed events."""

from typing import Iterable, Optional

from tlitrack.core.models import (
    ContextMarker,
    LogEvent,
    MapChange,
    SlotClear,
    SlotSet,
)
from tlitrack.data.inventory import EXCLUDED_PAGES
from tlitrack.parser.fields import extract_field, extract_int_field
from tlitrack.parser.patterns import (
    BAG_INIT_MARKER,
    BAG_MODIFY_MARKER,
    BAG_REMOVE_MARKER,
    ITEM_CHANGE_MARKER,
    ITEM_CHANGE_PATTERN,
    ITEM_FIELD,
    LEVEL_EVENT_MARKER,
    LEVEL_EVENT_PATTERN,
    NUM_FIELD,
    PAGE_FIELD,
    SLOT_FIELD,
)


class LineClassifier:
    """
    Stateless line classifier.

    Recognizes BagMgr slot updates, snapshots and removals, ItemChange
    context markers and zone transitions. Anything else (including lines
    with missing or non-numeric fields) classifies as None.
    """

    def __init__(self, excluded_pages: Iterable[int] = EXCLUDED_PAGES) -> None:
        """
        Args:
            excluded_pages: PageIds whose slots are never tracked (gear)
        """
        self.excluded_pages = frozenset(excluded_pages)

    def classify(self, line: str) -> Optional[LogEvent]:
        """
        Parse a single log line into a typed event.

        Args:
            line: Raw log line (may include trailing newline)

        Returns:
            SlotSet, SlotClear, ContextMarker, MapChange or None
        """
        line = line.rstrip("\r\n")
        if not line:
            return None

        if BAG_MODIFY_MARKER in line:
            return self._parse_slot_set(line, is_init=False)
        if BAG_INIT_MARKER in line:
            return self._parse_slot_set(line, is_init=True)
        if BAG_REMOVE_MARKER in line:
            return self._parse_slot_clear(line)
        if ITEM_CHANGE_MARKER in line:
            return _parse_context_marker(line)
        if LEVEL_EVENT_MARKER in line:
            return _parse_map_change(line)
        return None

    def _tracked_page(self, line: str) -> Optional[int]:
        page_id = extract_int_field(line, PAGE_FIELD)
        if page_id is None or page_id in self.excluded_pages:
            return None
        return page_id

    def _parse_slot_set(self, line: str, is_init: bool) -> Optional[SlotSet]:
        page_id = self._tracked_page(line)
        if page_id is None:
            return None
        slot_id = extract_int_field(line, SLOT_FIELD)
        config_base_id = extract_field(line, ITEM_FIELD)
        num = extract_int_field(line, NUM_FIELD)
        if slot_id is None or config_base_id is None or num is None:
            return None
        return SlotSet(
            page_id=page_id,
            slot_id=slot_id,
            config_base_id=config_base_id,
            num=num,
            is_init=is_init,
        )

    def _parse_slot_clear(self, line: str) -> Optional[SlotClear]:
        page_id = self._tracked_page(line)
        if page_id is None:
            return None
        slot_id = extract_int_field(line, SLOT_FIELD)
        if slot_id is None:
            return None
        return SlotClear(page_id=page_id, slot_id=slot_id)


def _parse_context_marker(line: str) -> Optional[ContextMarker]:
    match = ITEM_CHANGE_PATTERN.search(line)
    if not match:
        return None
    return ContextMarker(
        proto_name=match.group("proto_name"),
        is_start=match.group("marker") == "start",
    )


def _parse_map_change(line: str) -> Optional[MapChange]:
    match = LEVEL_EVENT_PATTERN.search(line)
    if not match:
        return None
    return MapChange(zone_path=match.group("level_path"))


_default_classifier = LineClassifier()


def parse_line(line: str) -> Optional[LogEvent]:
    """Classify a line using the default excluded pages."""
    return _default_classifier.classify(line)


def parse_lines(lines: Iterable[str]) -> list[LogEvent]:
    """
    Parse multiple log lines.

    Returns:
        Parsed events (unrecognized lines dropped)
    """
    events = (parse_line(line) for line in lines)
    return [e for e in events if e is not None]
