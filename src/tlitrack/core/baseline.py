"""Baseline locator - find the last completed inventory sort."""

from typing import Sequence

from tlitrack.core.models import ContextMarker
from tlitrack.parser.log_parser import LineClassifier
from tlitrack.parser.patterns import ITEM_CHANGE_MARKER, RESET_ITEMS_LAYOUT_LABEL


def find_baseline_index(
    lines: Sequence[str],
    classifier: LineClassifier,
    sort_label: str = RESET_ITEMS_LAYOUT_LABEL,
) -> int:
    """
    Find where replay should start.

    Sorting the inventory makes the client re-emit every slot as
    InitBagData, so the end of the most recent sort is the only point
    where the whole inventory is known.

    Args:
        lines: Every line of the log
        classifier: Classifier used to recognize the sort marker
        sort_label: ProtoName of the sort transaction

    Returns:
        Index of the line after the last ``<sort_label> end`` marker,
        or 0 if the log contains no completed sort
    """
    for i in range(len(lines) - 1, -1, -1):
        line = lines[i]
        # Cheap substring test before classifying
        if ITEM_CHANGE_MARKER not in line or sort_label not in line:
            continue
        event = classifier.classify(line)
        if (
            isinstance(event, ContextMarker)
            and event.proto_name == sort_label
            and not event.is_start
        ):
            return i + 1
    return 0
