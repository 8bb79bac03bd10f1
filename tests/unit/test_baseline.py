"""Tests for the baseline locator."""

from log_lines import context, init, modify, pick_start, sort_block

from tlitrack.core.baseline import find_baseline_index
from tlitrack.parser.log_parser import LineClassifier


class TestFindBaselineIndex:
    """Tests for find_baseline_index."""

    def setup_method(self):
        self.classifier = LineClassifier()

    def test_empty_log(self):
        assert find_baseline_index([], self.classifier) == 0

    def test_no_sort_starts_at_zero(self):
        lines = [init(102, 0, 100300, 5), pick_start(), modify(102, 0, 100300, 6)]
        assert find_baseline_index(lines, self.classifier) == 0

    def test_index_after_sort_end(self):
        lines = [init(102, 0, 100300, 5)] + sort_block() + [init(102, 0, 100300, 5)]
        assert find_baseline_index(lines, self.classifier) == 4

    def test_uses_last_sort(self):
        lines = sort_block() + [modify(102, 0, 100300, 5)] + sort_block()
        assert find_baseline_index(lines, self.classifier) == len(lines)

    def test_sort_start_without_end_ignored(self):
        lines = sort_block() + [context("ResetItemsLayout", "start"), init(102, 0, 1, 1)]
        assert find_baseline_index(lines, self.classifier) == 3

    def test_other_label_end_ignored(self):
        lines = [context("PickItems", "end"), context("Spv3Open", "end")]
        assert find_baseline_index(lines, self.classifier) == 0

    def test_custom_sort_label(self):
        lines = [context("ArrangeBag", "end"), init(102, 0, 1, 1)]
        assert find_baseline_index(lines, self.classifier, sort_label="ArrangeBag") == 1
