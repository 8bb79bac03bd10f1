"""Tests for the line classifier."""

import pytest

from tlitrack.core.models import ContextMarker, MapChange, SlotClear, SlotSet
from tlitrack.parser.log_parser import LineClassifier, parse_line, parse_lines


class TestParseLine:
    """Tests for single line parsing."""

    def test_parses_bag_modify_event(self):
        line = "GameLog: Display: [Game] BagMgr@:Modfy BagItem PageId = 102 SlotId = 0 ConfigBaseId = 100300 Num = 671"
        event = parse_line(line)
        assert event == SlotSet(page_id=102, slot_id=0, config_base_id="100300", num=671, is_init=False)

    def test_parses_bag_init_event(self):
        line = "GameLog: Display: [Game] BagMgr@:InitBagData PageId = 102 SlotId = 0 ConfigBaseId = 100300 Num = 609"
        event = parse_line(line)
        assert isinstance(event, SlotSet)
        assert event.is_init is True
        assert event.config_base_id == "100300"
        assert event.num == 609

    def test_parses_bag_remove_event(self):
        line = "GameLog: Display: [Game] BagMgr@:RemoveBagItem PageId = 103 SlotId = 39"
        assert parse_line(line) == SlotClear(page_id=103, slot_id=39)

    def test_parses_context_start(self):
        event = parse_line("GameLog: Display: [Game] ItemChange@ ProtoName=PickItems start")
        assert event == ContextMarker(proto_name="PickItems", is_start=True)

    def test_parses_context_end(self):
        event = parse_line("GameLog: Display: [Game] ItemChange@ ProtoName=PickItems end")
        assert event == ContextMarker(proto_name="PickItems", is_start=False)

    def test_parses_map_event(self):
        line = "SceneLevelMgr@ OpenMainWorld END! InMainLevelPath = /Game/Art/Maps/01SD/XZ_YuJinZhiXiBiNanSuo200/test"
        event = parse_line(line)
        assert isinstance(event, MapChange)
        assert "XZ_YuJinZhiXiBiNanSuo200" in event.zone_path
        assert event.display_name == "test"

    def test_fields_in_any_order(self):
        line = "BagMgr@:Modfy BagItem Num = 3 ConfigBaseId = 200100 SlotId = 4 PageId = 103"
        assert parse_line(line) == SlotSet(103, 4, "200100", 3, False)

    def test_item_id_kept_as_text(self):
        line = "BagMgr@:Modfy BagItem PageId = 102 SlotId = 0 ConfigBaseId = 007 Num = 1"
        assert parse_line(line).config_base_id == "007"

    def test_handles_newlines(self):
        line = "GameLog: Display: [Game] ItemChange@ ProtoName=PickItems start\r\n"
        assert parse_line(line) == ContextMarker("PickItems", True)

    def test_returns_none_for_unknown_line(self):
        assert parse_line("Some random log line") is None

    def test_returns_none_for_empty_line(self):
        assert parse_line("") is None

    def test_returns_none_for_other_scene_event(self):
        assert parse_line("SceneLevelMgr@ OpenSubWorld STT!") is None


class TestMalformedLines:
    """Garbled or partial lines are never recognized and never raise."""

    @pytest.mark.parametrize(
        "line",
        [
            "BagMgr@:Modfy BagItem PageId = 102 SlotId = 0 ConfigBaseId = 100300",
            "BagMgr@:Modfy BagItem PageId = 102 SlotId = x ConfigBaseId = 100300 Num = 5",
            "BagMgr@:Modfy BagItem PageId = -1 SlotId = 0 ConfigBaseId = 100300 Num = 5",
            "BagMgr@:Modfy BagItem PageId = 102 SlotId = 0 ConfigBaseId = 100300 Num = 1.5",
            "BagMgr@:RemoveBagItem PageId = 103",
            "BagMgr@:RemoveBagItem SlotId = 4",
            "ItemChange@ ProtoName=PickItems",
            "ItemChange@ ProtoName= start",
            "SceneLevelMgr@ OpenMainWorld END! InMainLevelPath =",
            "SceneLevelMgr@ OpenMainWorld END!",
            "BagMgr@:Modfy",
        ],
    )
    def test_not_recognized(self, line):
        assert parse_line(line) is None


class TestExcludedPages:
    """Gear page events are never classified."""

    @pytest.mark.parametrize(
        "line",
        [
            "BagMgr@:Modfy BagItem PageId = 100 SlotId = 0 ConfigBaseId = 100300 Num = 1",
            "BagMgr@:InitBagData PageId = 100 SlotId = 3 ConfigBaseId = 5000 Num = 1",
            "BagMgr@:RemoveBagItem PageId = 100 SlotId = 3",
        ],
    )
    def test_default_excludes_gear(self, line):
        assert parse_line(line) is None

    def test_custom_excluded_pages(self):
        classifier = LineClassifier(excluded_pages={101, 103})
        assert classifier.classify("BagMgr@:RemoveBagItem PageId = 103 SlotId = 1") is None
        assert classifier.classify("BagMgr@:RemoveBagItem PageId = 100 SlotId = 1") == SlotClear(100, 1)


class TestParseLines:
    """Tests for batch parsing."""

    def test_drops_unrecognized_lines(self):
        events = parse_lines(
            [
                "noise",
                "ItemChange@ ProtoName=PickItems start",
                "BagMgr@:Modfy BagItem PageId = 102 SlotId = 0 ConfigBaseId = 100300 Num = 5",
                "",
                "ItemChange@ ProtoName=PickItems end",
            ]
        )
        assert [type(e) for e in events] == [ContextMarker, SlotSet, ContextMarker]
