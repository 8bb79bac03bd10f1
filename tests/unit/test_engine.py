"""Tests for the loot engine."""

import pytest
from log_lines import (
    HIDEOUT,
    MINE,
    context,
    init,
    level,
    modify,
    pick_end,
    pick_start,
    remove,
    sort_block,
)

from tlitrack.config.settings import EngineConfig
from tlitrack.core.engine import LootEngine
from tlitrack.parser.log_reader import LogUnavailableError


class TestEndToEnd:
    """Realistic pickup sequences."""

    def test_single_pickup(self, engine):
        lines = [
            init(102, 0, 100300, 609),
            pick_start(),
            modify(102, 0, 100300, 671),
            pick_end(),
        ]
        summary = engine.loot_from_lines(lines)
        assert len(summary.items) == 1
        record = summary.items[0]
        assert record.config_base_id == "100300"
        assert record.delta == 62
        assert record.current == 671
        assert record.item_name == "Flame Elementium"

    def test_excluded_page_ignored(self, engine):
        lines = [pick_start(), modify(100, 4, 100300, 1), pick_end()]
        assert engine.loot_from_lines(lines).items == []
        assert engine.inventory_from_lines(lines) == []

    def test_remove_during_pickup(self, engine):
        lines = [
            init(103, 39, 200100, 5),
            init(102, 0, 100300, 1),
            pick_start(),
            remove(103, 39),
            pick_end(),
        ]
        summary = engine.loot_from_lines(lines)
        assert summary.delta_for("200100") == -5
        inventory = engine.inventory_from_lines(lines)
        assert [(r.page_id, r.slot_id) for r in inventory] == [(102, 0)]

    def test_different_item_in_slot_counts_full_stack(self, engine):
        lines = [init(102, 0, 100200, 50), pick_start(), modify(102, 0, 100300, 7), pick_end()]
        summary = engine.loot_from_lines(lines)
        assert summary.as_snapshot() == {"100300": 7}

    def test_net_zero_omitted(self, engine):
        lines = [
            init(102, 0, 100300, 10),
            pick_start(),
            modify(102, 0, 100300, 12),
            pick_end(),
            pick_start(),
            modify(102, 0, 100300, 10),
            pick_end(),
        ]
        assert engine.loot_from_lines(lines).items == []

    def test_unrelated_label_not_loot(self, engine):
        lines = [
            init(102, 0, 100300, 10),
            context("Spv3Open", "start"),
            modify(102, 0, 100300, 40),
            context("Spv3Open", "end"),
        ]
        assert engine.loot_from_lines(lines).items == []
        assert engine.inventory_from_lines(lines)[0].num == 40

    def test_whitespace_variants_equivalent(self, engine):
        tight = [
            "BagMgr@:InitBagData PageId=102 SlotId=0 ConfigBaseId=100300 Num=609",
            "ItemChange@ ProtoName=PickItems start",
            "BagMgr@:Modfy BagItem PageId=102 SlotId=0 ConfigBaseId=100300 Num=671",
        ]
        loose = [
            init(102, 0, 100300, 609),
            pick_start(),
            "BagMgr@:Modfy BagItem PageId  =  102 SlotId\t= 0 ConfigBaseId =100300 Num= 671",
        ]
        assert engine.loot_from_lines(tight) == engine.loot_from_lines(loose)

    def test_deterministic(self, engine):
        lines = [init(102, 0, 100300, 1), pick_start(), modify(102, 0, 100300, 9), modify(103, 1, 200100, 2)]
        assert engine.scan_lines(lines) == engine.scan_lines(lines)


class TestBaselineReplay:
    """Only the lines after the last sort contribute."""

    def test_loot_before_sort_discarded(self, engine):
        lines = [
            pick_start(),
            modify(102, 0, 100300, 50),
            pick_end(),
            *sort_block(),
            init(102, 0, 100300, 50),
            pick_start(),
            modify(102, 0, 100300, 55),
            pick_end(),
        ]
        summary = engine.loot_from_lines(lines)
        assert summary.as_snapshot() == {"100300": 5}
        assert summary.total_events == 1

    def test_inventory_only_from_snapshot(self, engine):
        lines = [init(103, 5, 200100, 1), *sort_block(), init(102, 0, 100300, 50)]
        inventory = engine.inventory_from_lines(lines)
        assert [r.config_base_id for r in inventory] == ["100300"]

    def test_scan_reports_baseline_index(self, engine):
        lines = [init(102, 0, 100300, 1), *sort_block(), init(102, 0, 100300, 1)]
        assert engine.scan_lines(lines).baseline_index == 4

    def test_tuple_lines_replay_from_baseline(self, engine):
        lines = (
            init(102, 0, 100300, 9),
            *sort_block(),
            init(102, 0, 100300, 50),
            pick_start(),
            modify(102, 0, 100300, 55),
            pick_end(),
        )
        before = list(lines)
        assert engine.loot_from_lines(lines).as_snapshot() == {"100300": 5}
        assert list(lines) == before

    def test_custom_labels(self, resolver):
        engine = LootEngine(EngineConfig.create(pickup_label="Loot", sort_label="Tidy"), resolver)
        lines = [
            pick_start(),
            modify(102, 0, 100300, 99),
            context("Tidy", "end"),
            context("Loot", "start"),
            modify(102, 1, 200100, 3),
        ]
        assert engine.loot_from_lines(lines).as_snapshot() == {"200100": 3}


class TestZone:
    """Zone detection scans the whole log."""

    def test_no_zone(self, engine):
        assert engine.zone_from_lines([init(102, 0, 100300, 1)]) is None

    def test_last_zone_wins(self, engine):
        lines = [level(HIDEOUT), pick_start(), level(MINE)]
        assert engine.zone_from_lines(lines) == "KD_YuanSuKuangDong000"

    def test_zone_before_sort_still_found(self, engine):
        lines = [level(MINE), *sort_block(), init(102, 0, 100300, 1)]
        scan = engine.scan_lines(lines)
        assert scan.zone == "KD_YuanSuKuangDong000"
        assert scan.baseline_index == 4

    def test_malformed_zone_line_skipped(self, engine):
        lines = [level(HIDEOUT), "SceneLevelMgr@ OpenMainWorld END! InMainLevelPath = "]
        assert engine.zone_from_lines(lines) == "XZ_YuJinZhiXiBiNanSuo200"


class TestFileApi:
    """File-level operations."""

    def test_scan_file(self, engine, write_log):
        log_path = write_log(
            [level(MINE), init(102, 0, 100300, 609), pick_start(), modify(102, 0, 100300, 671), pick_end()]
        )
        scan = engine.scan(log_path)
        assert scan.loot.as_snapshot() == {"100300": 62}
        assert scan.inventory[0].num == 671
        assert scan.zone == "KD_YuanSuKuangDong000"
        assert engine.parse_loot(log_path) == scan.loot
        assert engine.parse_inventory(log_path) == scan.inventory
        assert engine.detect_zone(log_path) == scan.zone

    def test_crlf_log(self, engine, tmp_path):
        log_path = tmp_path / "UE_game.log"
        log_path.write_bytes(
            "\r\n".join([init(102, 0, 100300, 1), pick_start(), modify(102, 0, 100300, 3)]).encode("utf-8")
        )
        assert engine.parse_loot(log_path).as_snapshot() == {"100300": 2}

    def test_missing_file_raises(self, engine, tmp_path):
        with pytest.raises(LogUnavailableError):
            engine.parse_loot(tmp_path / "missing.log")

    def test_no_path_raises(self, engine):
        with pytest.raises(LogUnavailableError):
            engine.scan(None)

    def test_default_engine_names_unknown(self, write_log):
        log_path = write_log([pick_start(), modify(102, 0, 100300, 1)])
        assert LootEngine().parse_loot(log_path).items[0].item_name == "Unknown 100300"
