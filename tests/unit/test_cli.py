"""Tests for CLI commands."""

import json

import pytest
from log_lines import MINE, init, level, modify, pick_end, pick_start

from tlitrack.cli.commands import create_parser, main


@pytest.fixture
def log_path(write_log):
    return write_log(
        [
            level(MINE),
            init(102, 0, 100300, 609),
            pick_start(),
            modify(102, 0, 100300, 671),
            modify(103, 2, 424242, 1),
            pick_end(),
        ]
    )


@pytest.fixture
def data_args(tmp_path):
    return ["--data-dir", str(tmp_path / "cli-data")]


class TestParser:
    """Tests for argument parsing."""

    def test_serve_defaults(self):
        args = create_parser().parse_args(["serve"])
        assert args.port == 8000
        assert args.host == "127.0.0.1"
        assert args.no_browser is False
        assert args.file is None

    def test_add_drop_arguments(self):
        args = create_parser().parse_args(["add-drop", "--name", "Ember", "--value", "2"])
        assert args.quantity == 1
        assert args.value == 2.0
        assert args.session is None

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out


class TestEngineCommands:
    """Tests for loot, inventory and zone commands."""

    def test_loot_table(self, capsys, data_args, log_path):
        assert main([*data_args, "loot", str(log_path)]) == 0
        out = capsys.readouterr().out
        assert "Flame Elementium" in out
        assert "+62" in out
        assert "Unknown 424242" in out

    def test_loot_json(self, capsys, data_args, log_path):
        assert main([*data_args, "loot", str(log_path), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["total_events"] == 2
        assert data["items"][0]["delta"] == 62

    def test_loot_custom_items(self, capsys, tmp_path, data_args, log_path):
        items = tmp_path / "names.json"
        items.write_text(json.dumps({"424242": "Mystery Ore"}), encoding="utf-8")
        assert main([*data_args, "--items", str(items), "loot", str(log_path)]) == 0
        assert "Mystery Ore" in capsys.readouterr().out

    def test_loot_bad_items_file(self, capsys, tmp_path, data_args, log_path):
        items = tmp_path / "names.json"
        items.write_text("[]", encoding="utf-8")
        assert main([*data_args, "--items", str(items), "loot", str(log_path)]) == 1
        assert "item table" in capsys.readouterr().out

    def test_loot_missing_log(self, capsys, tmp_path, data_args):
        assert main([*data_args, "loot", str(tmp_path / "gone.log")]) == 1
        assert "Error" in capsys.readouterr().out

    def test_inventory_json(self, capsys, data_args, log_path):
        assert main([*data_args, "inventory", str(log_path), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [(r["page_id"], r["slot_id"], r["num"]) for r in data] == [(102, 0, 671), (103, 2, 1)]

    def test_inventory_table(self, capsys, data_args, log_path):
        assert main([*data_args, "inventory", str(log_path)]) == 0
        out = capsys.readouterr().out
        assert "Commodity" in out
        assert "671 x Flame Elementium" in out

    def test_zone(self, capsys, data_args, log_path):
        assert main([*data_args, "zone", str(log_path)]) == 0
        assert capsys.readouterr().out.strip() == "KD_YuanSuKuangDong000"


class TestSessionCommands:
    """Tests for manual session commands."""

    def test_init(self, capsys, data_args, tmp_path):
        assert main([*data_args, "init"]) == 0
        assert (tmp_path / "cli-data" / "sessions.json").exists()

    def test_session_flow(self, capsys, data_args, tmp_path):
        assert main([*data_args, "start-session", "--map", "Glacial Abyss"]) == 0
        assert main([*data_args, "add-drop", "--name", "Ember", "--value", "3", "--quantity", "2"]) == 0
        assert main([*data_args, "summary"]) == 0
        out = capsys.readouterr().out
        assert "Map: Glacial Abyss" in out
        assert "Total value: 6.00" in out

        assert main([*data_args, "end-session"]) == 0
        assert "Session ended" in capsys.readouterr().out
        assert main([*data_args, "list"]) == 0
        assert "ended" in capsys.readouterr().out

        out_file = tmp_path / "export.json"
        assert main([*data_args, "export", "--out", str(out_file)]) == 0
        exported = json.loads(out_file.read_text(encoding="utf-8"))
        assert exported[0]["drops"] == [{"name": "Ember", "quantity": 2, "value": 3.0}]

    def test_add_drop_rejects_zero_quantity(self, capsys, data_args):
        main([*data_args, "start-session", "--map", "M"])
        assert main([*data_args, "add-drop", "--name", "Ember", "--value", "1", "--quantity", "0"]) == 1

    def test_end_without_active_session(self, capsys, data_args):
        assert main([*data_args, "end-session"]) == 1
        assert "No active session" in capsys.readouterr().out

    def test_list_empty(self, capsys, data_args):
        assert main([*data_args, "list"]) == 0
        assert "No sessions found." in capsys.readouterr().out
