"""Tests for SettingsStore."""
import json
import logging

import pytest

from gokifu.common.config_store import SettingsStore


class TestSettingsStore:
    """JSON persistence of the flat settings object."""

    @pytest.fixture
    def settings_path(self, tmp_path):
        return str(tmp_path / "settings.json")

    def test_missing_file_is_empty(self, settings_path):
        store = SettingsStore(settings_path)
        assert store.load() == {}
        assert store.get_config().sgf_folder is None

    def test_save_and_reload(self, settings_path):
        SettingsStore(settings_path).save({"sgf_folder": "SGF", "board_size": 13})
        store = SettingsStore(settings_path)
        assert store.load() == {"sgf_folder": "SGF", "board_size": 13}
        assert store.get_config().board_size == 13

    def test_update_merges(self, settings_path):
        store = SettingsStore(settings_path)
        store.save({"sgf_folder": "SGF"})
        store.update(board_size=9)
        assert SettingsStore(settings_path).load() == {"sgf_folder": "SGF", "board_size": 9}

    def test_load_returns_copy(self, settings_path):
        store = SettingsStore(settings_path)
        store.load()["sgf_folder"] = "mutated"
        assert store.load() == {}

    def test_non_ascii_preserved(self, settings_path):
        SettingsStore(settings_path).save({"sgf_folder": "棋譜"})
        with open(settings_path, encoding="utf-8") as f:
            assert "棋譜" in f.read()

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / ".gokifu" / "settings.json"
        SettingsStore(str(path)).save({"lang": "en"})
        assert json.loads(path.read_text(encoding="utf-8")) == {"lang": "en"}

    def test_no_temp_files_left(self, tmp_path, settings_path):
        SettingsStore(settings_path).save({"a": 1})
        assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]

    def test_corrupt_file_preserved(self, tmp_path, settings_path, caplog):
        with open(settings_path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with caplog.at_level(logging.WARNING, logger="gokifu.common.config_store"):
            store = SettingsStore(settings_path)
        assert store.load() == {}
        assert "Corrupt settings file" in caplog.text
        backups = [p.name for p in tmp_path.iterdir() if ".corrupt." in p.name]
        assert len(backups) == 1

    def test_non_object_ignored(self, settings_path):
        with open(settings_path, "w", encoding="utf-8") as f:
            json.dump(["SGF"], f)
        assert SettingsStore(settings_path).load() == {}
