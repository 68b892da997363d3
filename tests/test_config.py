"""Tests for config persistence."""

import json
import os
from unittest.mock import patch

from scriptui.config import (
    CONFIG_DIR_ENV, ConfigStore, compute_identity, default_config_dir, load_config,
    project_config, save_config, storage_name,
)
from scriptui.fields import FieldRegistry


def _registry():
    reg = FieldRegistry()
    reg.add_section("General")
    reg.add_checkbox("a", "A", False)
    reg.add_slider("b", "B", 10, 0, 100)
    reg.add_combo("c", "C", 0, ["x", "y", "z"])
    reg.add_input("d", "D", "")
    return reg


class TestIdentity:
    """Window identity and storage naming."""

    def test_whitespace_removed(self):
        assert compute_identity("Rasial Boss") == "RasialBoss"
        assert compute_identity("  a \t b\nc ") == "abc"

    def test_empty_title(self):
        assert compute_identity("") == ""

    def test_storage_name_lowercase(self):
        assert storage_name("RasialBoss") == "rasialboss.config.json"

    def test_config_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path / "elsewhere"))
        assert default_config_dir() == str(tmp_path / "elsewhere")

    def test_store_path(self, tmp_path):
        store = ConfigStore("RasialBoss", str(tmp_path))
        assert store.path == os.path.join(str(tmp_path), "rasialboss.config.json")


class TestSave:
    """Saving writes only declared keys."""

    def test_save_creates_directory(self, tmp_path):
        reg = _registry()
        target = tmp_path / "nested" / "dir"
        store = ConfigStore("Demo", str(target))
        assert store.save(reg.config, reg.get_all()) is True
        assert store.exists()
        with open(store.path) as f:
            assert json.load(f) == {"a": False, "b": 10, "c": 0, "d": ""}

    def test_unknown_keys_dropped(self, tmp_path):
        reg = _registry()
        reg.config["stale"] = 123
        store = ConfigStore("Demo", str(tmp_path))
        store.save(reg.config, reg.get_all())
        with open(store.path) as f:
            assert "stale" not in json.load(f)

    def test_project_config(self):
        reg = _registry()
        reg.config["extra"] = "x"
        assert set(project_config(reg.config, reg.get_all())) == {"a", "b", "c", "d"}

    def test_unwritable_location_never_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        reg = _registry()
        store = ConfigStore("Demo", str(blocker / "configs"))
        assert store.save(reg.config, reg.get_all()) is False

    def test_write_error_returns_false(self, tmp_path):
        reg = _registry()
        store = ConfigStore("Demo", str(tmp_path))
        with patch("builtins.open", side_effect=PermissionError("denied")):
            assert store.save(reg.config, reg.get_all()) is False

    def test_unencodable_value_returns_false(self, tmp_path):
        reg = _registry()
        reg.config["d"] = object()
        store = ConfigStore("Demo", str(tmp_path))
        assert store.save(reg.config, reg.get_all()) is False
        assert not store.exists()


class TestLoad:
    """Loading merges type-matching values only."""

    def test_round_trip(self, tmp_path):
        reg = _registry()
        reg.config.update(a=True, b=50, c=2, d="hello")
        assert save_config("Demo", reg.config, reg.get_all(), str(tmp_path))

        fresh = _registry()
        load_config("Demo", fresh.get_all(), fresh.config, str(tmp_path))
        assert fresh.config == {"a": True, "b": 50, "c": 2, "d": "hello"}

    def test_missing_file_keeps_defaults(self, tmp_path):
        reg = _registry()
        ConfigStore("Nothing", str(tmp_path)).load(reg.get_all(), reg.config)
        assert reg.config == reg.defaults()

    def test_type_mismatch_keeps_default(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        with open(store.path, "w") as f:
            json.dump({"a": "yes", "b": True, "c": 1, "d": 7}, f)
        reg = _registry()
        store.load(reg.get_all(), reg.config)
        assert reg.config == {"a": False, "b": 10, "c": 1, "d": ""}

    def test_integral_float_loaded_as_int(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        with open(store.path, "w") as f:
            f.write('{"b": 42.0}')
        reg = _registry()
        store.load(reg.get_all(), reg.config)
        assert reg.config["b"] == 42
        assert type(reg.config["b"]) is int

    def test_null_values_ignored(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        with open(store.path, "w") as f:
            f.write('{"a": null, "b": 70}')
        reg = _registry()
        store.load(reg.get_all(), reg.config)
        assert reg.config["a"] is False
        assert reg.config["b"] == 70

    def test_unknown_saved_keys_ignored(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        with open(store.path, "w") as f:
            f.write('{"removed": 1, "a": true}')
        reg = _registry()
        store.load(reg.get_all(), reg.config)
        assert "removed" not in reg.config
        assert reg.config["a"] is True

    def test_corrupted_file(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        with open(store.path, "w") as f:
            f.write("{not json")
        reg = _registry()
        store.load(reg.get_all(), reg.config)
        assert reg.config == reg.defaults()

    def test_invalid_utf8_file(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        with open(store.path, "wb") as f:
            f.write(b'{"a": true, "b": "\xff\xfe"}')
        reg = _registry()
        store.load(reg.get_all(), reg.config)
        assert reg.config == reg.defaults()

    def test_deeply_nested_json(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        with open(store.path, "w") as f:
            f.write("[" * 200000)
        reg = _registry()
        store.load(reg.get_all(), reg.config)
        assert reg.config == reg.defaults()

    def test_empty_file(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        open(store.path, "w").close()
        assert store.read() is None

    def test_non_object_document(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        with open(store.path, "w") as f:
            f.write("[1, 2, 3]")
        assert store.read() is None

    def test_load_returns_same_mapping(self, tmp_path):
        reg = _registry()
        store = ConfigStore("Demo", str(tmp_path))
        assert store.load(reg.get_all(), reg.config) is reg.config

    def test_out_of_range_values_kept(self, tmp_path):
        store = ConfigStore("Demo", str(tmp_path))
        with open(store.path, "w") as f:
            f.write('{"b": 500, "c": 9}')
        reg = _registry()
        store.load(reg.get_all(), reg.config)
        assert reg.config["b"] == 500
        assert reg.config["c"] == 9
