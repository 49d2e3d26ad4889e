"""
Tests for settings persistence, overlay placement and hotkey names.

Usage:
    python test_settings.py
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chunk_finder.keys import (
    hotkey_label, key_label, normalize_key, normalize_modifier, pynput_hotkey, validate_binding
)
from chunk_finder.settings import (
    DEFAULT_SETTINGS, load_settings, resolve_overlay_position, save_settings
)


SCREEN = (0, 0, 1920, 1080)


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "missing.json") == DEFAULT_SETTINGS


def test_invalid_json_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_non_object_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_partial_file_merges_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"hotkey_key": "f9", "overlay_x": 50}), encoding="utf-8")
    settings = load_settings(path)
    assert settings["hotkey_key"] == "f9"
    assert settings["overlay_x"] == 50
    assert settings["hotkey_modifier"] == DEFAULT_SETTINGS["hotkey_modifier"]


def test_wrong_typed_values_use_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "auto_refresh_ms": None,
        "overlay_x": "abc",
        "overlay_visible": 1,
        "overlay_y": True,
        "hotkey_key": "f9",
        "extra": [1, 2],
    }), encoding="utf-8")
    settings = load_settings(path)

    assert settings["auto_refresh_ms"] == DEFAULT_SETTINGS["auto_refresh_ms"]
    assert settings["overlay_x"] == DEFAULT_SETTINGS["overlay_x"]
    assert settings["overlay_visible"] is True
    assert settings["overlay_y"] == -1
    assert settings["hotkey_key"] == "f9"
    assert settings["extra"] == [1, 2]


def test_save_then_load(tmp_path):
    path = tmp_path / "config.json"
    settings = dict(DEFAULT_SETTINGS, hotkey_modifier="ctrl", overlay_y=300)
    assert save_settings(settings, path)
    assert load_settings(path) == settings


def test_save_to_missing_directory_fails(tmp_path):
    assert not save_settings(DEFAULT_SETTINGS, tmp_path / "nope" / "config.json")


def test_defaults_not_shared(tmp_path):
    settings = load_settings(tmp_path / "missing.json")
    settings["hotkey_key"] = "q"
    assert DEFAULT_SETTINGS["hotkey_key"] == "f8"


def test_overlay_default_position():
    assert resolve_overlay_position(-1, -1, SCREEN, 1920) == (1700, 20)


def test_overlay_saved_position_kept():
    assert resolve_overlay_position(300, 400, SCREEN, 1920) == (300, 400)
    assert resolve_overlay_position(1820, 1030, SCREEN, 1920) == (1820, 1030)


def test_overlay_off_screen_position_reset():
    assert resolve_overlay_position(1821, 400, SCREEN, 1920) == (1700, 20)
    assert resolve_overlay_position(300, 1031, SCREEN, 1920) == (1700, 20)
    assert resolve_overlay_position(-5, 400, SCREEN, 1920) == (1700, 20)


def test_overlay_on_left_monitor():
    virtual = (-1280, 0, 3200, 1080)
    assert resolve_overlay_position(-1000, 100, virtual, 1920) == (-1000, 100)


def test_key_names():
    assert normalize_key(" F8 ") == "f8"
    assert normalize_key("Q") == "q"
    assert normalize_key("7") == "7"
    for bad in ("", "f13", "ctrl", "é", "ab"):
        with pytest.raises(ValueError):
            normalize_key(bad)


def test_modifier_names():
    assert normalize_modifier("Ctrl") == "ctrl"
    with pytest.raises(ValueError):
        normalize_modifier("super")


def test_labels():
    assert key_label("f8") == "F8"
    assert key_label("page_up") == "Page Up"
    assert key_label("q") == "Q"
    assert key_label("f13") == "Unknown"
    assert hotkey_label("none", "f8") == "F8"
    assert hotkey_label("ctrl", "f8") == "Ctrl+F8"
    assert hotkey_label("shift", "a") == "Shift+A"


def test_pynput_hotkey_strings():
    assert pynput_hotkey("none", "f8") == "<f8>"
    assert pynput_hotkey("ctrl", "f8") == "<ctrl>+<f8>"
    assert pynput_hotkey("alt", "q") == "<alt>+q"
    with pytest.raises(ValueError):
        pynput_hotkey("none", "f13")


def test_shift_only_with_named_keys():
    assert validate_binding("Shift", "F8") == ("shift", "f8")
    assert pynput_hotkey("shift", "page_up") == "<shift>+<page_up>"
    for key in ("1", "a"):
        with pytest.raises(ValueError):
            validate_binding("shift", key)
        with pytest.raises(ValueError):
            pynput_hotkey("shift", key)
    assert pynput_hotkey("ctrl", "1") == "<ctrl>+1"


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
