import logging

import pytest
from PyQt6.QtCore import QSettings

from snapnav.core.config import NavigationSettings, DEFAULT_SETTINGS
from snapnav.storage.settings_store import load_settings, save_settings


def test_defaults_without_sources():
    s = load_settings(qsettings=None, config_paths=[], env={})
    assert s == DEFAULT_SETTINGS
    assert (s.min_delta, s.min_time_gap_ms) == (4.0, 1500)
    assert (s.normal_throttle_ms, s.momentum_throttle_ms) == (600, 1800)
    assert (s.safety_timeout_ms, s.stall_threshold_ms, s.watchdog_interval_ms) == (2000, 5000, 1000)


def test_yaml_navigation_section(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("navigation:\n  normal_throttle_ms: 450\n  debug: true\n  unknown_key: 1\n", encoding="utf-8")
    s = load_settings(config_paths=[str(p)], env={})
    assert s.normal_throttle_ms == 450
    assert s.debug is True


def test_first_config_path_wins(tmp_path):
    hi = tmp_path / "hi.yaml"
    lo = tmp_path / "lo.yaml"
    hi.write_text("min_delta: 6\n", encoding="utf-8")
    lo.write_text("min_delta: 2\nmax_swipe_ms: 900\n", encoding="utf-8")
    s = load_settings(config_paths=[str(hi), str(lo)], env={})
    assert s.min_delta == 6.0
    assert s.max_swipe_ms == 900


def test_env_overrides_yaml(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("navigation:\n  momentum_throttle_ms: 1500\n", encoding="utf-8")
    s = load_settings(config_paths=[str(p)], env={"SNAPNAV_MOMENTUM_THROTTLE_MS": "2100"})
    assert s.momentum_throttle_ms == 2100


def test_malformed_value_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        s = load_settings(config_paths=[], env={"SNAPNAV_MIN_DELTA": "lots", "SNAPNAV_DEBUG": "yes"})
    assert s.min_delta == DEFAULT_SETTINGS.min_delta
    assert s.debug is True
    assert "config_value_ignored" in caplog.text


def test_invalid_source_rejected(caplog):
    with caplog.at_level(logging.WARNING):
        s = load_settings(config_paths=[], env={"SNAPNAV_VISIBILITY_THRESHOLD": "1.5"})
    assert s.visibility_threshold == 0.5
    assert "config_source_rejected" in caplog.text


def test_qsettings_persisted_values(tmp_path):
    qs = QSettings(str(tmp_path / "nav.ini"), QSettings.Format.IniFormat)
    save_settings(NavigationSettings(safety_timeout_ms=2500, debug=True), qs)
    s = load_settings(qsettings=qs, config_paths=[], env={})
    assert s.safety_timeout_ms == 2500
    assert s.debug is True


def test_settings_validation():
    with pytest.raises(ValueError):
        NavigationSettings(visibility_threshold=0)
    with pytest.raises(ValueError):
        NavigationSettings(watchdog_interval_ms=0)
    with pytest.raises(ValueError):
        NavigationSettings(normal_throttle_ms=-5)
    assert DEFAULT_SETTINGS.with_overrides({"nope": 1}) is DEFAULT_SETTINGS
