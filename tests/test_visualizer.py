import json
import logging

import numpy as np
import pytest

import visualizer


def test_value_to_color_ramp():
    assert visualizer.value_to_color(0, 100) == (0, 0, 255)
    assert visualizer.value_to_color(50, 100) == (0, 255, 0)
    lo = visualizer.value_to_color(1, 100)
    hi = visualizer.value_to_color(100, 100)
    assert lo[2] == 255
    assert hi == (255, 0, 0)


def test_value_to_freq_bounds():
    assert visualizer.value_to_freq(0, 10, 100.0, 200.0) == 100.0
    assert visualizer.value_to_freq(10, 10, 100.0, 200.0) == 200.0
    assert visualizer.value_to_freq(5, 10, 100.0, 200.0) == pytest.approx(150.0)


def test_render_tone_shape_and_envelope():
    tone = visualizer.render_tone(220.0, sample_rate=8000)
    n = int(visualizer.TONE_SUSTAIN * 8000)
    assert tone.shape == (n, 2)
    assert tone.dtype == np.int16
    assert np.array_equal(tone[:, 0], tone[:, 1])
    # raised-cosine envelope starts and ends silent
    assert tone[0, 0] == 0
    assert abs(int(tone[-1, 0])) <= 1
    assert np.abs(tone).max() <= int(32767 * visualizer.TONE_HEADROOM)


def test_load_settings_missing_file_uses_defaults(tmp_path):
    cfg = visualizer.load_settings(str(tmp_path / "nope.json"))
    assert cfg == visualizer.DEFAULTS


def test_load_settings_overrides(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"size": 64, "speed": 3, "sound": False}))
    cfg = visualizer.load_settings(str(path))
    assert cfg["size"] == 64
    assert cfg["speed"] == 3.0
    assert cfg["sound"] is False
    assert cfg["freq_low"] == visualizer.FREQ_LOW


def test_load_settings_malformed_json_warns(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="visualizer"):
        cfg = visualizer.load_settings(str(path))
    assert cfg == visualizer.DEFAULTS
    assert "Could not read settings" in caplog.text


def test_load_settings_non_object(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]")
    with caplog.at_level(logging.WARNING, logger="visualizer"):
        cfg = visualizer.load_settings(str(path))
    assert cfg == visualizer.DEFAULTS
    assert "JSON object" in caplog.text


def test_merge_settings_ignores_unknown_and_bad_values(caplog):
    with caplog.at_level(logging.WARNING, logger="visualizer"):
        cfg = visualizer.merge_settings(visualizer.DEFAULTS, {"colour": "red", "size": "big"})
    assert cfg == visualizer.DEFAULTS
    assert "unknown setting" in caplog.text
    assert "bad value" in caplog.text


def test_merge_settings_clamps():
    cfg = visualizer.merge_settings(visualizer.DEFAULTS, {"size": 10_000, "speed": 0.0})
    assert cfg["size"] == visualizer.MAX_ARRAY_SIZE
    assert cfg["speed"] == 0.25
    cfg = visualizer.merge_settings(visualizer.DEFAULTS, {"size": 1})
    assert cfg["size"] == visualizer.MIN_ARRAY_SIZE


def test_merge_settings_rejects_inverted_freq_range():
    cfg = visualizer.merge_settings(visualizer.DEFAULTS, {"freq_low": 500, "freq_high": 100})
    assert (cfg["freq_low"], cfg["freq_high"]) == (visualizer.FREQ_LOW, visualizer.FREQ_HIGH)


def test_merge_settings_skips_none():
    cfg = visualizer.merge_settings(visualizer.DEFAULTS, {"size": None, "sound": None})
    assert cfg == visualizer.DEFAULTS
