"""Tests for vegam.core.settings – duration parsing and settings file."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vegam.core.settings import DURATION_ENV_VAR, Settings, load_settings, parse_duration_seconds


@pytest.fixture(autouse=True)
def _no_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DURATION_ENV_VAR, raising=False)


# ---------------------------------------------------------------------------
# parse_duration_seconds
# ---------------------------------------------------------------------------

class TestParseDuration:
    @pytest.mark.parametrize("value, expected", [(1, 60), ("2", 120), ("10", 600), (1.5, 90)])
    def test_minutes_to_seconds(self, value, expected: int):
        assert parse_duration_seconds(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", 0, -3, "nan", "inf"])
    def test_fallback_to_default(self, value):
        assert parse_duration_seconds(value) == 300

    def test_custom_default(self):
        assert parse_duration_seconds("bogus", default_minutes=2) == 120


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------

class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        s = load_settings(tmp_path / "settings.yaml")
        assert s == Settings()
        assert s.default_duration_seconds == 300

    def test_values_from_file(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "duration_options_minutes: [2, 4]\n"
            "default_duration_minutes: 4\n"
            "default_passage_index: 1\n"
            "tick_interval_seconds: 0.5\n",
            encoding="utf-8",
        )
        s = load_settings(path)
        assert s.duration_options_minutes == (2, 4)
        assert s.default_duration_minutes == 4
        assert s.default_passage_index == 1
        assert s.tick_interval_seconds == 0.5

    def test_default_added_to_options(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("default_duration_minutes: 7\n", encoding="utf-8")
        assert 7 in load_settings(path).duration_options_minutes

    def test_bad_values_fall_back(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "default_duration_minutes: soon\n"
            "default_passage_index: -2\n"
            "tick_interval_seconds: 0\n",
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING):
            s = load_settings(path)
        assert s == Settings()
        assert "default_duration_minutes" in caplog.text

    @pytest.mark.parametrize(
        "line",
        [
            "default_duration_minutes: .inf\n",
            "duration_options_minutes: [1, .inf]\n",
            "tick_interval_seconds: .inf\n",
            "tick_interval_seconds: .nan\n",
        ],
    )
    def test_non_finite_values_fall_back(self, tmp_path: Path, line: str):
        path = tmp_path / "settings.yaml"
        path.write_text(line, encoding="utf-8")
        assert load_settings(path) == Settings()

    def test_options_string_rejected(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        path = tmp_path / "settings.yaml"
        path.write_text('duration_options_minutes: "15"\n', encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            s = load_settings(path)
        assert s.duration_options_minutes == Settings().duration_options_minutes
        assert "duration_options_minutes" in caplog.text

    def test_corrupt_yaml(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        path = tmp_path / "settings.yaml"
        path.write_text("key: [unclosed\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            s = load_settings(path)
        assert s == Settings()
        assert "Could not load settings" in caplog.text

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        assert load_settings(path) == Settings()

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(DURATION_ENV_VAR, "2")
        assert load_settings(tmp_path / "settings.yaml").default_duration_minutes == 2

    def test_env_override_invalid(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(DURATION_ENV_VAR, "later")
        assert load_settings(tmp_path / "settings.yaml").default_duration_minutes == 5
