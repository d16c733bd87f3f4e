from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 5
DURATION_ENV_VAR = "VEGAM_DURATION_MINUTES"


def _default_duration_options() -> Tuple[int, ...]:
    return (1, 2, 3, 5, 10)


@dataclass(frozen=True)
class Settings:
    """User-tunable knobs. Durations are chosen in whole minutes."""

    duration_options_minutes: Tuple[int, ...] = field(default_factory=_default_duration_options)
    default_duration_minutes: int = DEFAULT_DURATION_MINUTES
    default_passage_index: int = 0
    tick_interval_seconds: float = 1.0

    @property
    def default_duration_seconds(self) -> int:
        return self.default_duration_minutes * 60


def default_settings_path() -> Path:
    return Path.home() / ".vegam" / "settings.yaml"


def parse_duration_seconds(value, default_minutes: int = DEFAULT_DURATION_MINUTES) -> int:
    """Convert a duration selection in minutes to seconds.

    Anything that is not a positive number falls back to *default_minutes*.
    """
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        minutes = 0
    if not (minutes > 0 and math.isfinite(minutes)):
        minutes = default_minutes
    return int(minutes * 60)


def _positive_int(raw: dict, key: str, fallback: int) -> int:
    value = raw.get(key, fallback)
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring invalid %s=%r in settings", key, value)
        return fallback
    if number <= 0:
        logger.warning("Ignoring non-positive %s=%r in settings", key, value)
        return fallback
    return number


def load_settings(path: Optional[Path] = None) -> Settings:
    """Read settings from YAML, then apply the environment override.

    A missing file means defaults. Unreadable files and bad values are logged
    and replaced with defaults rather than raised.
    """
    path = path or default_settings_path()
    settings = Settings()
    raw: dict = {}
    if path.exists():
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as e:
            logger.warning("Could not load settings from %s: %s", path, e)
            loaded = None
        if isinstance(loaded, dict):
            raw = loaded
        elif loaded is not None:
            logger.warning("Settings file %s is not a mapping; using defaults", path)

    options = settings.duration_options_minutes
    raw_options = raw.get("duration_options_minutes")
    if raw_options is not None and not isinstance(raw_options, (list, tuple)):
        logger.warning("Ignoring invalid duration_options_minutes=%r", raw_options)
    elif raw_options is not None:
        try:
            parsed = tuple(sorted({int(v) for v in raw_options if int(v) > 0}))
        except (TypeError, ValueError, OverflowError):
            logger.warning("Ignoring invalid duration_options_minutes=%r", raw_options)
            parsed = ()
        if parsed:
            options = parsed

    default_minutes = _positive_int(raw, "default_duration_minutes", settings.default_duration_minutes)
    env_value = os.environ.get(DURATION_ENV_VAR)
    if env_value:
        default_minutes = parse_duration_seconds(env_value, default_minutes) // 60 or default_minutes

    passage_index = raw.get("default_passage_index", settings.default_passage_index)
    if not isinstance(passage_index, int) or passage_index < 0:
        logger.warning("Ignoring invalid default_passage_index=%r", passage_index)
        passage_index = settings.default_passage_index

    tick = raw.get("tick_interval_seconds", settings.tick_interval_seconds)
    if not isinstance(tick, (int, float)) or not (tick > 0 and math.isfinite(tick)):
        logger.warning("Ignoring invalid tick_interval_seconds=%r", tick)
        tick = settings.tick_interval_seconds

    if default_minutes not in options:
        options = tuple(sorted(set(options) | {default_minutes}))

    return replace(
        settings,
        duration_options_minutes=options,
        default_duration_minutes=default_minutes,
        default_passage_index=passage_index,
        tick_interval_seconds=float(tick),
    )
