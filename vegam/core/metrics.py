from __future__ import annotations

import math
from dataclasses import dataclass

from vegam.core.comparator import classify

CHARS_PER_WORD = 5


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class MetricsSnapshot:
    """Live measurement of a round.

    Gross WPM follows the standard convention of five characters per word and
    does not subtract mistakes.
    """

    correct: int = 0
    mistakes: int = 0
    accuracy_percent: int = 100
    gross_wpm: int = 0

    @property
    def accuracy_text(self) -> str:
        return f"{self.accuracy_percent}%"


DEFAULT_METRICS = MetricsSnapshot()


def compute(target: str, typed: str, elapsed_seconds: int) -> MetricsSnapshot:
    """Derive counts, accuracy and gross WPM for *typed* after *elapsed_seconds*."""
    diff = classify(target, typed)
    correct = diff.correct
    total = len(typed)
    accuracy = 100 if total == 0 else round_half_up(correct / total * 100)
    # floor elapsed at one second so the first keystrokes don't divide by zero
    minutes = max(1, elapsed_seconds) / 60
    gross_wpm = round_half_up((total / CHARS_PER_WORD) / minutes)
    return MetricsSnapshot(
        correct=correct,
        mistakes=total - correct,
        accuracy_percent=accuracy,
        gross_wpm=gross_wpm,
    )
