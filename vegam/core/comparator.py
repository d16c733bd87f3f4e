"""Positional comparison of typed text against a reference passage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class CharStatus(Enum):
    MATCH = "correct"
    MISMATCH = "incorrect"


@dataclass(frozen=True)
class DiffResult:
    """Per-character classification of the typed text plus the untyped rest of the target."""

    per_character: Tuple[CharStatus, ...]
    pending_suffix: str

    @property
    def correct(self) -> int:
        return sum(1 for status in self.per_character if status is CharStatus.MATCH)

    @property
    def mistakes(self) -> int:
        return len(self.per_character) - self.correct

    def runs(self, typed: str) -> List[Tuple[CharStatus, str]]:
        """Group consecutive typed characters that share a status.

        *typed* must be the text this result was computed from.
        """
        runs: List[Tuple[CharStatus, str]] = []
        for ch, status in zip(typed, self.per_character):
            if runs and runs[-1][0] is status:
                runs[-1] = (status, runs[-1][1] + ch)
            else:
                runs.append((status, ch))
        return runs


def classify(target: str, typed: str) -> DiffResult:
    """Compare *typed* to *target* position by position.

    No re-alignment is attempted: an inserted character shifts every later
    position to a mismatch until it is deleted. Positions past the end of the
    target never match.
    """
    target_len = len(target)
    per_character = tuple(
        CharStatus.MATCH if i < target_len and ch == target[i] else CharStatus.MISMATCH
        for i, ch in enumerate(typed)
    )
    pending = target[len(typed):] if len(typed) < target_len else ""
    return DiffResult(per_character=per_character, pending_suffix=pending)
