from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional


def format_time(total_seconds: int) -> str:
    """Render seconds as MM:SS. Minutes are not capped at two digits."""
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    return f"{minutes:02d}:{seconds:02d}"


@dataclass(frozen=True)
class RoundClock:
    """Elapsed/remaining time of one round against its configured duration.

    Timestamps are float seconds from a monotonic source. The clock only
    answers queries; periodic ticking is driven from outside.
    """

    duration_seconds: int
    start_timestamp: Optional[float] = None

    @property
    def started(self) -> bool:
        return self.start_timestamp is not None

    def start(self, now: float) -> RoundClock:
        """Record the start time. A clock that already started is returned as is."""
        if self.started:
            return self
        return replace(self, start_timestamp=now)

    def elapsed_seconds(self, now: float) -> int:
        if self.start_timestamp is None:
            return 0
        return max(0, math.floor(now - self.start_timestamp))

    def remaining_seconds(self, now: float) -> int:
        return max(0, self.duration_seconds - self.elapsed_seconds(now))

    def remaining_text(self, now: float) -> str:
        return format_time(self.remaining_seconds(now))
