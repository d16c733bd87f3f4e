"""Round lifecycle as pure transitions over an immutable state value.

Each transition takes a :class:`RoundState` and returns a fresh one; nothing
here schedules timers or reads the clock on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from vegam.core.clock import RoundClock
from vegam.core.comparator import DiffResult, classify
from vegam.core.metrics import DEFAULT_METRICS, MetricsSnapshot, compute


class RoundStatus(Enum):
    WAITING = "Waiting"
    RUNNING = "Running"
    COMPLETED = "Completed"
    TIME_UP = "Time Up"
    STOPPED = "Stopped"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_ended(self) -> bool:
        return self in (RoundStatus.COMPLETED, RoundStatus.TIME_UP, RoundStatus.STOPPED)


@dataclass(frozen=True)
class RoundState:
    target: str
    clock: RoundClock
    status: RoundStatus = RoundStatus.WAITING
    typed: str = ""
    metrics: MetricsSnapshot = DEFAULT_METRICS
    ended_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self.status is RoundStatus.RUNNING

    @property
    def target_reached(self) -> bool:
        return len(self.typed) >= len(self.target)

    def diff(self) -> DiffResult:
        return classify(self.target, self.typed)

    def remaining_seconds(self, now: float) -> int:
        """Remaining time, frozen at the moment the round ended."""
        if self.ended_at is not None:
            now = self.ended_at
        return self.clock.remaining_seconds(now)


def new_round(target: str, duration_seconds: int) -> RoundState:
    """Fresh round: not started, empty buffer, default metrics."""
    return RoundState(target=target, clock=RoundClock(duration_seconds=duration_seconds))


reset_round = new_round


def _finish(state: RoundState, status: RoundStatus, now: float) -> RoundState:
    return replace(state, status=status, ended_at=now)


def _refresh(state: RoundState, now: float) -> RoundState:
    metrics = compute(state.target, state.typed, state.clock.elapsed_seconds(now))
    state = replace(state, metrics=metrics)
    if state.target_reached:
        state = _finish(state, RoundStatus.COMPLETED, now)
    return state


def start_round(state: RoundState, now: float, typed: Optional[str] = None) -> RoundState:
    """Begin measuring.

    *typed*, when given, becomes the buffer. Otherwise a round that never ran
    starts from an empty buffer and a restarted one keeps what it had. A round
    whose time is already used up goes straight back to TIME_UP.
    """
    if state.running:
        return state
    if typed is None:
        typed = state.typed if state.clock.started else ""
    clock = state.clock.start(now)
    if clock.remaining_seconds(now) <= 0:
        # out of time: keep the buffer for display, leave the metrics frozen
        return _finish(replace(state, clock=clock, typed=typed), RoundStatus.TIME_UP, now)
    state = replace(
        state,
        clock=clock,
        status=RoundStatus.RUNNING,
        typed=typed,
        ended_at=None,
    )
    return _refresh(state, now)


def update_typed(state: RoundState, typed: str, now: float) -> RoundState:
    """Replace the typed buffer.

    Metrics follow the buffer only while running; otherwise the buffer is kept
    for display and the last metrics stay frozen.
    """
    state = replace(state, typed=typed)
    if not state.running:
        return state
    return _refresh(state, now)


def tick_round(state: RoundState, now: float) -> RoundState:
    if not state.running:
        return state
    if state.target_reached:
        return _finish(state, RoundStatus.COMPLETED, now)
    if state.clock.remaining_seconds(now) <= 0:
        return _finish(state, RoundStatus.TIME_UP, now)
    return state


def end_round(state: RoundState, now: float, status: RoundStatus = RoundStatus.STOPPED) -> RoundState:
    if not state.running or not status.is_ended:
        return state
    return _finish(state, status, now)
