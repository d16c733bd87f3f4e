"""Tests for vegam.core.round – pure round transitions."""

from __future__ import annotations

import pytest

from vegam.core.metrics import DEFAULT_METRICS
from vegam.core.round import (
    RoundState,
    RoundStatus,
    end_round,
    new_round,
    reset_round,
    start_round,
    tick_round,
    update_typed,
)


# ---------------------------------------------------------------------------
# RoundStatus
# ---------------------------------------------------------------------------

class TestRoundStatus:
    def test_labels(self):
        assert [s.label for s in RoundStatus] == ["Waiting", "Running", "Completed", "Time Up", "Stopped"]

    def test_is_ended(self):
        assert not RoundStatus.WAITING.is_ended
        assert not RoundStatus.RUNNING.is_ended
        assert RoundStatus.COMPLETED.is_ended
        assert RoundStatus.TIME_UP.is_ended
        assert RoundStatus.STOPPED.is_ended


# ---------------------------------------------------------------------------
# new_round / reset_round
# ---------------------------------------------------------------------------

class TestNewRound:
    def test_fresh_state(self):
        state = new_round("hello", 60)
        assert state.status is RoundStatus.WAITING
        assert state.typed == ""
        assert state.metrics == DEFAULT_METRICS
        assert state.clock.start_timestamp is None
        assert state.clock.duration_seconds == 60
        assert state.ended_at is None

    def test_reset_twice_is_same(self):
        assert reset_round("abc", 30) == reset_round("abc", 30)

    def test_state_is_frozen(self):
        state = new_round("abc", 30)
        with pytest.raises(AttributeError):
            state.typed = "x"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# start_round
# ---------------------------------------------------------------------------

class TestStartRound:
    def test_starts_running(self):
        state = start_round(new_round("hello", 60), 100.0)
        assert state.status is RoundStatus.RUNNING
        assert state.clock.start_timestamp == 100.0

    def test_never_started_round_clears_buffer(self):
        state = update_typed(new_round("hello", 60), "junk", 0.0)
        assert state.typed == "junk"
        assert start_round(state, 1.0).typed == ""

    def test_already_running_is_noop(self):
        state = start_round(new_round("hello", 60), 100.0)
        assert start_round(state, 200.0) is state

    def test_restart_after_stop_keeps_timestamp(self):
        state = start_round(new_round("hello", 60), 100.0)
        state = update_typed(state, "he", 101.0)
        state = end_round(state, 102.0)
        state = start_round(state, 150.0)
        assert state.status is RoundStatus.RUNNING
        assert state.clock.start_timestamp == 100.0
        assert state.typed == "he"
        assert state.ended_at is None

    def test_restart_after_time_up_stays_ended(self):
        state = start_round(new_round("hello world", 5), 0.0)
        state = update_typed(state, "he", 1.0)
        state = tick_round(state, 5.0)
        assert state.status is RoundStatus.TIME_UP
        frozen = state.metrics
        state = start_round(state, 6.0)
        assert state.status is RoundStatus.TIME_UP
        assert state.remaining_seconds(6.0) == 0
        state = update_typed(state, "hel", 6.2)
        assert state.status is RoundStatus.TIME_UP
        assert state.metrics == frozen

    def test_explicit_buffer_replaces_typed(self):
        state = start_round(new_round("hello", 60), 0.0)
        state = update_typed(state, "hello", 1.0)
        assert state.status is RoundStatus.COMPLETED
        state = start_round(state, 2.0, typed="h")
        assert state.status is RoundStatus.RUNNING
        assert state.typed == "h"
        assert state.metrics.correct == 1

    def test_computes_metrics_immediately(self):
        state = start_round(new_round("hello", 60), 0.0)
        assert state.metrics == DEFAULT_METRICS


# ---------------------------------------------------------------------------
# update_typed
# ---------------------------------------------------------------------------

class TestUpdateTyped:
    def test_live_metrics_while_running(self):
        state = start_round(new_round("cat", 60), 0.0)
        state = update_typed(state, "ca", 0.5)
        assert state.metrics.correct == 2
        assert state.status is RoundStatus.RUNNING

    def test_completes_when_target_length_reached(self):
        state = start_round(new_round("cat", 60), 0.0)
        state = update_typed(state, "cap", 2.0)
        assert state.status is RoundStatus.COMPLETED
        assert state.metrics.correct == 2
        assert state.metrics.accuracy_percent == 67
        assert state.ended_at == 2.0

    def test_deletion_lowers_counts(self):
        state = start_round(new_round("hello", 60), 0.0)
        state = update_typed(state, "hex", 1.0)
        state = update_typed(state, "he", 1.0)
        assert state.metrics.mistakes == 0
        assert state.metrics.correct == 2

    def test_metrics_frozen_when_not_running(self):
        state = update_typed(new_round("hello", 60), "hel", 5.0)
        assert state.metrics == DEFAULT_METRICS

    def test_metrics_frozen_after_end(self):
        state = start_round(new_round("hello", 60), 0.0)
        state = update_typed(state, "he", 1.0)
        frozen = end_round(state, 2.0).metrics
        state = update_typed(end_round(state, 2.0), "hexxx", 3.0)
        assert state.metrics == frozen
        assert state.status is RoundStatus.STOPPED
        assert state.typed == "hexxx"


# ---------------------------------------------------------------------------
# tick_round
# ---------------------------------------------------------------------------

class TestTickRound:
    def test_time_up_at_duration(self):
        state = start_round(new_round("hello", 5), 0.0)
        assert tick_round(state, 4.0).status is RoundStatus.RUNNING
        ended = tick_round(state, 5.0)
        assert ended.status is RoundStatus.TIME_UP
        assert ended.remaining_seconds(99.0) == 0

    def test_completed_checked_before_time_up(self):
        state = start_round(new_round("hi", 5), 0.0)
        # force a full buffer without going through update_typed's completion check
        state = RoundState(target=state.target, clock=state.clock, status=RoundStatus.RUNNING, typed="hi")
        assert tick_round(state, 10.0).status is RoundStatus.COMPLETED

    def test_tick_when_not_running_is_noop(self):
        state = new_round("hello", 5)
        assert tick_round(state, 100.0) is state

    def test_remaining_frozen_after_end(self):
        state = start_round(new_round("hello", 60), 0.0)
        state = end_round(state, 20.0)
        assert state.remaining_seconds(50.0) == 40


# ---------------------------------------------------------------------------
# end_round
# ---------------------------------------------------------------------------

class TestEndRound:
    def test_manual_stop(self):
        state = start_round(new_round("hello", 60), 0.0)
        assert end_round(state, 1.0).status is RoundStatus.STOPPED

    def test_stop_when_idle_is_noop(self):
        state = new_round("hello", 60)
        assert end_round(state, 1.0) is state

    def test_non_ending_status_ignored(self):
        state = start_round(new_round("hello", 60), 0.0)
        assert end_round(state, 1.0, RoundStatus.WAITING) is state
