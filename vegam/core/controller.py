from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from vegam.core.clock import format_time
from vegam.core.comparator import DiffResult
from vegam.core.passages import Passage, PassageRepository
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
from vegam.core.settings import Settings, parse_duration_seconds

logger = logging.getLogger(__name__)

ENTER_KEYS = ("\n", "\r", "Enter", "Return")


class TickHandle(Protocol):
    def cancel(self) -> None: ...


# (interval_seconds, callback) -> handle that stops the periodic callback
Scheduler = Callable[[float, Callable[[], None]], TickHandle]


@dataclass(frozen=True)
class RoundDisplay:
    """Everything a view needs to paint one frame of the round."""

    time_text: str
    correct: int
    mistakes: int
    accuracy_text: str
    wpm: int
    status_label: str
    diff: DiffResult
    typed: str


class RoundController:
    """Owns the current round and routes input events, ticks and configuration to it.

    The periodic tick is registered through *scheduler* only while the round
    is running. Leaving the running state always cancels it, and callbacks
    from a cancelled registration are ignored.
    """

    def __init__(
        self,
        passages: PassageRepository,
        scheduler: Scheduler,
        settings: Optional[Settings] = None,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        self._passages = passages
        self._scheduler = scheduler
        self._settings = settings or Settings()
        self._now = time_source
        self._passage_index = self._passages.normalize_index(self._settings.default_passage_index)
        self._duration_seconds = self._settings.default_duration_seconds
        self._tick_handle: Optional[TickHandle] = None
        self._tick_generation = 0
        self._listeners: List[Callable[[RoundDisplay], None]] = []
        self._state = new_round(self.passage.text, self._duration_seconds)

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def passage(self) -> Passage:
        return self._passages.get(self._passage_index)

    @property
    def passage_index(self) -> int:
        return self._passage_index

    @property
    def duration_seconds(self) -> int:
        return self._duration_seconds

    @property
    def ticking(self) -> bool:
        return self._tick_handle is not None

    def add_listener(self, listener: Callable[[RoundDisplay], None]) -> None:
        self._listeners.append(listener)

    def display(self, now: Optional[float] = None) -> RoundDisplay:
        state = self._state
        now = self._now() if now is None else now
        metrics = state.metrics
        return RoundDisplay(
            time_text=format_time(state.remaining_seconds(now)),
            correct=metrics.correct,
            mistakes=metrics.mistakes,
            accuracy_text=metrics.accuracy_text,
            wpm=metrics.gross_wpm,
            status_label=state.status.label,
            diff=state.diff(),
            typed=state.typed,
        )

    # -- configuration -------------------------------------------------

    def select_passage(self, index) -> None:
        """Switch to another passage. The round is reset as part of the change."""
        self._passage_index = self._passages.normalize_index(index)
        logger.info("Selected passage %d", self._passage_index + 1)
        self.request_reset()

    def select_duration(self, minutes) -> None:
        """Switch the round duration (in minutes). The round is reset as part of the change."""
        self._duration_seconds = parse_duration_seconds(minutes, self._settings.default_duration_minutes)
        logger.info("Selected duration %ss", self._duration_seconds)
        self.request_reset()

    # -- input ---------------------------------------------------------

    def submit_typed_text(self, text) -> None:
        """Receive the full current content of the input buffer."""
        text = "" if text is None else str(text).replace("\r\n", "\n")
        state = self._state
        now = self._now()
        if state.status is RoundStatus.WAITING and text:
            state = start_round(state, now)
        self._apply(update_typed(state, text, now), now)

    def key_pressed(self, key: str, modifier: bool = False, editing: bool = False) -> bool:
        """Start the round from a first keystroke.

        Only a single printable character or Enter counts, and only without
        Ctrl/Alt/Meta. When the keystroke happened outside the editor
        (*editing* false) it becomes the whole buffer. Returns True if a round
        was started.
        """
        if self._state.running or modifier or not key:
            return False
        if key in ENTER_KEYS:
            char = "\n"
        elif len(key) == 1 and key.isprintable():
            char = key
        else:
            return False
        if editing:
            self.request_start()
        else:
            now = self._now()
            self._apply(start_round(self._state, now, typed=char), now)
        return self._state.running

    # -- lifecycle -----------------------------------------------------

    def request_start(self) -> None:
        if self._state.running:
            return
        self._apply(start_round(self._state, self._now()))

    def request_reset(self) -> None:
        self._apply(reset_round(self.passage.text, self._duration_seconds))

    def stop(self) -> None:
        self._apply(end_round(self._state, self._now(), RoundStatus.STOPPED))

    def tick(self, now: Optional[float] = None) -> None:
        if not self._state.running:
            return
        now = self._now() if now is None else now
        self._apply(tick_round(self._state, now), now)

    # -- internals -----------------------------------------------------

    def _apply(self, state: RoundState, now: Optional[float] = None) -> None:
        previous = self._state.status
        self._state = state
        if state.running:
            self._ensure_ticking()
        else:
            self._cancel_tick()
        if state.status is not previous:
            logger.info("Round %s -> %s", previous.label, state.status.label)
        self._notify(now)

    def _ensure_ticking(self) -> None:
        if self._tick_handle is not None:
            return
        self._tick_generation += 1
        generation = self._tick_generation
        self._tick_handle = self._scheduler(
            self._settings.tick_interval_seconds,
            lambda: self._on_tick(generation),
        )
        logger.debug("Tick registered (generation %d)", generation)

    def _cancel_tick(self) -> None:
        if self._tick_handle is None:
            return
        self._tick_handle.cancel()
        self._tick_handle = None
        self._tick_generation += 1
        logger.debug("Tick cancelled")

    def _on_tick(self, generation: int) -> None:
        if generation != self._tick_generation or self._tick_handle is None:
            logger.debug("Ignoring stale tick (generation %d)", generation)
            return
        self.tick()

    def _notify(self, now: Optional[float] = None) -> None:
        if not self._listeners:
            return
        display = self.display(now)
        for listener in list(self._listeners):
            listener(display)
