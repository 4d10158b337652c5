"""
Card sequencer for the Wrapped viewer.

Owns which card of a member's deck is shown, how far the current card's dwell
timer has run, and whether playback is paused. The sequencer never schedules
anything itself: it is driven by AutoAdvanceDriver (ui/scheduler.py), which
calls tick() and is told about every transition through listeners.

Swipe, tap and key events are classified by the pure functions below so any
front end can feed raw input into the same transitions.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from wrapped_bot.constants import ViewerConstants


class NavAction(str, Enum):
    """Outcome of classifying one input event."""
    ADVANCE = "advance"
    RETREAT = "retreat"
    SUPPRESS = "suppress"  # swallow the event, no navigation
    NONE = "none"


@dataclass(frozen=True)
class ViewerState:
    """Snapshot of the viewer for the rendering layer."""
    current_index: int
    card_count: int
    is_paused: bool
    progress: float
    is_sharing: bool


def clamp_index(index: int, card_count: int) -> int:
    return max(0, min(card_count - 1, index))


def classify_swipe(delta_x: float, delta_y: float,
                   threshold: float = ViewerConstants.SWIPE_THRESHOLD) -> NavAction:
    """Horizontal swipes navigate; vertical-dominant drags are scroll intent."""
    if abs(delta_x) > threshold and abs(delta_x) > abs(delta_y):
        return NavAction.ADVANCE if delta_x < 0 else NavAction.RETREAT
    return NavAction.NONE


def classify_tap(x: float, width: float, on_control: bool = False) -> NavAction:
    """Right zone advances, left zone retreats, the centre band does nothing."""
    if on_control or width <= 0:
        return NavAction.NONE
    if x > width * ViewerConstants.TAP_ADVANCE_ZONE:
        return NavAction.ADVANCE
    if x < width * ViewerConstants.TAP_RETREAT_ZONE:
        return NavAction.RETREAT
    return NavAction.NONE


def classify_key(key: str) -> NavAction:
    if key in ViewerConstants.ADVANCE_KEYS:
        return NavAction.ADVANCE
    if key in ViewerConstants.RETREAT_KEYS:
        return NavAction.RETREAT
    if key in ViewerConstants.SUPPRESSED_KEYS:
        return NavAction.SUPPRESS
    return NavAction.NONE


class CardSequencer:
    """
    Playing/Paused state machine over a fixed-length, wrapping card deck.

    Progress is derived from an elapsed-time accumulator: time already spent on
    the current card before the last resume, plus time since that resume while
    playing. Pausing folds the running segment into the accumulator so resume
    continues where it left off.

    Every transition bumps ``generation`` and notifies listeners. A driver
    callback carries the generation it was scheduled under, so a tick that
    races a manual transition is discarded instead of advancing twice.
    """

    def __init__(
        self,
        card_count: int,
        start_index: Optional[int] = None,
        duration: float = ViewerConstants.AUTO_ADVANCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if card_count < 1:
            raise ValueError("card sequence must not be empty")
        if duration <= 0:
            raise ValueError("duration must be positive")

        self.card_count = card_count
        self.duration = duration
        self._clock = clock
        self._index = clamp_index(start_index or 0, card_count)
        self._paused = False
        self._sharing = False
        self._accumulated = 0.0
        self._resumed_at: Optional[float] = clock()
        self._generation = 0
        self._listeners: List[Callable[[ViewerState], None]] = []

    # State

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_sharing(self) -> bool:
        return self._sharing

    @property
    def generation(self) -> int:
        return self._generation

    def elapsed(self) -> float:
        """Seconds the current card has been playing, paused time excluded."""
        if self._paused or self._resumed_at is None:
            return self._accumulated
        return self._accumulated + max(0.0, self._clock() - self._resumed_at)

    @property
    def progress(self) -> float:
        return min(1.0, max(0.0, self.elapsed() / self.duration))

    def remaining_seconds(self) -> float:
        return max(0.0, self.duration - self.elapsed())

    @property
    def state(self) -> ViewerState:
        return ViewerState(
            current_index=self._index,
            card_count=self.card_count,
            is_paused=self._paused,
            progress=self.progress,
            is_sharing=self._sharing,
        )

    # Listeners

    def add_listener(self, listener: Callable[[ViewerState], None]):
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[ViewerState], None]):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _transitioned(self):
        self._generation += 1
        state = self.state
        for listener in list(self._listeners):
            listener(state)

    # Transitions

    def _reset_progress(self):
        self._accumulated = 0.0
        self._resumed_at = None if self._paused else self._clock()

    def advance(self):
        self._index = (self._index + 1) % self.card_count
        self._reset_progress()
        self._transitioned()

    def retreat(self):
        self._index = (self._index - 1 + self.card_count) % self.card_count
        self._reset_progress()
        self._transitioned()

    def pause(self):
        if self._paused:
            return
        self._accumulated = self.elapsed()
        self._resumed_at = None
        self._paused = True
        self._transitioned()

    def resume(self):
        if not self._paused:
            return
        self._paused = False
        self._resumed_at = self._clock()
        self._transitioned()

    def toggle_pause(self):
        if self._paused:
            self.resume()
        else:
            self.pause()

    def begin_share(self):
        """Freeze the current card for capture."""
        self.pause()
        self._sharing = True
        self._transitioned()

    def end_share(self):
        """Clear the sharing flag and resume playback unconditionally."""
        self._sharing = False
        if self._paused:
            self.resume()
        else:
            self._transitioned()

    def tick(self, generation: Optional[int] = None) -> bool:
        """
        Advance if the current card's dwell time is used up.

        Returns True when the tick advanced. Ticks scheduled under an older
        generation, or arriving while paused, do nothing.
        """
        if generation is not None and generation != self._generation:
            return False
        if self._paused or self.progress < 1.0:
            return False
        self.advance()
        return True

    # Input

    def apply(self, action: NavAction) -> NavAction:
        if action is NavAction.ADVANCE:
            self.advance()
        elif action is NavAction.RETREAT:
            self.retreat()
        return action

    def handle_swipe(self, delta_x: float, delta_y: float) -> NavAction:
        return self.apply(classify_swipe(delta_x, delta_y))

    def handle_tap(self, x: float, width: float, on_control: bool = False) -> NavAction:
        return self.apply(classify_tap(x, width, on_control))

    def handle_key(self, key: str) -> NavAction:
        """Returns the action so callers can suppress default handling."""
        return self.apply(classify_key(key))
