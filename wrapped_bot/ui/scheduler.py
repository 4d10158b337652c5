"""
Timer driver for the Wrapped viewer.

ScheduledCallback is the single cancellable timer abstraction; the viewer
never holds more than one pending callback. AutoAdvanceDriver cancels and
reschedules it on every sequencer transition, waking either when the current
card runs out or when the display is due a refresh, whichever comes first.
"""

import asyncio
import inspect
from typing import Any, Callable, Optional, Sequence

from wrapped_bot.constants import ViewerConstants
from wrapped_bot.ui.sequencer import CardSequencer, ViewerState
from wrapped_bot.utils.logger import setup_logger

logger = setup_logger(__name__)


class ScheduledCallback:
    """One delayed call on the event loop that can be cancelled or replaced."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay: float, callback: Callable[..., Any], *args):
        """Replace any pending call with ``callback(*args)`` after ``delay`` seconds."""
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(max(0.0, delay), self._fire, callback, args)

    def _fire(self, callback, args):
        self._handle = None
        callback(*args)

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AutoAdvanceDriver:
    """Runs a sequencer's dwell timer and reports progress to the display."""

    def __init__(
        self,
        sequencer: CardSequencer,
        refresh_interval: float,
        on_refresh: Optional[Callable[[ViewerState], Any]] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        if refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")
        self.sequencer = sequencer
        self.refresh_interval = refresh_interval
        self.on_refresh = on_refresh
        self._timer = ScheduledCallback(loop)
        self._tasks: set = set()
        self._disposed = False
        sequencer.add_listener(self._on_transition)

    @property
    def timer_pending(self) -> bool:
        return self._timer.pending

    def start(self):
        self._reschedule()

    def _on_transition(self, state: ViewerState):
        if self._disposed:
            return
        self._reschedule()
        self._emit(state)

    def _reschedule(self):
        self._timer.cancel()
        if self._disposed or self.sequencer.is_paused:
            return
        delay = min(self.refresh_interval, self.sequencer.remaining_seconds())
        self._timer.schedule(delay, self._tick, self.sequencer.generation)

    def _tick(self, generation: int):
        if self.sequencer.tick(generation):
            # advance() notified _on_transition, which rescheduled and emitted
            return
        self._reschedule()
        self._emit(self.sequencer.state)

    def _emit(self, state: ViewerState):
        if self.on_refresh is None:
            return
        result = self.on_refresh(state)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Future):
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Viewer refresh failed: {error}", exc_info=error)

    def dispose(self):
        """Cancel the pending timer and any refresh still in flight."""
        self._disposed = True
        self._timer.cancel()
        self.sequencer.remove_listener(self._on_transition)
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()


class ViewerHandle:
    """A mounted viewer: sequencer plus its running driver."""

    def __init__(self, sequencer: CardSequencer, driver: AutoAdvanceDriver):
        self.sequencer = sequencer
        self.driver = driver
        self._disposed = False

    @property
    def state(self) -> ViewerState:
        return self.sequencer.state

    @property
    def disposed(self) -> bool:
        return self._disposed

    def advance(self):
        self.sequencer.advance()

    def retreat(self):
        self.sequencer.retreat()

    def toggle_pause(self):
        self.sequencer.toggle_pause()

    def dispose(self):
        if self._disposed:
            return
        self._disposed = True
        self.driver.dispose()


def mount(
    cards: Sequence[Any],
    start_index: Optional[int] = None,
    *,
    duration: float = ViewerConstants.AUTO_ADVANCE_SECONDS,
    refresh_interval: Optional[float] = None,
    on_refresh: Optional[Callable[[ViewerState], Any]] = None,
    clock: Optional[Callable[[], float]] = None,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> ViewerHandle:
    """
    Start a viewer over ``cards`` and return its handle.

    Must be called with an event loop running (or an explicit ``loop``).
    The start index is clamped into range. ``refresh_interval`` defaults to
    the card duration, i.e. the driver only wakes to advance.
    """
    kwargs = {"duration": duration}
    if clock is not None:
        kwargs["clock"] = clock
    sequencer = CardSequencer(len(cards), start_index, **kwargs)
    driver = AutoAdvanceDriver(
        sequencer,
        refresh_interval=refresh_interval or duration,
        on_refresh=on_refresh,
        loop=loop,
    )
    driver.start()
    logger.debug(f"Mounted viewer with {len(cards)} cards at index {sequencer.current_index}")
    return ViewerHandle(sequencer, driver)
