"""Cancellable timed tasks for the memory game.

`spawn` is anything with the signature of `socketio.start_background_task`
(callable, *args). Cancelling flips a threading.Event so a sleeping worker
exits at its next wake-up without running the callback.
"""
import threading
import time
from typing import Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class ScheduledTask(Protocol):
    """Anything the controller can start once and cancel later."""

    @property
    def active(self) -> bool: ...

    def start(self) -> 'ScheduledTask': ...

    def cancel(self) -> None: ...


def run_inline(target, *args, **kwargs):
    """Spawner that runs the task on the calling thread."""
    target(*args, **kwargs)


class DelayedCall:
    """Run `callback` once after `delay` seconds unless cancelled first."""

    def __init__(self, spawn: Callable, delay: float, callback: Callable[[], None], sleep: Callable = time.sleep):
        self._spawn = spawn
        self._delay = max(0.0, float(delay))
        self._callback = callback
        self._sleep = sleep
        self._cancelled = threading.Event()
        self._started = False

    @property
    def active(self) -> bool:
        return self._started and not self._cancelled.is_set()

    def start(self) -> 'DelayedCall':
        self._started = True
        self._spawn(self._run)
        return self

    def cancel(self) -> None:
        self._cancelled.set()

    def _run(self):
        if self._delay:
            self._sleep(self._delay)
        if self._cancelled.is_set():
            return
        self._cancelled.set()
        self._callback()


class RepeatingCall:
    """Run `callback` every `interval` seconds until cancelled."""

    def __init__(self, spawn: Callable, interval: float, callback: Callable[[], None], sleep: Callable = time.sleep):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._spawn = spawn
        self._interval = float(interval)
        self._callback = callback
        self._sleep = sleep
        self._cancelled = threading.Event()
        self._started = False

    @property
    def active(self) -> bool:
        return self._started and not self._cancelled.is_set()

    def start(self) -> 'RepeatingCall':
        self._started = True
        self._spawn(self._run)
        return self

    def cancel(self) -> None:
        self._cancelled.set()

    def _run(self):
        while not self._cancelled.is_set():
            self._sleep(self._interval)
            if self._cancelled.is_set():
                return
            self._callback()


class GameTimer:
    """Once-per-interval clock. `start` always begins a new task; `stop` freezes.

    Arguments given to `start` are passed to every `on_tick` call of that run,
    so a tick can tell which game it belongs to.
    """

    def __init__(self, spawn: Callable, on_tick: Callable[..., None], interval: float = 1.0, sleep: Callable = time.sleep):
        self._spawn = spawn
        self._on_tick = on_tick
        self._interval = interval
        self._sleep = sleep
        self._task: Optional[ScheduledTask] = None

    @property
    def running(self) -> bool:
        return self._task is not None and self._task.active

    def start(self, *args) -> None:
        self.stop()
        on_tick = self._on_tick
        self._task = RepeatingCall(self._spawn, self._interval, lambda: on_tick(*args), sleep=self._sleep)
        self._task.start()

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
