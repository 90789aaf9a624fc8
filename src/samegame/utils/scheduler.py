from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List


@dataclass(slots=True, eq=False)
class TaskHandle:
    """A callback waiting in a :class:`Scheduler`.

    Cancelling is permanent; a cancelled handle is skipped even if its due
    time has already passed.
    """

    due: float
    callback: Callable[[], None] = field(repr=False)
    sequence: int = 0
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


@dataclass(slots=True)
class Scheduler:
    """Tick-driven timer queue.

    Time only moves when :meth:`advance` is called, normally from the
    ``tick`` event, so tests can step it deterministically.

    * Due tasks fire in (due time, scheduling order) order.
    * Tasks scheduled from inside a callback wait for the next ``advance``
      even when their delay is zero.
    """

    now: float = 0.0
    _tasks: List[TaskHandle] = field(init=False, default_factory=list, repr=False)
    _sequence: int = field(init=False, default=0, repr=False)

    def schedule(self, delay: float, callback: Callable[[], None]) -> TaskHandle:
        self._sequence += 1
        handle = TaskHandle(
            due=self.now + max(0.0, float(delay)),
            callback=callback,
            sequence=self._sequence,
        )
        self._tasks.append(handle)
        return handle

    def advance(self, dt: float) -> int:
        """Move the clock forward by ``dt`` and run every task that became due.

        Returns the number of callbacks that ran.
        """
        if dt > 0.0:
            self.now += float(dt)
        self._tasks = [task for task in self._tasks if task.active]
        due = sorted(
            (task for task in self._tasks if task.due <= self.now),
            key=lambda task: (task.due, task.sequence),
        )
        fired = 0
        for task in due:
            # An earlier callback in this batch may have cancelled it.
            if not task.active:
                continue
            task.fired = True
            task.callback()
            fired += 1
        self._tasks = [task for task in self._tasks if task.active]
        return fired

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()

    def pending(self) -> List[TaskHandle]:
        return [task for task in self._tasks if task.active]
