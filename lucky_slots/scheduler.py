from dataclasses import dataclass, field
from typing import Callable


@dataclass(eq=False)
class ScheduledCall:
    due_time: float
    callback: Callable[[], None]


@dataclass
class Scheduler:
    """Deferred callbacks driven by game time instead of the wall clock.

    The frame loop advances it with the frame `dt`, tests advance it by hand.
    """

    game_time: float = 0.0
    pending: list[ScheduledCall] = field(default_factory=list)


def schedule(scheduler: Scheduler, delay_sec: float, callback: Callable[[], None]) -> ScheduledCall:
    if delay_sec < 0.0:
        raise ValueError(f"delay_sec must not be negative, got {delay_sec}")

    call = ScheduledCall(scheduler.game_time + delay_sec, callback)
    scheduler.pending.append(call)
    return call


def has_pending(scheduler: Scheduler) -> bool:
    return len(scheduler.pending) > 0


def tick_scheduler(scheduler: Scheduler, dt: float) -> int:
    """Mutates `scheduler`.

    Advances game time by `dt` and runs every call that became due, earliest
    first. Returns how many calls ran.
    """
    if dt < 0.0:
        raise ValueError(f"dt must not be negative, got {dt}")

    scheduler.game_time += dt

    calls_run: int = 0
    while True:
        due_calls: list[ScheduledCall] = [
            c for c in scheduler.pending if c.due_time <= scheduler.game_time
        ]
        if not due_calls:
            return calls_run

        # `min` keeps the first registered call on equal due times
        call: ScheduledCall = min(due_calls, key=lambda c: c.due_time)

        # Removed before running so a call can never fire twice
        scheduler.pending.remove(call)
        call.callback()
        calls_run += 1
