"""Repeating timers that gate movement and food spawning."""

from __future__ import annotations

from dataclasses import dataclass


class Timer:
    """Accumulates elapsed seconds and reports when *interval* is crossed.

    A repeating timer resets its accumulator each time it finishes; a
    one-shot timer stays finished once the interval has been reached.
    """

    def __init__(self, interval: float, repeating: bool = True) -> None:
        if interval <= 0:
            raise ValueError("Timer interval must be positive.")
        self.interval = interval
        self.repeating = repeating
        self.elapsed = 0.0
        self.finished = False

    def tick(self, delta: float) -> bool:
        """Advance by *delta* seconds; return whether the timer finished."""
        if delta < 0:
            raise ValueError("Elapsed time cannot be negative.")
        if self.finished and not self.repeating:
            return True
        self.elapsed += delta
        if self.elapsed >= self.interval:
            self.finished = True
            self.elapsed = 0.0 if self.repeating else self.interval
        else:
            self.finished = False
        return self.finished

    def reset(self) -> None:
        self.elapsed = 0.0
        self.finished = False


@dataclass(frozen=True)
class Ticks:
    """Which timers elapsed during one scheduler advance."""

    move: bool
    food: bool


class TickScheduler:
    """Two independent timers fed the same elapsed duration each step."""

    def __init__(self, move_interval: float, food_interval: float) -> None:
        self.move_timer = Timer(move_interval)
        self.food_timer = Timer(food_interval)

    def advance(self, delta: float) -> Ticks:
        return Ticks(
            move=self.move_timer.tick(delta),
            food=self.food_timer.tick(delta),
        )
