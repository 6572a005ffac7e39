"""
Wall-clock timing for training runs.

fit() records one total plus a 'training' and an 'evaluation' section; the
numbers end up in Result.timing.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Wall-clock timer for a run, with named sections inside it.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('training'):
            trace = model.fit(X, y, steps=2000, learning_rate=0.5)
        timer.stop()
        timer.result()   # {'total_seconds': ..., 'training': ...}

    Entering the same section twice adds the two durations.
    """

    def __init__(self) -> None:
        self._began: float | None = None
        self._elapsed: float | None = None
        self._sections: dict[str, float] = {}

    def start(self) -> None:
        self._began = time.perf_counter()
        self._elapsed = None

    def stop(self) -> None:
        if self._began is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._elapsed = time.perf_counter() - self._began

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent in the with-block to section `name`."""
        began = time.perf_counter()
        try:
            yield
        finally:
            spent = time.perf_counter() - began
            self._sections[name] = self._sections.get(name, 0.0) + spent

    def result(self) -> dict[str, float]:
        """'total_seconds' followed by every section, in seconds."""
        if self._elapsed is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._elapsed, **self._sections}


@contextmanager
def timed() -> Iterator[Timer]:
    """Time a with-block; the timer is stopped on exit, even on error."""
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
