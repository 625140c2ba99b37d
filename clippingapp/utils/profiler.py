"""Lightweight wall-clock timers.

Provides:
    - timer(): Context manager for wall-clock timing with optional sink
    - TimerAccumulator: Accumulate repeated measurements

Used to measure:
    - Each clipping example inside ClippedView.render()
    - Whole-frame rendering in the CLI

No heavy dependencies (no line_profiler, no cProfile overhead while rendering).
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Context manager for wall-clock timing.

    Parameters
    ----------
    name : str
        Timer name (for logging/display)
    sink : Optional[Callable[[str, float], None]]
        Optional callback(name, elapsed_seconds)
        If None, logs at DEBUG level

    Yields
    ------
    None

    Examples
    --------
    >>> with timer("frame"):
    ...     view.render(canvas)

    >>> timings = {}
    >>> with timer("difference", sink=timings.__setitem__):
    ...     view.render(canvas, only=["difference"])
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if sink is not None:
            sink(name, elapsed)
        else:
            logger.debug(f"{name}: {elapsed * 1000.0:.2f} ms")


class TimerAccumulator:
    """Accumulate multiple timing measurements for averaging.

    Attributes
    ----------
    name : str
        Timer name
    total_time : float
        Accumulated time in seconds
    count : int
        Number of measurements
    """

    def __init__(self, name: str):
        self.name = name
        self.total_time = 0.0
        self.count = 0

    @contextmanager
    def measure(self):
        """Context manager to measure and accumulate time."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.total_time += time.perf_counter() - start
            self.count += 1

    def mean(self) -> float:
        """Average time in seconds (0.0 when nothing was recorded)."""
        return self.total_time / self.count if self.count else 0.0

    def reset(self) -> None:
        self.total_time = 0.0
        self.count = 0

    def __repr__(self) -> str:
        return (
            f"TimerAccumulator({self.name!r}, count={self.count}, "
            f"mean={self.mean() * 1000.0:.2f} ms)"
        )
