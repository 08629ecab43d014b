"""Throughput statistics for a series of timed uploads.

The mean speed is the logical size divided by the mean duration. The
standard deviation is taken over the per-run speeds, measured against
that mean speed rather than against the arithmetic mean of the per-run
speeds. The two reference points differ whenever durations vary, so the
reported deviation is not the plain population standard deviation of the
speeds.
"""

import math
from typing import Sequence

from src.models import ThroughputStats


def compute_throughput(durations: Sequence[float], units: float) -> ThroughputStats:
    """Aggregate per-run durations into throughput statistics.

    Args:
        durations: Elapsed seconds for each run. Must not be empty.
        units: Logical amount transferred per run (size / minimum size).

    Returns:
        ThroughputStats with the mean speed and population standard
        deviation, both in units per second.

    Raises:
        ValueError: If no durations are given.
    """
    if not durations:
        raise ValueError("at least one duration is required")

    mean_time = sum(durations) / len(durations)
    mean_speed = units / mean_time

    sigma = 0.0
    for d in durations:
        diff = mean_speed - units / d
        sigma += diff * diff
    sigma = math.sqrt(sigma / len(durations))

    return ThroughputStats(mean_speed=mean_speed, std_dev=sigma)
