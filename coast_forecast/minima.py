"""Wind local-minima detection for a single day's forecast series."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Sequence

DEFAULT_WINDOW_SIZE = 2


class EmptyInputError(ValueError):
    """Raised when a mean speed is requested for an empty series."""


@dataclass(frozen=True)
class Sample:
    time: datetime
    speed: float


@dataclass(frozen=True)
class AnnotatedMinimum:
    time: datetime
    speed: float
    volatility: float


def mean_speed(samples: Sequence[Sample]) -> float:
    if not samples:
        raise EmptyInputError("Cannot compute the mean speed of an empty series")
    return sum(s.speed for s in samples) / len(samples)


def neighbor_change_average(
    samples: Sequence[Sample], index: int, window_size: int = DEFAULT_WINDOW_SIZE
) -> float:
    """
    Average absolute speed change around ``index``.

    Walks back up to ``window_size`` steps and forward up to ``window_size``
    steps, summing the absolute difference between each adjacent pair, then
    divides by the number of steps actually taken.

    Args:
        samples: Time-ordered samples for one day
        index: Position of the sample to score
        window_size: Maximum number of steps to walk on each side

    Returns:
        float: The average change, or 0.0 if no step could be taken
    """
    total_change = 0.0
    steps = 0

    for k in range(1, window_size + 1):
        j = index - k
        if j < 0:
            break
        total_change += abs(samples[j].speed - samples[j + 1].speed)
        steps += 1

    for k in range(1, window_size + 1):
        j = index + k
        if j >= len(samples):
            break
        total_change += abs(samples[j].speed - samples[j - 1].speed)
        steps += 1

    if steps == 0:
        return 0.0
    return total_change / steps


def is_local_minimum(samples: Sequence[Sample], index: int) -> bool:
    """Strictly lower than both immediate neighbours; endpoints never qualify."""
    if index <= 0 or index >= len(samples) - 1:
        return False
    speed = samples[index].speed
    return speed < samples[index - 1].speed and speed < samples[index + 1].speed


def find_local_minima(
    samples: Sequence[Sample], window_size: int = DEFAULT_WINDOW_SIZE
) -> List[AnnotatedMinimum]:
    """
    Find calm spots in a day's wind series.

    A sample is kept when it is strictly lower than both neighbours and
    strictly below the mean speed of the whole series. Each kept sample is
    returned as a new AnnotatedMinimum carrying its neighbour-change average.

    Args:
        samples: Time-ordered samples for one day (ordering is not checked)
        window_size: Steps to look back and forward when scoring volatility

    Returns:
        List[AnnotatedMinimum]: Retained minima in input order
    """
    if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
        raise ValueError(f"window_size must be an integer >= 1, got: {window_size!r}")

    if len(samples) < 3:
        return []

    average = mean_speed(samples)

    minima = []
    for i in range(1, len(samples) - 1):
        if not is_local_minimum(samples, i):
            continue
        volatility = neighbor_change_average(samples, i, window_size)
        if samples[i].speed < average:
            minima.append(
                AnnotatedMinimum(
                    time=samples[i].time,
                    speed=samples[i].speed,
                    volatility=volatility,
                )
            )
    return minima
