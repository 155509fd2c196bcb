"""Small numeric helpers shared by progress and analytics code."""
import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Unlike round(), 12.5 becomes 13.
    """
    return math.floor(value + 0.5)


def percent(part: float, whole: float) -> int:
    """part / whole as a rounded percentage, 0 when whole is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


def mean(values: list[float]) -> int:
    """Rounded arithmetic mean, 0 for an empty list."""
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def mean_of(total: float, count: int) -> int:
    """Rounded total / count, 0 when count is 0."""
    if not count:
        return 0
    return round_half_up(total / count)
