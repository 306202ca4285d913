"""Descriptive statistics helpers shared by the ledger and analytics."""

import statistics
from typing import Optional, Sequence


def mean_or_none(values: Sequence[float]) -> Optional[float]:
    """Return the arithmetic mean, or None for an empty sequence."""
    if not values:
        return None
    return statistics.mean(values)


def sample_stdev_or_none(values: Sequence[float]) -> Optional[float]:
    """
    Return the sample standard deviation (n - 1 divisor).

    At least two values are required; fewer gives None.
    """
    if len(values) < 2:
        return None
    return statistics.stdev(values)
