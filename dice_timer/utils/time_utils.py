"""
Utility functions for the Dice Round Timer application.

This module contains the clock and display helpers used throughout the application.
"""
import time
from typing import Optional


def fmt_seconds(seconds: float) -> str:
    """
    Format elapsed seconds with two decimal places.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string

    Example:
        >>> fmt_seconds(3.14159)
        '3.14'
        >>> fmt_seconds(0)
        '0.00'
    """
    return f"{seconds:.2f}"


def fmt_duration(seconds: Optional[float], missing: str = "-") -> str:
    """
    Format a duration as seconds with a unit suffix.

    Example:
        >>> fmt_duration(15.5)
        '15.50s'
        >>> fmt_duration(None)
        '-'
    """
    if seconds is None:
        return missing
    return f"{seconds:.2f}s"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()


def monotonic_ts() -> float:
    """Get a monotonic timestamp in seconds for measuring elapsed time."""
    return time.monotonic()
