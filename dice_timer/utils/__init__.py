"""
Utilities package for the Dice Round Timer.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_seconds, fmt_duration, now_ts, monotonic_ts
from .stats_utils import mean_or_none, sample_stdev_or_none
from .constants import (
    APP_TITLE, TICK_INTERVAL_SECONDS, UI_REFRESH_MS, MIN_PLAYERS,
    MAX_PLAYERS, DEFAULT_PLAYER_COUNT, DEFAULT_HOST, DEFAULT_PORT,
    LOG_FORMAT, RESET_SCOPES
)

__all__ = [
    "fmt_seconds", "fmt_duration", "now_ts", "monotonic_ts",
    "mean_or_none", "sample_stdev_or_none", "APP_TITLE",
    "TICK_INTERVAL_SECONDS", "UI_REFRESH_MS", "MIN_PLAYERS", "MAX_PLAYERS",
    "DEFAULT_PLAYER_COUNT", "DEFAULT_HOST", "DEFAULT_PORT", "LOG_FORMAT",
    "RESET_SCOPES"
]
