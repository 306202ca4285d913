"""
Dice Round Timer

Times dice-rolling rounds for several teams and reports the mean, sample
standard deviation and fastest round per team and per round.

This package provides both desktop (Tkinter) and web (Flask) interfaces
around a shared stopwatch and team round ledger.
"""
import logging

from .models import Team, RoundTiming, SessionState
from .services import Stopwatch, SessionService, AnalyticsService
from .utils import fmt_seconds, fmt_duration, APP_TITLE

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "Team", "RoundTiming", "SessionState", "Stopwatch", "SessionService",
    "AnalyticsService", "fmt_seconds", "fmt_duration", "APP_TITLE"
]
