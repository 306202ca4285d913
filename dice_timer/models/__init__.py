"""
Models package for the Dice Round Timer.

This package contains the core data models used throughout the application.
"""
from .team import Team, RoundTiming, FastestRound
from .session_state import SessionState
from .session_report import (
    SessionReport, TeamSummary, RoundSummary, RoundResult, RoundRow
)

__all__ = [
    "Team", "RoundTiming", "FastestRound", "SessionState",
    "SessionReport", "TeamSummary", "RoundSummary", "RoundResult", "RoundRow"
]
