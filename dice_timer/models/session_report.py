"""Dataclasses representing results reports for the dice timer app."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RoundRow:
    """Timing of one team in one round, as shown in a team's results card."""

    round: int
    first_dice_time: Optional[float]
    last_dice_time: Optional[float]
    duration: Optional[float]


@dataclass
class TeamSummary:
    """Aggregated round statistics for a single team."""

    team_id: str
    name: str
    player_count: int
    rounds: List[RoundRow]
    completed_rounds: int
    average_duration: Optional[float]
    average_duration_per_player: Optional[float]
    standard_deviation: Optional[float]
    fastest_round: Optional[int]
    fastest_duration: Optional[float]


@dataclass
class RoundResult:
    """A team's duration in a round."""

    team_id: str
    team_name: str
    duration: float


@dataclass
class RoundSummary:
    """Statistics across teams for a single round, fastest result first."""

    round: int
    results: List[RoundResult] = field(default_factory=list)
    average_duration: Optional[float] = None
    standard_deviation: Optional[float] = None


@dataclass
class SessionReport:
    """Snapshot of team and round statistics for the current session."""

    generated_ts: float
    current_round: int
    team_count: int
    teams: List[TeamSummary] = field(default_factory=list)
    rounds: List[RoundSummary] = field(default_factory=list)
