"""
Team model for the Dice Round Timer application.

This module contains the Team dataclass, which keeps a per-round ledger of
first and last dice timestamps, and the statistics derived from that ledger.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional

from ..utils import mean_or_none, sample_stdev_or_none


class FastestRound(NamedTuple):
    """The quickest completed round of a team (1-based round number)."""
    round: int
    duration: float


@dataclass
class RoundTiming:
    """
    Timestamps recorded for one team in one round.

    Attributes:
        first_dice_time: Stopwatch reading when the team rolled its first dice
        last_dice_time: Stopwatch reading when the team rolled its last dice
    """
    first_dice_time: Optional[float] = None
    last_dice_time: Optional[float] = None

    @property
    def duration(self) -> Optional[float]:
        """Seconds between first and last dice, or None when incomplete."""
        if self.first_dice_time is None or self.last_dice_time is None:
            return None
        return self.last_dice_time - self.first_dice_time

    @property
    def is_complete(self) -> bool:
        return self.duration is not None

    def to_json(self) -> Dict[str, Optional[float]]:
        return {
            "first_dice_time": self.first_dice_time,
            "last_dice_time": self.last_dice_time,
            "duration": self.duration,
        }


@dataclass
class Team:
    """
    A team taking part in the dice game.

    Attributes:
        name: Display name of the team
        player_count: Number of players in the team (at least one)
        rounds: Round ledger, index 0 holds round 1
        id: Stable unique identifier
    """
    name: str
    player_count: int
    rounds: List[RoundTiming] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    # ---------- Recording ---------- #
    def _ensure_round(self, round_number: int) -> None:
        while len(self.rounds) < round_number:
            self.rounds.append(RoundTiming())

    def record_first_dice(self, time: float, round_number: int) -> None:
        """
        Record the first dice time for a round, replacing any earlier value.

        Missing rounds up to ``round_number`` are created empty. Round numbers
        below 1 are ignored.
        """
        if round_number < 1:
            return
        self._ensure_round(round_number)
        self.rounds[round_number - 1].first_dice_time = time

    def record_last_dice(self, time: float, round_number: int) -> None:
        """
        Record the last dice time for a round.

        The value is only stored when the round already has a first dice
        time; otherwise the round entry is created (if missing) and left empty.
        """
        if round_number < 1:
            return
        self._ensure_round(round_number)
        timing = self.rounds[round_number - 1]
        if timing.first_dice_time is not None:
            timing.last_dice_time = time

    def reset_rounds(self) -> None:
        """Forget every recorded round."""
        self.rounds = []

    def round_timing(self, round_number: int) -> Optional[RoundTiming]:
        """Return the timing entry for a round, or None if never recorded."""
        if round_number < 1 or round_number > len(self.rounds):
            return None
        return self.rounds[round_number - 1]

    # ---------- Statistics ---------- #
    @property
    def completed_durations(self) -> List[float]:
        return [timing.duration for timing in self.rounds if timing.duration is not None]

    @property
    def average_duration(self) -> Optional[float]:
        """Mean duration of the completed rounds."""
        return mean_or_none(self.completed_durations)

    @property
    def standard_deviation(self) -> Optional[float]:
        """Sample standard deviation of completed durations (needs two rounds)."""
        return sample_stdev_or_none(self.completed_durations)

    @property
    def fastest_round(self) -> Optional[FastestRound]:
        """Completed round with the smallest duration; earliest round wins ties."""
        best: Optional[FastestRound] = None
        for index, timing in enumerate(self.rounds):
            duration = timing.duration
            if duration is None:
                continue
            if best is None or duration < best.duration:
                best = FastestRound(round=index + 1, duration=duration)
        return best

    @property
    def average_duration_per_player(self) -> Optional[float]:
        average = self.average_duration
        if average is None or self.player_count < 1:
            return None
        return average / self.player_count

    def to_json(self) -> Dict[str, Any]:
        """
        Convert Team to a JSON-serializable dictionary.

        Returns:
            Dictionary with the ledger and the derived statistics
        """
        fastest = self.fastest_round
        return {
            "id": self.id,
            "name": self.name,
            "player_count": self.player_count,
            "rounds": [timing.to_json() for timing in self.rounds],
            "average_duration": self.average_duration,
            "standard_deviation": self.standard_deviation,
            "fastest_round": fastest._asdict() if fastest else None,
        }
