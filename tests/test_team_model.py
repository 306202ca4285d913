"""
Unit tests for the Team model and its round ledger.

Tests recording of first/last dice times and the statistics derived from
completed rounds.
"""
import unittest

from dice_timer.models import FastestRound, RoundTiming, Team


def team_with_durations(*durations: float) -> Team:
    team = Team(name="Test Team", player_count=5)
    for round_number, duration in enumerate(durations, start=1):
        team.record_first_dice(0.0, round_number)
        team.record_last_dice(duration, round_number)
    return team


class TestRoundTiming(unittest.TestCase):
    """Test cases for RoundTiming."""

    def test_duration_is_last_minus_first(self) -> None:
        timing = RoundTiming(first_dice_time=10.0, last_dice_time=25.5)
        self.assertEqual(timing.duration, 15.5)
        self.assertTrue(timing.is_complete)

    def test_duration_missing_when_incomplete(self) -> None:
        self.assertIsNone(RoundTiming().duration)
        self.assertIsNone(RoundTiming(first_dice_time=1.0).duration)
        self.assertIsNone(RoundTiming(last_dice_time=1.0).duration)
        self.assertFalse(RoundTiming(first_dice_time=1.0).is_complete)


class TestTeamRecording(unittest.TestCase):
    """Test cases for recording dice events."""

    def setUp(self) -> None:
        self.team = Team(name="Test Team", player_count=5)

    def test_record_first_dice(self) -> None:
        self.team.record_first_dice(10.5, 1)

        self.assertEqual(len(self.team.rounds), 1)
        self.assertEqual(self.team.rounds[0].first_dice_time, 10.5)
        self.assertIsNone(self.team.rounds[0].last_dice_time)

    def test_record_first_dice_overwrites(self) -> None:
        self.team.record_first_dice(10.5, 1)
        self.team.record_first_dice(12.0, 1)

        self.assertEqual(self.team.rounds[0].first_dice_time, 12.0)

    def test_record_last_dice(self) -> None:
        self.team.record_first_dice(10.5, 1)
        self.team.record_last_dice(25.3, 1)

        self.assertEqual(self.team.rounds[0].last_dice_time, 25.3)

    def test_record_last_dice_without_first_dice(self) -> None:
        self.team.record_last_dice(25.3, 1)

        self.assertEqual(len(self.team.rounds), 1)
        self.assertIsNone(self.team.rounds[0].last_dice_time)

    def test_record_last_dice_ignored_for_round_without_first(self) -> None:
        self.team.record_first_dice(1.0, 1)
        self.team.record_last_dice(5.0, 2)

        self.assertEqual(len(self.team.rounds), 2)
        self.assertIsNone(self.team.rounds[1].last_dice_time)
        self.assertIsNone(self.team.rounds[0].last_dice_time)

    def test_recording_later_round_fills_gaps(self) -> None:
        self.team.record_first_dice(3.0, 3)

        self.assertEqual(len(self.team.rounds), 3)
        self.assertEqual(self.team.rounds[0], RoundTiming())
        self.assertEqual(self.team.rounds[1], RoundTiming())
        self.assertEqual(self.team.rounds[2].first_dice_time, 3.0)

    def test_non_positive_rounds_are_ignored(self) -> None:
        self.team.record_first_dice(1.0, 1)
        self.team.record_first_dice(9.0, 0)
        self.team.record_last_dice(9.0, -1)

        self.assertEqual(len(self.team.rounds), 1)
        self.assertEqual(self.team.rounds[0].first_dice_time, 1.0)
        self.assertIsNone(self.team.rounds[0].last_dice_time)

    def test_multiple_rounds(self) -> None:
        self.team.record_first_dice(10.0, 1)
        self.team.record_last_dice(25.0, 1)
        self.team.record_first_dice(5.0, 2)
        self.team.record_last_dice(18.0, 2)

        self.assertEqual(len(self.team.rounds), 2)
        self.assertEqual(self.team.rounds[0].duration, 15.0)
        self.assertEqual(self.team.rounds[1].duration, 13.0)

    def test_round_timing_lookup(self) -> None:
        self.team.record_first_dice(2.0, 2)

        self.assertIsNone(self.team.round_timing(0))
        self.assertIsNone(self.team.round_timing(3))
        self.assertEqual(self.team.round_timing(1), RoundTiming())
        self.assertEqual(self.team.round_timing(2).first_dice_time, 2.0)

    def test_reset_rounds(self) -> None:
        self.team.record_first_dice(10.0, 1)
        self.team.record_last_dice(25.0, 1)
        self.team.record_first_dice(1.0, 4)

        self.team.reset_rounds()

        self.assertEqual(self.team.rounds, [])

    def test_reset_rounds_when_empty(self) -> None:
        self.team.reset_rounds()
        self.assertEqual(self.team.rounds, [])

    def test_ids_are_unique(self) -> None:
        other = Team(name="Test Team", player_count=5)
        self.assertNotEqual(self.team.id, other.id)


class TestTeamStatistics(unittest.TestCase):
    """Test cases for derived statistics."""

    def test_average_duration(self) -> None:
        team = team_with_durations(10.0, 20.0, 30.0)
        self.assertEqual(team.average_duration, 20.0)

    def test_average_duration_none_without_completed_rounds(self) -> None:
        team = Team(name="Test Team", player_count=5)
        team.record_first_dice(10.0, 1)
        self.assertIsNone(team.average_duration)

    def test_average_skips_incomplete_rounds(self) -> None:
        team = team_with_durations(10.0, 20.0)
        team.record_first_dice(3.0, 3)
        self.assertEqual(team.completed_durations, [10.0, 20.0])
        self.assertEqual(team.average_duration, 15.0)

    def test_standard_deviation(self) -> None:
        # mean 20, variance ((-10)^2 + 0 + 10^2) / 2 = 100
        team = team_with_durations(10.0, 20.0, 30.0)
        self.assertEqual(team.standard_deviation, 10.0)

    def test_standard_deviation_none_for_single_round(self) -> None:
        team = team_with_durations(10.0)
        self.assertIsNone(team.standard_deviation)
        self.assertIsNone(Team(name="Empty", player_count=1).standard_deviation)

    def test_fastest_round(self) -> None:
        team = team_with_durations(20.0, 10.0, 15.0)
        fastest = team.fastest_round
        self.assertEqual(fastest, FastestRound(round=2, duration=10.0))
        self.assertEqual(fastest.round, 2)
        self.assertEqual(fastest.duration, 10.0)

    def test_fastest_round_tie_goes_to_earliest(self) -> None:
        team = team_with_durations(12.0, 8.0, 8.0)
        self.assertEqual(team.fastest_round.round, 2)

    def test_fastest_round_skips_incomplete_rounds(self) -> None:
        team = Team(name="Test Team", player_count=5)
        team.record_first_dice(0.0, 1)
        team.record_first_dice(0.0, 2)
        team.record_last_dice(7.0, 2)
        self.assertEqual(team.fastest_round, FastestRound(round=2, duration=7.0))

    def test_fastest_round_none_without_completed_rounds(self) -> None:
        self.assertIsNone(Team(name="Test Team", player_count=5).fastest_round)

    def test_average_duration_per_player(self) -> None:
        team = team_with_durations(10.0, 20.0, 30.0)
        self.assertEqual(team.average_duration_per_player, 4.0)
        self.assertIsNone(Team(name="Empty", player_count=2).average_duration_per_player)

    def test_to_json(self) -> None:
        team = team_with_durations(20.0, 10.0)
        data = team.to_json()

        self.assertEqual(data["name"], "Test Team")
        self.assertEqual(data["player_count"], 5)
        self.assertEqual(len(data["rounds"]), 2)
        self.assertEqual(data["rounds"][1]["duration"], 10.0)
        self.assertEqual(data["fastest_round"], {"round": 2, "duration": 10.0})
        self.assertEqual(data["average_duration"], 15.0)


if __name__ == "__main__":
    unittest.main()
