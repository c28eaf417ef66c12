"""
Unit tests for the stats aggregator
"""

from datetime import date
from pathlib import Path

import pytest

from wordle_tracker.models.wordle import ResultBatch, StoredResult
from wordle_tracker.repositories.results_repository import WordleResultsRepository
from wordle_tracker.services import stats_service
from wordle_tracker.services.stats_service import (
    WordleStatsService,
    aggregate_wordle_stats,
    build_daily_summary,
    build_leaderboards,
    build_user_stats,
    calculate_current_streak,
    calculate_max_streak,
)


def make_batch(day, *results, wordle_number=None):
    return ResultBatch(
        date=day,
        results=[StoredResult(id=user_id, score=score) for user_id, score in results],
        wordle_number=wordle_number,
    )


class TestAggregateWordleStats:
    """Test suite for aggregate_wordle_stats."""

    def test_empty_input(self):
        stats = aggregate_wordle_stats([], {})

        assert stats.daily_summary is None
        assert stats.user_stats == {}
        assert stats.all_time_leaderboards.longest_streak == []
        assert stats.all_time_leaderboards.best_win_rate == []
        assert stats.all_time_leaderboards.best_average_score == []

    def test_end_to_end_scenario(self):
        batches = [
            make_batch("2024-01-01", ("1", 3), ("2", -1)),
            make_batch("2024-01-02", ("1", 2)),
        ]

        stats = aggregate_wordle_stats(batches, {"1": "Alice"}, today=date(2024, 1, 3))

        user1 = stats.user_stats["1"]
        assert user1.username == "Alice"
        assert user1.games_played == 2
        assert user1.games_solved == 2
        assert user1.average_score == 2.5
        assert user1.max_streak == 2
        assert user1.current_streak == 2

        user2 = stats.user_stats["2"]
        assert user2.games_played == 1
        assert user2.win_rate == 0
        assert user2.average_score is None

        summary = stats.daily_summary
        assert summary.date == "2024-01-02"
        assert summary.total_players == 1
        assert summary.success_rate == 100

    def test_batch_order_does_not_matter(self):
        batches = [
            make_batch("2024-01-02", ("1", 2)),
            make_batch("2024-01-01", ("1", 3)),
        ]

        stats = aggregate_wordle_stats(batches, {}, today=date(2024, 1, 2))

        assert stats.daily_summary.date == "2024-01-02"
        assert stats.user_stats["1"].max_streak == 2

    def test_unresolved_results_excluded_from_user_stats(self):
        batches = [make_batch("2024-01-01", ("1", 4), (None, 5))]

        stats = aggregate_wordle_stats(batches, {}, today=date(2024, 1, 2))

        assert list(stats.user_stats) == ["1"]
        assert stats.daily_summary.total_players == 2

    def test_unknown_user_gets_fallback_name(self):
        stats = aggregate_wordle_stats([make_batch("2024-01-01", ("987654321", 4))], {})

        assert stats.user_stats["987654321"].username == "User...4321"

    def test_latest_batch_wins_for_same_date(self):
        batches = [
            make_batch("2024-01-05", ("1", 3)),
            make_batch("2024-01-05", ("1", 3), ("2", 4)),
        ]

        stats = aggregate_wordle_stats(batches, {}, today=date(2024, 1, 6))

        assert stats.daily_summary.total_players == 2


class TestStreaks:
    """Current and max streak calculations."""

    def test_three_consecutive_solves(self):
        games = [("2024-03-01", 3), ("2024-03-02", 4), ("2024-03-03", 2)]

        assert calculate_max_streak(games) == 3
        assert calculate_current_streak(games, date(2024, 3, 3)) == 3
        assert calculate_current_streak(games, date(2024, 3, 4)) == 3

    def test_current_streak_zero_when_stale(self):
        games = [("2024-03-01", 3), ("2024-03-02", 4)]

        assert calculate_current_streak(games, date(2024, 3, 10)) == 0

    def test_current_streak_zero_after_failure(self):
        games = [("2024-03-01", 3), ("2024-03-02", 4), ("2024-03-03", -1)]

        assert calculate_current_streak(games, date(2024, 3, 3)) == 0

    def test_current_streak_stops_at_gap(self):
        games = [("2024-03-01", 3), ("2024-03-03", 4), ("2024-03-04", 5)]

        assert calculate_current_streak(games, date(2024, 3, 4)) == 2

    def test_max_streak_resets(self):
        games = [
            ("2024-03-01", 3),
            ("2024-03-02", 3),
            ("2024-03-03", -1),
            ("2024-03-04", 2),
            ("2024-03-06", 2),
            ("2024-03-07", 2),
            ("2024-03-08", 2),
        ]

        assert calculate_max_streak(games) == 3

    def test_max_streak_only_failures(self):
        assert calculate_max_streak([("2024-03-01", -1), ("2024-03-02", -1)]) == 0

    def test_malformed_date_breaks_streak(self):
        games = [("2024-03-01", 3), ("not-a-date", 3)]

        assert calculate_max_streak(games) == 1


class TestModuleIndependence:

    def test_aggregator_does_not_import_parser(self):
        source = Path(stats_service.__file__).read_text(encoding="utf-8")

        assert "parser_service" not in source


class TestBuildUserStats:

    def test_distribution_and_guess_counts(self):
        games = [("2024-03-01", 3), ("2024-03-02", 3), ("2024-03-03", -1), ("2024-03-04", 6)]

        stats = build_user_stats("1", games, "Alice", date(2024, 3, 5))

        assert stats.distribution == {"1": 0, "2": 0, "3": 2, "4": 0, "5": 0, "6": 1, "-1": 1}
        assert stats.guess_counts[3] == 2
        assert stats.guess_counts[6] == 1
        assert stats.win_rate == 0.75
        assert stats.average_score == 4.0


class TestBuildDailySummary:

    def test_summary_of_batch(self):
        batch = make_batch("2024-01-01", ("1", 3), ("2", -1), ("3", 5), wordle_number=1000)

        summary = build_daily_summary(batch)

        assert summary.wordle_number == 1000
        assert summary.total_players == 3
        assert summary.success_rate == pytest.approx(200 / 3)
        assert summary.average_score == 4.0
        assert [w.id for w in summary.winners] == ["1", "3"]
        assert summary.distribution == {"3": 1, "-1": 1, "5": 1}

    def test_empty_batch(self):
        summary = build_daily_summary(make_batch("2024-01-01"))

        assert summary.total_players == 0
        assert summary.success_rate == 0
        assert summary.average_score is None


class TestBuildLeaderboards:

    def test_top_five_and_order(self):
        stats = [
            build_user_stats(str(i), [("2024-01-01", (i % 6) + 1)], f"user{i}", date(2024, 1, 2))
            for i in range(7)
        ]

        boards = build_leaderboards(stats)

        assert len(boards.longest_streak) == 5
        assert [s.id for s in boards.best_average_score[:2]] == ["0", "6"]

    def test_ties_keep_input_order(self):
        stats = [
            build_user_stats("a", [("2024-01-01", 4)], "a", date(2024, 1, 2)),
            build_user_stats("b", [("2024-01-01", 4)], "b", date(2024, 1, 2)),
        ]

        boards = build_leaderboards(stats)

        assert [s.id for s in boards.best_win_rate] == ["a", "b"]

    def test_null_average_excluded(self):
        stats = [build_user_stats("a", [("2024-01-01", -1)], "a", date(2024, 1, 2))]

        boards = build_leaderboards(stats)

        assert boards.best_average_score == []
        assert [s.id for s in boards.longest_streak] == ["a"]


class TestWordleStatsService:

    @pytest.mark.asyncio
    async def test_aggregates_stored_batches(self, test_db):
        repo = WordleResultsRepository(test_db)
        await repo.add(make_batch("2024-01-01", ("1", 3)))
        await repo.add(make_batch("2024-01-02", ("1", 4)))

        service = WordleStatsService(test_db)
        stats = await service.get_aggregated_stats({"1": "Alice"}, today=date(2024, 1, 2))

        assert stats.daily_summary.date == "2024-01-02"
        assert stats.user_stats["1"].current_streak == 2
