"""
StatsService - Calcula estadísticas de Wordle a partir de todo el historial.

Todo se recalcula desde cero en cada llamada (O(historial total)).
No hay estado incremental: los batches guardados son la única fuente de verdad.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from wordle_tracker.models.stats import (
    AggregatedStats,
    AllTimeLeaderboards,
    DailySummary,
    UserStats,
    empty_distribution,
    empty_guess_counts,
)
from wordle_tracker.models.wordle import FAIL_SCORE, ResultBatch
from wordle_tracker.repositories.results_repository import WordleResultsRepository


LEADERBOARD_SIZE = 5


def _day_gap(earlier: str, later: str) -> Optional[int]:
    try:
        return (date.fromisoformat(later) - date.fromisoformat(earlier)).days
    except ValueError:
        # Fecha mal formada: se trata como hueco y corta la racha
        return None


def _fallback_name(user_id: str) -> str:
    return f"User...{user_id[-4:]}"


def calculate_current_streak(games: Sequence[tuple[str, int]], today: date) -> int:
    """
    Racha actual: solo cuenta si la última partida fue resuelta hoy o ayer.

    `games` tiene que venir ordenado cronológicamente como (fecha, score).
    """
    if not games:
        return 0

    last_date, last_score = games[-1]
    anchors = {today.isoformat(), (today - timedelta(days=1)).isoformat()}
    if last_score == FAIL_SCORE or last_date not in anchors:
        return 0

    streak = 1
    for i in range(len(games) - 2, -1, -1):
        prev_date, prev_score = games[i]
        if prev_score != FAIL_SCORE and _day_gap(prev_date, games[i + 1][0]) == 1:
            streak += 1
        else:
            break

    return streak


def calculate_max_streak(games: Sequence[tuple[str, int]]) -> int:
    max_streak = 0
    running = 0

    for i, (game_date, score) in enumerate(games):
        if score == FAIL_SCORE:
            running = 0
        elif i == 0:
            running = 1
        elif _day_gap(games[i - 1][0], game_date) == 1:
            running += 1
        else:
            running = 1

        max_streak = max(max_streak, running)

    return max_streak


def build_user_stats(
    user_id: str,
    games: Sequence[tuple[str, int]],
    username: Optional[str],
    today: date
) -> UserStats:
    """Stats de un jugador. `games` ya ordenado por fecha."""
    solved_scores = [score for _, score in games if score != FAIL_SCORE]

    distribution = empty_distribution()
    guess_counts = empty_guess_counts()
    for score in solved_scores:
        if score in guess_counts:
            distribution[str(score)] += 1
            guess_counts[score] += 1
    distribution["-1"] = len(games) - len(solved_scores)

    games_played = len(games)

    return UserStats(
        id=user_id,
        username=username or _fallback_name(user_id),
        games_played=games_played,
        games_solved=len(solved_scores),
        win_rate=len(solved_scores) / games_played if games_played else 0.0,
        average_score=sum(solved_scores) / len(solved_scores) if solved_scores else None,
        current_streak=calculate_current_streak(games, today),
        max_streak=calculate_max_streak(games),
        distribution=distribution,
        guess_counts=guess_counts,
    )


def build_daily_summary(batch: ResultBatch) -> DailySummary:
    results = batch.results
    winners = [r for r in results if r.score != FAIL_SCORE]

    distribution: dict[str, int] = {}
    for r in results:
        key = "-1" if r.score == FAIL_SCORE else str(r.score)
        distribution[key] = distribution.get(key, 0) + 1

    return DailySummary(
        date=batch.date,
        wordle_number=batch.wordle_number,
        total_players=len(results),
        success_rate=len(winners) / len(results) * 100 if results else 0.0,
        average_score=sum(r.score for r in winners) / len(winners) if winners else None,
        distribution=distribution,
        winners=winners,
        results=results,
    )


def build_leaderboards(stats: Iterable[UserStats]) -> AllTimeLeaderboards:
    """Top 5 por categoría. sorted() es estable: los empates mantienen el orden de entrada."""
    qualified = [s for s in stats if s.games_played > 0]

    return AllTimeLeaderboards(
        longest_streak=sorted(qualified, key=lambda s: s.max_streak, reverse=True)[:LEADERBOARD_SIZE],
        best_win_rate=sorted(qualified, key=lambda s: s.win_rate, reverse=True)[:LEADERBOARD_SIZE],
        best_average_score=sorted(
            (s for s in qualified if s.average_score is not None),
            key=lambda s: s.average_score
        )[:LEADERBOARD_SIZE],
    )


def aggregate_wordle_stats(
    batches: Sequence[ResultBatch],
    user_id_to_name: dict[str, str],
    today: Optional[date] = None
) -> AggregatedStats:
    """
    Agrega todos los batches en stats diarias + históricas.

    Args:
        batches: Todos los batches guardados, en cualquier orden
        user_id_to_name: Map de Discord ID -> nombre para mostrar
        today: Fecha de referencia para la racha actual (default: hoy en UTC)

    Returns:
        AggregatedStats (vacío pero bien formado si no hay batches)
    """
    if not batches:
        return AggregatedStats()

    if today is None:
        today = datetime.now(timezone.utc).date()

    # Partidas por usuario: [(fecha, score), ...]
    games_by_user: dict[str, list[tuple[str, int]]] = defaultdict(list)
    latest_by_date: dict[str, ResultBatch] = {}

    for batch in batches:
        # Si hay varios batches para la misma fecha, el último gana para el resumen diario
        latest_by_date[batch.date] = batch
        for result in batch.results:
            if result.id is None:
                continue
            games_by_user[result.id].append((batch.date, result.score))

    user_stats: dict[str, UserStats] = {}
    for user_id, games in games_by_user.items():
        games.sort(key=lambda g: g[0])
        user_stats[user_id] = build_user_stats(user_id, games, user_id_to_name.get(user_id), today)

    most_recent_date = max(latest_by_date)

    return AggregatedStats(
        daily_summary=build_daily_summary(latest_by_date[most_recent_date]),
        user_stats=user_stats,
        all_time_leaderboards=build_leaderboards(user_stats.values()),
    )


class WordleStatsService:
    """Carga el historial desde Mongo y delega en aggregate_wordle_stats()"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.results_repo = WordleResultsRepository(db)

    async def get_aggregated_stats(
        self,
        user_id_to_name: dict[str, str],
        today: Optional[date] = None
    ) -> AggregatedStats:
        batches = await self.results_repo.get_all()
        return aggregate_wordle_stats(batches, user_id_to_name, today)
