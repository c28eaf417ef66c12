from typing import Optional
from pydantic import BaseModel, Field

from .wordle import StoredResult


def empty_distribution() -> dict[str, int]:
    return {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0, "6": 0, "-1": 0}


def empty_guess_counts() -> dict[int, int]:
    return {guess: 0 for guess in range(1, 7)}


class UserStats(BaseModel):
    """Estadísticas históricas de un jugador (se recalculan siempre desde cero)"""

    id: str
    username: str

    games_played: int
    games_solved: int
    win_rate: float  # fracción 0-1
    average_score: Optional[float] = None  # None si nunca resolvió

    current_streak: int
    max_streak: int

    distribution: dict[str, int]  # "1".."6" y "-1" para fallos
    guess_counts: dict[int, int]  # 1..6 -> veces resuelto en ese intento


class DailySummary(BaseModel):
    """Resumen del día más reciente guardado"""

    date: str
    wordle_number: Optional[int] = None

    total_players: int
    success_rate: float  # porcentaje 0-100
    average_score: Optional[float] = None

    distribution: dict[str, int]
    winners: list[StoredResult]
    results: list[StoredResult]


class AllTimeLeaderboards(BaseModel):
    longest_streak: list[UserStats] = []
    best_win_rate: list[UserStats] = []
    best_average_score: list[UserStats] = []


class AggregatedStats(BaseModel):
    """Lo que devuelve el agregador: resumen diario + stats por usuario + leaderboards"""

    daily_summary: Optional[DailySummary] = None
    user_stats: dict[str, UserStats] = {}
    all_time_leaderboards: AllTimeLeaderboards = Field(default_factory=AllTimeLeaderboards)
