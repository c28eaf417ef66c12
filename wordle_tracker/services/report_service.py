"""
ReportService - Arma los payloads de Discord (embeds) a partir de las stats agregadas.

Funciones puras: reciben AggregatedStats / UserStats y devuelven dicts listos para
mandar como JSON a la API de Discord.
"""

from typing import Any, Callable, Optional, Sequence

from wordle_tracker.models.stats import AggregatedStats, DailySummary, UserStats
from wordle_tracker.models.wordle import StoredResult


MEDALS = ["🥇", "🥈", "🥉"]
BAR_LENGTH = 12
NOT_ENOUGH_DATA = "*Not enough data yet.*"
WORDLE_URL = "https://www.nytimes.com/games/wordle/index.html"

# Colores de embeds
COLOR_BLURPLE = 0x5865F2
COLOR_GREEN = 0x57F287
COLOR_YELLOW = 0xFEE75C
COLOR_RED = 0xED4245
COLOR_GREY = 0x95A5A6
COLOR_BLUE = 0x3498DB

# Tipos de componentes de mensaje
COMPONENT_ACTION_ROW = 1
COMPONENT_BUTTON = 2
BUTTON_STYLE_LINK = 5


# ============================================
# Utilidades de formato
# ============================================

def get_result_emoji(score: int) -> str:
    if score == -1:
        return "❌"
    if score == 1:
        return "🎯"
    if score <= 3:
        return "✅"
    if score <= 5:
        return "👍"
    if score == 6:
        return "😅"
    return "🤔"


def get_most_common_score(distribution: dict[str, int]) -> int:
    """Score 1-6 más frecuente (en empate gana el menor)"""
    most_common = 0
    max_count = -1
    for guess in range(1, 7):
        count = distribution.get(str(guess), 0)
        if count > max_count:
            max_count = count
            most_common = guess
    return most_common


def _bar(count: int, total: int) -> str:
    filled = round(count / total * BAR_LENGTH) if total > 0 else 0
    return "█" * filled + "░" * (BAR_LENGTH - filled)


def create_distribution_chart(distribution: dict[str, int], total_players: int) -> str:
    """Gráfico de barras en texto: una fila por intento y una para los fallos"""
    rows = []
    for guess in range(1, 7):
        count = distribution.get(str(guess), 0)
        rows.append(f"{guess}: {_bar(count, total_players)} {count}")

    fail_count = distribution.get("-1", 0)
    rows.append(f"F: {_bar(fail_count, total_players)} {fail_count}")

    return "```ansi\n" + "\n".join(rows) + "\n```"


def get_fun_fact(summary: DailySummary) -> str:
    if summary.distribution.get("1", 0) > 0:
        return "Someone got a hole-in-one yesterday! Incredible!"

    if summary.distribution.get("6", 0) > summary.total_players / 3:
        return "Yesterday was a nail-biter for many, with lots of 6/6 solves!"

    if summary.success_rate < 50:
        return "Oof! Yesterday's word was a real challenge for the group."

    fail_count = summary.distribution.get("-1", 0)
    if fail_count > 0:
        return f"There were {fail_count} failed attempts yesterday. Keep trying!"

    return f"The most common score yesterday was {get_most_common_score(summary.distribution)} guesses."


def _username(user_stats: dict[str, UserStats], result: StoredResult) -> str:
    stats = user_stats.get(result.id or "")
    return stats.username if stats else "Unknown"


def format_podium(winners: Sequence[StoredResult], user_stats: dict[str, UserStats]) -> str:
    lines = [
        f"{MEDALS[i]} **{_username(user_stats, r)}** ({r.score}/6)"
        for i, r in enumerate(winners[:3])
    ]
    return "\n".join(lines) or "*No successful solves today.*"


def format_daily_stats(summary: DailySummary) -> str:
    average = f"{summary.average_score:.2f}" if summary.average_score is not None else "N/A"
    return "\n".join([
        f"**Success Rate**: {summary.success_rate:.1f}%",
        f"**Avg. Score**: {average}",
        f"**Failed**: {summary.distribution.get('-1', 0)} player(s)",
    ])


def format_leaderboard_category(
    stats: Sequence[UserStats],
    value_of: Callable[[UserStats], Optional[float]],
    format_value: Callable[[float], str],
    descending: bool = True
) -> str:
    """
    Ranking con medallas que respeta empates.

    Para cada medalla se toma el mejor valor entre los jugadores que todavía
    no tienen medalla, y TODOS los que comparten ese valor van a esa medalla.
    La siguiente medalla va al siguiente valor distinto, no al siguiente puesto.
    """
    relevant = [s for s in stats if value_of(s) is not None]
    if not relevant:
        return NOT_ENOUGH_DATA

    sections = []
    placed: set[str] = set()

    for medal in MEDALS:
        remaining = [s for s in relevant if s.id not in placed]
        if not remaining:
            break

        values = [value_of(s) for s in remaining]
        top_value = max(values) if descending else min(values)
        tied = [s for s in remaining if value_of(s) == top_value]

        tie_suffix = f" ({len(tied)}-way tie)" if len(tied) > 1 else ""
        players = "\n".join(f"  • {s.username}" for s in tied)
        sections.append(f"{medal} **{format_value(top_value)}**{tie_suffix}\n{players}")

        placed.update(s.id for s in tied)

    return "\n\n".join(sections)


def format_most_solves_by_guess(all_stats: Sequence[UserStats]) -> str:
    lines = []
    for guess in range(1, 7):
        best = max((s.guess_counts.get(guess, 0) for s in all_stats), default=0)
        if best == 0:
            lines.append(f"**{guess}/6:** *No solves yet*")
            continue

        top_users = ", ".join(f"**{s.username}**" for s in all_stats if s.guess_counts.get(guess, 0) == best)
        plural = "" if best == 1 else "s"
        lines.append(f"**{guess}/6:** {top_users} ({best} time{plural})")

    return "\n".join(lines)


# ============================================
# Embeds
# ============================================

def build_daily_summary_embed(summary: DailySummary, user_stats: dict[str, UserStats]) -> dict[str, Any]:
    sorted_winners = sorted(summary.winners, key=lambda r: r.score)

    if summary.success_rate >= 75:
        color = COLOR_GREEN
    elif summary.success_rate >= 50:
        color = COLOR_YELLOW
    else:
        color = COLOR_RED

    description = f"A total of **{summary.total_players}** players competed yesterday."
    if sorted_winners and sorted_winners[0].id in user_stats:
        champion = sorted_winners[0]
        description += (
            f"\n\nCrowning yesterday's champion, **{user_stats[champion.id].username}**, "
            f"for solving it in **{champion.score}** guesses! 👑"
        )

    title = f"🎯 Wordle Report: {summary.date}"
    if summary.wordle_number:
        title += f" (#{summary.wordle_number})"

    return {
        "color": color,
        "title": title,
        "description": description,
        "fields": [
            {"name": "🏆 Yesterday's Podium", "value": format_podium(sorted_winners, user_stats), "inline": True},
            {"name": "📈 Yesterday's Statistics", "value": format_daily_stats(summary), "inline": True},
            {
                "name": "📊 Guess Distribution",
                "value": create_distribution_chart(summary.distribution, summary.total_players),
                "inline": False,
            },
        ],
        "footer": {"text": f"Fun Fact: {get_fun_fact(summary)}"},
        "timestamp": f"{summary.date}T00:00:00.000Z",
    }


def build_full_results_embed(summary: DailySummary, user_stats: dict[str, UserStats]) -> dict[str, Any]:
    # Primero los que resolvieron (por score), los fallos al final
    sorted_results = sorted(summary.results, key=lambda r: 99 if r.score == -1 else r.score)

    lines = []
    for r in sorted_results:
        score_text = "Failed" if r.score == -1 else f"{r.score}/6"
        lines.append(f"{get_result_emoji(r.score)} **{_username(user_stats, r)}** - {score_text}")

    return {
        "color": COLOR_GREY,
        "title": "📋 Yesterday's Full Scoreboard",
        "description": "\n".join(lines) or "No results to display.",
    }


def build_leaderboard_embed(all_stats: Sequence[UserStats]) -> dict[str, Any]:
    return {
        "color": COLOR_BLUE,
        "title": "📜 All-Time Server Leaderboards",
        "description": "Ranking the server's all-time greatest Wordle players.",
        "fields": [
            {
                "name": "🔥 Longest Max Streak",
                "value": format_leaderboard_category(all_stats, lambda s: s.max_streak, lambda v: f"{v} days"),
                "inline": False,
            },
            {
                "name": "⭐ Best Win Rate",
                "value": format_leaderboard_category(all_stats, lambda s: s.win_rate, lambda v: f"{v * 100:.1f}%"),
                "inline": False,
            },
            {
                "name": "🧠 Best Average Score",
                "value": format_leaderboard_category(
                    all_stats, lambda s: s.average_score, lambda v: f"{v:.2f}", descending=False
                ),
                "inline": False,
            },
            {
                "name": "🏅 Most Solves by Guess Count",
                "value": format_most_solves_by_guess(all_stats),
                "inline": False,
            },
        ],
        "footer": {"text": "Keep playing to climb the ranks!"},
    }


def build_results_infographic(stats: AggregatedStats) -> dict[str, Any]:
    """Payload completo del reporte diario"""
    summary = stats.daily_summary

    if summary is None or summary.total_players == 0:
        return {
            "embeds": [{
                "title": "😴 No Wordle Results Yesterday",
                "description": "It looks like no one submitted their Wordle results for yesterday. "
                               "Be the first next time!",
                "color": COLOR_BLURPLE,
            }]
        }

    user_stats = stats.user_stats

    return {
        "content": f"**Wordle Report is in!** Here's the breakdown for **yesterday ({summary.date})**.",
        "embeds": [
            build_daily_summary_embed(summary, user_stats),
            build_full_results_embed(summary, user_stats),
            build_leaderboard_embed(list(user_stats.values())),
        ],
        "components": [{
            "type": COMPONENT_ACTION_ROW,
            "components": [{
                "type": COMPONENT_BUTTON,
                "style": BUTTON_STYLE_LINK,
                "label": "Play Today's Wordle",
                "url": WORDLE_URL,
                "emoji": {"name": "🔗"},
            }],
        }],
    }


def build_personal_stats_embed(stats: UserStats) -> dict[str, Any]:
    average = f"{stats.average_score:.2f}" if stats.average_score is not None else "N/A"
    distribution = " | ".join(f"{k}: {v}" for k, v in stats.distribution.items())

    return {
        "color": COLOR_BLURPLE,
        "title": f"Wordle Stats for {stats.username}",
        "fields": [
            {"name": "Games Played", "value": str(stats.games_played), "inline": True},
            {"name": "Games Solved", "value": str(stats.games_solved), "inline": True},
            {"name": "Win Rate", "value": f"{stats.win_rate * 100:.1f}%", "inline": True},
            {"name": "Average Score", "value": average, "inline": True},
            {"name": "Current Streak", "value": str(stats.current_streak), "inline": True},
            {"name": "Max Streak", "value": str(stats.max_streak), "inline": True},
            {"name": "Guess Distribution", "value": distribution, "inline": False},
        ],
        "footer": {"text": "Keep playing to improve your stats!"},
    }


def build_help_embed(entries: Sequence[tuple[str, str]]) -> dict[str, Any]:
    """Embed de ayuda: (uso, explicación) por comando"""
    return {
        "color": COLOR_GREEN,
        "title": "Wordle Bot Help & Commands Guide",
        "description": "Here are the available commands and how to use them:",
        "fields": [{"name": usage, "value": text} for usage, text in entries],
        "footer": {"text": "Need more help? Contact the server admin or bot maintainer."},
    }
