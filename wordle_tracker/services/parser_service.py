"""
ParserService - Convierte el resumen diario de Wordle en resultados tipados.

El bot de Wordle publica un mensaje como:

    Your group is on a 12 day streak! 🔥 Here are yesterday's results:
    👑 3/6: <@123> @Alice
    4/6: <@456>
    X/6: @bob
    3 solved and 1 unsolved games of Wordle

Funciones puras: no hay I/O, solo logging.
"""

import logging
import re
from typing import Optional, Sequence

from wordle_tracker.models.wordle import FAIL_SCORE, GuildMember, ParsedWordleSummary, WordleResult


logger = logging.getLogger(__name__)

FAIL_MARKER = "X"

STREAK_PATTERN = re.compile(r"on a (\d+) day streak")
RESULT_LINE_PATTERN = re.compile(r"^(?:\U0001F451 )?([X1-6])/6: (.+)$")
USER_SPLIT_PATTERN = re.compile(r" (?=@|<@)")
MENTION_PATTERN = re.compile(r"^<@!?([0-9]+)>$")
SOLVED_PATTERN = re.compile(r"(\d+) solved and (\d+) unsolved games of Wordle")


def is_wordle_summary(content: str) -> bool:
    """Heurística barata para descartar mensajes que no son resúmenes"""
    return "day streak" in content and "Wordle" in content


def parse_wordle_summary(
    content: str,
    guild_members: Sequence[GuildMember]
) -> Optional[ParsedWordleSummary]:
    """
    Parsea un resumen de Wordle.

    Retorna None si falta la racha o no hay ninguna línea de resultados.
    Nunca lanza excepciones: cualquier error se loguea y se trata como fallo.
    """
    try:
        lines = content.split("\n")
        streak = _parse_streak(lines[0])
        results = _parse_results(lines, guild_members)
        solved, unsolved = _parse_solved_unsolved(lines)

        if streak is not None and results:
            return ParsedWordleSummary(
                streak=streak,
                results=results,
                solved=solved,
                unsolved=unsolved,
            )

        logger.warning("Failed to parse Wordle summary. Content: %r", content)
        return None
    except Exception:
        logger.exception("Error parsing Wordle summary. Content: %r", content)
        return None


def resolve_username(
    username: str,
    guild_members: Sequence[GuildMember]
) -> Optional[str]:
    """
    Busca un '@username' en el roster (case-insensitive, username o nick).

    Si hay varios matches se usa el primero en orden del roster.
    """
    lower_username = username.lower()
    matches = [
        m for m in guild_members
        if m.username.lower() == lower_username
        or (m.nick and m.nick.lower() == lower_username)
    ]

    if not matches:
        logger.warning("Username '@%s' not found in guild members.", username)
        return None

    if len(matches) > 1:
        logger.warning(
            "Ambiguous username match for '@%s': %d users found, using %s.",
            username, len(matches), matches[0].id
        )

    return matches[0].id


# ============================================
# Helpers privados
# ============================================

def _parse_streak(line: str) -> Optional[int]:
    match = STREAK_PATTERN.search(line)
    return int(match.group(1)) if match else None


def _decode_score(token: str) -> int:
    if token == FAIL_MARKER:
        return FAIL_SCORE
    return int(token)


def _parse_results(
    lines: Sequence[str],
    guild_members: Sequence[GuildMember]
) -> list[WordleResult]:
    results: list[WordleResult] = []

    for line in lines:
        match = RESULT_LINE_PATTERN.match(line)
        if not match:
            continue

        score = _decode_score(match.group(1))
        user_string = match.group(2).strip()

        # Varios usuarios pueden compartir la misma línea ("3/6: @Alice <@42>")
        for part in USER_SPLIT_PATTERN.split(user_string):
            token = part.strip()
            if not token:
                continue

            mention = MENTION_PATTERN.match(token)
            if mention:
                results.append(WordleResult(id=mention.group(1), score=score))
            elif token.startswith("@"):
                username = token[1:]
                results.append(WordleResult(
                    id=resolve_username(username, guild_members),
                    username=username,
                    score=score,
                ))
            # Cualquier otra cosa no es una mención y se ignora

    return results


def _parse_solved_unsolved(lines: Sequence[str]) -> tuple[Optional[int], Optional[int]]:
    solved: Optional[int] = None
    unsolved: Optional[int] = None

    for line in lines:
        match = SOLVED_PATTERN.search(line)
        if match:
            solved = int(match.group(1))
            unsolved = int(match.group(2))

    return solved, unsolved
