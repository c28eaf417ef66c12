from .wordle import WordleResult, ParsedWordleSummary, GuildMember, StoredResult, ResultBatch
from .stats import UserStats, DailySummary, AllTimeLeaderboards, AggregatedStats
from .discord import DiscordMessage, CommandOption, CommandData

__all__ = [
    "WordleResult",
    "ParsedWordleSummary",
    "GuildMember",
    "StoredResult",
    "ResultBatch",
    "UserStats",
    "DailySummary",
    "AllTimeLeaderboards",
    "AggregatedStats",
    "DiscordMessage",
    "CommandOption",
    "CommandData",
]
