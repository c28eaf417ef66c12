"""
/personalstats - Stats históricas de un jugador
"""

import logging
from typing import Any

from wordle_tracker.commands.base import (
    OPTION_USER,
    Command,
    CommandContext,
    CommandError,
    get_option,
    message_response,
    require_config,
)
from wordle_tracker.models.discord import CommandData, CommandOption
from wordle_tracker.services.report_service import build_personal_stats_embed
from wordle_tracker.services.tracker_service import WordleTracker


logger = logging.getLogger(__name__)


class PersonalStatsCommand(Command):
    data = CommandData(
        name="personalstats",
        description="Show all-time Wordle stats for a user",
        options=[
            CommandOption(
                name="user",
                description="The user to show stats for",
                type=OPTION_USER,
                required=True,
            )
        ],
    )
    usage = "/personalstats user:@someone"
    help_text = "Shows games played, win rate, average score, streaks and guess distribution for a user."

    async def execute(self, interaction: dict[str, Any], context: CommandContext) -> dict[str, Any]:
        user_id = get_option(interaction, "user")
        if not user_id:
            return message_response("Please specify a user.")

        try:
            discord = require_config(context, channel=False)
        except CommandError as e:
            return message_response(str(e))

        try:
            stats = await WordleTracker(context.db, discord, context.settings).get_stats()
        except Exception as e:
            logger.exception("Error fetching personal stats")
            return message_response(f"Error fetching personal stats: {e}")

        user_stats = stats.user_stats.get(str(user_id))
        if user_stats is None:
            return message_response(f"No Wordle stats found for <@{user_id}>.")

        return message_response(
            f"Here are the all-time Wordle stats for <@{user_id}>:",
            embeds=[build_personal_stats_embed(user_stats)],
        )
