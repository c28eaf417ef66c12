"""
/printresults - Publica el infográfico con los datos actuales
"""

import logging
from typing import Any

from wordle_tracker.commands.base import Command, CommandContext, CommandError, message_response, require_config
from wordle_tracker.models.discord import CommandData
from wordle_tracker.services.tracker_service import WordleTracker


logger = logging.getLogger(__name__)


class PrintResultsCommand(Command):
    data = CommandData(
        name="printresults",
        description="Post the Wordle infographic using the current data",
    )
    usage = "/printresults"
    help_text = "Posts the Wordle results infographic for today to the configured channel."

    async def execute(self, interaction: dict[str, Any], context: CommandContext) -> dict[str, Any]:
        try:
            discord = require_config(context)
        except CommandError as e:
            return message_response(str(e))

        try:
            await WordleTracker(context.db, discord, context.settings).post_report()
        except Exception as e:
            logger.exception("Error posting Wordle infographic")
            return message_response(f"Error posting Wordle infographic: {e}")

        return message_response("Wordle infographic posted for today based on current data.")
