"""
/initsetup - Importa el historial de resúmenes de Wordle desde una fecha
"""

import logging
from datetime import date, datetime, timezone
from typing import Any

from wordle_tracker.commands.base import (
    OPTION_STRING,
    Command,
    CommandContext,
    CommandError,
    get_option,
    message_response,
    require_config,
)
from wordle_tracker.models.discord import CommandData, CommandOption
from wordle_tracker.services.tracker_service import WordleTracker


logger = logging.getLogger(__name__)


def parse_start_date(value: Any) -> date:
    """YYYY-MM-DD -> date; CommandError si el formato es inválido"""
    if not isinstance(value, str):
        raise CommandError("Invalid date format. Please use YYYY-MM-DD.")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise CommandError("Invalid date format. Please use YYYY-MM-DD.")


class InitSetupCommand(Command):
    data = CommandData(
        name="initsetup",
        description="Import historical Wordle results from a start date",
        options=[
            CommandOption(
                name="date",
                description="Start date (YYYY-MM-DD)",
                type=OPTION_STRING,
                required=True,
            )
        ],
    )
    usage = "/initsetup date:YYYY-MM-DD"
    help_text = "Imports historical Wordle results posted since the given date."

    async def execute(self, interaction: dict[str, Any], context: CommandContext) -> dict[str, Any]:
        try:
            start = parse_start_date(get_option(interaction, "date"))
            discord = require_config(context)
        except CommandError as e:
            return message_response(str(e))

        since = datetime(start.year, start.month, start.day, tzinfo=timezone.utc)
        tracker = WordleTracker(context.db, discord, context.settings)

        try:
            summary = await tracker.import_results(since)
        except Exception as e:
            logger.exception("Error during historical import")
            return message_response(f"Error during historical import: {e}")

        if summary.fetched == 0:
            return message_response(f"No messages found in channel since {start.isoformat()}.")

        return message_response(
            f"Historical Wordle data import complete. {summary.stored} new result(s) stored "
            f"out of {summary.checked} Wordle summaries found since {start.isoformat()}."
        )
