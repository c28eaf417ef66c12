from typing import Any

from wordle_tracker.commands.base import Command, CommandContext, message_response
from wordle_tracker.models.discord import CommandData
from wordle_tracker.services.report_service import build_help_embed


class HelpCommand(Command):
    data = CommandData(
        name="help",
        description="Show the list of Wordle bot commands",
    )
    usage = "/help"
    help_text = "Shows this help message."

    async def execute(self, interaction: dict[str, Any], context: CommandContext) -> dict[str, Any]:
        entries = [(c.usage, c.help_text) for c in context.commands]
        return message_response(embeds=[build_help_embed(entries)])
