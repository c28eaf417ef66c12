from typing import Optional

from wordle_tracker.commands.base import Command, CommandContext, CommandError, message_response
from wordle_tracker.commands.help import HelpCommand
from wordle_tracker.commands.init_setup import InitSetupCommand
from wordle_tracker.commands.personal_stats import PersonalStatsCommand
from wordle_tracker.commands.print_results import PrintResultsCommand


COMMANDS: list[Command] = [
    InitSetupCommand(),
    PrintResultsCommand(),
    PersonalStatsCommand(),
    HelpCommand(),
]


def get_command(name: str) -> Optional[Command]:
    for command in COMMANDS:
        if command.name == name:
            return command
    return None


def command_definitions() -> list[dict]:
    """Definiciones para registrar en Discord"""
    return [c.data.model_dump(exclude_none=True) for c in COMMANDS]


__all__ = [
    "COMMANDS",
    "Command",
    "CommandContext",
    "CommandError",
    "HelpCommand",
    "InitSetupCommand",
    "PersonalStatsCommand",
    "PrintResultsCommand",
    "command_definitions",
    "get_command",
    "message_response",
]
