"""
Base de los slash commands

Cada comando define su propia metadata (CommandData, texto de ayuda) y se
ejecuta de forma independiente. El controlador de interacciones los busca por nombre.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from wordle_tracker.core.config import Settings
from wordle_tracker.models.discord import CommandData
from wordle_tracker.services.discord_service import DiscordClient


# Tipos de respuesta de interacción
CHANNEL_MESSAGE_WITH_SOURCE = 4

# Tipos de opciones de comandos
OPTION_STRING = 3
OPTION_USER = 6


class CommandError(Exception):
    """Error de uso del comando; el mensaje se le muestra al usuario"""
    pass


class CommandContext:
    """Dependencias que recibe un comando al ejecutarse"""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        settings: Settings,
        discord: Optional[DiscordClient] = None,
        commands: Sequence["Command"] = ()
    ):
        self.db = db
        self.settings = settings
        self.discord = discord
        self.commands = commands


class Command(ABC):
    data: CommandData
    usage: str  # cómo se invoca, para /help
    help_text: str

    @property
    def name(self) -> str:
        return self.data.name

    @abstractmethod
    async def execute(self, interaction: dict[str, Any], context: CommandContext) -> dict[str, Any]:
        """Ejecuta el comando y retorna la respuesta de interacción"""


def message_response(
    content: Optional[str] = None,
    embeds: Optional[list[dict[str, Any]]] = None
) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if content is not None:
        data["content"] = content
    if embeds:
        data["embeds"] = embeds
    return {"type": CHANNEL_MESSAGE_WITH_SOURCE, "data": data}


def get_option(interaction: dict[str, Any], name: str) -> Optional[Any]:
    options = (interaction.get("data") or {}).get("options") or []
    for option in options:
        if option.get("name") == name:
            return option.get("value")
    return None


def require_config(context: CommandContext, channel: bool = True, guild: bool = True) -> DiscordClient:
    """Verifica que el comando tenga canal/servidor/token; lanza CommandError si falta algo"""
    missing = []
    if channel and not context.settings.wordle_channel_id:
        missing.append("channel")
    if guild and not context.settings.guild_id:
        missing.append("guild")
    if context.discord is None:
        missing.append("bot token")

    if missing:
        raise CommandError(f"Missing: {', '.join(missing)}.")

    return context.discord
