"""
Dependencies de FastAPI para inyección de BD, configuración y cliente de Discord
"""

from typing import AsyncIterator, Annotated, Optional

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from wordle_tracker.core.config import Settings, get_settings
from wordle_tracker.database import get_database
from wordle_tracker.services.discord_service import DiscordClient


async def get_discord_client(
    settings: Annotated[Settings, Depends(get_settings)]
) -> AsyncIterator[Optional[DiscordClient]]:
    """
    Cliente de Discord por request (None si no hay token configurado).

    Se cierra al terminar el request.
    """
    if not settings.discord_bot_token:
        yield None
        return

    async with DiscordClient(settings.discord_bot_token) as client:
        yield client


# Alias de tipos para que se vea más limpio en los endpoints
Database = Annotated[AsyncIOMotorDatabase, Depends(get_database)]
AppSettings = Annotated[Settings, Depends(get_settings)]
Discord = Annotated[Optional[DiscordClient], Depends(get_discord_client)]
