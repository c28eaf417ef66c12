"""
Controlador de interacciones - Endpoint que Discord llama para los slash commands
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from wordle_tracker.commands import COMMANDS, CommandContext, get_command
from wordle_tracker.core.dependencies import AppSettings, Database, Discord


logger = logging.getLogger(__name__)

router = APIRouter(tags=["interactions"])

# Tipos de interacción de Discord
PING = 1
APPLICATION_COMMAND = 2

PONG = 1


@router.post("/interactions")
async def handle_interaction(
    request: Request,
    db: Database,
    settings: AppSettings,
    discord: Discord
):
    """
    Recibe una interacción de Discord.

    - PING -> PONG
    - APPLICATION_COMMAND -> se busca el comando por nombre y se ejecuta
    """
    try:
        interaction = await request.json()
    except ValueError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid JSON body"}
        )

    interaction_type = interaction.get("type") if isinstance(interaction, dict) else None

    if interaction_type == PING:
        return {"type": PONG}

    if interaction_type != APPLICATION_COMMAND:
        logger.warning("Unknown interaction type: %s", interaction_type)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Unknown interaction type"}
        )

    name = (interaction.get("data") or {}).get("name")
    command = get_command(name) if name else None
    if command is None:
        logger.warning("Unknown command: %s", name)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Unknown command"}
        )

    context = CommandContext(db=db, settings=settings, discord=discord, commands=COMMANDS)

    try:
        return await command.execute(interaction, context)
    except Exception:
        logger.exception("Error executing command %s", name)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Command execution error"}
        )
