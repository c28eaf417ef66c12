"""
Controlador de Admin - Registro de slash commands en Discord
"""

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request, status

from wordle_tracker.commands import command_definitions
from wordle_tracker.core.dependencies import AppSettings
from wordle_tracker.services.discord_service import DiscordAPIError, DiscordClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


async def _password_from_body(request: Request) -> Optional[str]:
    try:
        body = await request.json()
    except ValueError:
        return None
    password = body.get("password") if isinstance(body, dict) else None
    return password if isinstance(password, str) else None


def _is_valid_password(provided: Optional[str], expected: Optional[str]) -> bool:
    if not provided or not expected:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())


# ============================================
# 📌 REGISTER COMMANDS
# ============================================

@router.post("/register-commands")
async def register_commands(
    request: Request,
    settings: AppSettings,
    password: Optional[str] = None,
    x_admin_password: Optional[str] = Header(None)
):
    """
    Registra (PUT) todos los slash commands en la aplicación de Discord.

    La password puede venir por query (?password=), header x-admin-password
    o body JSON {"password": "..."}.
    """
    provided = password or x_admin_password or await _password_from_body(request)

    if not _is_valid_password(provided, settings.admin_password):
        logger.warning("Rejected command registration: invalid admin password")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden"
        )

    if not settings.discord_bot_token or not settings.discord_application_id:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Missing DISCORD_BOT_TOKEN or DISCORD_APPLICATION_ID"
        )

    definitions = command_definitions()

    try:
        async with DiscordClient(settings.discord_bot_token) as discord:
            registered = await discord.register_commands(settings.discord_application_id, definitions)
    except DiscordAPIError as e:
        logger.error("Error registering commands: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error registering commands: {e.body}"
        )

    logger.info("Registered %d slash commands", len(definitions))
    return {
        "message": "Commands registered successfully",
        "commands": [c.get("name") for c in registered] if isinstance(registered, list) else [],
    }
