"""
Cliente de la API REST de Discord (v10)

Solo lo que necesita el tracker:
- Leer mensajes de un canal hacia atrás hasta una fecha
- Leer los miembros del servidor (para resolver '@username')
- Publicar un mensaje (el infográfico)
- Registrar los slash commands

Las lecturas paginadas toleran rate limits (429) con backoff exponencial y,
ante cualquier otro error, devuelven lo que ya se había acumulado.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from wordle_tracker.models.discord import DiscordMessage
from wordle_tracker.models.wordle import GuildMember


logger = logging.getLogger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"

MESSAGE_FETCH_LIMIT = 100
GUILD_MEMBER_FETCH_LIMIT = 1000

INITIAL_BACKOFF = 1.0  # segundos
MAX_BACKOFF = 30.0
MAX_RATE_LIMIT_RETRIES = 5


class DiscordAPIError(Exception):
    """Respuesta no-2xx de Discord en una operación que no tolera fallos"""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Discord API error {status_code}: {body}")


class DiscordClient:
    def __init__(
        self,
        token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        max_retries: int = MAX_RATE_LIMIT_RETRIES
    ):
        self.token = token
        self.max_retries = max_retries
        self._client = http_client or httpx.AsyncClient(base_url=DISCORD_API_BASE, timeout=30.0)
        self._headers = {"Authorization": f"Bot {token}"}

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self) -> "DiscordClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    # ============================================
    # Lecturas paginadas
    # ============================================

    async def _get_page(self, url: str, params: dict[str, Any]) -> Optional[list[dict]]:
        """
        GET de una página con reintentos ante 429.

        Retorna None si hay que cortar la paginación (error o reintentos agotados).
        """
        backoff = INITIAL_BACKOFF
        attempts = 0

        while True:
            try:
                response = await self._client.get(url, params=params, headers=self._headers)
            except httpx.HTTPError as e:
                logger.error("Error fetching %s: %s", url, e)
                return None

            if response.status_code == 429:
                attempts += 1
                if attempts > self.max_retries:
                    logger.error("Rate limited on %s, giving up after %d retries", url, self.max_retries)
                    return None

                retry_after = _retry_after_seconds(response) or backoff
                logger.warning("Rate limited on %s. Retrying after %.2fs.", url, retry_after)
                await asyncio.sleep(retry_after)
                backoff = min(backoff * 2, MAX_BACKOFF)
                continue

            if not response.is_success:
                logger.error("Non-2xx response (%d) for %s", response.status_code, url)
                return None

            try:
                data = response.json()
            except ValueError:
                logger.error("Invalid JSON in response for %s", url)
                return None

            return data if isinstance(data, list) else None

    async def fetch_messages(self, channel_id: str, since: datetime) -> list[DiscordMessage]:
        """
        Todos los mensajes del canal posteriores a `since` (más nuevo primero).

        Discord devuelve de a 100 mensajes; se pagina con `before`.
        """
        url = f"/channels/{channel_id}/messages"
        messages: list[DiscordMessage] = []
        before: Optional[str] = None

        while True:
            params: dict[str, Any] = {"limit": MESSAGE_FETCH_LIMIT}
            if before:
                params["before"] = before

            page = await self._get_page(url, params)
            if not page:
                break

            reached_since = False
            for raw in page:
                try:
                    message = DiscordMessage(**raw)
                except ValidationError:
                    logger.warning("Skipping malformed message %s", raw.get("id"))
                    continue
                if message.timestamp < since:
                    reached_since = True
                    break
                messages.append(message)

            if reached_since or len(page) < MESSAGE_FETCH_LIMIT:
                break

            before = page[-1].get("id") if isinstance(page[-1], dict) else None
            if not before:
                break

        logger.info("Fetched %d messages from channel %s", len(messages), channel_id)
        return messages

    async def fetch_guild_members(self, guild_id: str) -> list[GuildMember]:
        """Todos los miembros del servidor, paginando con `after`"""
        url = f"/guilds/{guild_id}/members"
        members: list[GuildMember] = []
        after: Optional[str] = None

        while True:
            params: dict[str, Any] = {"limit": GUILD_MEMBER_FETCH_LIMIT}
            if after:
                params["after"] = after

            page = await self._get_page(url, params)
            if not page:
                break

            for raw in page:
                try:
                    member = GuildMember.from_api(raw)
                except (ValidationError, AttributeError):
                    member = None

                if member is None or not member.id:
                    logger.warning("Skipping malformed guild member %r", raw)
                    continue
                members.append(member)

            if len(page) < GUILD_MEMBER_FETCH_LIMIT:
                break

            after = _member_id(page[-1])
            if not after:
                break

        return members

    # ============================================
    # Escrituras
    # ============================================

    async def post_message(self, channel_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self._client.post(
            f"/channels/{channel_id}/messages",
            json=payload,
            headers=self._headers,
        )

        if not response.is_success:
            logger.error(
                "Non-2xx response (%d) posting to channel %s: %s",
                response.status_code, channel_id, response.text
            )
            raise DiscordAPIError(response.status_code, response.text)

        logger.info("Successfully posted message to channel %s", channel_id)
        return response.json() if response.content else {}

    async def register_commands(
        self,
        application_id: str,
        definitions: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """PUT de la lista completa de comandos (idempotente: reemplaza los existentes)"""
        response = await self._client.put(
            f"/applications/{application_id}/commands",
            json=definitions,
            headers=self._headers,
        )

        if not response.is_success:
            raise DiscordAPIError(response.status_code, response.text)

        return response.json()


def _retry_after_seconds(response: httpx.Response) -> Optional[float]:
    try:
        data = response.json()
    except ValueError:
        return None
    retry_after = data.get("retry_after") if isinstance(data, dict) else None
    return float(retry_after) if retry_after else None


def _member_id(raw: Any) -> Optional[str]:
    user = raw.get("user") if isinstance(raw, dict) else None
    user_id = user.get("id") if isinstance(user, dict) else None
    return str(user_id) if user_id else None
