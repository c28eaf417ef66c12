"""
TrackerService - Orquesta el flujo completo:

    leer mensajes -> parsear -> guardar -> agregar -> publicar reporte

Es la única pieza que junta Discord, Mongo, el parser y el agregador.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, NamedTuple, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from wordle_tracker.core.config import Settings
from wordle_tracker.models.stats import AggregatedStats
from wordle_tracker.models.wordle import GuildMember
from wordle_tracker.repositories.results_repository import WordleResultsRepository
from wordle_tracker.services.discord_service import DiscordClient
from wordle_tracker.services.parser_service import is_wordle_summary, parse_wordle_summary
from wordle_tracker.services.report_service import build_results_infographic
from wordle_tracker.services.stats_service import WordleStatsService


logger = logging.getLogger(__name__)


class ImportSummary(NamedTuple):
    """Resultado de una importación de mensajes"""

    fetched: int  # mensajes leídos del canal
    checked: int  # resúmenes de Wordle encontrados
    stored: int  # batches nuevos guardados


def build_name_map(members: Sequence[GuildMember]) -> dict[str, str]:
    """Discord ID -> nick (o username si no tiene nick)"""
    return {m.id: m.display_name for m in members}


def result_date_for(timestamp: datetime) -> str:
    """
    El resumen se publica a la mañana siguiente, así que corresponde al día anterior.

    Se calcula en UTC y se devuelve como YYYY-MM-DD.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    previous_day = timestamp.astimezone(timezone.utc) - timedelta(days=1)
    return previous_day.date().isoformat()


class WordleTracker:
    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        discord: DiscordClient,
        settings: Settings
    ):
        self.discord = discord
        self.settings = settings
        self.results_repo = WordleResultsRepository(db)
        self.stats_service = WordleStatsService(db)

    async def import_results(self, since: datetime) -> ImportSummary:
        """
        Lee los mensajes del canal desde `since`, parsea los resúmenes y los guarda.

        Un resumen que no parsea o que no se puede guardar no corta el resto.
        """
        messages = await self.discord.fetch_messages(self.settings.wordle_channel_id, since)
        members = await self.discord.fetch_guild_members(self.settings.guild_id)

        checked = 0
        stored = 0
        for message in messages:
            if not is_wordle_summary(message.content):
                continue

            checked += 1
            parsed = parse_wordle_summary(message.content, members)
            if parsed is None:
                continue

            if await self.results_repo.store_parsed_summary(result_date_for(message.timestamp), parsed):
                stored += 1

        logger.info("Imported Wordle results: %d stored out of %d summaries", stored, checked)
        return ImportSummary(fetched=len(messages), checked=checked, stored=stored)

    async def get_stats(self) -> AggregatedStats:
        """Agrega todo el historial usando los nombres actuales del servidor"""
        members = await self.discord.fetch_guild_members(self.settings.guild_id)
        return await self.stats_service.get_aggregated_stats(build_name_map(members))

    async def build_report(self) -> dict[str, Any]:
        return build_results_infographic(await self.get_stats())

    async def post_report(self) -> None:
        payload = await self.build_report()
        await self.discord.post_message(self.settings.wordle_channel_id, payload)

    async def track_wordle_results(self) -> None:
        """
        Corrida diaria: importa las últimas horas y publica el reporte.

        Cualquier error se loguea y la corrida termina sin publicar nada.
        """
        try:
            since = datetime.now(timezone.utc) - timedelta(hours=self.settings.fetch_window_hours)
            await self.import_results(since)
            await self.post_report()
        except Exception:
            logger.exception("Error in Wordle tracking workflow")
