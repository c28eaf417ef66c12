"""
Unit tests for the slash commands
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from wordle_tracker.commands import COMMANDS, CommandContext, command_definitions, get_command
from wordle_tracker.commands.help import HelpCommand
from wordle_tracker.commands.init_setup import InitSetupCommand
from wordle_tracker.commands.personal_stats import PersonalStatsCommand
from wordle_tracker.commands.print_results import PrintResultsCommand
from wordle_tracker.core.config import Settings
from wordle_tracker.models.wordle import ResultBatch, StoredResult
from wordle_tracker.repositories.results_repository import WordleResultsRepository
from wordle_tracker.services.discord_service import DiscordClient
from wordle_tracker.services.tracker_service import ImportSummary


def command_interaction(name, **options):
    return {
        "type": 2,
        "data": {
            "name": name,
            "options": [{"name": k, "value": v} for k, v in options.items()],
        },
    }


@pytest.fixture
def settings():
    return Settings(
        mongodb_uri="mongodb://localhost:27017",
        wordle_channel_id="chan",
        guild_id="guild",
        _env_file=None,
    )


@pytest.fixture
def discord(guild_members):
    client = AsyncMock(spec=DiscordClient)
    client.fetch_guild_members.return_value = guild_members
    client.fetch_messages.return_value = []
    return client


@pytest.fixture
def context(test_db, settings, discord):
    return CommandContext(db=test_db, settings=settings, discord=discord, commands=COMMANDS)


class TestRegistry:

    def test_get_command(self):
        assert isinstance(get_command("initsetup"), InitSetupCommand)
        assert get_command("nope") is None

    def test_command_definitions(self):
        definitions = {d["name"]: d for d in command_definitions()}

        assert set(definitions) == {"initsetup", "printresults", "personalstats", "help"}
        assert definitions["initsetup"]["options"][0] == {
            "name": "date",
            "description": "Start date (YYYY-MM-DD)",
            "type": 3,
            "required": True,
        }
        assert definitions["personalstats"]["options"][0]["type"] == 6
        assert definitions["help"]["options"] == []


class TestInitSetupCommand:

    @pytest.mark.asyncio
    async def test_invalid_date(self, context):
        response = await InitSetupCommand().execute(command_interaction("initsetup", date="01/02/2024"), context)

        assert response == {"type": 4, "data": {"content": "Invalid date format. Please use YYYY-MM-DD."}}

    @pytest.mark.asyncio
    async def test_missing_configuration(self, test_db):
        context = CommandContext(
            db=test_db,
            settings=Settings(mongodb_uri="mongodb://localhost:27017", _env_file=None),
            discord=None,
        )

        response = await InitSetupCommand().execute(command_interaction("initsetup", date="2024-01-01"), context)

        assert response["data"]["content"].startswith("Missing: channel, guild, bot token")

    @pytest.mark.asyncio
    async def test_import_summary_reply(self, context):
        with patch(
            "wordle_tracker.commands.init_setup.WordleTracker.import_results",
            AsyncMock(return_value=ImportSummary(fetched=40, checked=3, stored=2)),
        ) as import_results:
            response = await InitSetupCommand().execute(command_interaction("initsetup", date="2024-01-01"), context)

        import_results.assert_awaited_once_with(datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert response["data"]["content"] == (
            "Historical Wordle data import complete. 2 new result(s) stored "
            "out of 3 Wordle summaries found since 2024-01-01."
        )

    @pytest.mark.asyncio
    async def test_no_messages(self, context):
        response = await InitSetupCommand().execute(command_interaction("initsetup", date="2024-01-01"), context)

        assert response["data"]["content"] == "No messages found in channel since 2024-01-01."

    @pytest.mark.asyncio
    async def test_error_is_reported_as_text(self, context, discord):
        discord.fetch_messages.side_effect = RuntimeError("boom")

        response = await InitSetupCommand().execute(command_interaction("initsetup", date="2024-01-01"), context)

        assert response["data"]["content"] == "Error during historical import: boom"


class TestPrintResultsCommand:

    @pytest.mark.asyncio
    async def test_posts_report(self, context, discord):
        response = await PrintResultsCommand().execute(command_interaction("printresults"), context)

        discord.post_message.assert_awaited_once()
        assert response["data"]["content"] == "Wordle infographic posted for today based on current data."

    @pytest.mark.asyncio
    async def test_post_failure(self, context, discord):
        discord.post_message.side_effect = RuntimeError("forbidden")

        response = await PrintResultsCommand().execute(command_interaction("printresults"), context)

        assert response["data"]["content"] == "Error posting Wordle infographic: forbidden"


class TestPersonalStatsCommand:

    @pytest.mark.asyncio
    async def test_user_with_stats(self, context, test_db):
        await WordleResultsRepository(test_db).add(
            ResultBatch(date="2024-01-01", results=[StoredResult(id="111", score=4)])
        )

        response = await PersonalStatsCommand().execute(command_interaction("personalstats", user="111"), context)

        assert response["type"] == 4
        assert response["data"]["embeds"][0]["title"] == "Wordle Stats for Ali"

    @pytest.mark.asyncio
    async def test_user_without_stats(self, context):
        response = await PersonalStatsCommand().execute(command_interaction("personalstats", user="999"), context)

        assert response["data"]["content"] == "No Wordle stats found for <@999>."

    @pytest.mark.asyncio
    async def test_missing_user_option(self, context):
        response = await PersonalStatsCommand().execute(command_interaction("personalstats"), context)

        assert response["data"]["content"] == "Please specify a user."


class TestHelpCommand:

    @pytest.mark.asyncio
    async def test_lists_every_command(self, context):
        response = await HelpCommand().execute(command_interaction("help"), context)

        embed = response["data"]["embeds"][0]
        assert embed["title"] == "Wordle Bot Help & Commands Guide"
        assert [f["name"] for f in embed["fields"]] == [c.usage for c in COMMANDS]
