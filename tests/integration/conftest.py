"""
Fixtures for integration tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from wordle_tracker.core.dependencies import get_discord_client
from wordle_tracker.database import Database
from wordle_tracker.main import app


@pytest.fixture
def fake_discord():
    """Cliente de Discord falso; los tests le cargan respuestas"""
    from unittest.mock import AsyncMock
    from wordle_tracker.services.discord_service import DiscordClient

    client = AsyncMock(spec=DiscordClient)
    client.fetch_guild_members.return_value = []
    client.fetch_messages.return_value = []
    return client


@pytest.fixture
async def client(test_db, fake_discord):
    """
    HTTP client for testing API endpoints.

    Uses the in-memory test database and a fake Discord client.
    The app lifespan is not run, so no real Mongo connection is made.
    """
    original_db = Database.db
    Database.db = test_db
    app.dependency_overrides[get_discord_client] = lambda: fake_discord

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    Database.db = original_db
