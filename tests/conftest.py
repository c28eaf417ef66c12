"""
Pytest fixtures and configuration for all tests.
"""

import os

# Settings() necesita MONGODB_URI al importar la app
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import pytest
from datetime import datetime, timezone
from typing import AsyncGenerator

from mongomock_motor import AsyncMongoMockClient
from motor.motor_asyncio import AsyncIOMotorDatabase

from wordle_tracker.models.wordle import GuildMember

TEST_DB_NAME = "wordle_tracker_test"


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    Provide a clean in-memory test database for each test.
    """
    client = AsyncMongoMockClient()
    db = client[TEST_DB_NAME]

    yield db

    # Cleanup: drop all collections after test
    for collection_name in await db.list_collection_names():
        await db[collection_name].drop()


@pytest.fixture
def guild_members():
    """Roster with one nick and one plain username."""
    return [
        GuildMember(id="111", username="alice", nick="Ali"),
        GuildMember(id="222", username="bob"),
        GuildMember(id="333", username="carol", nick="Caz"),
    ]


@pytest.fixture
def sample_summary():
    """A daily summary as posted by the Wordle bot."""
    return (
        "Your group is on a 12 day streak! 🔥 Here are yesterday's results:\n"
        "👑 3/6: <@111> @bob\n"
        "4/6: <@!333>\n"
        "X/6: @nobody\n"
        "3 solved and 1 unsolved games of Wordle"
    )


@pytest.fixture
def message_timestamp():
    """Morning of 2024-05-11 (UTC): reports results for 2024-05-10."""
    return datetime(2024, 5, 11, 13, 0, tzinfo=timezone.utc)
