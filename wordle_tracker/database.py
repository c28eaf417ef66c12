"""
🔌 Database Connection Setup - MongoDB

Configuración centralizada para conectar a MongoDB
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from wordle_tracker.core.config import get_settings


logger = logging.getLogger(__name__)


class Database:
    """Singleton para la conexión a MongoDB"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls):
        """Conecta a MongoDB"""
        if cls.client is None:
            settings = get_settings()

            cls.client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
            )
            cls.db = cls.client[settings.mongodb_db_name]

            # Test de conexión
            await cls.client.admin.command("ping")
            logger.info("✅ Connected to MongoDB: %s", settings.mongodb_db_name)

    @classmethod
    async def disconnect(cls):
        """Cierra la conexión"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("❌ Disconnected from MongoDB")

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Retorna la instancia de la base de datos"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


async def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency para inyectar la DB"""
    return Database.get_db()


async def create_indexes():
    """
    Crea los índices necesarios para las queries por fecha

    La deduplicación no necesita índice propio: usa el _id.
    """
    db = Database.get_db()
    await db.wordle_results.create_index("date")
    logger.info("✅ Indexes created successfully")
