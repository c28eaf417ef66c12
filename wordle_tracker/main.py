"""
Entry point de la API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wordle_tracker.core.config import get_settings
from wordle_tracker.core.logging import setup_logging
from wordle_tracker.core.scheduler import start_scheduler, stop_scheduler
from wordle_tracker.database import Database, create_indexes

from wordle_tracker.controllers.admin_controller import router as admin_router
from wordle_tracker.controllers.health_controller import router as health_router
from wordle_tracker.controllers.interactions_controller import router as interactions_router

settings = get_settings()

logger = logging.getLogger(__name__)

APP_NAME = "Wordle Tracker API"
APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    await Database.connect()
    await create_indexes()

    if settings.scheduler_enabled:
        start_scheduler(settings)

    yield

    if settings.scheduler_enabled:
        stop_scheduler()
    await Database.disconnect()

# Creo la app
app = FastAPI(
    title=APP_NAME,
    description="Tracker de resultados diarios de Wordle para un servidor de Discord",
    version=APP_VERSION,
    lifespan=lifespan
)

# Agrego todos los routers de los controllers al app
app.include_router(health_router)
app.include_router(interactions_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que la API está levantada
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "docs": "/docs"
    }
