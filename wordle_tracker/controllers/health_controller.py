"""
Controlador de salud - Estado de la base y del job diario
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from wordle_tracker.core.scheduler import TRACK_JOB_ID, scheduler
from wordle_tracker.database import Database


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    database: str
    scheduler: str
    next_run: Optional[str] = None  # próxima corrida del tracker (ISO)


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Endpoint de verificación de estado.

    Reporta si Mongo está conectado y si el job diario está programado.
    """
    db_status = "connected" if Database.db is not None else "disconnected"

    job = scheduler.get_job(TRACK_JOB_ID) if scheduler.running else None
    next_run = job.next_run_time.isoformat() if job and job.next_run_time else None

    return HealthResponse(
        status="ok",
        database=db_status,
        scheduler="running" if job else "stopped",
        next_run=next_run,
    )
