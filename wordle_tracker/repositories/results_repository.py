"""
🗂️ WordleResultsRepository - Batches diarios de resultados

Un documento por resumen parseado:
    { _id, date: "YYYY-MM-DD", results: [{id, score}], wordleNumber? }

El _id es una clave de idempotencia "fecha:ids ordenados", así que
guardar dos veces el mismo resumen es un insert que Mongo rechaza solo.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError

from wordle_tracker.models.wordle import ParsedWordleSummary, ResultBatch


logger = logging.getLogger(__name__)

COLLECTION_NAME = "wordle_results"

# Marcador para resultados sin identidad resuelta
UNRESOLVED_ID = "?"


def build_idempotency_key(batch: ResultBatch) -> str:
    """
    Clave "fecha:id1,id2,..." independiente del orden de los resultados.

    Los ids None cuentan como "?", así que dos batches que solo difieren en
    qué usuario no se pudo resolver generan la misma clave.
    """
    ids = sorted(r.id if r.id is not None else UNRESOLVED_ID for r in batch.results)
    return f"{batch.date}:{','.join(ids)}"


def _to_batches(docs: list[dict]) -> list[ResultBatch]:
    batches = []
    for doc in docs:
        try:
            batches.append(ResultBatch(**doc))
        except ValidationError:
            logger.warning("Skipping malformed result document %s", doc.get("_id"))
    return batches


class WordleResultsRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[COLLECTION_NAME]

    # ============================================
    # 📌 CREATE
    # ============================================

    async def add(self, batch: ResultBatch) -> bool:
        """
        Inserta un batch si no existe otro con la misma clave.

        Retorna True si se guardó, False si era duplicado.
        """
        doc = batch.to_document()
        doc["_id"] = build_idempotency_key(batch)

        try:
            await self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.info("Duplicate result for date %s, skipping.", batch.date)
            return False

        return True

    async def store_parsed_summary(self, date: str, parsed: ParsedWordleSummary) -> bool:
        """
        Guarda un resumen parseado bajo `date` (YYYY-MM-DD).

        Los errores de Mongo se loguean y no se propagan.
        """
        batch = ResultBatch.from_parsed(date, parsed)
        try:
            return await self.add(batch)
        except PyMongoError:
            logger.exception("Error storing Wordle result for %s", date)
            return False

    # ============================================
    # 📌 READ
    # ============================================

    async def get_all(self) -> list[ResultBatch]:
        """Todos los batches, de más nuevo a más viejo"""
        cursor = self.collection.find().sort("date", -1)
        docs = await cursor.to_list(length=None)
        return _to_batches(docs)

    async def get_by_date(self, date: str) -> list[ResultBatch]:
        """Batches con fecha exacta"""
        cursor = self.collection.find({"date": date})
        docs = await cursor.to_list(length=None)
        return _to_batches(docs)

