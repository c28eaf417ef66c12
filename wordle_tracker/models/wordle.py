"""
Modelos del dominio Wordle: resultados parseados, miembros del servidor y batches guardados
"""

from datetime import date, datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


# Score de una partida no resuelta
FAIL_SCORE = -1


class WordleResult(BaseModel):
    """Resultado de un usuario sacado de un resumen"""

    id: Optional[str] = None  # Discord user ID (None si no se pudo resolver)
    username: Optional[str] = None  # Nombre en texto plano, solo para menciones "@nombre"
    score: int  # -1 = fallo, 1-6 = intentos usados


class ParsedWordleSummary(BaseModel):
    """Resumen completo de un mensaje: racha del grupo, resultados y conteos"""

    streak: Optional[int] = None
    results: list[WordleResult] = []
    solved: Optional[int] = None
    unsolved: Optional[int] = None


class GuildMember(BaseModel):
    """Miembro del servidor de Discord, usado para resolver '@username'"""

    id: str
    username: str
    nick: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.nick or self.username

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "GuildMember":
        """Construye un miembro desde el objeto que devuelve la API de Discord"""
        user = payload.get("user") or {}
        return cls(
            id=str(user.get("id", "")),
            username=user.get("username", ""),
            nick=payload.get("nick"),
        )


class StoredResult(BaseModel):
    """Resultado tal como se persiste (sin username)"""

    id: Optional[str] = None
    score: int = FAIL_SCORE

    @field_validator("score", mode="before")
    @classmethod
    def missing_score_is_fail(cls, value: Any) -> Any:
        # Documentos viejos o corruptos sin score cuentan como fallo
        return FAIL_SCORE if value is None else value


class ResultBatch(BaseModel):
    """
    Todos los resultados de un resumen, atribuidos a un día (YYYY-MM-DD).

    En Mongo el número de puzzle se guarda como "wordleNumber".
    """

    date: str
    results: list[StoredResult] = []
    wordle_number: Optional[int] = Field(None, alias="wordleNumber")

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: Any) -> Any:
        if isinstance(value, (datetime, date)):
            return value.isoformat()[:10]
        return value

    class Config:
        populate_by_name = True

    @classmethod
    def from_parsed(cls, date: str, parsed: ParsedWordleSummary) -> "ResultBatch":
        return cls(
            date=date,
            results=[StoredResult(id=r.id, score=r.score) for r in parsed.results],
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "date": self.date,
            "results": [r.model_dump() for r in self.results],
        }
        if self.wordle_number is not None:
            doc["wordleNumber"] = self.wordle_number
        return doc
