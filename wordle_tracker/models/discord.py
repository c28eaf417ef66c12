from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class DiscordMessage(BaseModel):
    """Mensaje de un canal (solo los campos que usamos)"""

    id: str
    content: str = ""
    timestamp: datetime

    class Config:
        extra = "ignore"


class CommandOption(BaseModel):
    name: str
    description: str
    type: int  # 3 = STRING, 6 = USER
    required: Optional[bool] = None


class CommandData(BaseModel):
    """Definición de un slash command tal como se registra en Discord"""

    name: str
    description: str
    type: int = 1  # CHAT_INPUT
    options: list[CommandOption] = []
