"""
Configuración de logging

Todos los módulos usan logging.getLogger(__name__); acá solo se configura el root logger.
"""

import logging
import sys


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Configura el root logger una sola vez (handler a stdout)"""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # httpx loguea cada request en INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
