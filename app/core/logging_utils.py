# app/core/logging_utils.py

import sys

from loguru import logger

from app.core.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
)


def setup_logger(level: str | None = None) -> None:
    """
    Configura o loguru para a API.

    Remove o handler padrão (evita logs duplicados com o reload do uvicorn)
    e registra um único sink em stderr com o nível de LOG_LEVEL.
    """
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level or settings.LOG_LEVEL)
    logger.debug("Logger inicializado (nível {})", level or settings.LOG_LEVEL)
