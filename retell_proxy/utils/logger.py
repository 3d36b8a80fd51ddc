import logging
import os

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_configured = False


def setup_logging(level: str = None) -> None:
    """
    Настраивает корневой логгер один раз за процесс.
    Уровень берётся из аргумента или переменной LOG_LEVEL.
    """
    global _configured
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    if not _configured:
        logging.basicConfig(level=level, format=_FORMAT)
        _configured = True
    logging.getLogger().setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Возвращает логгер модуля, при необходимости настраивая логирование."""
    if not _configured:
        setup_logging()
    return logging.getLogger(name)
