# === FILE: link_scout/logger.py ===
"""Логгер LinkScout.

Все модули пишут через один именованный логгер ``LinkScout``::

    from link_scout.logger import logger
    logger.info("Checked %d nodes", count)

Строки лога идут в stderr (stdout занят JSON-отчётом команды ``check``),
по желанию дублируются в ротируемый файл. CLI перенастраивает логгер через
:func:`init_logging` после разбора опций ``--log-level`` / ``--log-file``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

LOGGER_NAME: Final[str] = "LinkScout"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# ротация файла логов: 5 MiB x 3 архива
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

Level = Union[int, str]


def _build_handlers(fmt: str, log_file: Optional[Union[str, Path]]) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: Level = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Настроить логгер LinkScout.

    Args:
        level: уровень логирования, числом или строкой (``"DEBUG"``).
        log_file: путь к файлу логов; None: только stderr.
        log_format: строка формата для :class:`logging.Formatter`.
        replace_handlers: закрыть и убрать прежние обработчики перед добавлением новых.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()

    for handler in _build_handlers(log_format, log_file):
        lg.addHandler(handler)

    # сообщения проверки не должны дублироваться корневым логгером
    lg.propagate = False
    return lg


def init_logging(
    level: Level = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Переинициализация логгера из CLI: прежние обработчики заменяются."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME"]
