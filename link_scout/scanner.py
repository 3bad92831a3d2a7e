# === FILE: link_scout/scanner.py ===
"""
Модуль-обёртка для асинхронного запуска проверки ссылок.
"""
import asyncio

from link_scout.aggregator import LinkCheckReport
from link_scout.config import CheckerConfig
from link_scout.engine import run_check


async def start_check(cfg: CheckerConfig) -> LinkCheckReport:
    """
    Запускает проверку в отдельном потоке, не блокируя event loop.

    Parameters
    ----------
    cfg : CheckerConfig
        Конфигурация проверки.

    Returns
    -------
    LinkCheckReport
        Агрегированный отчёт.
    """
    return await asyncio.to_thread(run_check, cfg)

__all__ = ["start_check"]
