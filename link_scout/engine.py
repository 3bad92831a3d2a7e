# File: link_scout/engine.py
"""link_scout.engine: Orchestration layer для запуска проверки и агрегации результатов."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from link_scout.aggregator import LinkCheckReport, aggregate_results
from link_scout.config import CheckerConfig
from link_scout.crawler.crawler import ContentNodeCrawler
from link_scout.crawler.models import NodeTypes
from link_scout.logger import logger
from link_scout.store.base import AssetResolver, Clock, TreeStore
from link_scout.store.memory import InMemoryFindingRecorder, load_tree

__all__ = ["Engine", "run_check"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Engine:
    """Фасад для CLI и тестов: загрузка дерева, запуск обхода и агрегация результатов."""

    def __init__(
        self,
        config: CheckerConfig,
        *,
        store: Optional[TreeStore] = None,
        asset_resolver: Optional[AssetResolver] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """Инициализирует Engine; без store/asset_resolver дерево читается из config.tree_file."""
        self.config = config
        if store is None or asset_resolver is None:
            loaded_store, loaded_assets = load_tree(config.tree_file, NodeTypes(config.node_types))
            store = loaded_store if store is None else store
            asset_resolver = loaded_assets if asset_resolver is None else asset_resolver
        self.store = store
        self.asset_resolver = asset_resolver
        self.clock = clock or _utcnow

    def start_check(self) -> LinkCheckReport:
        """Один проход проверки: новый контекст, новый recorder, новый crawler."""
        cfg = self.config
        logger.info("Starting link check…")
        recorder = InMemoryFindingRecorder()
        crawler = ContentNodeCrawler(
            self.store,
            self.asset_resolver,
            recorder,
            document_types=cfg.document_types,
            content_types=cfg.content_types,
            primary_workspace=cfg.primary_workspace,
            max_depth=cfg.max_depth,
        )
        context = self.store.create_context(
            cfg.workspace,
            show_hidden=cfg.show_hidden,
            current_datetime=self.clock(),
            site_node_path=cfg.site_node_path,
        )
        try:
            messages = crawler.crawl(context, cfg.domain)
        except Exception as exc:
            logger.error("Link check failed: %s", exc)
            raise
        return aggregate_results(cfg.domain, recorder, messages)


def run_check(config: CheckerConfig) -> LinkCheckReport:
    return Engine(config).start_check()
