# === FILE: link_scout/crawler/crawler.py ===
from __future__ import annotations

import time
from typing import Iterable, List, Optional, Sequence

from link_scout.crawler.assembler import FindingAssembler
from link_scout.crawler.extractors import PhoneScanner, ReferenceScanner, ScanHit, Scanner
from link_scout.crawler.visibility import DEFAULT_MAX_DEPTH, is_visible
from link_scout.logger import logger
from link_scout.store.base import AssetResolver, FindingRecorder, TreeContext, TreeStore

__all__ = ("ContentNodeCrawler",)


class ContentNodeCrawler:
    """Обходит узлы документов и контента и записывает битые ссылки.

    All collaborators are passed in; one instance serves one check run.
    """

    def __init__(
        self,
        store: TreeStore,
        asset_resolver: AssetResolver,
        recorder: FindingRecorder,
        *,
        document_types: Iterable[str] = ("document",),
        content_types: Iterable[str] = ("content",),
        primary_workspace: str = "live",
        max_depth: int = DEFAULT_MAX_DEPTH,
        scanners: Optional[Sequence[Scanner]] = None,
    ) -> None:
        self.document_types = tuple(document_types)
        self.content_types = tuple(content_types)
        self.max_depth = max_depth
        self.scanners: List[Scanner] = list(
            scanners
            if scanners is not None
            else (ReferenceScanner(asset_resolver, max_depth), PhoneScanner())
        )
        self.assembler = FindingAssembler(
            store,
            recorder,
            document_types=self.document_types,
            primary_workspace=primary_workspace,
            max_depth=max_depth,
        )

    def crawl(self, context: TreeContext, domain: str) -> List[str]:
        """
        Check every visible document and content node below the site node of
        *context*. Returns one human-readable message per broken reference;
        the findings themselves go to the recorder.
        """
        logger.info("Старт проверки: %s (workspace %s)", domain, context.workspace_name)
        start = time.monotonic()
        messages: List[str] = []
        checked = 0

        wanted = self.document_types + self.content_types
        for node in context.find_nodes(context.site_node, wanted):
            if not is_visible(node, context, self.max_depth):
                logger.debug("Skipping invisible node %s", node.path)
                continue
            checked += 1

            # one bucket per scanner keeps "all 404s, then all 490s" per node
            buckets: List[List[ScanHit]] = [[] for _ in self.scanners]
            for text in node.text_properties():
                for bucket, scanner in zip(buckets, self.scanners):
                    bucket.extend(scanner.scan(text, context))

            for bucket in buckets:
                for hit in bucket:
                    messages.append(hit.message)
                    self.assembler.record(context, domain, node, hit.token, hit.status_code)

        duration = time.monotonic() - start
        logger.info(
            "Завершено: %d узлов, %d битых ссылок за %.2f с", checked, len(messages), duration
        )
        return messages
