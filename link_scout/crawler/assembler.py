# link_scout/crawler/assembler.py
"""Builds :class:`Finding` records and hands them to the recorder."""
from __future__ import annotations

from typing import Iterable, Optional

from link_scout.crawler.extractors import parse_reference
from link_scout.crawler.models import ContentNode, Finding, NodeReference, StatusCode
from link_scout.crawler.visibility import DEFAULT_MAX_DEPTH, find_closest_document
from link_scout.logger import logger
from link_scout.store.base import FindingRecorder, TreeContext, TreeStore

__all__ = ["FindingAssembler"]


class FindingAssembler:
    """
    Turns a broken reference into a finding.

    Findings are always attributed to the closest document node, never to a
    content fragment. Target paths of ``node://`` references are looked up in
    a canonical context (primary workspace, hidden nodes shown), so a target
    that is merely hidden still gets a readable path in the report.
    """

    def __init__(
        self,
        store: TreeStore,
        recorder: FindingRecorder,
        *,
        document_types: Iterable[str] = ("document",),
        primary_workspace: str = "live",
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.store = store
        self.recorder = recorder
        self.document_types = tuple(document_types)
        self.primary_workspace = primary_workspace
        self.max_depth = max_depth
        self._canonical: Optional[TreeContext] = None

    def _canonical_context(self) -> TreeContext:
        if self._canonical is None:
            self._canonical = self.store.create_context(self.primary_workspace, show_hidden=True)
        return self._canonical

    def target_path(self, token: str) -> Optional[str]:
        reference = parse_reference(token)
        if not isinstance(reference, NodeReference):
            return None
        target = self._canonical_context().get_node_by_identifier(reference.identifier)
        return target.path if target is not None else None

    def record(
        self,
        context: TreeContext,
        domain: str,
        node: ContentNode,
        token: str,
        status_code: StatusCode,
    ) -> Finding:
        document = find_closest_document(
            node, self.store.node_types, self.document_types, self.max_depth
        )
        finding = Finding(
            domain=domain,
            source=document.identifier,
            source_path=document.path,
            target=token,
            target_path=self.target_path(token) if token.startswith("node://") else None,
            status_code=status_code,
            created_at=context.current_datetime,
            checked_at=context.current_datetime,
        )
        self.recorder.add(finding)
        logger.info("%s (source %s)", finding.message, finding.source_path)
        return finding
