# link_scout/crawler/visibility.py
"""
Ancestor walks over the content tree: visibility and closest document lookup.
"""
from __future__ import annotations

from typing import Iterable

from link_scout.crawler.models import ContentNode, NodeTypes
from link_scout.errors import MissingDocumentError, TreeCycleError
from link_scout.store.base import TreeContext

__all__ = ("DEFAULT_MAX_DEPTH", "is_visible", "find_closest_document")

DEFAULT_MAX_DEPTH = 256


def is_visible(node: ContentNode, context: TreeContext, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """
    A node is visible when its chain of parents, as exposed by *context*,
    ends at the workspace root. An orphaned node, or one below an ancestor
    the context hides, is not.
    """
    current = node
    for _ in range(max_depth + 1):
        parent = context.get_parent(current)
        if parent is None:
            return context.is_root(current)
        current = parent
    raise TreeCycleError(node.identifier, max_depth)


def find_closest_document(
    node: ContentNode,
    node_types: NodeTypes,
    document_types: Iterable[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ContentNode:
    """Return *node* or its nearest structural ancestor of a document type."""
    wanted = tuple(document_types)
    current = node
    for _ in range(max_depth + 1):
        if node_types.is_any_of(current.node_type, wanted):
            return current
        parent = current.parent
        if parent is None:
            raise MissingDocumentError(node.identifier, node.path)
        current = parent
    raise TreeCycleError(node.identifier, max_depth)
