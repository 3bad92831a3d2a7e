# link_scout/store/__init__.py
"""Ports for the content tree, assets and finding persistence, with in-memory adapters."""
from link_scout.store.base import AssetResolver, Clock, FindingRecorder, TreeContext, TreeStore
from link_scout.store.memory import (
    InMemoryFindingRecorder,
    InMemoryTreeContext,
    InMemoryTreeStore,
    MappingAssetResolver,
    load_tree,
)

__all__ = [
    "AssetResolver",
    "Clock",
    "FindingRecorder",
    "TreeContext",
    "TreeStore",
    "InMemoryFindingRecorder",
    "InMemoryTreeContext",
    "InMemoryTreeStore",
    "MappingAssetResolver",
    "load_tree",
]
