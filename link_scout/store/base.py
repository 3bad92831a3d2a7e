"""
Port interfaces for the collaborators the crawler depends on.

The crawler never touches storage directly: it asks a :class:`TreeStore` for a
:class:`TreeContext`, resolves assets through an :class:`AssetResolver` and
hands findings to a :class:`FindingRecorder`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Iterable, Iterator, Optional

from link_scout.crawler.models import ContentNode, Finding, NodeTypes

__all__ = ("Clock", "TreeContext", "TreeStore", "AssetResolver", "FindingRecorder")

Clock = Callable[[], datetime]


class TreeContext(ABC):
    """A view of one workspace with fixed visibility rules and crawl time."""

    @property
    @abstractmethod
    def workspace_name(self) -> str:
        """Name of the workspace this context reads from."""

    @property
    @abstractmethod
    def current_datetime(self) -> datetime:
        """Time stamp used for everything recorded through this context."""

    @property
    @abstractmethod
    def site_node(self) -> ContentNode:
        """Node the crawl starts from."""

    @abstractmethod
    def find_nodes(self, start: ContentNode, node_types: Iterable[str]) -> Iterator[ContentNode]:
        """Yield descendants of *start* (not *start* itself) of the given types, in tree order."""

    @abstractmethod
    def get_parent(self, node: ContentNode) -> Optional[ContentNode]:
        """Parent of *node* as seen by this context, or None."""

    @abstractmethod
    def is_root(self, node: ContentNode) -> bool:
        """True if *node* is the root of this context's workspace."""

    @abstractmethod
    def get_node_by_identifier(self, identifier: str) -> Optional[ContentNode]:
        """Resolve *identifier* to a node visible in this context, or None."""


class TreeStore(ABC):
    """Factory for :class:`TreeContext` objects."""

    @property
    @abstractmethod
    def node_types(self) -> NodeTypes:
        """Type hierarchy of the nodes in this store."""

    @abstractmethod
    def create_context(
        self,
        workspace: str,
        *,
        show_hidden: bool = False,
        current_datetime: Optional[datetime] = None,
        site_node_path: str = "/",
    ) -> TreeContext:
        """Open a context on *workspace*."""


class AssetResolver(ABC):
    @abstractmethod
    def resolve(self, identifier: str) -> Optional[str]:
        """Return a handle (usually a URI) for the asset, or None."""


class FindingRecorder(ABC):
    @abstractmethod
    def add(self, finding: Finding) -> None:
        """Accept one completed finding."""
