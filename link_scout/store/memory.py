# link_scout/store/memory.py
"""In-memory implementations of the store ports, plus a YAML/JSON tree loader."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from link_scout.config import read_mapping
from link_scout.crawler.models import ContentNode, Finding, NodeTypes
from link_scout.logger import logger
from link_scout.store.base import AssetResolver, FindingRecorder, TreeContext, TreeStore

__all__ = (
    "InMemoryTreeStore",
    "InMemoryTreeContext",
    "MappingAssetResolver",
    "InMemoryFindingRecorder",
    "load_tree",
)


class InMemoryTreeStore(TreeStore):
    """Holds one tree per workspace and an identifier index for each of them.

    Orphans are subtrees registered with a workspace but not attached to its
    root; they can be looked up by identifier but never reach the root.
    """

    def __init__(
        self,
        workspaces: Mapping[str, ContentNode],
        *,
        orphans: Optional[Mapping[str, Iterable[ContentNode]]] = None,
        node_types: Optional[NodeTypes] = None,
    ) -> None:
        self._node_types = node_types or NodeTypes()
        self._roots: Dict[str, ContentNode] = dict(workspaces)
        self._orphans: Dict[str, List[ContentNode]] = {
            name: list(nodes) for name, nodes in (orphans or {}).items()
        }
        self._index: Dict[str, Dict[str, ContentNode]] = {}
        for name, root in self._roots.items():
            self._index[name] = self._build_index(name, [root, *self._orphans.get(name, [])])

    @staticmethod
    def _build_index(workspace: str, tops: Iterable[ContentNode]) -> Dict[str, ContentNode]:
        index: Dict[str, ContentNode] = {}
        for top in tops:
            for node in top.walk():
                if node.identifier in index:
                    raise ValueError(
                        f"Duplicate node identifier {node.identifier!r} in workspace {workspace!r}"
                    )
                index[node.identifier] = node
        return index

    @property
    def node_types(self) -> NodeTypes:
        return self._node_types

    @property
    def workspaces(self) -> List[str]:
        return list(self._roots)

    def root(self, workspace: str) -> ContentNode:
        try:
            return self._roots[workspace]
        except KeyError:
            raise LookupError(f"Unknown workspace: {workspace}") from None

    def lookup(self, workspace: str, identifier: str) -> Optional[ContentNode]:
        return self._index.get(workspace, {}).get(identifier)

    def create_context(
        self,
        workspace: str,
        *,
        show_hidden: bool = False,
        current_datetime: Optional[datetime] = None,
        site_node_path: str = "/",
    ) -> InMemoryTreeContext:
        return InMemoryTreeContext(
            self,
            workspace,
            show_hidden=show_hidden,
            current_datetime=current_datetime or datetime.now(timezone.utc),
            site_node_path=site_node_path,
        )


class InMemoryTreeContext(TreeContext):
    def __init__(
        self,
        store: InMemoryTreeStore,
        workspace: str,
        *,
        show_hidden: bool,
        current_datetime: datetime,
        site_node_path: str = "/",
    ) -> None:
        self._store = store
        self._workspace = workspace
        self._root = store.root(workspace)
        self._show_hidden = show_hidden
        self._now = current_datetime
        self._site_node = self._find_by_path(site_node_path)

    def _find_by_path(self, path: str) -> ContentNode:
        wanted = "/" + path.strip("/")
        for node in self._root.walk():
            if node.path == wanted:
                return node
        raise LookupError(f"Site node {wanted} not found in workspace {self._workspace}")

    def _exposes(self, node: ContentNode) -> bool:
        return self._show_hidden or not node.hidden

    @property
    def workspace_name(self) -> str:
        return self._workspace

    @property
    def current_datetime(self) -> datetime:
        return self._now

    @property
    def site_node(self) -> ContentNode:
        return self._site_node

    def find_nodes(self, start: ContentNode, node_types: Iterable[str]) -> Iterator[ContentNode]:
        wanted = tuple(node_types)
        nodes = start.walk()
        next(nodes, None)  # start itself
        for node in nodes:
            if not self._exposes(node):
                continue
            if self._store.node_types.is_any_of(node.node_type, wanted):
                yield node

    def get_parent(self, node: ContentNode) -> Optional[ContentNode]:
        parent = node.parent
        if parent is None or not self._exposes(parent):
            return None
        return parent

    def is_root(self, node: ContentNode) -> bool:
        return node is self._root

    def get_node_by_identifier(self, identifier: str) -> Optional[ContentNode]:
        node = self._store.lookup(self._workspace, identifier)
        if node is None or not self._exposes(node):
            return None
        return node


class MappingAssetResolver(AssetResolver):
    """Resolves asset identifiers from a plain ``{identifier: uri}`` mapping."""

    def __init__(self, assets: Optional[Mapping[str, str]] = None) -> None:
        self._assets: Dict[str, str] = dict(assets or {})

    def resolve(self, identifier: str) -> Optional[str]:
        return self._assets.get(identifier)

    def __len__(self) -> int:
        return len(self._assets)


class InMemoryFindingRecorder(FindingRecorder):
    def __init__(self) -> None:
        self.findings: List[Finding] = []

    def add(self, finding: Finding) -> None:
        self.findings.append(finding)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self.findings)

    def __len__(self) -> int:
        return len(self.findings)


# ---------------------------------------------------------------------------
# Tree files
# ---------------------------------------------------------------------------


def _build_node(data: Any, where: str) -> ContentNode:
    if not isinstance(data, dict):
        raise TypeError(f"Node at {where} must be a mapping, got {type(data).__name__}")
    try:
        identifier = str(data["identifier"])
        node_type = str(data["type"])
    except KeyError as exc:
        raise ValueError(f"Node at {where} is missing {exc.args[0]!r}") from exc
    properties = data.get("properties") or {}
    if not isinstance(properties, dict):
        raise TypeError(f"Properties of node {identifier} must be a mapping")
    node = ContentNode(
        identifier=identifier,
        node_type=node_type,
        name=str(data.get("name", "")),
        properties=dict(properties),
        hidden=bool(data.get("hidden", False)),
    )
    for i, child in enumerate(data.get("children") or []):
        node.add_child(_build_node(child, f"{where}/{identifier}[{i}]"))
    return node


def load_tree(
    path: Union[str, Path], node_types: Optional[NodeTypes] = None
) -> Tuple[InMemoryTreeStore, MappingAssetResolver]:
    """
    Load a tree file (YAML or JSON) and return the store and the asset resolver.

    Expected layout::

        workspaces:
          live: {identifier: root, type: root, children: [...]}
        orphans:
          live: [{identifier: lost, type: content}]
        assets:
          logo: /media/logo.png
    """
    data = read_mapping(Path(path))
    workspaces_raw = data.get("workspaces")
    if not isinstance(workspaces_raw, dict) or not workspaces_raw:
        raise ValueError(f"Tree file {path} declares no workspaces")

    workspaces = {
        name: _build_node(node, f"workspaces.{name}") for name, node in workspaces_raw.items()
    }
    orphans = {
        name: [_build_node(node, f"orphans.{name}[{i}]") for i, node in enumerate(nodes or [])]
        for name, nodes in (data.get("orphans") or {}).items()
    }
    assets = {str(k): str(v) for k, v in (data.get("assets") or {}).items()}

    store = InMemoryTreeStore(workspaces, orphans=orphans, node_types=node_types)
    logger.debug(
        "Loaded tree %s: %d workspace(s), %d asset(s)", path, len(workspaces), len(assets)
    )
    return store, MappingAssetResolver(assets)
