# link_scout/crawler/models.py
"""
Data models for the LinkScout crawler: content nodes, references and findings.
"""
from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

__all__ = (
    "ContentNode",
    "NodeReference",
    "AssetReference",
    "PhoneReference",
    "Reference",
    "StatusCode",
    "Finding",
    "NodeTypes",
)


@dataclass(eq=False)
class ContentNode:
    """A node of the content tree.

    Children are owned by their parent; the parent is only reachable through a
    weak reference, so a subtree dropped by its owner does not keep ancestors
    alive.
    """

    identifier: str
    node_type: str
    name: str = ""
    properties: Dict[str, Any] = field(default_factory=dict)
    hidden: bool = False
    children: List[ContentNode] = field(default_factory=list, repr=False)
    _parent: Optional[weakref.ReferenceType[ContentNode]] = field(
        default=None, init=False, repr=False
    )

    def __post_init__(self) -> None:
        for child in self.children:
            child._attach(self)

    @property
    def parent(self) -> Optional[ContentNode]:
        return self._parent() if self._parent is not None else None

    def add_child(self, child: ContentNode) -> ContentNode:
        """Append *child* and point its back-reference at this node."""
        child._attach(self)
        self.children.append(child)
        return child

    def detach(self) -> None:
        """Remove this node from its parent, leaving it orphaned."""
        parent = self.parent
        if parent is not None:
            parent.children = [c for c in parent.children if c is not self]
        self._parent = None

    def _attach(self, parent: ContentNode) -> None:
        if self.parent is not None and self.parent is not parent:
            raise ValueError(f"Node {self.identifier} already has a parent")
        self._parent = weakref.ref(parent)

    @property
    def path(self) -> str:
        names: List[str] = []
        seen: set[int] = set()
        node: Optional[ContentNode] = self
        while node is not None and id(node) not in seen:
            seen.add(id(node))
            names.append(node.name)
            node = node.parent
        names.reverse()
        joined = "/".join(n for n in names if n)
        return "/" + joined

    def walk(self) -> Iterator[ContentNode]:
        """Yield this node and its descendants in depth-first pre-order."""
        stack = [self]
        seen: set[int] = set()
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            yield node
            stack.extend(reversed(node.children))

    def text_properties(self) -> Iterator[str]:
        for value in self.properties.values():
            if isinstance(value, str):
                yield value


@dataclass(frozen=True, slots=True)
class NodeReference:
    identifier: str

    @property
    def token(self) -> str:
        return f"node://{self.identifier}"


@dataclass(frozen=True, slots=True)
class AssetReference:
    identifier: str

    @property
    def token(self) -> str:
        return f"asset://{self.identifier}"


@dataclass(frozen=True, slots=True)
class PhoneReference:
    raw_digits: str

    @property
    def token(self) -> str:
        return f"tel:{self.raw_digits}"

    @property
    def is_international(self) -> bool:
        return self.raw_digits.startswith("+")


Reference = Union[NodeReference, AssetReference, PhoneReference]


class StatusCode(IntEnum):
    """Classification of a broken reference.

    The values look like HTTP status codes so that findings can share a
    reporting channel with fetched links; 490 is unassigned by IANA.
    """

    NOT_FOUND = 404
    INVALID_FORMAT = 490

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    StatusCode.NOT_FOUND: "Not found",
    StatusCode.INVALID_FORMAT: "Invalid format",
}


@dataclass(slots=True)
class Finding:
    """One broken reference found during a crawl."""

    domain: str
    source: str
    source_path: str
    target: str
    status_code: StatusCode
    created_at: datetime
    checked_at: datetime
    target_path: Optional[str] = None

    @property
    def message(self) -> str:
        return f"{self.status_code.label}: {self.target}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "source": self.source,
            "source_path": self.source_path,
            "target": self.target,
            "target_path": self.target_path,
            "status_code": int(self.status_code),
            "created_at": self.created_at.isoformat(),
            "checked_at": self.checked_at.isoformat(),
        }


class NodeTypes:
    """Node type hierarchy: each type may declare any number of supertypes."""

    def __init__(self, supertypes: Optional[Mapping[str, Iterable[str]]] = None) -> None:
        self._supertypes: Dict[str, tuple[str, ...]] = {
            name: tuple(parents) for name, parents in (supertypes or {}).items()
        }

    def is_of_type(self, node_type: str, base: str) -> bool:
        pending = [node_type]
        seen: set[str] = set()
        while pending:
            current = pending.pop()
            if current == base:
                return True
            if current in seen:
                continue
            seen.add(current)
            pending.extend(self._supertypes.get(current, ()))
        return False

    def is_any_of(self, node_type: str, bases: Iterable[str]) -> bool:
        return any(self.is_of_type(node_type, base) for base in bases)
