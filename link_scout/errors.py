# link_scout/errors.py
"""Exceptions raised by the LinkScout core."""
from __future__ import annotations

__all__ = ("LinkCheckError", "MissingDocumentError", "TreeCycleError")


class LinkCheckError(Exception):
    """Base class for all LinkScout errors."""


class MissingDocumentError(LinkCheckError):
    """A node has no document ancestor, so a finding cannot be attributed."""

    def __init__(self, identifier: str, path: str) -> None:
        super().__init__(f"No document ancestor for node {identifier} ({path})")
        self.identifier = identifier
        self.path = path


class TreeCycleError(LinkCheckError):
    """An ancestor walk exceeded the configured depth limit."""

    def __init__(self, identifier: str, max_depth: int) -> None:
        super().__init__(f"Ancestor chain of node {identifier} exceeds {max_depth} levels")
        self.identifier = identifier
        self.max_depth = max_depth
