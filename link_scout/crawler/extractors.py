# link_scout/crawler/extractors.py
"""
Reference scanners for text properties.

Both scanners share one shape: a cheap substring check first, then a regex
scan over the whole value. :class:`Scanner` wraps them so the crawler can run
any number of them without knowing what they look for.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

from link_scout.crawler.models import (
    AssetReference,
    NodeReference,
    PhoneReference,
    Reference,
    StatusCode,
)
from link_scout.crawler.visibility import DEFAULT_MAX_DEPTH, is_visible
from link_scout.store.base import AssetResolver, TreeContext

__all__: Sequence[str] = (
    "PATTERN_SUPPORTED_URIS",
    "PATTERN_SUPPORTED_PHONE_NUMBERS",
    "parse_reference",
    "extract_unresolved",
    "extract_invalid",
    "ScanHit",
    "Scanner",
    "ReferenceScanner",
    "PhoneScanner",
)

PATTERN_SUPPORTED_URIS = re.compile(r"(node|asset)://([A-Za-z0-9\-]+)")
PATTERN_SUPPORTED_PHONE_NUMBERS = re.compile(r'href="(tel):(\+?\d*)')

_URI_MARKERS = ("node://", "asset://")
_PHONE_MARKER = "tel:"


def parse_reference(token: str) -> Optional[Reference]:
    """Turn ``node://…`` / ``asset://…`` / ``tel:…`` into a reference, or None."""
    match = PATTERN_SUPPORTED_URIS.fullmatch(token)
    if match:
        scheme, identifier = match.group(1), match.group(2)
        return NodeReference(identifier) if scheme == "node" else AssetReference(identifier)
    if token.startswith(_PHONE_MARKER):
        return PhoneReference(token[len(_PHONE_MARKER):])
    return None


def extract_unresolved(
    text: str,
    context: TreeContext,
    asset_resolver: AssetResolver,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[str]:
    """
    Return every ``node://`` or ``asset://`` token in *text* that does not
    resolve, in match order.

    Node identifiers are looked up in *context*, the context of the node the
    text belongs to, and the target must itself be visible there. Asset
    identifiers only need to resolve.
    """
    if not any(marker in text for marker in _URI_MARKERS):
        return []

    unresolved: List[str] = []
    for match in PATTERN_SUPPORTED_URIS.finditer(text):
        reference = parse_reference(match.group(0))
        if isinstance(reference, NodeReference):
            linked = context.get_node_by_identifier(reference.identifier)
            valid = linked is not None and is_visible(linked, context, max_depth)
        else:
            valid = asset_resolver.resolve(reference.identifier) is not None
        if not valid:
            unresolved.append(reference.token)
    return unresolved


def extract_invalid(text: str) -> List[str]:
    """
    Return ``tel:<payload>`` for every telephone link in *text* whose payload
    lacks the leading ``+``. Digit count is not checked.
    """
    if _PHONE_MARKER not in text:
        return []

    invalid: List[str] = []
    for match in PATTERN_SUPPORTED_PHONE_NUMBERS.finditer(text):
        phone = PhoneReference(match.group(2))
        if not phone.is_international:
            invalid.append(phone.token)
    return invalid


@dataclass(frozen=True, slots=True)
class ScanHit:
    """A broken reference found in one text value."""

    token: str
    status_code: StatusCode

    @property
    def message(self) -> str:
        return f"{self.status_code.label}: {self.token}"


class Scanner(ABC):
    """Finds broken references of one kind in a text value."""

    status_code: StatusCode

    @abstractmethod
    def scan(self, text: str, context: TreeContext) -> List[ScanHit]:
        """Return the broken references in *text*, in order of appearance."""


class ReferenceScanner(Scanner):
    status_code = StatusCode.NOT_FOUND

    def __init__(self, asset_resolver: AssetResolver, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.asset_resolver = asset_resolver
        self.max_depth = max_depth

    def scan(self, text: str, context: TreeContext) -> List[ScanHit]:
        tokens = extract_unresolved(text, context, self.asset_resolver, self.max_depth)
        return [ScanHit(token, self.status_code) for token in tokens]


class PhoneScanner(Scanner):
    status_code = StatusCode.INVALID_FORMAT

    def scan(self, text: str, context: TreeContext) -> List[ScanHit]:
        return [ScanHit(token, self.status_code) for token in extract_invalid(text)]
