# File: link_scout/aggregator.py
"""link_scout.aggregator: Модуль агрегатора отчётов проверки ссылок."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, TypedDict

from link_scout.crawler.models import Finding


class FindingInfo(TypedDict, total=False):
    """Находка в сериализуемом виде."""

    domain: str
    source: str
    source_path: str
    target: str
    target_path: str | None
    status_code: int
    created_at: str
    checked_at: str


@dataclass(slots=True)
class LinkCheckReport:
    """Результаты проверки: находки, сообщения и счётчики по кодам статуса."""

    domain: str
    findings: List[FindingInfo] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)
    status_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def has_findings(self) -> bool:
        return bool(self.findings)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "findings": self.findings,
            "messages": self.messages,
            "status_counts": self.status_counts,
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление LinkCheckReport."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(domain: str, findings: Iterable[Finding], messages: List[str]) -> LinkCheckReport:
    """Собирает находки и сообщения в LinkCheckReport."""
    items: List[FindingInfo] = [f.to_dict() for f in findings]  # type: ignore[misc]
    counts = Counter(str(item["status_code"]) for item in items)
    return LinkCheckReport(
        domain=domain,
        findings=items,
        messages=list(messages),
        status_counts=dict(sorted(counts.items())),
    )
