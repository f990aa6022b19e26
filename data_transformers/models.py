"""
Unified Data Models for News Triage

These dataclasses define the structures that flow through the triage
pipeline:
- RawNewsItem: a search result as collected from one region
- RankedNewsItem: a news item with a guaranteed risk score and reason
- CollectionResult: the union of all regional search results
- TriageResult: the final short, prioritized list

Raw and ranked items are distinct types so that enrichment is visible in
the signature of every stage instead of hiding behind optional fields.
"""

from dataclasses import dataclass, field, fields
from typing import Optional, Dict, List, Tuple


MIN_RISK_SCORE = 1.0
MAX_RISK_SCORE = 10.0
MAX_TRIAGE_ITEMS = 5
FALLBACK_REASON_PREFIX = "Fallback"


@dataclass(frozen=True)
class RawNewsItem:
    """
    A single news article from the search backend.

    `published_at` is kept as the source-supplied string: it may be an ISO
    timestamp, a relative phrase ("3 hours ago") or an absolute date, and is
    not guaranteed to be parseable.
    """
    title: str
    description: str
    url: str
    published_at: str
    source: str
    region: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "published_at": self.published_at,
            "source": self.source,
            "region": self.region,
        }


@dataclass(frozen=True)
class RankedNewsItem:
    """A news item enriched with a risk score (1-10) and an impact reason."""
    title: str
    description: str
    url: str
    published_at: str
    source: str
    risk_score: float
    impact_reason: str
    region: Optional[str] = None

    def __post_init__(self):
        if not MIN_RISK_SCORE <= self.risk_score <= MAX_RISK_SCORE:
            raise ValueError(f"risk_score must be within 1-10, got {self.risk_score}")

    @classmethod
    def from_raw(cls, item: RawNewsItem, risk_score: float, impact_reason: str) -> "RankedNewsItem":
        return cls(
            title=item.title,
            description=item.description,
            url=item.url,
            published_at=item.published_at,
            source=item.source,
            region=item.region,
            risk_score=risk_score,
            impact_reason=impact_reason,
        )

    def to_raw(self) -> RawNewsItem:
        return RawNewsItem(
            title=self.title,
            description=self.description,
            url=self.url,
            published_at=self.published_at,
            source=self.source,
            region=self.region,
        )

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class CollectionResult:
    """Union of all regional search results for one query."""
    query: str
    items: List[RawNewsItem] = field(default_factory=list)
    succeeded_regions: List[str] = field(default_factory=list)
    failed_regions: Dict[str, str] = field(default_factory=dict)  # region -> error

    @property
    def all_failed(self) -> bool:
        return bool(self.failed_regions) and not self.succeeded_regions

    @property
    def items_count(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "items": [i.to_dict() for i in self.items],
            "succeeded_regions": self.succeeded_regions,
            "failed_regions": self.failed_regions,
            "count": self.items_count,
        }


@dataclass(frozen=True)
class TriageResult:
    """
    Final output of the triage pipeline.

    Items are ordered highest score first (ties broken by recency).
    `fallback_used` reflects only whether the AI scorer was bypassed, not
    partial region failures during collection.
    """
    items: Tuple[RankedNewsItem, ...]
    fallback_used: bool
    query: str = ""
    scorer_failure: Optional[str] = None

    def __post_init__(self):
        if len(self.items) > MAX_TRIAGE_ITEMS:
            raise ValueError(f"TriageResult holds at most {MAX_TRIAGE_ITEMS} items, got {len(self.items)}")
        if self.fallback_used:
            for item in self.items:
                if not item.impact_reason.startswith(FALLBACK_REASON_PREFIX):
                    raise ValueError("Fallback results must carry a fallback impact reason")

    @classmethod
    def empty(cls, query: str = "", scorer_failure: Optional[str] = None) -> "TriageResult":
        return cls(items=(), fallback_used=True, query=query, scorer_failure=scorer_failure)

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict:
        return {
            "items": [i.to_dict() for i in self.items],
            "fallback_used": self.fallback_used,
            "query": self.query,
            "scorer_failure": self.scorer_failure,
        }
