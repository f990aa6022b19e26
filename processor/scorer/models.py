"""
Data models for the Scorer module.
"""
from dataclasses import dataclass, field
from typing import Optional, Union

from constants.enums import ScorerFailureKind
from data_transformers.models import RankedNewsItem


@dataclass(frozen=True)
class ScoringSuccess:
    """AI scoring produced at least one accepted item."""
    items: list[RankedNewsItem]
    submitted_count: int = 0
    dropped_count: int = 0

    def to_dict(self) -> dict:
        return {
            "items": [i.to_dict() for i in self.items],
            "submitted_count": self.submitted_count,
            "dropped_count": self.dropped_count,
        }


@dataclass(frozen=True)
class ScoringFailure:
    """AI scoring could not be used; the caller should rank with the fallback."""
    kind: ScorerFailureKind
    detail: str = ""
    parse_errors: list[str] = field(default_factory=list)
    raw_output: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "detail": self.detail,
            "parse_errors": self.parse_errors,
        }


ScoringOutcome = Union[ScoringSuccess, ScoringFailure]
