"""
Heuristic Adjuster - deterministic multipliers shared by the AI scorer
and the fallback ranker.
"""
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from data_transformers.models import RawNewsItem, RankedNewsItem
from utils.dates import age_in_hours, parse_published_at
from .config import (
    get_recency_factor,
    get_source_weight,
    calculate_keyword_boost,
    calculate_geo_multiplier,
    combine_score,
)
from .models import HeuristicFactors


_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class HeuristicAdjuster:
    """
    Compute recency, source, keyword and geographic multipliers for an item.

    Results depend only on the item and the reference time `now`.
    """

    def __init__(
        self,
        regional_terms: Iterable[str] = (),
        priority_terms: Iterable[str] = (),
    ):
        """
        Args:
            regional_terms: Country/region names of the regional focus
            priority_terms: Names identifying the priority country
        """
        self.regional_terms = tuple(regional_terms)
        self.priority_terms = tuple(priority_terms)

    def factors(self, item: RawNewsItem, now: Optional[datetime] = None) -> HeuristicFactors:
        text = f"{item.title} {item.description}"
        return HeuristicFactors(
            recency=get_recency_factor(age_in_hours(item.published_at, now)),
            source=get_source_weight(item.source),
            keyword=calculate_keyword_boost(text),
            geo=calculate_geo_multiplier(text, self.regional_terms, self.priority_terms),
        )

    def adjust(
        self,
        base_score: float,
        item: RawNewsItem,
        now: Optional[datetime] = None,
    ) -> tuple[float, HeuristicFactors]:
        """
        Apply all multipliers to a base score.

        Returns:
            (final score clamped to 1-10 and rounded to one decimal, factors)
        """
        factors = self.factors(item, now)
        return combine_score(base_score, factors.multiplier), factors


def sort_by_score_and_recency(
    items: Sequence[RankedNewsItem],
    now: Optional[datetime] = None,
) -> list[RankedNewsItem]:
    """
    Order ranked items by score (descending), then publish date (newest first).

    Items with unparseable dates lose recency ties. Scores are compared at
    their one-decimal precision.
    """
    def key(item: RankedNewsItem):
        published = parse_published_at(item.published_at, now) or _OLDEST
        return (round(item.risk_score, 1), published)

    return sorted(items, key=key, reverse=True)


def most_recent_first(
    items: Sequence[RawNewsItem],
    now: Optional[datetime] = None,
) -> list[RawNewsItem]:
    """Order raw items newest first; unparseable dates go last in original order."""
    def key(item: RawNewsItem):
        return parse_published_at(item.published_at, now) or _OLDEST

    return sorted(items, key=key, reverse=True)
