"""
Fallback Ranker - Deterministic news ranking without the LLM.

Used whenever AI scoring is unavailable: every item gets a neutral base
score, the same heuristic multipliers as the AI path, and a fallback
impact reason.
"""
from datetime import datetime, timezone
from typing import Optional, Sequence

from loguru import logger

from data_transformers.models import RawNewsItem, RankedNewsItem, FALLBACK_REASON_PREFIX
from .heuristics import HeuristicAdjuster, sort_by_score_and_recency


FALLBACK_REASON = f"{FALLBACK_REASON_PREFIX} ranking - AI scoring unavailable"


class FallbackRanker:
    """
    Recency + heuristic ranking.

    Has no external dependency and never fails; an empty input yields an
    empty list.
    """

    def __init__(
        self,
        adjuster: HeuristicAdjuster,
        base_score: float = 5.0,
        max_results: int = 5,
    ):
        """
        Initialize ranker.

        Args:
            adjuster: Heuristic multipliers shared with the AI scorer
            base_score: Neutral score assigned to every item
            max_results: Number of items returned
        """
        self.adjuster = adjuster
        self.base_score = base_score
        self.max_results = max_results

    def rank(self, items: Sequence[RawNewsItem], now: Optional[datetime] = None) -> list[RankedNewsItem]:
        """
        Rank items without AI scores.

        Args:
            items: News items (normally already deduplicated)
            now: Reference time for recency

        Returns:
            Top items, highest score first, ties broken by recency
        """
        if not items:
            return []

        now = now or datetime.now(timezone.utc)
        ranked = []

        for item in items:
            score, factors = self.adjuster.adjust(self.base_score, item, now)
            ranked.append(RankedNewsItem.from_raw(
                item,
                risk_score=score,
                impact_reason=f"{FALLBACK_REASON} ({factors.describe()})",
            ))

        top = sort_by_score_and_recency(ranked, now)[:self.max_results]
        logger.info(f"[FallbackRanker] Ranked {len(items)} items, returning top {len(top)}")
        return top
