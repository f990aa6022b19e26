"""
Impact Scorer - AI risk scoring of triaged news

Sends the most recent articles to the LLM in a single ranking request,
then applies the heuristic multipliers on top of each base score.
"""
import asyncio
import json
from datetime import datetime, timezone
from typing import Optional, Sequence

from loguru import logger

from constants.enums import RiskCategory, ScorerFailureKind
from data_transformers.models import RawNewsItem, RankedNewsItem
from llm import LLMClient, LLMError, set_llm_context
from prompts import PromptLoader
from processor.output_parser import RankingOutputParser
from processor.ranker.heuristics import HeuristicAdjuster, most_recent_first, sort_by_score_and_recency
from .models import ScoringFailure, ScoringOutcome, ScoringSuccess


DEFAULT_FOCUS = "Southeast Asian markets"


class ImpactScorer:
    """
    Hybrid (LLM + heuristic) news scorer.

    Never raises for backend problems: timeouts, API errors, malformed
    output and empty acceptance all come back as a ScoringFailure.
    """

    def __init__(
        self,
        client: LLMClient,
        adjuster: HeuristicAdjuster,
        timeout: float = 10.0,
        max_items: int = 8,
        max_results: int = 5,
        acceptance_threshold: float = 3.0,
        prompt_loader: Optional[PromptLoader] = None,
    ):
        """
        Initialize scorer.

        Args:
            client: LLM client used for the ranking call
            adjuster: Heuristic multipliers applied to model scores
            timeout: Budget for the ranking call in seconds
            max_items: Most recent items sent to the model
            max_results: Number of items returned
            acceptance_threshold: Minimum final score kept
            prompt_loader: Prompt template loader
        """
        self.client = client
        self.adjuster = adjuster
        self.timeout = timeout
        self.max_items = max_items
        self.max_results = max_results
        self.acceptance_threshold = acceptance_threshold
        self.prompt_loader = prompt_loader or PromptLoader()
        self.parser = RankingOutputParser()

    def build_prompt(self, items: Sequence[RawNewsItem], instrument_context: Optional[str] = None) -> str:
        """Build the ranking prompt for the given (already truncated) items."""
        articles = [
            {
                "id": index,
                "title": item.title,
                "description": item.description,
                "source": item.source,
                "publishedAt": item.published_at,
            }
            for index, item in enumerate(items)
        ]
        focus = f"{DEFAULT_FOCUS} related to {instrument_context}" if instrument_context else DEFAULT_FOCUS
        categories = "\n".join(f"{n}. {c.value}" for n, c in enumerate(RiskCategory, start=1))

        return self.prompt_loader.format(
            "news_ranking",
            focus=focus,
            articles_json=json.dumps(articles, ensure_ascii=False, indent=2),
            risk_categories=categories,
        )

    async def score(
        self,
        items: Sequence[RawNewsItem],
        instrument_context: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ScoringOutcome:
        """
        Score deduplicated news items.

        Args:
            items: Deduplicated news items
            instrument_context: Optional instrument name to focus the analysis
            now: Reference time for recency

        Returns:
            ScoringSuccess with the top items, or ScoringFailure
        """
        if not items:
            return self._failure(ScorerFailureKind.NO_ACCEPTED_ITEMS, "no items to score")

        now = now or datetime.now(timezone.utc)
        candidates = most_recent_first(items, now)[:self.max_items]

        set_llm_context(task_type="news_ranking")
        prompt = self.build_prompt(candidates, instrument_context)
        system = self.prompt_loader.get("news_ranking_system")

        try:
            response = await asyncio.wait_for(
                self.client.generate(
                    prompt=prompt,
                    system=system,
                    max_tokens=1000,
                    temperature=0.3,
                    json_mode=True,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            return self._failure(ScorerFailureKind.TIMEOUT, f"ranking call exceeded {self.timeout}s")
        except LLMError as e:
            return self._failure(ScorerFailureKind.API_ERROR, str(e))
        except Exception as e:
            return self._failure(ScorerFailureKind.API_ERROR, f"{type(e).__name__}: {e}")

        parsed = self.parser.parse(response.content, len(candidates))
        if not parsed.structured:
            return self._failure(
                ScorerFailureKind.MALFORMED_RESPONSE,
                "; ".join(parsed.parse_errors),
                parse_errors=parsed.parse_errors,
                raw_output=parsed.raw_output,
            )

        accepted = []
        for entry in parsed.entries:
            item = candidates[entry.index]
            final_score, factors = self.adjuster.adjust(entry.risk_score, item, now)
            if final_score < self.acceptance_threshold:
                logger.debug(f"[Scorer] Dropped {item.title[:60]!r}: {final_score} < {self.acceptance_threshold}")
                continue
            accepted.append(RankedNewsItem.from_raw(item, risk_score=final_score, impact_reason=entry.impact_reason))

        if not accepted:
            return self._failure(
                ScorerFailureKind.NO_ACCEPTED_ITEMS,
                f"{len(parsed.entries)} rankings, none above {self.acceptance_threshold}",
                parse_errors=parsed.parse_errors,
            )

        top = sort_by_score_and_recency(accepted, now)[:self.max_results]
        logger.info(
            f"[Scorer] Scored {len(candidates)} items: accepted={len(accepted)}, "
            f"returning={len(top)}, top_score={top[0].risk_score}"
        )
        return ScoringSuccess(
            items=top,
            submitted_count=len(candidates),
            dropped_count=len(parsed.entries) - len(accepted),
        )

    def _failure(self, kind: ScorerFailureKind, detail: str, **kwargs) -> ScoringFailure:
        logger.warning(f"[Scorer] AI scoring unavailable ({kind.value}): {detail}")
        return ScoringFailure(kind=kind, detail=detail, **kwargs)
