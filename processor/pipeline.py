"""
Triage Pipeline - Main orchestrator for news triage.

Pipeline Flow (one call per user action):
1. Collect news for the query from every region concurrently
2. Deduplicate near-identical stories across regions
3. Score with the LLM + heuristics (Impact Scorer)
4. If AI scoring is unavailable, rank with the deterministic Fallback Ranker
5. If fewer than MIN_RESULTS items came back, retry with broader queries

State per attempt:
    COLLECTING -> DEDUPLICATING -> SCORING -> DONE
                                       \\-> FALLBACK_SCORING -> DONE
The whole call runs under one wall-clock budget; exhausting it moves to
TIMED_OUT and raises TriageTimeoutError.
"""
import asyncio
from datetime import datetime, timezone
from typing import Optional, Sequence

from loguru import logger

from constants.enums import QueryKind, TriageState
from crawlers import BaseSearchClient, RegionCollector, SerperClient
from data_transformers.models import RawNewsItem, TriageResult
from llm import LLMClient, get_client
from .deduplicator import Deduplicator
from .query_builder import (
    alternate_queries,
    build_general_impact_query,
    build_impact_query,
    is_instrument_name,
    optimal_search_term,
)
from .ranker import FallbackRanker, HeuristicAdjuster
from .scorer import ImpactScorer, ScoringSuccess


class TriageTimeoutError(Exception):
    """Raised when a triage call exceeds its overall time budget."""

    def __init__(self, query: str, timeout: float):
        super().__init__(f"News triage for {query!r} exceeded {timeout}s")
        self.query = query
        self.timeout = timeout


class TriageOrchestrator:
    """
    Sequences Collector -> Deduplicator -> Scorer / Fallback Ranker.

    Stateless across calls: concurrent triages share only the injected
    service objects, none of which hold per-request state.
    """

    def __init__(
        self,
        collector: RegionCollector,
        deduplicator: Deduplicator,
        scorer: ImpactScorer,
        fallback_ranker: FallbackRanker,
        timeout: float = 25.0,
        min_results: int = 3,
    ):
        """
        Initialize orchestrator.

        Args:
            collector: Multi-region news collector
            deduplicator: Cross-region duplicate remover
            scorer: AI + heuristic scorer
            fallback_ranker: Deterministic ranker used when AI scoring is unavailable
            timeout: Overall budget for one triage call in seconds
            min_results: Below this many items the query is broadened
        """
        self.collector = collector
        self.deduplicator = deduplicator
        self.scorer = scorer
        self.fallback_ranker = fallback_ranker
        self.timeout = timeout
        self.min_results = min_results

    @classmethod
    def from_settings(
        cls,
        settings,
        search_client: Optional[BaseSearchClient] = None,
        llm_client: Optional[LLMClient] = None,
    ) -> "TriageOrchestrator":
        """Build the full pipeline from application settings."""
        search_client = search_client or SerperClient(
            api_key=settings.SERPER_API_KEY,
            timeout=settings.SEARCH_TIMEOUT_SECONDS,
            results_per_request=settings.SEARCH_RESULTS_PER_REGION,
        )
        llm_client = llm_client or get_client()

        adjuster = HeuristicAdjuster(
            regional_terms=settings.REGIONAL_FOCUS_TERMS,
            priority_terms=settings.PRIORITY_COUNTRY_TERMS,
        )
        return cls(
            collector=RegionCollector(
                search_client,
                regions=settings.NEWS_REGIONS,
                time_filter=settings.NEWS_TIME_FILTER,
            ),
            deduplicator=Deduplicator(similarity_threshold=settings.SIMILARITY_THRESHOLD),
            scorer=ImpactScorer(
                client=llm_client,
                adjuster=adjuster,
                timeout=settings.SCORER_TIMEOUT_SECONDS,
                max_items=settings.SCORER_MAX_ITEMS,
                max_results=settings.MAX_RESULTS,
                acceptance_threshold=settings.ACCEPTANCE_THRESHOLD,
            ),
            fallback_ranker=FallbackRanker(
                adjuster,
                base_score=settings.FALLBACK_BASE_SCORE,
                max_results=settings.MAX_RESULTS,
            ),
            timeout=settings.TRIAGE_TIMEOUT_SECONDS,
            min_results=settings.MIN_RESULTS,
        )

    async def aclose(self) -> None:
        """Close the network clients behind the pipeline."""
        await self.collector.search_client.aclose()
        await self.scorer.client.aclose()

    # ============================================
    # Public operations
    # ============================================

    async def triage(self, query: str, instrument_context: Optional[str] = None) -> TriageResult:
        """
        Triage news for a free-form user query.

        Raises:
            ValueError: If the query is blank
            TriageTimeoutError: If the overall budget is exhausted
        """
        term = self._require(query)
        # Free-form phrases stay unquoted across every attempt
        queries = [build_general_impact_query(term)] + alternate_queries(term, quoted=is_instrument_name(term))
        return await self._with_budget(self._triage_with_broadening(queries, instrument_context), term)

    async def triage_instrument(self, instrument_name: str) -> TriageResult:
        """
        Triage news for a dashboard instrument (e.g. "Thai Baht").

        Raises:
            ValueError: If the name is blank
            TriageTimeoutError: If the overall budget is exhausted
        """
        name = self._require(instrument_name)
        term = optimal_search_term(name)
        queries = [build_impact_query(term, QueryKind.PRIMARY)] + alternate_queries(term)

        logger.info(f"[NEWS-TRIAGE] Using optimized query for {name} (search term: {term!r}): {queries[0]!r}")
        return await self._with_budget(self._triage_with_broadening(queries, name), name)

    async def collect_global_news(self, query: str, now: Optional[datetime] = None) -> list[RawNewsItem]:
        """
        Collect and deduplicate news from all regions without scoring.

        Raises:
            TriageTimeoutError: If the overall budget is exhausted
        """
        term = self._require(query)

        async def _collect() -> list[RawNewsItem]:
            collection = await self.collector.collect(term)
            return self.deduplicator.deduplicate(collection.items, now)

        return await self._with_budget(_collect(), term)

    async def triage_query(
        self,
        query: str,
        instrument_context: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TriageResult:
        """
        Run one triage attempt for an already-built search query.

        No timeout or broadening is applied here; degraded paths (region
        failures, scorer failures) never raise.
        """
        now = now or datetime.now(timezone.utc)

        self._enter(TriageState.COLLECTING, query)
        collection = await self.collector.collect(query)

        self._enter(TriageState.DEDUPLICATING, query)
        items = self.deduplicator.deduplicate(collection.items, now)

        if not items:
            logger.warning(f"[NEWS-TRIAGE] No news found for {query!r}")
            self._enter(TriageState.DONE, query)
            return TriageResult.empty(query=query)

        self._enter(TriageState.SCORING, query)
        outcome = await self.scorer.score(items, instrument_context, now)

        if isinstance(outcome, ScoringSuccess):
            self._enter(TriageState.DONE, query)
            return TriageResult(items=tuple(outcome.items), fallback_used=False, query=query)

        self._enter(TriageState.FALLBACK_SCORING, query)
        ranked = self.fallback_ranker.rank(items, now)

        self._enter(TriageState.DONE, query)
        return TriageResult(
            items=tuple(ranked),
            fallback_used=True,
            query=query,
            scorer_failure=outcome.kind.value,
        )

    # ============================================
    # Internals
    # ============================================

    async def _triage_with_broadening(
        self,
        queries: Sequence[str],
        instrument_context: Optional[str],
    ) -> TriageResult:
        best: Optional[TriageResult] = None

        for attempt, query in enumerate(queries):
            result = await self.triage_query(query, instrument_context)
            if len(result) >= self.min_results:
                if attempt:
                    logger.info(f"[NEWS-TRIAGE] Fallback query successful with {len(result)} items")
                return result

            if best is None or len(result) > len(best):
                best = result

            if attempt + 1 < len(queries):
                logger.info(
                    f"[NEWS-TRIAGE] Query returned {len(result)} items (< {self.min_results}), "
                    f"trying broader query {attempt + 2}/{len(queries)}"
                )

        return best

    async def _with_budget(self, coro, label: str):
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout)
        except asyncio.TimeoutError:
            self._enter(TriageState.TIMED_OUT, label)
            logger.error(f"[NEWS-TRIAGE] Triage for {label!r} timed out after {self.timeout}s")
            raise TriageTimeoutError(label, self.timeout) from None

    @staticmethod
    def _require(value: str) -> str:
        if not value or not value.strip():
            raise ValueError("query must not be empty")
        return value.strip()

    @staticmethod
    def _enter(state: TriageState, query: str) -> None:
        logger.debug(f"[NEWS-TRIAGE] {state.value}: {query}")
