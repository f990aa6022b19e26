import asyncio
import json
from datetime import datetime, timezone
from typing import Optional

import pytest

from crawlers import BaseSearchClient, RegionCollector, SearchBackendError
from data_transformers.models import RawNewsItem
from llm import LLMClient, LLMError, LLMResponse
from processor import (
    Deduplicator,
    FallbackRanker,
    HeuristicAdjuster,
    ImpactScorer,
    TriageOrchestrator,
)


NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

REGIONS = ["us", "gb", "de", "jp", "cn", "th", "sg", "my"]
REGIONAL_TERMS = ["southeast asia", "asean", "malaysia", "singapore", "vietnam"]
PRIORITY_TERMS = ["thailand", "thai", "bangkok", "baht"]


def make_item(
    title: str,
    published_at: str = "2026-10-18T10:00:00Z",
    source: str = "Some Blog",
    description: str = "",
    region: Optional[str] = None,
    url: Optional[str] = None,
) -> RawNewsItem:
    return RawNewsItem(
        title=title,
        description=description,
        url=url or f"https://example.com/{abs(hash(title))}",
        published_at=published_at,
        source=source,
        region=region,
    )


def rankings_json(*entries) -> str:
    """entries: (id, score, reason) tuples"""
    return json.dumps({
        "rankings": [
            {"id": i, "riskScore": s, "impactReason": r} for i, s, r in entries
        ]
    })


class FakeSearchClient(BaseSearchClient):
    """Region code -> list of items, or an exception to raise."""

    def __init__(self, by_region=None, default=None, by_query=None, delay: float = 0.0):
        super().__init__("fake")
        self.by_region = by_region or {}
        self.by_query = by_query or {}
        self.default = default if default is not None else []
        self.delay = delay
        self.calls = []
        self.closed = False

    async def search_news(self, query, region="us", time_filter=None):
        self.calls.append({"query": query, "region": region, "time_filter": time_filter})
        if self.delay:
            await asyncio.sleep(self.delay)

        if query in self.by_query:
            result = self.by_query[query]
        else:
            result = self.by_region.get(region, self.default)

        if isinstance(result, Exception):
            raise result
        return [
            RawNewsItem(
                title=i.title,
                description=i.description,
                url=i.url,
                published_at=i.published_at,
                source=i.source,
                region=region,
            )
            for i in result
        ]

    async def aclose(self):
        self.closed = True


class FakeLLMClient(LLMClient):
    """Returns canned content, raises, or sleeps past the caller's timeout."""

    def __init__(self, content: str = "", error: Optional[Exception] = None, delay: float = 0.0):
        super().__init__(api_key="test", model="fake-model")
        self.content = content
        self.error = error
        self.delay = delay
        self.calls = []
        self.closed = False

    async def chat(self, messages, system=None, max_tokens=1000, temperature=0.0, json_mode=False):
        self.calls.append({
            "messages": messages,
            "system": system,
            "temperature": temperature,
            "json_mode": json_mode,
        })
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return LLMResponse(content=self.content, model=self.model, usage={"input_tokens": 10, "output_tokens": 5})

    async def aclose(self):
        self.closed = True


@pytest.fixture
def adjuster():
    return HeuristicAdjuster(regional_terms=REGIONAL_TERMS, priority_terms=PRIORITY_TERMS)


def build_scorer(llm, adjuster, **kwargs) -> ImpactScorer:
    params = {"timeout": 1.0, "max_items": 8, "max_results": 5, "acceptance_threshold": 3.0}
    params.update(kwargs)
    return ImpactScorer(client=llm, adjuster=adjuster, **params)


def build_orchestrator(search, llm, regions=None, timeout=5.0, scorer_timeout=1.0, min_results=3) -> TriageOrchestrator:
    adj = HeuristicAdjuster(regional_terms=REGIONAL_TERMS, priority_terms=PRIORITY_TERMS)
    return TriageOrchestrator(
        collector=RegionCollector(search, regions=regions or REGIONS, time_filter="qdr:w"),
        deduplicator=Deduplicator(0.7),
        scorer=build_scorer(llm, adj, timeout=scorer_timeout),
        fallback_ranker=FallbackRanker(adj, base_score=5.0, max_results=5),
        timeout=timeout,
        min_results=min_results,
    )
