import asyncio

import pytest

from config import settings
from crawlers import RegionCollector
from processor import TriageOrchestrator, TriageTimeoutError
from processor.query_builder import alternate_queries, build_general_impact_query, build_impact_query
from tests.conftest import (
    NOW,
    FakeLLMClient,
    FakeSearchClient,
    LLMError,
    SearchBackendError,
    build_orchestrator,
    make_item,
    rankings_json,
)


GOLD_EARLY = make_item("Gold hits record high", "2026-10-18T08:00:00Z", source="Reuters")
GOLD_LATE = make_item("Gold hits record high", "2026-10-18T10:00:00Z", source="Bloomberg")

REGIONAL_RESULTS = {
    "us": [GOLD_EARLY, make_item("Baht weakens as exports slow", "2026-10-18T07:00:00Z")],
    "gb": [GOLD_LATE, make_item("Palm oil output falls in Malaysia", "2026-10-18T06:00:00Z")],
    "de": [make_item("ECB signals pause", "2026-10-18T05:00:00Z", source="Bloomberg")],
    "jp": SearchBackendError("timeout", region="jp"),
    "cn": SearchBackendError("502 Bad Gateway", region="cn"),
    "th": [make_item("Rice shipments delayed at port", "2026-10-18T09:00:00Z", source="Bangkok Post")],
    "sg": SearchBackendError("429 Too Many Requests", region="sg"),
    "my": [],
}


def test_triage_with_partial_region_failures_and_duplicates():
    search = FakeSearchClient(by_region=REGIONAL_RESULTS)
    llm = FakeLLMClient(rankings_json(*[(i, 6, f"reason {i}") for i in range(5)]))
    orchestrator = build_orchestrator(search, llm)

    result = asyncio.run(orchestrator.triage_query("gold", now=NOW))

    assert result.fallback_used is False
    assert result.scorer_failure is None
    assert 1 <= len(result) <= 5
    assert all(1.0 <= i.risk_score <= 10.0 for i in result.items)

    gold = [i for i in result.items if i.title == "Gold hits record high"]
    assert len(gold) == 1
    assert gold[0].published_at == "2026-10-18T10:00:00Z"
    assert gold[0].region == "gb"
    assert gold[0].source == "Bloomberg"

    scores = [i.risk_score for i in result.items]
    assert scores == sorted(scores, reverse=True)


def test_scorer_failure_switches_to_fallback():
    search = FakeSearchClient(by_region=REGIONAL_RESULTS)
    orchestrator = build_orchestrator(search, FakeLLMClient(error=LLMError("503")))

    result = asyncio.run(orchestrator.triage_query("gold", now=NOW))

    assert result.fallback_used is True
    assert result.scorer_failure == "api_error"
    assert len(result) == 5
    assert all(i.impact_reason.startswith("Fallback") for i in result.items)


def test_scorer_timeout_switches_to_fallback():
    search = FakeSearchClient(by_region=REGIONAL_RESULTS)
    llm = FakeLLMClient(rankings_json((0, 9, "late")), delay=1.0)
    orchestrator = build_orchestrator(search, llm, scorer_timeout=0.05)

    result = asyncio.run(orchestrator.triage_query("gold", now=NOW))

    assert result.fallback_used is True
    assert result.scorer_failure == "timeout"


def test_all_regions_failing_returns_empty_result():
    search = FakeSearchClient(default=SearchBackendError("down"))
    llm = FakeLLMClient(rankings_json((0, 9, "r")))
    orchestrator = build_orchestrator(search, llm)

    result = asyncio.run(orchestrator.triage_query("gold", now=NOW))

    assert len(result) == 0
    assert result.fallback_used is True
    assert result.scorer_failure is None
    assert llm.calls == []


def test_triage_broadens_until_enough_results():
    first, second = build_general_impact_query("gold"), alternate_queries("gold")[0]
    search = FakeSearchClient(by_query={
        first: [make_item("Gold edges up", "1 hour ago")],
        second: [
            make_item("Gold edges up", "1 hour ago"),
            make_item("Central bank buying lifts bullion", "2 hours ago"),
            make_item("Jewellers cut orders as prices climb", "3 hours ago"),
            make_item("Mining output disrupted by floods", "4 hours ago"),
        ],
    })
    orchestrator = build_orchestrator(search, FakeLLMClient(error=LLMError("down")), regions=["us", "th"])

    result = asyncio.run(orchestrator.triage("gold"))

    assert len(result) == 4
    assert result.query == second
    assert [c["query"] for c in search.calls].count(first) == 2
    assert len(search.calls) == 4


def test_triage_returns_best_attempt_when_all_queries_are_thin():
    third = alternate_queries("gold")[1]
    search = FakeSearchClient(by_query={
        third: [make_item("Gold edges up", "1 hour ago"), make_item("Silver slips", "2 hours ago")],
    })
    orchestrator = build_orchestrator(search, FakeLLMClient(error=LLMError("down")), regions=["us"])

    result = asyncio.run(orchestrator.triage("gold"))

    assert len(result) == 2
    assert result.query == third
    assert len(search.calls) == 5


def test_triage_instrument_uses_mapped_term_and_context():
    search = FakeSearchClient(default=[
        make_item("Baht firms against dollar", "1 hour ago"),
        make_item("Thai exports beat forecasts", "2 hours ago"),
        make_item("Bank of Thailand holds rates", "3 hours ago"),
    ])
    llm = FakeLLMClient(rankings_json((0, 7, "r"), (1, 6, "r"), (2, 5, "r")))
    orchestrator = build_orchestrator(search, llm, regions=["th"])

    result = asyncio.run(orchestrator.triage_instrument("Thai Baht"))

    assert search.calls[0]["query"] == build_impact_query("Thai baht THB")
    assert "related to Thai Baht" in llm.calls[0]["messages"][0].content
    assert result.fallback_used is False
    assert len(result) == 3


def test_overall_timeout_raises():
    search = FakeSearchClient(default=[make_item("Gold edges up", "1 hour ago")], delay=1.0)
    orchestrator = build_orchestrator(search, FakeLLMClient(rankings_json((0, 5, "r"))), timeout=0.05)

    with pytest.raises(TriageTimeoutError):
        asyncio.run(orchestrator.triage("gold"))


def test_blank_query_rejected():
    orchestrator = build_orchestrator(FakeSearchClient(), FakeLLMClient())

    with pytest.raises(ValueError):
        asyncio.run(orchestrator.triage("   "))


def test_collect_global_news_deduplicates():
    search = FakeSearchClient(by_region=REGIONAL_RESULTS)
    orchestrator = build_orchestrator(search, FakeLLMClient())

    items = asyncio.run(orchestrator.collect_global_news("gold", now=NOW))

    assert len(items) == 5
    assert [i.title for i in items].count("Gold hits record high") == 1


def test_from_settings_and_aclose(monkeypatch):
    monkeypatch.setattr(settings, "NEWS_REGIONS", ["th", "sg"])
    monkeypatch.setattr(settings, "TRIAGE_TIMEOUT_SECONDS", 12.5)
    search, llm = FakeSearchClient(), FakeLLMClient()
    orchestrator = TriageOrchestrator.from_settings(settings, search_client=search, llm_client=llm)

    assert isinstance(orchestrator.collector, RegionCollector)
    assert orchestrator.collector.regions == ["th", "sg"]
    assert orchestrator.timeout == 12.5
    assert orchestrator.scorer.timeout == settings.SCORER_TIMEOUT_SECONDS

    asyncio.run(orchestrator.aclose())
    assert search.closed and llm.closed


@pytest.mark.parametrize("digits", [400, 5000])
def test_oversized_model_numbers_fall_back(digits):
    search = FakeSearchClient(by_region=REGIONAL_RESULTS)
    content = '{"rankings": [{"id": 0, "riskScore": ' + "9" * digits + ', "impactReason": "huge"}]}'
    orchestrator = build_orchestrator(search, FakeLLMClient(content))

    result = asyncio.run(orchestrator.triage_query("gold", now=NOW))

    assert result.fallback_used is True
    assert result.scorer_failure in ("no_accepted_items", "malformed_response")
    assert len(result) == 5


def test_free_form_broadening_keeps_queries_unquoted():
    search = FakeSearchClient(default=[make_item("Rates on hold", "1 hour ago")])
    orchestrator = build_orchestrator(search, FakeLLMClient(error=LLMError("down")), regions=["us"])

    result = asyncio.run(orchestrator.triage("interest rate outlook"))

    assert len(result) == 1
    assert len(search.calls) == 5
    assert all('"' not in c["query"] for c in search.calls)
    assert all("interest rate outlook" in c["query"] for c in search.calls)
