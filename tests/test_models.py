import pytest

from data_transformers.models import CollectionResult, RankedNewsItem, TriageResult
from tests.conftest import make_item


def _ranked(title="Gold rallies", score=5.0, reason="Safe-haven demand"):
    return RankedNewsItem.from_raw(make_item(title, region="us"), risk_score=score, impact_reason=reason)


def test_ranked_item_keeps_raw_fields():
    raw = make_item("Gold rallies", source="Reuters", region="th")
    ranked = RankedNewsItem.from_raw(raw, risk_score=7.5, impact_reason="Safe-haven demand")

    assert ranked.to_raw() == raw
    assert ranked.to_dict()["risk_score"] == 7.5
    assert ranked.to_dict()["region"] == "th"


@pytest.mark.parametrize("score", [0.9, 10.1, -3])
def test_ranked_item_rejects_out_of_range_score(score):
    with pytest.raises(ValueError):
        _ranked(score=score)


def test_triage_result_holds_at_most_five_items():
    items = tuple(_ranked(title=f"Story {c}") for c in "ABCDEF")
    with pytest.raises(ValueError):
        TriageResult(items=items, fallback_used=False)


def test_fallback_result_requires_fallback_reasons():
    with pytest.raises(ValueError):
        TriageResult(items=(_ranked(reason="Model reason"),), fallback_used=True)

    result = TriageResult(items=(_ranked(reason="Fallback ranking"),), fallback_used=True)
    assert len(result) == 1


def test_empty_result():
    result = TriageResult.empty(query="gold")

    assert len(result) == 0
    assert result.fallback_used is True
    assert result.to_dict() == {"items": [], "fallback_used": True, "query": "gold", "scorer_failure": None}


def test_collection_all_failed():
    collection = CollectionResult(query="gold", failed_regions={"us": "boom"})
    assert collection.all_failed

    collection.succeeded_regions.append("th")
    assert not collection.all_failed
    assert CollectionResult(query="gold").all_failed is False
