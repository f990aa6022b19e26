import pytest

from prompts import PromptLoader


def test_ranking_prompt_renders():
    prompt = PromptLoader().format(
        "news_ranking",
        focus="Southeast Asian markets",
        articles_json='[{"id": 0}]',
        risk_categories="1. Central bank decisions",
    )

    assert "particularly focusing on Southeast Asian markets" in prompt
    assert '"rankings": [' in prompt
    assert "{focus}" not in prompt


def test_missing_variable():
    with pytest.raises(ValueError):
        PromptLoader().format("news_ranking", focus="x")


def test_unknown_prompt(tmp_path):
    loader = PromptLoader(prompts_dir=tmp_path)

    with pytest.raises(FileNotFoundError):
        loader.get("news_ranking")


def test_list_prompts():
    assert set(PromptLoader().list_prompts()) >= {"news_ranking", "news_ranking_system"}
