"""
Prompts Module - Centralized prompt management for LLM calls.

Usage:
    from prompts import PromptLoader

    loader = PromptLoader()
    formatted = loader.format("news_ranking", focus="...", articles_json="...")

Prompt Files:
- news_ranking.md: Risk ranking of triaged news articles
- news_ranking_system.md: System prompt for the ranking call
"""

from ._loader import PromptLoader

__all__ = ["PromptLoader"]
