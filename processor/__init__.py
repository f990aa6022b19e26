"""
Processor package for Market News Triage.

Triage Pipeline:
- Deduplicator: collapse near-duplicate stories across regions
- Scorer: LLM base score + heuristic multipliers
- Ranker: heuristic multipliers and deterministic fallback ranking

Insights: AI market analysis per instrument with deterministic fallback

Main entry point: TriageOrchestrator class
"""

from .deduplicator import Deduplicator, normalize_text, is_similar, token_overlap
from .output_parser import RankingOutputParser, ParsedRankings, RankingEntry
from .ranker import FallbackRanker, HeuristicAdjuster, HeuristicFactors
from .scorer import ImpactScorer, ScoringSuccess, ScoringFailure, ScoringOutcome
from .query_builder import (
    is_instrument_name,
    optimal_search_term,
    build_general_impact_query,
    build_impact_query,
    alternate_queries,
    basic_market_query,
)
from .pipeline import TriageOrchestrator, TriageTimeoutError
from .insights import InsightsGenerator, MarketInsights, PriceEstimates

__all__ = [
    # Pipeline
    "TriageOrchestrator",
    "TriageTimeoutError",
    # Deduplication
    "Deduplicator",
    "normalize_text",
    "is_similar",
    "token_overlap",
    # Scoring
    "ImpactScorer",
    "ScoringSuccess",
    "ScoringFailure",
    "ScoringOutcome",
    "RankingOutputParser",
    "ParsedRankings",
    "RankingEntry",
    # Ranking
    "FallbackRanker",
    "HeuristicAdjuster",
    "HeuristicFactors",
    # Queries
    "is_instrument_name",
    "optimal_search_term",
    "build_general_impact_query",
    "build_impact_query",
    "alternate_queries",
    "basic_market_query",
    # Insights
    "InsightsGenerator",
    "MarketInsights",
    "PriceEstimates",
]
