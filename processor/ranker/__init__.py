"""
Ranker Module - heuristic scoring and fallback ranking

Components:
- HeuristicAdjuster: recency, source, keyword and geographic multipliers
- FallbackRanker: deterministic ranking when AI scoring is unavailable
- HeuristicFactors: data class for the applied multipliers
- Heuristic configuration and utilities
"""

from .models import HeuristicFactors
from .config import (
    RECENCY_SCHEDULE,
    RECENCY_FLOOR,
    RECENCY_UNKNOWN,
    SOURCE_TIERS,
    SOURCE_UNKNOWN,
    KEYWORD_TIERS,
    KEYWORD_BOOST_CAP,
    REGIONAL_BOOST,
    PRIORITY_COUNTRY_BOOST,
    GEO_BOOST_CAP,
    get_recency_factor,
    get_source_weight,
    calculate_keyword_boost,
    calculate_geo_multiplier,
    combine_score,
)
from .heuristics import HeuristicAdjuster, sort_by_score_and_recency, most_recent_first
from .ranker import FallbackRanker, FALLBACK_REASON


__all__ = [
    # Main classes
    "FallbackRanker",
    "HeuristicAdjuster",
    # Models
    "HeuristicFactors",
    # Config
    "RECENCY_SCHEDULE",
    "RECENCY_FLOOR",
    "RECENCY_UNKNOWN",
    "SOURCE_TIERS",
    "SOURCE_UNKNOWN",
    "KEYWORD_TIERS",
    "KEYWORD_BOOST_CAP",
    "REGIONAL_BOOST",
    "PRIORITY_COUNTRY_BOOST",
    "GEO_BOOST_CAP",
    "FALLBACK_REASON",
    # Utilities
    "get_recency_factor",
    "get_source_weight",
    "calculate_keyword_boost",
    "calculate_geo_multiplier",
    "combine_score",
    "sort_by_score_and_recency",
    "most_recent_first",
]
