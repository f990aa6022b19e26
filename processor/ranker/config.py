"""
Configuration and utilities for heuristic news scoring.

Contains:
- Recency schedule and factor calculation
- Source credibility tiers
- Keyword impact tiers
- Geographic relevance boosts
- Score combination (clamp + rounding)
"""
import re
from functools import lru_cache
from typing import Iterable, Optional

from processor.deduplicator import normalize_text


# ============================================
# RECENCY CONFIGURATION
# ============================================

RECENCY_SCHEDULE = {
    # max_age_hours: multiplier
    2: 1.25,     # Last 2 hours
    6: 1.15,     # Last 6 hours
    24: 1.05,    # Today
    72: 1.0,     # Last 3 days
    168: 0.9,    # Last week
}
RECENCY_FLOOR = 0.8          # Older than a week
RECENCY_UNKNOWN = 0.95       # Unparseable publish date


# ============================================
# SOURCE CREDIBILITY
# ============================================

SOURCE_TIERS = [
    # (multiplier, publisher name fragments)
    (1.2, (  # Wire services and top financial press
        "reuters", "bloomberg", "financial times", "ft.com", "wall street journal",
        "wsj", "associated press", "ap news", "nikkei", "cnbc", "dow jones",
    )),
    (1.1, (  # Established general press
        "bbc", "cnn", "the guardian", "new york times", "washington post",
        "the economist", "forbes", "marketwatch", "yahoo finance", "barron's",
        "al jazeera", "afp", "business insider", "fortune", "axios", "politico",
        "the telegraph", "deutsche welle",
    )),
    (1.0, (  # Regional and specialized press
        "bangkok post", "the nation thailand", "nation thailand", "thai pbs", "straits times",
        "channel newsasia", "cna", "the star", "new straits times", "the edge",
        "south china morning post", "scmp", "jakarta post", "vnexpress",
        "japan times", "kyodo", "xinhua", "handelsblatt", "oilprice",
        "kitco", "mining.com", "fxstreet", "investing.com", "s&p global",
        "argus", "platts", "fastmarkets", "seeking alpha",
    )),
]
SOURCE_UNKNOWN = 0.95


# ============================================
# KEYWORD IMPACT
# ============================================

KEYWORD_TIERS = {
    "urgency": {
        "terms": ("breaking", "urgent", "just in", "alert", "emergency", "flash"),
        "per_hit": 0.10,
        "cap": 0.20,
    },
    "crisis": {
        "terms": (
            "crisis", "war", "conflict", "attack", "sanctions", "embargo", "shortage",
            "disruption", "collapse", "default", "blockade", "disaster", "earthquake",
            "flood", "typhoon", "drought",
        ),
        "per_hit": 0.08,
        "cap": 0.24,
    },
    "policy": {
        "terms": (
            "central bank", "interest rate", "rate hike", "rate cut", "tariff", "tariffs",
            "export ban", "import ban", "quota", "regulation", "stimulus",
            "federal reserve", "fed", "opec", "monetary policy", "trade war",
        ),
        "per_hit": 0.06,
        "cap": 0.18,
    },
    "market": {
        "terms": (
            "surge", "plunge", "soar", "slump", "crash", "record high", "record low",
            "volatility", "rally", "selloff", "tumble", "spike",
        ),
        "per_hit": 0.05,
        "cap": 0.15,
    },
}
KEYWORD_BOOST_CAP = 0.5      # Total boost across all tiers


# ============================================
# GEOGRAPHIC RELEVANCE
# ============================================

REGIONAL_BOOST = 1.1
PRIORITY_COUNTRY_BOOST = 1.25
GEO_BOOST_CAP = 1.3


# ============================================
# SCORE BOUNDS
# ============================================

MIN_SCORE = 1.0
MAX_SCORE = 10.0


# ============================================
# UTILITY FUNCTIONS
# ============================================

@lru_cache(maxsize=512)
def _term_pattern(term: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(normalize_text(term))}\b")


def _count_hits(text: str, terms: Iterable[str]) -> int:
    """Count distinct terms present in normalized text (word-boundary match)."""
    return sum(1 for term in terms if normalize_text(term) and _term_pattern(term).search(text))


def get_recency_factor(age_hours: Optional[float]) -> float:
    """
    Get recency multiplier for an article age.

    Args:
        age_hours: Hours since publication, or None if unknown

    Returns:
        Multiplier between RECENCY_FLOOR and the freshest bracket
    """
    if age_hours is None:
        return RECENCY_UNKNOWN

    for max_age in sorted(RECENCY_SCHEDULE):
        if age_hours <= max_age:
            return RECENCY_SCHEDULE[max_age]

    return RECENCY_FLOOR


def get_source_weight(source: Optional[str]) -> float:
    """Get credibility multiplier for a publisher name."""
    text = normalize_text(source)
    if not text:
        return SOURCE_UNKNOWN

    for weight, names in SOURCE_TIERS:
        if _count_hits(text, names):
            return weight

    return SOURCE_UNKNOWN


def calculate_keyword_boost(text: Optional[str]) -> float:
    """
    Calculate keyword impact multiplier.

    Each tier adds per_hit for every distinct matching term, up to the
    tier cap; the sum is capped at KEYWORD_BOOST_CAP.

    Returns:
        Multiplier between 1.0 and 1 + KEYWORD_BOOST_CAP
    """
    normalized = normalize_text(text)
    if not normalized:
        return 1.0

    boost = 0.0
    for tier in KEYWORD_TIERS.values():
        hits = _count_hits(normalized, tier["terms"])
        boost += min(hits * tier["per_hit"], tier["cap"])

    return 1.0 + min(boost, KEYWORD_BOOST_CAP)


def calculate_geo_multiplier(
    text: Optional[str],
    regional_terms: Iterable[str] = (),
    priority_terms: Iterable[str] = (),
) -> float:
    """
    Calculate geographic relevance multiplier.

    Mentions of the regional focus boost by REGIONAL_BOOST; mentions of the
    priority country by PRIORITY_COUNTRY_BOOST; combined result capped.
    """
    normalized = normalize_text(text)
    if not normalized:
        return 1.0

    multiplier = 1.0
    if _count_hits(normalized, regional_terms):
        multiplier *= REGIONAL_BOOST
    if _count_hits(normalized, priority_terms):
        multiplier *= PRIORITY_COUNTRY_BOOST

    return min(multiplier, GEO_BOOST_CAP)


def clamp_score(score: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def combine_score(base_score: float, multiplier: float) -> float:
    """Final score = clamp(base × multiplier, 1, 10), rounded to one decimal."""
    return round(clamp_score(clamp_score(base_score) * multiplier), 1)
