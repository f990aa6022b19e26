"""
Scorer Module - AI risk scoring of triaged news

Components:
- ImpactScorer: LLM ranking call + heuristic adjustment
- ScoringSuccess / ScoringFailure: outcome of a scoring attempt
"""

from .models import ScoringSuccess, ScoringFailure, ScoringOutcome
from .scorer import ImpactScorer

__all__ = [
    "ImpactScorer",
    "ScoringSuccess",
    "ScoringFailure",
    "ScoringOutcome",
]
