"""
Constants package for Market News Triage.

Contains enums and search region definitions.
"""

from .enums import (
    TriageState,
    ScorerFailureKind,
    RiskCategory,
    QueryKind,
    InsightsFailureKind,
)
from .regions import NEWS_REGIONS, REGION_NAMES, NEWS_TIME_FILTER, region_name

__all__ = [
    "TriageState",
    "ScorerFailureKind",
    "RiskCategory",
    "QueryKind",
    "InsightsFailureKind",
    "NEWS_REGIONS",
    "REGION_NAMES",
    "NEWS_TIME_FILTER",
    "region_name",
]
