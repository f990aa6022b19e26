"""
Data Transformers Module

Transforms raw search backend output to the news models used by the
triage pipeline.

Usage:
    from data_transformers import SerperNewsTransformer, RawNewsItem
    
    transformer = SerperNewsTransformer()
    items: list[RawNewsItem] = transformer.transform(raw_json, region="us")

Structure:
    data_transformers/
    ├── models.py           # Shared models (RawNewsItem, RankedNewsItem, TriageResult)
    ├── base.py             # BaseTransformer abstract class
    └── serper/             # Serper.dev news search
        └── transformer.py  # SerperNewsTransformer
"""

from .models import (
    RawNewsItem,
    RankedNewsItem,
    CollectionResult,
    TriageResult,
    MIN_RISK_SCORE,
    MAX_RISK_SCORE,
    MAX_TRIAGE_ITEMS,
    FALLBACK_REASON_PREFIX,
)
from .base import BaseTransformer
from .serper import SerperNewsTransformer

__all__ = [
    # Models
    "RawNewsItem",
    "RankedNewsItem",
    "CollectionResult",
    "TriageResult",
    "MIN_RISK_SCORE",
    "MAX_RISK_SCORE",
    "MAX_TRIAGE_ITEMS",
    "FALLBACK_REASON_PREFIX",
    # Transformers
    "BaseTransformer",
    "SerperNewsTransformer",
]
