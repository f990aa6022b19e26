"""
Shared Enums

Application-wide enums used across multiple modules.
"""
from enum import Enum


class TriageState(str, Enum):
    """States of a single triage attempt."""
    COLLECTING = "collecting"
    DEDUPLICATING = "deduplicating"
    SCORING = "scoring"
    FALLBACK_SCORING = "fallback_scoring"
    DONE = "done"
    TIMED_OUT = "timed_out"


class ScorerFailureKind(str, Enum):
    """Why the AI scoring path handed over to the fallback ranker."""
    TIMEOUT = "timeout"
    API_ERROR = "api_error"
    MALFORMED_RESPONSE = "malformed_response"
    NO_ACCEPTED_ITEMS = "no_accepted_items"


class RiskCategory(str, Enum):
    """Risk categories the ranking model is asked to consider."""
    GEOPOLITICAL = "Geopolitical risks and conflicts"
    SUPPLY_CHAIN = "Supply chain disruptions"
    POLICY = "Economic policy changes"
    MARKET_VOLATILITY = "Market volatility events"
    DISASTER = "Natural disasters affecting trade"
    CENTRAL_BANK = "Central bank decisions"
    TRADE_WAR = "Trade war developments"
    COMMODITY_SUPPLY = "Commodity supply/production changes"


class QueryKind(str, Enum):
    """Phrasings used when building instrument impact queries."""
    PRIMARY = "primary"
    POLICY = "policy"
    MARKET = "market"
    REGIONAL = "regional"


class InsightsFailureKind(str, Enum):
    """Why market insights were served from the deterministic fallback."""
    TIMEOUT = "timeout"
    API_ERROR = "api_error"
    MALFORMED_RESPONSE = "malformed_response"
