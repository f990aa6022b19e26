"""
Query Builder - Search query construction for news triage

Turns a user query or a dashboard instrument name into Serper search
queries tuned for market-moving news.
"""
import re

from constants.enums import QueryKind


IMPACT_KEYWORDS = (
    "breaking", "urgent", "crisis", "disruption", "sanctions",
    "conflict", "shortage", "supply chain",
)

QUERY_KEYWORDS = {
    QueryKind.PRIMARY: IMPACT_KEYWORDS,
    QueryKind.POLICY: ("central bank", "tariff", "sanctions", "export ban", "regulation", "policy"),
    QueryKind.MARKET: ("price", "volatility", "surge", "plunge", "outlook", "forecast"),
    QueryKind.REGIONAL: ("Southeast Asia", "Thailand", "ASEAN", "Malaysia", "Singapore"),
}

# Commodity/currency words that mark a term as an instrument name
INSTRUMENT_WORDS = (
    "gold", "silver", "oil", "copper", "aluminum", "sugar", "coffee", "wheat",
    "corn", "bitcoin", "ethereum", "steel", "baht", "ringgit", "euro", "pound",
    "gbp", "thb", "myr", "eur",
)

# Ticker-like symbols such as "CL=F", "USDTHB=X", "EUR"
_TICKER_PATTERN = re.compile(r"^[A-Z]{2,6}[=\-.]?[FX]?$", re.IGNORECASE)

# Dashboard display names -> terms that search well
SEARCH_TERM_MAPPINGS = {
    # Commodities
    "Crude Oil (WTI)": "crude oil",
    "Steel (HRC)": "steel prices",
    "Sugar #11": "sugar commodity",
    "Aluminum": "aluminum",
    # Currencies
    "Thai Baht": "Thai baht THB",
    "Malaysian Ringgit": "Malaysian ringgit MYR",
    "Euro": "euro EUR",
    "British Pound": "British pound GBP",
}


def _disjunction(terms) -> str:
    return "(" + " OR ".join(terms) + ")"


def is_instrument_name(term: str) -> bool:
    """Whether a search term looks like a ticker or a commodity/currency name."""
    term = term.strip()
    if not term:
        return False
    if _TICKER_PATTERN.match(term):
        return True
    lowered = term.lower()
    return any(word in lowered for word in INSTRUMENT_WORDS)


def optimal_search_term(instrument_name: str) -> str:
    """Map a dashboard display name to a search-friendly term."""
    name = instrument_name.strip()
    return SEARCH_TERM_MAPPINGS.get(name, name)


def build_general_impact_query(search_term: str) -> str:
    """Quote instrument names and append the market-impact keyword disjunction."""
    term = search_term.strip()
    query_term = f'"{term}"' if is_instrument_name(term) else term
    return f"{query_term} {_disjunction(IMPACT_KEYWORDS)}"


def build_impact_query(search_term: str, kind: QueryKind = QueryKind.PRIMARY, quoted: bool = True) -> str:
    """Build an instrument query with the keywords for `kind`, exact-match unless `quoted` is off."""
    term = search_term.strip()
    query_term = f'"{term}"' if quoted else term
    return f"{query_term} {_disjunction(QUERY_KEYWORDS[kind])}"


def alternate_queries(search_term: str, quoted: bool = True) -> list[str]:
    """Broader phrasings tried in order when the primary query yields too few results."""
    return [
        build_impact_query(search_term, QueryKind.POLICY, quoted=quoted),
        build_impact_query(search_term, QueryKind.MARKET, quoted=quoted),
        build_impact_query(search_term, QueryKind.REGIONAL, quoted=quoted),
        basic_market_query(search_term),
    ]


def basic_market_query(search_term: str) -> str:
    """Last-resort unquoted query without impact keywords."""
    return f"{search_term.strip()} commodity currency market news Southeast Asia Thailand"
