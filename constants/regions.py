"""
Search regions used to diversify news sourcing.

Each region is a Serper `gl` country code with a display name.
"""

NEWS_REGIONS = {
    "US": {"code": "us", "name": "United States"},
    "UK": {"code": "gb", "name": "United Kingdom"},
    "DE": {"code": "de", "name": "Germany"},
    "JP": {"code": "jp", "name": "Japan"},
    "CN": {"code": "cn", "name": "China"},
    "TH": {"code": "th", "name": "Thailand"},
    "SG": {"code": "sg", "name": "Singapore"},
    "MY": {"code": "my", "name": "Malaysia"},
}

REGION_NAMES = {r["code"]: r["name"] for r in NEWS_REGIONS.values()}

# Past week
NEWS_TIME_FILTER = "qdr:w"


def region_name(code: str) -> str:
    """Display name for a region code (falls back to the upper-cased code)."""
    return REGION_NAMES.get(code.lower(), code.upper())
