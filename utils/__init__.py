"""
Utilities module for Market News Triage.
"""
from .logger import logger, init_logging, setup_logging
from .dates import parse_published_at, age_in_hours

__all__ = ["logger", "init_logging", "setup_logging", "parse_published_at", "age_in_hours"]
