"""Crawlers package for Market News Triage."""

from .base_crawler import BaseSearchClient, SearchBackendError
from .serper_client import SerperClient
from .region_collector import RegionCollector

__all__ = ["BaseSearchClient", "SearchBackendError", "SerperClient", "RegionCollector"]
