"""
Region Collector - Multi-region news collection

Issues one search per configured region concurrently and returns the
union of all results. A failing region contributes nothing and never
aborts the others.
"""
import asyncio
from typing import Optional, Sequence

from loguru import logger

from constants.regions import region_name
from data_transformers.models import CollectionResult
from .base_crawler import BaseSearchClient


class RegionCollector:
    """
    Fan-out/fan-in collector over a search backend.

    The overall await completes only when every regional request has
    settled (succeeded or failed).
    """

    def __init__(
        self,
        search_client: BaseSearchClient,
        regions: Sequence[str],
        time_filter: Optional[str] = None,
    ):
        """
        Initialize collector.

        Args:
            search_client: Backend used for each regional search
            regions: Region codes to query (e.g. "us", "th")
            time_filter: Recency filter passed to every request
        """
        if not regions:
            raise ValueError("At least one region is required")

        self.search_client = search_client
        self.regions = list(regions)
        self.time_filter = time_filter

    async def collect(self, query: str) -> CollectionResult:
        """
        Collect news for a query from all regions.

        Returns:
            CollectionResult with the union of items (each tagged with its
            region) and the per-region failure record
        """
        logger.info(f"[Collector] Searching {len(self.regions)} regions for: {query}")

        results = await asyncio.gather(
            *(self.search_client.search_news(query, region, self.time_filter) for region in self.regions),
            return_exceptions=True,
        )

        collection = CollectionResult(query=query)

        for region, result in zip(self.regions, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                logger.warning(f"[Collector] Region {region} ({region_name(region)}) failed: {result}")
                collection.failed_regions[region] = str(result)
                continue

            collection.succeeded_regions.append(region)
            collection.items.extend(result)
            logger.debug(f"[Collector] Region {region}: {len(result)} items")

        if collection.all_failed:
            logger.error(f"[Collector] All {len(self.regions)} regions failed for: {query}")
        elif collection.failed_regions:
            logger.info(
                f"[Collector] {len(collection.failed_regions)}/{len(self.regions)} regions failed: "
                f"{', '.join(collection.failed_regions)}"
            )

        logger.info(f"[Collector] Collected {collection.items_count} items from {len(collection.succeeded_regions)} regions")
        return collection
