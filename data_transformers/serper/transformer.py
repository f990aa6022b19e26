"""
Serper Transformer - Transform Serper news search responses to RawNewsItems.

Serper `/news` response shape:
    {
        "news": [
            {"title": "...", "snippet": "...", "link": "...",
             "date": "3 hours ago", "source": "Reuters"}
        ]
    }
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loguru import logger

from data_transformers.base import BaseTransformer
from data_transformers.models import RawNewsItem


UNKNOWN_SOURCE = "Unknown"


class SerperNewsTransformer(BaseTransformer):
    """
    Transform Serper news results to RawNewsItem format.

    Missing dates default to the transform time and missing publishers
    to "Unknown". Entries without a title or link are skipped.
    """

    @property
    def source_name(self) -> str:
        return "serper"

    def transform(self, raw_data: Dict[str, Any], region: Optional[str] = None) -> List[RawNewsItem]:
        if not self.validate_raw_data(raw_data):
            logger.debug(f"[SerperTransformer] Empty response for region {region}")
            return []

        entries = raw_data.get("news") or []
        if not isinstance(entries, list):
            logger.warning(f"[SerperTransformer] Unexpected 'news' payload for region {region}: {type(entries).__name__}")
            return []

        fetched_at = datetime.now(timezone.utc).isoformat()
        items = []

        for entry in entries:
            item = self._to_item(entry, region, fetched_at)
            if item is not None:
                items.append(item)

        skipped = len(entries) - len(items)
        if skipped:
            logger.warning(f"[SerperTransformer] Skipped {skipped} malformed entries for region {region}")

        return items

    def _to_item(self, entry: Any, region: Optional[str], fetched_at: str) -> Optional[RawNewsItem]:
        if not isinstance(entry, dict):
            return None

        title = self._clean(entry.get("title"))
        url = self._clean(entry.get("link"))
        if not title and not url:
            return None

        return RawNewsItem(
            title=title,
            description=self._clean(entry.get("snippet")),
            url=url,
            published_at=self._clean(entry.get("date")) or fetched_at,
            source=self._clean(entry.get("source")) or UNKNOWN_SOURCE,
            region=region,
        )

    @staticmethod
    def _clean(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()
