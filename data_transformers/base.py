"""
Base Transformer Interface

All search-backend transformers must inherit from BaseTransformer
and implement the transform() method.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from data_transformers.models import RawNewsItem


class BaseTransformer(ABC):
    """
    Abstract base class for search result transformers.

    Each search backend has its own transformer class that converts
    the raw response body into RawNewsItems.

    Usage:
        transformer = SerperNewsTransformer()
        items = transformer.transform(response.json(), region="th")
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the backend name (e.g., 'serper')."""
        pass

    @abstractmethod
    def transform(self, raw_data: Dict[str, Any], region: Optional[str] = None) -> List[RawNewsItem]:
        """
        Transform a raw search response to news items.

        Args:
            raw_data: Decoded JSON body from the search backend
            region: Region code the request was issued for

        Returns:
            List of RawNewsItem tagged with the region
        """
        pass

    def validate_raw_data(self, raw_data: Any) -> bool:
        """
        Validate raw data before transformation.

        Override in subclass for backend-specific validation.
        """
        if raw_data is None:
            return False
        if isinstance(raw_data, dict):
            return len(raw_data) > 0
        return False
