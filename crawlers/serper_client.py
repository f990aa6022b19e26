"""
Serper Client - Google News search through serper.dev

API docs: https://serper.dev/
"""
from typing import Optional

import httpx
from loguru import logger

from data_transformers.models import RawNewsItem
from data_transformers.serper import SerperNewsTransformer
from .base_crawler import BaseSearchClient, SearchBackendError


class SerperClient(BaseSearchClient):
    """
    Serper.dev news search client.

    One instance holds a single httpx.AsyncClient; call aclose() when done.
    """

    API_URL = "https://google.serper.dev/news"

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        results_per_request: int = 10,
        language: str = "en",
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize Serper client.

        Args:
            api_key: Serper API key
            timeout: Per-request timeout in seconds
            results_per_request: Number of results requested per region
            language: Interface language (`hl`)
            client: Optional preconfigured httpx.AsyncClient
        """
        super().__init__("serper")
        if not api_key:
            raise ValueError("SERPER_API_KEY is required")

        self.api_key = api_key
        self.results_per_request = results_per_request
        self.language = language
        self.transformer = SerperNewsTransformer()

        self.headers = {
            "X-API-KEY": api_key,
            "Content-Type": "application/json",
        }
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def build_payload(self, query: str, region: str, time_filter: Optional[str] = None) -> dict:
        payload = {
            "q": query,
            "num": self.results_per_request,
            "gl": region,
            "hl": self.language,
        }
        if time_filter:
            payload["tbs"] = time_filter
        return payload

    async def search_news(
        self,
        query: str,
        region: str = "us",
        time_filter: Optional[str] = None,
    ) -> list[RawNewsItem]:
        """
        Search news for one region.

        Returns:
            RawNewsItems tagged with the region

        Raises:
            SearchBackendError: On transport error, non-2xx status or non-JSON body
        """
        payload = self.build_payload(query, region, time_filter)
        logger.debug(f"[Serper] region={region} q={query!r} tbs={time_filter}")

        try:
            response = await self._client.post(self.API_URL, headers=self.headers, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise SearchBackendError(
                f"Serper API error: {e.response.status_code} {e.response.reason_phrase}",
                region=region,
            ) from e
        except httpx.HTTPError as e:
            raise SearchBackendError(f"Serper request failed: {e!r}", region=region) from e
        except ValueError as e:
            raise SearchBackendError(f"Serper returned invalid JSON: {e}", region=region) from e

        if not isinstance(data, dict):
            raise SearchBackendError("Serper returned an unexpected payload", region=region)

        return self.transformer.transform(data, region=region)

    async def aclose(self) -> None:
        await self._client.aclose()
