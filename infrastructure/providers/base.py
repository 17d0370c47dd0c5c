from abc import ABC, abstractmethod

import httpx

from domain.exceptions.currency import ProviderError
from domain.models.currency import ExchangeRateEntry, ParseReport


class ExchangeRateFeedProvider(ABC):
    """A base class for rate feed providers, handling common HTTP logic."""

    def __init__(self, url: str, client: httpx.AsyncClient | None = None, timeout: int = 10):
        self._url = url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def media_type(self) -> str:
        ...

    @property
    def url(self) -> str:
        return self._url

    @abstractmethod
    def parse_with_report(self, json_bytes: bytes) -> ParseReport:
        ...

    def parse(self, json_bytes: bytes) -> list[ExchangeRateEntry]:
        return list(self.parse_with_report(json_bytes).entries)

    async def _request(self) -> bytes:
        try:
            response = await self._client.get(self.url, headers={"accept": self.media_type})
            response.raise_for_status()
            return response.content

        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(f"{self.name} request failed: {e.__class__.__name__}") from e

    async def fetch_report(self) -> ParseReport:
        body = await self._request()
        return self.parse_with_report(body)

    async def fetch_rates(self) -> list[ExchangeRateEntry]:
        report = await self.fetch_report()
        return list(report.entries)

    async def close(self) -> None:
        """Cleanly close the HTTP client."""
        await self._client.aclose()
