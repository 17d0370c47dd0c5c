import json
import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from domain.exceptions.currency import InvalidRateError, MalformedFeedError
from domain.models.currency import (
	ExchangeRateEntry,
	ParseReport,
	RateType,
	RawRateEntry,
	RawValue,
	SkippedEntry,
	SkipReason,
)
from domain.services.rate_normalization import normalize_rate_value

from .base import ExchangeRateFeedProvider

logger = logging.getLogger(__name__)

SkipHook = Callable[[SkippedEntry], None]


class CoinGeckoFeed(BaseModel):
	"""Top-level shape of the exchange_rates document; extra fields are ignored."""
	model_config = ConfigDict(extra='ignore')

	rates: dict[str, Any]


class CoinGeckoProvider(ExchangeRateFeedProvider):
	URL = 'https://api.coingecko.com/api/v3/exchange_rates'
	MEDIA_TYPE = 'application/json; charset=utf-8'

	def __init__(
		self,
		url: str = URL,
		client: httpx.AsyncClient | None = None,
		timeout: int = 10,
		on_skip: SkipHook | None = None,
	):
		super().__init__(url=url, client=client, timeout=timeout)
		self._on_skip = on_skip

	@property
	def name(self) -> str:
		return 'coingecko'

	@property
	def media_type(self) -> str:
		return self.MEDIA_TYPE

	def parse_with_report(self, json_bytes: bytes) -> ParseReport:
		rates = self._load_rates(json_bytes)

		entries: list[ExchangeRateEntry] = []
		skipped: list[SkippedEntry] = []
		for code, body in rates.items():
			result = self._read_entry(code, body)
			if isinstance(result, SkippedEntry):
				skipped.append(result)
				self._report_skip(result)
			else:
				entries.append(result)

		logger.debug(f'{self.name}: parsed {len(entries)} rates, skipped {len(skipped)}')
		return ParseReport(entries=tuple(entries), skipped=tuple(skipped), source=self.name)

	def _load_rates(self, json_bytes: bytes) -> dict[str, Any]:
		try:
			document = json.loads(
				json_bytes,
				parse_float=Decimal,
				parse_int=Decimal,
				parse_constant=Decimal,
			)
		except (TypeError, ValueError, RecursionError) as e:
			raise MalformedFeedError(f'{self.name} feed is not valid JSON: {e}') from e

		try:
			feed = CoinGeckoFeed.model_validate(document)
		except ValidationError as e:
			raise MalformedFeedError(f'{self.name} feed has no rates mapping: {e.errors()[0]["msg"]}') from e

		return feed.rates

	def _read_entry(self, code: str, body: Any) -> ExchangeRateEntry | SkippedEntry:
		if not isinstance(body, dict):
			return SkippedEntry(code, SkipReason.MALFORMED_ENTRY, f'entry is {type(body).__name__}, not an object')

		raw = RawRateEntry(key=code, type=RateType.from_tag(body.get('type')), value=RawValue.of(body.get('value')))
		if raw.type is not RateType.FIAT:
			return SkippedEntry(code, SkipReason.NOT_FIAT, f'type {body.get("type")!r}')

		try:
			rate = normalize_rate_value(raw.value)
		except InvalidRateError as e:
			return SkippedEntry(code, SkipReason.INVALID_VALUE, str(e))

		if rate <= 0:
			return SkippedEntry(code, SkipReason.NON_POSITIVE_VALUE, f'value {rate}')

		return ExchangeRateEntry(currency_code=raw.key, rate=rate)

	def _report_skip(self, skipped: SkippedEntry) -> None:
		logger.debug(f'{self.name}: skipped {skipped.currency_code} ({skipped.reason.value}): {skipped.detail}')
		if self._on_skip is not None:
			self._on_skip(skipped)
