import logging
import time

from domain.exceptions.currency import InvalidCurrencyError, ProviderError
from domain.models.currency import ExchangeRateEntry
from infrastructure.monitoring.logger import ProductionLogger, get_production_logger
from infrastructure.providers.base import ExchangeRateFeedProvider

logger = logging.getLogger(__name__)


class ExchangeRateService:
	def __init__(self, provider: ExchangeRateFeedProvider, production_logger: ProductionLogger | None = None):
		self.provider = provider
		self.production_logger = production_logger or get_production_logger()

	async def get_rates(self) -> list[ExchangeRateEntry]:
		start_time = time.perf_counter()
		try:
			report = await self.provider.fetch_report()
		except ProviderError as e:
			self.production_logger.log_api_call(
				self.provider.name,
				self.provider.url,
				success=False,
				response_time_ms=(time.perf_counter() - start_time) * 1000,
				error_message=str(e),
			)
			raise

		duration_ms = (time.perf_counter() - start_time) * 1000
		self.production_logger.log_api_call(self.provider.name, self.provider.url, success=True, response_time_ms=duration_ms)
		self.production_logger.log_feed_parse(report, duration_ms)
		return list(report.entries)

	async def get_rate(self, currency_code: str) -> ExchangeRateEntry:
		rates = await self.get_rates()

		for entry in rates:
			if entry.currency_code == currency_code:
				return entry

		wanted = currency_code.casefold()
		for entry in rates:
			if entry.currency_code.casefold() == wanted:
				return entry

		logger.warning(f'No {self.provider.name} rate for {currency_code}')
		raise InvalidCurrencyError(f'Currency {currency_code} is not available from {self.provider.name}')

	async def close(self) -> None:
		await self.provider.close()
