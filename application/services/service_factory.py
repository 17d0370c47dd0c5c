import httpx

from config.settings import Settings, get_settings
from domain.models.currency import SkippedEntry
from infrastructure.monitoring.logger import ProductionLogger, configure_logging, get_production_logger
from infrastructure.providers import CoinGeckoProvider

from .rate_service import ExchangeRateService


def create_rate_service(
	settings: Settings | None = None,
	production_logger: ProductionLogger | None = None,
	client: httpx.AsyncClient | None = None,
) -> ExchangeRateService:
	"""Wire a CoinGecko-backed rate service and its log handlers from settings."""
	settings = settings or get_settings()
	configure_logging(log_directory=settings.LOG_DIRECTORY, console_level=settings.LOG_LEVEL)
	production_logger = production_logger or get_production_logger()

	def report_skip(skipped: SkippedEntry) -> None:
		production_logger.log_entry_skipped(provider.name, skipped.currency_code, skipped.reason.value, skipped.detail)

	provider = CoinGeckoProvider(
		url=settings.COINGECKO_URL,
		client=client,
		timeout=settings.HTTP_TIMEOUT_SECONDS,
		on_skip=report_skip,
	)
	return ExchangeRateService(provider, production_logger=production_logger)
