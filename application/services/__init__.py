from .rate_service import ExchangeRateService
from .service_factory import create_rate_service

__all__ = ['ExchangeRateService', 'create_rate_service']
