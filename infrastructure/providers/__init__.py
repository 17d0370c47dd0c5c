from .base import ExchangeRateFeedProvider
from .coingecko import CoinGeckoProvider

__all__ = ['ExchangeRateFeedProvider', 'CoinGeckoProvider']
