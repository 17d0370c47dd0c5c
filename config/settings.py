from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	COINGECKO_URL: str = 'https://api.coingecko.com/api/v3/exchange_rates'
	HTTP_TIMEOUT_SECONDS: int = 10

	# Logging
	LOG_DIRECTORY: str = 'logs'
	LOG_LEVEL: str = 'INFO'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
