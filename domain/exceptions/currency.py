class CurrencyException(Exception):
    pass


class InvalidCurrencyError(CurrencyException):
    pass


class InvalidRateError(CurrencyException):
    pass


class ProviderError(CurrencyException):
    pass


class MalformedFeedError(ProviderError):
    pass
