from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from domain.exceptions.currency import InvalidRateError


class RateType(Enum):
    FIAT = "fiat"
    CRYPTO = "crypto"
    COMMODITY = "commodity"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: Any) -> "RateType":
        """Map a feed `type` tag to a RateType; anything unrecognised is UNKNOWN."""
        for member in (cls.FIAT, cls.CRYPTO, cls.COMMODITY):
            if tag == member.value:
                return member
        return cls.UNKNOWN


class ValueKind(Enum):
    NUMBER = "number"
    STRING = "string"
    OTHER = "other"


@dataclass(frozen=True)
class RawValue:
    """A JSON scalar as it appeared in the feed, tagged by its encoding."""
    kind: ValueKind
    raw: Any

    @classmethod
    def of(cls, raw: Any) -> "RawValue":
        # JSON booleans decode to bool, which is an int subclass
        if isinstance(raw, bool):
            return cls(ValueKind.OTHER, raw)
        if isinstance(raw, (Decimal, int, float)):
            return cls(ValueKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(ValueKind.STRING, raw)
        return cls(ValueKind.OTHER, raw)


@dataclass(frozen=True)
class RawRateEntry:
    key: str
    type: RateType
    value: RawValue


@dataclass(frozen=True)
class ExchangeRateEntry:
    currency_code: str
    rate: Decimal

    def __post_init__(self):
        if not isinstance(self.rate, Decimal) or not self.rate.is_finite():
            raise InvalidRateError(f"Rate for {self.currency_code} must be a finite Decimal, got {self.rate!r}")
        if self.rate <= 0:
            raise InvalidRateError(f"Rate for {self.currency_code} must be positive, got {self.rate}")


class SkipReason(Enum):
    NOT_FIAT = "not_fiat"
    MALFORMED_ENTRY = "malformed_entry"
    INVALID_VALUE = "invalid_value"
    NON_POSITIVE_VALUE = "non_positive_value"


@dataclass(frozen=True)
class SkippedEntry:
    currency_code: str
    reason: SkipReason
    detail: str = ""


@dataclass(frozen=True)
class ParseReport:
    entries: tuple[ExchangeRateEntry, ...] = ()
    skipped: tuple[SkippedEntry, ...] = ()
    source: str = field(default="", compare=False)

    def skip_counts(self) -> dict[SkipReason, int]:
        counts: dict[SkipReason, int] = {}
        for skipped in self.skipped:
            counts[skipped.reason] = counts.get(skipped.reason, 0) + 1
        return counts
