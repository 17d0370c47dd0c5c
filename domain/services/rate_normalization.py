import re
from decimal import Decimal, InvalidOperation

from domain.exceptions.currency import InvalidRateError
from domain.models.currency import RawValue, ValueKind

# Plain integers, decimals and e/E scientific notation. Decimal() alone would
# also accept "NaN", "Infinity" and digit-group underscores.
_NUMERIC_STRING = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_decimal_string(text: str) -> Decimal:
    candidate = text.strip()
    if not _NUMERIC_STRING.fullmatch(candidate):
        raise InvalidRateError(f"Not a numeric string: {text!r}")
    try:
        return Decimal(candidate)
    except InvalidOperation as e:
        raise InvalidRateError(f"Not a numeric string: {text!r}") from e


def normalize_rate_value(value: RawValue) -> Decimal:
    """Resolve a raw feed value to an exact, finite Decimal.

    Raises InvalidRateError when the value cannot be read as a number.
    Sign is not checked here.
    """
    if value.kind is ValueKind.NUMBER:
        raw = value.raw
        number = raw if isinstance(raw, Decimal) else Decimal(str(raw))
    elif value.kind is ValueKind.STRING:
        number = parse_decimal_string(value.raw)
    else:
        raise InvalidRateError(f"Unsupported value type: {type(value.raw).__name__}")

    if not number.is_finite():
        raise InvalidRateError(f"Non-finite value: {value.raw!r}")
    return number
