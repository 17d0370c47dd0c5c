# nosec B101


from decimal import Decimal

import pytest

from domain.exceptions.currency import InvalidRateError
from domain.models.currency import (
    ExchangeRateEntry,
    ParseReport,
    RateType,
    RawValue,
    SkippedEntry,
    SkipReason,
    ValueKind,
)
from domain.services.rate_normalization import normalize_rate_value, parse_decimal_string


def test_exchange_rate_entry_keeps_code_case_and_rate():
    entry = ExchangeRateEntry(currency_code='usd', rate=Decimal('26795.49'))

    assert entry.currency_code == 'usd'
    assert entry.rate == Decimal('26795.49')


@pytest.mark.parametrize('rate', [Decimal('0'), Decimal('-1'), Decimal('-0.0001')])
def test_exchange_rate_entry_rejects_non_positive_rate(rate):
    with pytest.raises(InvalidRateError):
        ExchangeRateEntry(currency_code='usd', rate=rate)


@pytest.mark.parametrize('rate', [Decimal('NaN'), Decimal('Infinity'), 1.5])
def test_exchange_rate_entry_rejects_non_finite_or_float_rate(rate):
    with pytest.raises(InvalidRateError):
        ExchangeRateEntry(currency_code='usd', rate=rate)


def test_exchange_rate_entry_is_frozen():
    entry = ExchangeRateEntry(currency_code='usd', rate=Decimal('1'))

    with pytest.raises(AttributeError):
        entry.rate = Decimal('2')


@pytest.mark.parametrize('tag, expected', [
    ('fiat', RateType.FIAT),
    ('crypto', RateType.CRYPTO),
    ('commodity', RateType.COMMODITY),
    ('FIAT', RateType.UNKNOWN),
    ('collectible', RateType.UNKNOWN),
    (None, RateType.UNKNOWN),
    (1, RateType.UNKNOWN),
])
def test_rate_type_from_tag(tag, expected):
    assert RateType.from_tag(tag) is expected


@pytest.mark.parametrize('raw, kind', [
    (Decimal('1.5'), ValueKind.NUMBER),
    (3, ValueKind.NUMBER),
    (2.5, ValueKind.NUMBER),
    ('1.5', ValueKind.STRING),
    (True, ValueKind.OTHER),
    (None, ValueKind.OTHER),
    ({'amount': 1}, ValueKind.OTHER),
    ([1], ValueKind.OTHER),
])
def test_raw_value_tags_json_scalars(raw, kind):
    assert RawValue.of(raw).kind is kind


@pytest.mark.parametrize('text, expected', [
    ('42', Decimal('42')),
    ('  42.50 ', Decimal('42.5')),
    ('-3', Decimal('-3')),
    ('+7.25', Decimal('7.25')),
    ('.5', Decimal('0.5')),
    ('5.', Decimal('5')),
    ('1.5e2', Decimal('150')),
    ('2E-3', Decimal('0.002')),
    ('1e+3', Decimal('1000')),
])
def test_parse_decimal_string_accepts_numeric_forms(text, expected):
    assert parse_decimal_string(text) == expected


@pytest.mark.parametrize('text', ['', '   ', 'abc', 'NaN', 'Infinity', '1_000', '12,5', '1e', 'e5', '0x1A', '1.2.3'])
def test_parse_decimal_string_rejects_non_numeric(text):
    with pytest.raises(InvalidRateError):
        parse_decimal_string(text)


def test_normalize_rate_value_keeps_full_precision():
    value = normalize_rate_value(RawValue.of('98765432109876543210987654321098765432.1'))

    assert value == Decimal('98765432109876543210987654321098765432.1')
    assert str(value) == '98765432109876543210987654321098765432.1'


def test_normalize_rate_value_converts_float_through_str():
    assert normalize_rate_value(RawValue.of(0.1)) == Decimal('0.1')


def test_normalize_rate_value_does_not_check_sign():
    assert normalize_rate_value(RawValue.of(Decimal('-5'))) == Decimal('-5')


@pytest.mark.parametrize('raw', [Decimal('NaN'), Decimal('-Infinity'), None, True, [1]])
def test_normalize_rate_value_rejects_unusable_values(raw):
    with pytest.raises(InvalidRateError):
        normalize_rate_value(RawValue.of(raw))


def test_parse_report_skip_counts():
    report = ParseReport(
        entries=(ExchangeRateEntry('usd', Decimal('1')),),
        skipped=(
            SkippedEntry('btc', SkipReason.NOT_FIAT),
            SkippedEntry('eth', SkipReason.NOT_FIAT),
            SkippedEntry('eur', SkipReason.INVALID_VALUE, 'Not a numeric string'),
        ),
    )

    assert report.skip_counts() == {SkipReason.NOT_FIAT: 2, SkipReason.INVALID_VALUE: 1}
