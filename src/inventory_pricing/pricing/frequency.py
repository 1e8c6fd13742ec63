"""Publishing cadence to monthly occurrence conversion.

Months are treated as a uniform 30-day average, so every figure here is an
estimate rather than an accounting-grade count.
"""

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType

from inventory_pricing.domain.types import Frequency, Timeframe

DAYS_PER_MONTH = Decimal("30")

FREQUENCY_TO_MONTHLY: Mapping[str, Decimal] = MappingProxyType({
    Frequency.DAILY: Decimal("30"),
    Frequency.DAILY_BUSINESS: Decimal("22"),
    Frequency.WEEKLY: Decimal("4.33"),
    Frequency.BI_WEEKLY: Decimal("2.17"),
    Frequency.MONTHLY: Decimal("1"),
    Frequency.QUARTERLY: Decimal("0.33"),
    Frequency.BI_ANNUALLY: Decimal("0.167"),
    Frequency.ANNUAL: Decimal("0.083"),
    Frequency.IRREGULAR: Decimal("2"),
})

TIMEFRAME_DAYS: Mapping[str, Decimal] = MappingProxyType({
    Timeframe.DAY: Decimal("1"),
    Timeframe.WEEK: Decimal("7"),
    Timeframe.MONTH: Decimal("30"),
    Timeframe.QUARTER: Decimal("91.25"),
    Timeframe.YEAR: Decimal("365"),
})


def occurrences_per_month(frequency: object) -> Decimal:
    """Translate a cadence label into occurrences per month.

    Args:
        frequency: A cadence label such as ``"weekly"``. Case and surrounding
            whitespace are ignored.

    Returns:
        The average number of occurrences per month as a ``Decimal``
        (``Decimal("4.33")`` for weekly, which compares unequal to the float
        ``4.33``); ``0`` for missing, unrecognized and on-demand cadences.
    """
    if not isinstance(frequency, str):
        return Decimal("0")
    return FREQUENCY_TO_MONTHLY.get(frequency.strip().lower(), Decimal("0"))


def days_in_timeframe(timeframe: object) -> Decimal:
    """Number of days in a projection window.

    Accepts a :class:`Timeframe` name or a positive whole number of days.
    Anything else falls back to one month.
    """
    if isinstance(timeframe, int) and not isinstance(timeframe, bool) and timeframe > 0:
        return Decimal(timeframe)
    if isinstance(timeframe, str):
        return TIMEFRAME_DAYS.get(timeframe.strip().lower(), DAYS_PER_MONTH)
    return DAYS_PER_MONTH
