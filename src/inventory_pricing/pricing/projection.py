"""Monthly revenue projection for advertising opportunities.

Converts any supported pricing model into currency per month:

- Periodic models (flat, monthly, weekly, daily) scale by their own cadence.
- Occurrence models (per spot, per send, ...) scale by publishing frequency.
- Impression models (CPM, CPD, CPV) scale by monthly impressions per 1000.

All monetary values use Decimal arithmetic and results are quantized to two
decimal places with ROUND_HALF_UP. Every function returns ``0`` rather than
raising when a projection is impossible; callers tell "contact for pricing"
apart from a real zero with :func:`is_projectable`.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType

import structlog

from inventory_pricing.config import Settings
from inventory_pricing.domain.models import PerformanceMetrics, RevenueEstimate
from inventory_pricing.domain.types import (
    IMPRESSION_MODELS,
    OCCURRENCE_MODELS,
    PERIODIC_MODELS,
    Channel,
    Frequency,
    PricingModel,
    Timeframe,
)
from inventory_pricing.pricing.fields import resolve_pricing, to_amount
from inventory_pricing.pricing.frequency import (
    DAYS_PER_MONTH,
    days_in_timeframe,
    occurrences_per_month,
)
from inventory_pricing.pricing.tiers import select_base_tier

logger = structlog.get_logger()

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
PER_THOUSAND = Decimal("1000")

# Billing cadence of each periodic model, independent of channel frequency
PERIODIC_CADENCE: Mapping[str, str] = MappingProxyType({
    PricingModel.FLAT: Frequency.MONTHLY,
    PricingModel.MONTHLY: Frequency.MONTHLY,
    PricingModel.PER_MONTH: Frequency.MONTHLY,
    PricingModel.WEEKLY: Frequency.WEEKLY,
    PricingModel.PER_WEEK: Frequency.WEEKLY,
    PricingModel.PER_DAY: Frequency.DAILY,
})


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _spots(spots_per_occurrence: object) -> Decimal:
    spots = to_amount(spots_per_occurrence, allow_zero=True)
    return Decimal("1") if spots is None else spots


def _occurrences(metrics: PerformanceMetrics, frequency: object) -> Decimal:
    if metrics.occurrences_per_month is not None:
        return metrics.occurrences_per_month
    return occurrences_per_month(frequency)


def _monthly_units(
    opportunity: Mapping[str, object],
    metrics: PerformanceMetrics,
    frequency: object,
    spots: Decimal,
) -> Decimal | None:
    """Monthly impressions/downloads/views, or ``None`` if nothing supports one."""
    if metrics.impressions_per_month is not None:
        return metrics.impressions_per_month
    legacy = to_amount(opportunity.get("monthlyImpressions"), allow_zero=True)
    if legacy is not None:
        return legacy
    if metrics.audience_size is not None:
        return metrics.audience_size * _occurrences(metrics, frequency) * spots
    return None


def _monthly_revenue(
    opportunity: object,
    frequency: object,
    spots_per_occurrence: object,
    channel: str | None,
) -> Decimal:
    if not isinstance(opportunity, Mapping):
        return ZERO

    record = select_base_tier(opportunity.get("pricing"))
    model, amount = resolve_pricing(record)
    if model is None or model == PricingModel.CONTACT or amount is None:
        logger.debug("revenue_unprojectable", pricing_model=model)
        return ZERO

    metrics = PerformanceMetrics.from_raw(opportunity.get("performanceMetrics"))
    spots = _spots(spots_per_occurrence)

    if model in PERIODIC_MODELS:
        if model == PricingModel.FLAT and channel == Channel.EVENTS:
            # Event sponsorships are priced per event instance
            return amount * _occurrences(metrics, frequency)
        return amount * occurrences_per_month(PERIODIC_CADENCE[model])

    if model in OCCURRENCE_MODELS:
        return amount * _occurrences(metrics, frequency) * spots

    if model in IMPRESSION_MODELS:
        units = _monthly_units(opportunity, metrics, frequency, spots)
        if units is None:
            logger.debug("revenue_missing_metrics", pricing_model=model)
            return ZERO
        return amount * units / PER_THOUSAND

    logger.debug("revenue_unsupported_model", pricing_model=model)
    return ZERO


def project_monthly_revenue(
    opportunity: object,
    frequency: object,
    spots_per_occurrence: object = 1,
    *,
    channel: str | None = None,
) -> Decimal:
    """Project an opportunity's revenue per month.

    Args:
        opportunity: The advertising opportunity (``pricing`` plus optional
            ``performanceMetrics``).
        frequency: The publishing cadence of the parent channel, show or event.
        spots_per_occurrence: How many times the ad runs in one publishing
            instance (e.g. two mid-roll slots in one video).
        channel: The opportunity's channel; on ``events`` a flat price is a
            per-event fee.

    Returns:
        Monthly revenue with exactly 2 decimal places; ``0`` when no numeric
        projection is possible.
    """
    return _quantize(_monthly_revenue(opportunity, frequency, spots_per_occurrence, channel))


def project_revenue(
    opportunity: object,
    timeframe: object,
    frequency: object,
    spots_per_occurrence: object = 1,
    *,
    channel: str | None = None,
) -> Decimal:
    """Project an opportunity's revenue over an arbitrary window.

    The monthly figure is scaled by the window's length in days over a
    30-day month.

    Args:
        opportunity: The advertising opportunity.
        timeframe: A :class:`Timeframe` name or a number of days.
        frequency: The publishing cadence of the parent channel.
        spots_per_occurrence: Ad placements per publishing instance.
        channel: The opportunity's channel.

    Returns:
        Revenue for the window with exactly 2 decimal places.
    """
    monthly = _monthly_revenue(opportunity, frequency, spots_per_occurrence, channel)
    return _quantize(monthly * days_in_timeframe(timeframe) / DAYS_PER_MONTH)


def estimate_revenue_range(
    opportunity: object,
    frequency: object,
    spots_per_occurrence: object = 1,
    *,
    timeframe: object = Timeframe.MONTH,
    channel: str | None = None,
    settings: Settings | None = None,
) -> RevenueEstimate:
    """Project revenue with a conservative/optimistic band.

    Guaranteed metrics get the tighter ``guaranteed_variance`` band, estimated
    metrics the wider ``estimated_variance`` band.

    Args:
        opportunity: The advertising opportunity.
        frequency: The publishing cadence of the parent channel.
        spots_per_occurrence: Ad placements per publishing instance.
        timeframe: The projection window. Defaults to one month.
        channel: The opportunity's channel.
        settings: Settings to read the variances from. Without them the
            default variances apply; the environment is not read.

    Returns:
        The expected revenue and its band, each with 2 decimal places.
    """
    settings = settings or Settings.model_construct()
    monthly = _monthly_revenue(opportunity, frequency, spots_per_occurrence, channel)
    expected = monthly * days_in_timeframe(timeframe) / DAYS_PER_MONTH

    raw_metrics = opportunity.get("performanceMetrics") if isinstance(opportunity, Mapping) else None
    guaranteed = PerformanceMetrics.from_raw(raw_metrics).guaranteed
    variance = Decimal(
        str(settings.guaranteed_variance if guaranteed else settings.estimated_variance)
    )

    return RevenueEstimate(
        conservative=_quantize(expected * (1 - variance)),
        expected=_quantize(expected),
        optimistic=_quantize(expected * (1 + variance)),
        guaranteed=guaranteed,
    )


def is_projectable(opportunity: object) -> bool:
    """Whether an opportunity's pricing supports a numeric projection.

    ``False`` for contact-for-pricing, unresolved and unsupported models, so a
    ``0`` projection can be rendered differently from a real zero.
    """
    if not isinstance(opportunity, Mapping):
        return False
    model, amount = resolve_pricing(select_base_tier(opportunity.get("pricing")))
    if amount is None:
        return False
    return model in PERIODIC_MODELS or model in OCCURRENCE_MODELS or model in IMPRESSION_MODELS
