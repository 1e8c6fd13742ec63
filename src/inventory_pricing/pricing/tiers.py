"""Normalization of pricing values into ordered display lines.

A pricing value is either a single record or an ordered list of tiers
(``[{"pricing": {...}}, ...]``). Both shapes run through the same pipeline:
field resolution, model inference, then unit formatting.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from inventory_pricing.domain.models import DisplayLine
from inventory_pricing.domain.types import PricingModel
from inventory_pricing.pricing.fields import (
    FIELD_MODELS,
    explicit_model,
    populated_fields,
    resolve_pricing,
)
from inventory_pricing.pricing.formatting import CONTACT_LABEL, NOT_AVAILABLE, unit_label

_COMMITMENT_PATTERN = re.compile(r"^(\d+)x$")
_ONE_TIME_LABELS = frozenset({"1x", "onetime"})


def is_tier_list(pricing: object) -> bool:
    """Whether a pricing value is a tier list rather than a single record."""
    return isinstance(pricing, list | tuple)


def tier_record(tier: object) -> Mapping[str, Any]:
    """Return the pricing record of a tier.

    Tiers normally wrap their record as ``{"pricing": {...}}``; a bare record
    inside a tier list is treated as its own pricing.
    """
    if not isinstance(tier, Mapping):
        return {}
    nested = tier.get("pricing")
    if isinstance(nested, Mapping):
        return nested
    return tier


def _unavailable() -> DisplayLine:
    return DisplayLine(amount=None, unit_label=NOT_AVAILABLE)


def _record_line(record: Mapping[str, Any], channel: str | None) -> DisplayLine:
    model, amount = resolve_pricing(record)
    if model == PricingModel.CONTACT:
        return DisplayLine(amount="contact", unit_label=CONTACT_LABEL)
    if model is None or amount is None:
        return _unavailable()
    return DisplayLine(amount=amount, unit_label=unit_label(model, channel))


def normalize(pricing: object, channel: str | None = None) -> list[DisplayLine]:
    """Produce the ordered display lines for a pricing value.

    Tier lists keep their input order. A single record with an explicit model
    yields one line. A legacy record yields one line per populated field so
    historical prices stay visible.

    Args:
        pricing: A single pricing record or a list of tiers.
        channel: The channel of the opportunity, for channel-sensitive labels.

    Returns:
        At least one display line; a lone ``N/A`` line when nothing resolves.
    """
    if is_tier_list(pricing):
        tiers: Sequence[object] = pricing  # type: ignore[assignment]
        if not tiers:
            return [_unavailable()]
        return [_record_line(tier_record(tier), channel) for tier in tiers]

    if not isinstance(pricing, Mapping):
        return [_unavailable()]

    if explicit_model(pricing) is not None:
        return [_record_line(pricing, channel)]

    fields = populated_fields(pricing)
    if not fields:
        return [_unavailable()]
    return [
        DisplayLine(
            amount=resolved.value,
            unit_label=unit_label(FIELD_MODELS.get(resolved.field or ""), channel),
        )
        for resolved in fields
    ]


def parse_commitment_multiplier(frequency: object) -> int:
    """Parse a commitment label such as ``"12x"`` into its multiplier.

    Anything that is not ``<digits>x`` is a single commitment (``1``).
    """
    if not isinstance(frequency, str):
        return 1
    match = _COMMITMENT_PATTERN.match(frequency.strip().lower())
    return int(match.group(1)) if match else 1


def calculate_total(record: object) -> Decimal | None:
    """Total price of a commitment package, e.g. ``$300 x 4x = $1,200``.

    Returns:
        The amount times the commitment multiplier, or ``None`` for contact
        and unpriced records.
    """
    model, amount = resolve_pricing(record)
    if model == PricingModel.CONTACT or not amount:
        return None
    frequency = record.get("frequency") if isinstance(record, Mapping) else None
    return amount * parse_commitment_multiplier(frequency)


def _tier_commitment(tier: object) -> str:
    record = tier_record(tier)
    frequency = record.get("frequency")
    if not frequency and isinstance(tier, Mapping):
        frequency = tier.get("frequency")
    return frequency.strip().lower() if isinstance(frequency, str) else ""


def select_base_tier(pricing: object) -> Mapping[str, Any]:
    """Pick the pricing record used for revenue forecasting.

    Commitment tiers are volume discounts, so forecasting uses the full-price
    single-insertion tier: the ``1x`` / one-time tier if present, otherwise
    the tier with the lowest commitment multiplier (first one on ties).

    Args:
        pricing: A single pricing record or a list of tiers.

    Returns:
        The selected record; ``{}`` when there is nothing to select.
    """
    if not is_tier_list(pricing):
        return pricing if isinstance(pricing, Mapping) else {}

    tiers: Sequence[object] = pricing  # type: ignore[assignment]
    if not tiers:
        return {}

    for tier in tiers:
        commitment = _tier_commitment(tier)
        if commitment in _ONE_TIME_LABELS or "one time" in commitment:
            return tier_record(tier)

    lowest = min(tiers, key=lambda t: parse_commitment_multiplier(_tier_commitment(t)))
    return tier_record(lowest)
