"""Legacy pricing schema to ``{flatRate, pricingModel}`` migration.

Legacy records carry one field per billing unit (``perPost``, ``perSend``,
``cpm``, ``weekly`` ...). The current schema stores a single ``flatRate``
amount and an explicit ``pricingModel`` tag. Functions here return new
objects and never mutate their inputs.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

import structlog

from inventory_pricing.domain.types import PricingModel
from inventory_pricing.pricing.fields import (
    FIELD_MODELS,
    MODEL_KEY,
    explicit_amount,
    explicit_model,
    populated_fields,
    to_amount,
)

logger = structlog.get_logger()

PRESERVED_KEYS: tuple[str, ...] = ("frequency", "minimumCommitment")


def _json_number(amount: Decimal) -> int | float:
    return int(amount) if amount == amount.to_integral_value() else float(amount)


def _clean_record(amount: Decimal, model: str, source: Mapping[str, Any]) -> dict[str, Any]:
    migrated: dict[str, Any] = {"flatRate": _json_number(amount), MODEL_KEY: str(model)}
    for key in PRESERVED_KEYS:
        if source.get(key):
            migrated[key] = source[key]
    return migrated


def migrate_pricing_record(record: object) -> dict[str, Any] | None:
    """Migrate one pricing record to the current schema.

    Records that already carry ``pricingModel`` and ``flatRate`` are returned
    as a copy. A record with an explicit ``pricingModel`` keeps that tag and
    takes its amount from the first priced field. Otherwise the first
    populated legacy field (``flatRate`` last) becomes the amount and its
    mapped model the tag; a bare ``flatRate`` defaults to ``flat``. A bare
    number, as stored by old event records, becomes a ``flat`` record.
    ``frequency`` and ``minimumCommitment`` are kept.

    Args:
        record: A pricing record of unknown shape.

    Returns:
        The migrated record, or ``None`` if nothing is priced.
    """
    if isinstance(record, int | float | Decimal) and not isinstance(record, bool):
        amount = to_amount(record)
        return None if amount is None else _clean_record(amount, PricingModel.FLAT, {})
    if not isinstance(record, Mapping):
        return None
    if record.get(MODEL_KEY) and record.get("flatRate") is not None:
        return dict(record)

    model = explicit_model(record)
    if model is not None:
        if model == PricingModel.CONTACT:
            return None
        amount = explicit_amount(record)
        return None if amount is None else _clean_record(amount, model, record)

    legacy = [resolved for resolved in populated_fields(record) if resolved.field != "flatRate"]
    if legacy:
        chosen = legacy[0]
        model = FIELD_MODELS[chosen.field or ""]
        amount = chosen.value
    else:
        amount = to_amount(record.get("flatRate"))
        model = PricingModel.FLAT
    if amount is None:
        return None
    return _clean_record(amount, model, record)


def _migrate_pricing_value(pricing: Any) -> Any:
    """Migrate a single record or each tier of a tier list."""
    if isinstance(pricing, list):
        return [_migrate_wrapped(tier) for tier in pricing]
    clean = migrate_pricing_record(pricing)
    return clean if clean is not None else pricing


def _migrate_wrapped(item: Any) -> Any:
    """Migrate the ``pricing`` of a tier or hub override, keeping its other keys."""
    if not isinstance(item, Mapping) or "pricing" not in item:
        return item
    return {**item, "pricing": _migrate_pricing_value(item["pricing"])}


def migrate_opportunity(opportunity: Mapping[str, Any]) -> dict[str, Any]:
    """Migrate every pricing value carried by an advertising opportunity.

    Covers the single ``pricing`` record, each tier of a tier list and each
    ``hubPricing`` override. Pricing that cannot be migrated is kept as-is.

    Args:
        opportunity: The advertising opportunity record.

    Returns:
        A new opportunity dict with migrated pricing.
    """
    updated = dict(opportunity)
    if "pricing" in opportunity:
        updated["pricing"] = _migrate_pricing_value(opportunity["pricing"])

    hub_pricing = opportunity.get("hubPricing")
    if isinstance(hub_pricing, list):
        updated["hubPricing"] = [_migrate_wrapped(hub) for hub in hub_pricing]

    logger.debug("opportunity_migrated", name=opportunity.get("name"))
    return updated
