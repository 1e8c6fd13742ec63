"""Pricing normalization and revenue projection engine.

Re-exports key functions for convenient access:
    from inventory_pricing.pricing import normalize, project_monthly_revenue
"""

from inventory_pricing.pricing.fields import (
    FIELD_MODELS,
    PRICE_FIELDS,
    infer_model,
    populated_fields,
    resolve_field,
    resolve_pricing,
)
from inventory_pricing.pricing.formatting import UNIT_LABELS, format_line, unit_label
from inventory_pricing.pricing.frequency import (
    FREQUENCY_TO_MONTHLY,
    TIMEFRAME_DAYS,
    days_in_timeframe,
    occurrences_per_month,
)
from inventory_pricing.pricing.migration import migrate_opportunity, migrate_pricing_record
from inventory_pricing.pricing.overrides import (
    effective_pricing,
    is_valid_override,
    merge_overrides,
    parse_overrides,
)
from inventory_pricing.pricing.projection import (
    estimate_revenue_range,
    is_projectable,
    project_monthly_revenue,
    project_revenue,
)
from inventory_pricing.pricing.tiers import (
    calculate_total,
    normalize,
    parse_commitment_multiplier,
    select_base_tier,
)

__all__ = [
    "FIELD_MODELS",
    "FREQUENCY_TO_MONTHLY",
    "PRICE_FIELDS",
    "TIMEFRAME_DAYS",
    "UNIT_LABELS",
    "calculate_total",
    "days_in_timeframe",
    "effective_pricing",
    "estimate_revenue_range",
    "format_line",
    "infer_model",
    "is_projectable",
    "is_valid_override",
    "merge_overrides",
    "migrate_opportunity",
    "migrate_pricing_record",
    "normalize",
    "occurrences_per_month",
    "parse_commitment_multiplier",
    "parse_overrides",
    "populated_fields",
    "project_monthly_revenue",
    "project_revenue",
    "resolve_field",
    "resolve_pricing",
    "select_base_tier",
    "unit_label",
]
