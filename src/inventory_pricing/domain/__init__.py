"""Domain types, models, and errors for inventory pricing."""

from inventory_pricing.domain.errors import InventoryPricingError, PricingInputError
from inventory_pricing.domain.models import (
    DisplayLine,
    HubPriceOverride,
    PerformanceMetrics,
    ResolvedField,
    RevenueEstimate,
)
from inventory_pricing.domain.types import (
    IMPRESSION_MODELS,
    OCCURRENCE_MODELS,
    PERIODIC_MODELS,
    Channel,
    Frequency,
    PricingModel,
    Timeframe,
)

__all__ = [
    "IMPRESSION_MODELS",
    "OCCURRENCE_MODELS",
    "PERIODIC_MODELS",
    "Channel",
    "DisplayLine",
    "Frequency",
    "HubPriceOverride",
    "InventoryPricingError",
    "PerformanceMetrics",
    "PricingInputError",
    "PricingModel",
    "ResolvedField",
    "RevenueEstimate",
    "Timeframe",
]
