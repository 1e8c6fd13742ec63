"""Unit suffixes and price display strings for pricing models."""

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType

from inventory_pricing.domain.models import DisplayLine
from inventory_pricing.domain.types import Channel, PricingModel

NOT_AVAILABLE = "N/A"
CONTACT_LABEL = "Contact for pricing"

UNIT_LABELS: Mapping[str, str] = MappingProxyType({
    PricingModel.FLAT_RATE: "Flat Rate",
    PricingModel.PER_MONTH: "/month",
    PricingModel.MONTHLY: "/month",
    PricingModel.PER_WEEK: "/week",
    PricingModel.WEEKLY: "/week",
    PricingModel.PER_DAY: "/day",
    PricingModel.CPM: "/1000 impressions",
    PricingModel.CPC: "/click",
    PricingModel.PER_SEND: "/send",
    PricingModel.PER_AD: "/ad",
    PricingModel.PER_LINE: "/line",
    PricingModel.PER_SPOT: "/spot",
    PricingModel.PER_EPISODE: "/episode",
    PricingModel.CPD: "/1000 downloads",
    PricingModel.PER_POST: "/post",
    PricingModel.PER_STORY: "/story",
    PricingModel.CPV: "/1000 views",
    PricingModel.PER_VIDEO: "/video",
    PricingModel.CONTACT: CONTACT_LABEL,
})


def unit_label(model: str | None, channel: str | None = None) -> str:
    """Return the display suffix for a pricing model.

    ``flat`` is the only channel-sensitive model: a single sponsorship fee per
    event instance on the events channel, a monthly fee everywhere else.

    Args:
        model: The canonical model id, or ``None`` if unresolved.
        channel: The channel the opportunity belongs to, if known.

    Returns:
        The unit suffix; ``"N/A"`` for a missing model and the model id itself
        for a model outside the label table.
    """
    if not model:
        return NOT_AVAILABLE
    if model == PricingModel.FLAT:
        return "/occurrence" if channel == Channel.EVENTS else "/month"
    return UNIT_LABELS.get(model, model)


def format_amount(amount: Decimal) -> str:
    """Format an amount as dollars with thousands separators."""
    return f"${amount:,.2f}"


def format_line(line: DisplayLine) -> str:
    """Render a display line as a single string, e.g. ``$1,500.00/month``."""
    if line.amount == "contact":
        return CONTACT_LABEL
    if line.amount is None:
        return line.unit_label
    if line.unit_label.startswith("/"):
        return f"{format_amount(line.amount)}{line.unit_label}"
    return f"{format_amount(line.amount)} {line.unit_label}"
