"""Price field resolution and pricing-model inference.

Pricing records arrive in three historical shapes: legacy records with one or
more unit-specific fields (``perSpot``, ``perSend``, ``cpm`` ...), tier lists,
and the current ``{flatRate, pricingModel}`` shape. This module turns any of
the single-record shapes into a ``(model, amount)`` pair.

Every function here is total: malformed input yields ``None`` or the null
``ResolvedField``, never an exception.
"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from types import MappingProxyType

from inventory_pricing.domain.models import ResolvedField
from inventory_pricing.domain.types import PricingModel

# Resolution order is fixed so multi-field legacy records always resolve the
# same field first.
PRICE_FIELDS: tuple[str, ...] = (
    "flatRate",
    "perPost",
    "perStory",
    "monthly",
    "perSpot",
    "per30Second",
    "per60Second",
    "perSend",
    "perAd",
    "perEpisode",
    "perVideo",
    "perLine",
    "cpm",
    "cpc",
    "cpd",
    "cpv",
    "weekly",
    "perWeek",
    "perDay",
)

FIELD_MODELS: Mapping[str, str] = MappingProxyType({
    "flatRate": PricingModel.FLAT,
    "perPost": PricingModel.PER_POST,
    "perStory": PricingModel.PER_STORY,
    "monthly": PricingModel.MONTHLY,
    "perSpot": PricingModel.PER_SPOT,
    "per30Second": PricingModel.PER_SPOT,
    "per60Second": PricingModel.PER_SPOT,
    "perSend": PricingModel.PER_SEND,
    "perAd": PricingModel.PER_AD,
    "perEpisode": PricingModel.PER_EPISODE,
    "perVideo": PricingModel.PER_VIDEO,
    "perLine": PricingModel.PER_LINE,
    "cpm": PricingModel.CPM,
    "cpc": PricingModel.CPC,
    "cpd": PricingModel.CPD,
    "cpv": PricingModel.CPV,
    "weekly": PricingModel.PER_WEEK,
    "perWeek": PricingModel.PER_WEEK,
    "perDay": PricingModel.PER_DAY,
})

MODEL_KEY = "pricingModel"


def to_amount(value: object, *, allow_zero: bool = False) -> Decimal | None:
    """Convert a raw price value to a ``Decimal``.

    Numbers and numeric strings are accepted. Booleans, negatives, NaN and
    infinities are not prices.

    Args:
        value: The raw field value.
        allow_zero: Whether ``0`` counts as a populated price.

    Returns:
        The amount, or ``None`` if the value is not a usable price.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int | float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not amount.is_finite() or amount < 0:
        return None
    if amount == 0 and not allow_zero:
        return None
    return amount


def resolve_field(record: object, *, allow_zero: bool = False) -> ResolvedField:
    """Find the first populated known price field of a record.

    Args:
        record: A pricing record of unknown shape. Non-mappings resolve to
            the null pair.
        allow_zero: Whether a ``0`` value counts as populated.

    Returns:
        The resolved field name and amount, or the null pair.
    """
    if not isinstance(record, Mapping):
        return ResolvedField()
    for name in PRICE_FIELDS:
        amount = to_amount(record.get(name), allow_zero=allow_zero)
        if amount is not None:
            return ResolvedField(field=name, value=amount)
    return ResolvedField()


def populated_fields(record: object) -> list[ResolvedField]:
    """Return every populated, non-zero known price field in resolution order."""
    if not isinstance(record, Mapping):
        return []
    found: list[ResolvedField] = []
    for name in PRICE_FIELDS:
        amount = to_amount(record.get(name))
        if amount is not None:
            found.append(ResolvedField(field=name, value=amount))
    return found


def explicit_model(record: object) -> str | None:
    """Return the record's explicit ``pricingModel`` tag, if it carries one."""
    if not isinstance(record, Mapping):
        return None
    model = record.get(MODEL_KEY)
    if isinstance(model, str) and model.strip():
        return model
    return None


def infer_model(record: object, resolved_field: str | None) -> str | None:
    """Determine the canonical pricing model of a record.

    An explicit ``pricingModel`` always wins and is returned verbatim.
    Otherwise the resolved field name is mapped through ``FIELD_MODELS``.

    Args:
        record: The pricing record.
        resolved_field: The field found by :func:`resolve_field`, if any.

    Returns:
        The model id, or ``None`` when neither source yields one.
    """
    model = explicit_model(record)
    if model is not None:
        return model
    if not isinstance(resolved_field, str):
        return None
    return FIELD_MODELS.get(resolved_field)


def explicit_amount(record: Mapping[str, object]) -> Decimal | None:
    """Resolve the single amount of a record that carries an explicit model.

    ``flatRate`` is preferred, then ``cpm``, then any other known field. A
    zero ``flatRate`` is kept as a real amount when nothing else is priced.
    """
    for name in ("flatRate", "cpm"):
        amount = to_amount(record.get(name))
        if amount is not None:
            return amount
    resolved = resolve_field(record)
    if resolved.is_resolved:
        return resolved.value
    return to_amount(record.get("flatRate"), allow_zero=True)


def resolve_pricing(record: object) -> tuple[str | None, Decimal | None]:
    """Resolve a single pricing record to its ``(model, amount)`` pair.

    ``contact`` records resolve to ``("contact", None)``; records with no
    explicit model and no populated field resolve to ``(None, None)``.
    """
    model = explicit_model(record)
    if model is not None and isinstance(record, Mapping):
        if model == PricingModel.CONTACT:
            return model, None
        return model, explicit_amount(record)

    resolved = resolve_field(record)
    return infer_model(record, resolved.field), resolved.value
