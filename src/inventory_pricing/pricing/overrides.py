"""Per-hub price overrides: save-time filtering and effective pricing lookup.

Partial overrides are normal while an opportunity is being edited, so invalid
entries are dropped rather than reported as errors.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from inventory_pricing.domain.models import HubPriceOverride

logger = structlog.get_logger()


def _non_empty(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_valid_override(candidate: object) -> bool:
    """Whether a candidate override can be persisted.

    A valid override is a mapping with non-empty ``hubId`` and ``hubName``
    and a structured (mapping or list) ``pricing`` value.
    """
    if not isinstance(candidate, Mapping):
        return False
    if not _non_empty(candidate.get("hubId")) or not _non_empty(candidate.get("hubName")):
        return False
    return isinstance(candidate.get("pricing"), Mapping | list)


def merge_overrides(overrides: object) -> list[Any]:
    """Filter a list of hub overrides down to the valid ones.

    Valid entries are returned unchanged and in their original order, so the
    filter is idempotent.

    Args:
        overrides: The ``hubPricing`` value of an opportunity, if any.

    Returns:
        The valid overrides; ``[]`` when the input is missing or not a list.
    """
    if not isinstance(overrides, list | tuple):
        return []
    valid = [candidate for candidate in overrides if is_valid_override(candidate)]
    dropped = len(overrides) - len(valid)
    if dropped:
        logger.debug("hub_overrides_dropped", dropped=dropped, kept=len(valid))
    return valid


def parse_overrides(overrides: object) -> list[HubPriceOverride]:
    """Return the valid overrides as typed :class:`HubPriceOverride` models.

    Entries that pass the save-time predicate but carry a malformed optional
    field (e.g. a non-boolean ``available``) are skipped.
    """
    parsed: list[HubPriceOverride] = []
    for candidate in merge_overrides(overrides):
        try:
            parsed.append(HubPriceOverride.model_validate(candidate))
        except ValidationError:
            logger.debug("hub_override_unparseable", hub_id=candidate.get("hubId"))
    return parsed


def effective_pricing(opportunity: object, hub_id: str | None = None) -> Any:
    """Return the pricing a given hub sees for an opportunity.

    The first valid, available override for ``hub_id`` wins; otherwise the
    opportunity's default ``pricing`` applies.

    Args:
        opportunity: The advertising opportunity record.
        hub_id: The hub to look up, or ``None`` for the default pricing.

    Returns:
        A pricing record or tier list, or ``None`` if the opportunity has none.
    """
    if not isinstance(opportunity, Mapping):
        return None
    default = opportunity.get("pricing")
    if not hub_id:
        return default
    for override in parse_overrides(opportunity.get("hubPricing")):
        if override.hub_id == hub_id and override.available:
            return override.pricing
    return default
