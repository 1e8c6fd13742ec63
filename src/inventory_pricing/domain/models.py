"""Pydantic v2 models for the values the pricing engine derives on read."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = structlog.get_logger()


class ResolvedField(BaseModel):
    """The first populated known price field of a pricing record.

    The null pair (``field=None, value=None``) means nothing was populated.
    """

    model_config = ConfigDict(frozen=True)

    field: str | None = None
    value: Decimal | None = None

    @property
    def is_resolved(self) -> bool:
        """Whether a populated field was found."""
        return self.field is not None


class DisplayLine(BaseModel):
    """One rendered price: an amount and its unit suffix.

    ``amount`` is ``"contact"`` for contact-for-pricing records and ``None``
    when no amount could be resolved.
    """

    model_config = ConfigDict(frozen=True)

    amount: Decimal | Literal["contact"] | None
    unit_label: str


class PerformanceMetrics(BaseModel):
    """Observed delivery metrics attached to an advertising opportunity.

    Accepts the camelCase keys used by the host application's JSON. Unknown
    keys are ignored. Negative and non-finite numbers are rejected.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    occurrences_per_month: Decimal | None = Field(default=None, alias="occurrencesPerMonth")
    impressions_per_month: Decimal | None = Field(default=None, alias="impressionsPerMonth")
    audience_size: Decimal | None = Field(default=None, alias="audienceSize")
    guaranteed: bool = False

    @field_validator(
        "occurrences_per_month", "impressions_per_month", "audience_size", mode="before"
    )
    @classmethod
    def float_via_str(cls, v: object) -> object:
        """Convert floats through ``str`` so ``4.33`` stays ``Decimal("4.33")``."""
        if isinstance(v, bool):
            raise ValueError("metric must be a number, not a boolean")
        if isinstance(v, float):
            return str(v)
        return v

    @field_validator("occurrences_per_month", "impressions_per_month", "audience_size")
    @classmethod
    def must_be_finite_and_non_negative(cls, v: Decimal | None) -> Decimal | None:
        """Ensure metric values are finite and not negative."""
        if v is None:
            return v
        if not v.is_finite() or v < 0:
            raise ValueError("metric must be a finite, non-negative number")
        return v

    @classmethod
    def from_raw(cls, raw: object) -> PerformanceMetrics:
        """Build metrics from untrusted host data without raising.

        Invalid keys are dropped individually so one malformed metric does not
        discard the rest.

        Args:
            raw: The ``performanceMetrics`` value of an opportunity, if any.

        Returns:
            The parsed metrics; an empty instance when nothing usable exists.
        """
        if isinstance(raw, PerformanceMetrics):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as exc:
            bad_keys = {err["loc"][0] for err in exc.errors() if err["loc"]}
            logger.debug("performance_metrics_dropped_keys", keys=sorted(map(str, bad_keys)))
            cleaned = {k: v for k, v in raw.items() if k not in bad_keys}
            try:
                return cls.model_validate(cleaned)
            except ValidationError:
                return cls()


class RevenueEstimate(BaseModel):
    """A projected revenue figure with a conservative/optimistic band."""

    model_config = ConfigDict(frozen=True)

    conservative: Decimal
    expected: Decimal
    optimistic: Decimal
    guaranteed: bool = False


class HubPriceOverride(BaseModel):
    """A price override negotiated with one distribution partner (hub).

    Mirrors the save-time validity rule: both identifiers non-empty and the
    pricing a structured value.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    hub_id: str = Field(alias="hubId")
    hub_name: str = Field(alias="hubName")
    pricing: dict[str, Any] | list[Any]
    available: bool = True

    @field_validator("hub_id", "hub_name")
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        """Ensure hub identifiers are not empty or whitespace-only."""
        if not v.strip():
            raise ValueError("hub identifiers must not be empty")
        return v
