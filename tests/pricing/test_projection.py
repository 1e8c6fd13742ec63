"""Tests for monthly revenue projection."""

from decimal import Decimal
from typing import Any

import pytest

from inventory_pricing.config import Settings
from inventory_pricing.domain.types import Channel
from inventory_pricing.pricing.projection import (
    estimate_revenue_range,
    is_projectable,
    project_monthly_revenue,
    project_revenue,
)


class TestProjectMonthlyRevenueSentinels:
    """Tests for unprojectable opportunities."""

    @pytest.mark.parametrize(
        "opportunity",
        [
            {"pricing": {"pricingModel": "contact"}},
            {"pricing": {"pricingModel": "contact", "flatRate": 900}},
            {"pricing": {}},
            {"pricing": None},
            {},
            None,
            "opportunity",
        ],
        ids=["contact", "contact_with_amount", "empty", "null", "no_pricing", "none", "string"],
    )
    @pytest.mark.parametrize("frequency", ["weekly", "daily", None])
    def test_contact_or_unresolved_is_zero(self, opportunity: object, frequency: str | None):
        metrics_opportunity = opportunity
        if isinstance(opportunity, dict):
            metrics_opportunity = {
                **opportunity,
                "performanceMetrics": {"impressionsPerMonth": 100000, "audienceSize": 5000},
            }
        assert project_monthly_revenue(opportunity, frequency) == 0
        assert project_monthly_revenue(metrics_opportunity, frequency, 3) == 0

    def test_unsupported_model_is_zero(self):
        assert project_monthly_revenue({"pricing": {"cpc": 2}}, "weekly") == 0
        assert project_monthly_revenue(
            {"pricing": {"flatRate": 10, "pricingModel": "per_billboard"}}, "weekly"
        ) == 0


class TestOccurrenceModels:
    """Tests for per-spot/per-send style pricing."""

    def test_radio_per_spot_weekly(self, radio_spot_opportunity: dict[str, Any]):
        result = project_monthly_revenue(radio_spot_opportunity, "weekly", 1)
        assert result == Decimal("649.50")

    def test_spots_per_occurrence_multiplies(self, radio_spot_opportunity: dict[str, Any]):
        result = project_monthly_revenue(radio_spot_opportunity, "weekly", 2)
        assert result == Decimal("1299.00")

    def test_newsletter_per_send_daily(self):
        opportunity = {"pricing": {"flatRate": 75, "pricingModel": "per_send"}}
        assert project_monthly_revenue(opportunity, "daily") == Decimal("2250.00")

    def test_metrics_occurrences_take_precedence(self):
        opportunity = {
            "pricing": {"perEpisode": 200},
            "performanceMetrics": {"occurrencesPerMonth": 8},
        }
        assert project_monthly_revenue(opportunity, "weekly") == Decimal("1600.00")

    def test_unknown_frequency_is_zero(self, radio_spot_opportunity: dict[str, Any]):
        assert project_monthly_revenue(radio_spot_opportunity, "on-demand") == 0

    def test_result_has_two_places(self, radio_spot_opportunity: dict[str, Any]):
        result = project_monthly_revenue(radio_spot_opportunity, "bi-weekly")
        assert result == Decimal("325.50")
        assert result.as_tuple().exponent == -2


class TestPeriodicModels:
    """Tests for flat/monthly/weekly/daily pricing."""

    @pytest.mark.parametrize("frequency", ["daily", "weekly", "monthly", None])
    def test_flat_monthly_fee_ignores_channel_frequency(self, frequency: str | None):
        opportunity = {"pricing": {"flatRate": 1200, "pricingModel": "flat"}}
        assert project_monthly_revenue(opportunity, frequency) == Decimal("1200.00")

    def test_legacy_monthly_field(self):
        assert project_monthly_revenue({"pricing": {"monthly": 800}}, "daily") == Decimal("800.00")

    def test_weekly_rate(self):
        opportunity = {"pricing": {"flatRate": 100, "pricingModel": "per_week"}}
        assert project_monthly_revenue(opportunity, "monthly") == Decimal("433.00")

    def test_daily_rate(self):
        opportunity = {"pricing": {"flatRate": 20, "pricingModel": "per_day"}}
        assert project_monthly_revenue(opportunity, None) == Decimal("600.00")

    def test_event_flat_fee_is_per_occurrence(self):
        opportunity = {"pricing": {"flatRate": 10000, "pricingModel": "flat"}}
        result = project_monthly_revenue(opportunity, "annual", channel=Channel.EVENTS)
        assert result == Decimal("830.00")

    def test_event_flat_fee_without_frequency_is_zero(self):
        opportunity = {"pricing": {"flatRate": 10000, "pricingModel": "flat"}}
        assert project_monthly_revenue(opportunity, None, channel="events") == 0


class TestImpressionModels:
    """Tests for CPM/CPD/CPV pricing."""

    def test_cpm_with_explicit_impressions(self, cpm_opportunity: dict[str, Any]):
        assert project_monthly_revenue(cpm_opportunity, "weekly") == Decimal("500.00")

    def test_explicit_impressions_ignore_frequency(self, cpm_opportunity: dict[str, Any]):
        assert project_monthly_revenue(cpm_opportunity, "daily", 4) == Decimal("500.00")

    def test_cpd_derived_from_audience(self):
        opportunity = {
            "pricing": {"flatRate": 25, "pricingModel": "cpd"},
            "performanceMetrics": {"audienceSize": 2000},
        }
        # 2000 downloads x 4.33 episodes x 2 slots = 17,320 units
        assert project_monthly_revenue(opportunity, "weekly", 2) == Decimal("433.00")

    def test_cpv_divides_by_thousand(self):
        opportunity = {
            "pricing": {"cpv": 30},
            "performanceMetrics": {"impressionsPerMonth": 10000},
        }
        assert project_monthly_revenue(opportunity, "weekly") == Decimal("300.00")

    def test_legacy_monthly_impressions(self):
        opportunity = {"pricing": {"cpm": 8}, "monthlyImpressions": 250000}
        assert project_monthly_revenue(opportunity, None) == Decimal("2000.00")

    def test_no_metrics_is_zero(self):
        assert project_monthly_revenue({"pricing": {"cpm": 10}}, "daily") == 0

    def test_malformed_metrics_are_ignored(self):
        opportunity = {
            "pricing": {"cpm": 10},
            "performanceMetrics": {"impressionsPerMonth": "lots", "audienceSize": 1000},
        }
        # Falls back to audience x occurrences: 1000 x 30 = 30,000
        assert project_monthly_revenue(opportunity, "daily") == Decimal("300.00")


class TestTieredProjection:
    """Tests for projection over tier lists."""

    def test_uses_one_x_tier(self, tiered_opportunity: dict[str, Any]):
        assert project_monthly_revenue(tiered_opportunity, "weekly") == Decimal("4330.00")

    def test_input_not_mutated(self, tiered_opportunity: dict[str, Any]):
        before = repr(tiered_opportunity)
        project_monthly_revenue(tiered_opportunity, "weekly")
        assert repr(tiered_opportunity) == before


class TestProjectRevenue:
    """Tests for arbitrary projection windows."""

    def test_month_matches_monthly(self, radio_spot_opportunity: dict[str, Any]):
        assert project_revenue(radio_spot_opportunity, "month", "weekly") == Decimal("649.50")

    def test_year(self):
        opportunity = {"pricing": {"flatRate": 1200, "pricingModel": "monthly"}}
        assert project_revenue(opportunity, "year", None) == Decimal("14600.00")

    def test_day_count(self):
        opportunity = {"pricing": {"flatRate": 20, "pricingModel": "per_day"}}
        assert project_revenue(opportunity, 10, None) == Decimal("200.00")

    def test_contact_is_zero(self):
        assert project_revenue({"pricing": {"pricingModel": "contact"}}, "year", "daily") == 0


class TestEstimateRevenueRange:
    """Tests for the conservative/optimistic band."""

    def test_estimated_metrics_band(self, cpm_opportunity: dict[str, Any], settings: Settings):
        estimate = estimate_revenue_range(cpm_opportunity, "weekly", settings=settings)
        assert estimate.expected == Decimal("500.00")
        assert estimate.conservative == Decimal("425.00")
        assert estimate.optimistic == Decimal("575.00")
        assert estimate.guaranteed is False

    def test_guaranteed_metrics_band(self, settings: Settings):
        opportunity = {
            "pricing": {"cpm": 10, "pricingModel": "cpm"},
            "performanceMetrics": {"impressionsPerMonth": 50000, "guaranteed": True},
        }
        estimate = estimate_revenue_range(opportunity, None, settings=settings)
        assert estimate.conservative == Decimal("475.00")
        assert estimate.optimistic == Decimal("525.00")
        assert estimate.guaranteed is True

    def test_custom_variance(self, cpm_opportunity: dict[str, Any]):
        settings = Settings(_env_file=None, estimated_variance=0.5)  # type: ignore[call-arg]
        estimate = estimate_revenue_range(cpm_opportunity, None, settings=settings)
        assert estimate.conservative == Decimal("250.00")
        assert estimate.optimistic == Decimal("750.00")

    def test_timeframe(self, cpm_opportunity: dict[str, Any], settings: Settings):
        estimate = estimate_revenue_range(
            cpm_opportunity, None, timeframe="quarter", settings=settings
        )
        assert estimate.expected == Decimal("1520.83")

    def test_contact_band_is_zero(self, settings: Settings):
        estimate = estimate_revenue_range(
            {"pricing": {"pricingModel": "contact"}}, "weekly", settings=settings
        )
        assert estimate.expected == estimate.conservative == estimate.optimistic == 0

    def test_default_variance_ignores_invalid_environment(
        self, cpm_opportunity: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("INVENTORY_PRICING_GUARANTEED_VARIANCE", "5")
        estimate = estimate_revenue_range(cpm_opportunity, None)
        assert estimate.conservative == Decimal("425.00")
        assert estimate.optimistic == Decimal("575.00")


class TestIsProjectable:
    """Tests for telling "no number" apart from "zero dollars"."""

    @pytest.mark.parametrize(
        ("pricing", "expected"),
        [
            ({"perSpot": 150}, True),
            ({"cpm": 10, "pricingModel": "cpm"}, True),
            ({"flatRate": 0, "pricingModel": "flat"}, True),
            ({"pricingModel": "contact"}, False),
            ({}, False),
            ({"cpc": 1}, False),
            ({"flatRate": 5, "pricingModel": "per_billboard"}, False),
        ],
        ids=["per_spot", "cpm", "free_flat", "contact", "empty", "cpc", "unknown_model"],
    )
    def test_projectable(self, pricing: dict[str, Any], expected: bool):
        assert is_projectable({"pricing": pricing}) is expected

    def test_non_mapping(self):
        assert is_projectable(None) is False
