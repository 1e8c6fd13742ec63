"""Shared pytest fixtures for the inventory pricing test suite."""

from typing import Any

import pytest

from inventory_pricing.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only, isolated from the environment's ``.env``."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def radio_spot_opportunity() -> dict[str, Any]:
    """A legacy radio opportunity priced per spot with no explicit model."""
    return {
        "name": "Morning Drive :30",
        "pricing": {"perSpot": 150},
    }


@pytest.fixture
def cpm_opportunity() -> dict[str, Any]:
    """A website display opportunity priced on CPM with explicit impressions."""
    return {
        "name": "Homepage Leaderboard",
        "pricing": {"cpm": 10, "pricingModel": "cpm"},
        "performanceMetrics": {"impressionsPerMonth": 50000},
    }


@pytest.fixture
def tiered_opportunity() -> dict[str, Any]:
    """A print opportunity with commitment tiers, listed out of order."""
    return {
        "name": "Full Page",
        "pricing": [
            {"pricing": {"flatRate": 900, "pricingModel": "per_ad", "frequency": "12x"}},
            {"pricing": {"flatRate": 950, "pricingModel": "per_ad", "frequency": "4x"}},
            {"pricing": {"flatRate": 1000, "pricingModel": "per_ad", "frequency": "1x"}},
        ],
    }


@pytest.fixture
def hub_overrides() -> list[dict[str, Any]]:
    """A mix of valid and invalid hub overrides as seen during editing."""
    return [
        {"hubId": "", "hubName": "X", "pricing": {"flatRate": 1}},
        {"hubId": "h2", "hubName": "Y", "pricing": {"flatRate": 2}},
        {"hubId": "h3", "hubName": "   ", "pricing": {"flatRate": 3}},
        {"hubId": "h4", "hubName": "Z", "pricing": 4},
        {"hubId": "h5", "hubName": "W", "pricing": None},
        {"hubId": "h6", "hubName": "V", "pricing": [{"pricing": {"flatRate": 6}}]},
        "not-an-override",
    ]
