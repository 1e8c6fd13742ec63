"""Domain enumerations and model groupings for advertising inventory pricing."""

from enum import StrEnum


class Channel(StrEnum):
    """Distribution channels a publication sells advertising on."""

    WEBSITE = "website"
    NEWSLETTER = "newsletter"
    PRINT = "print"
    EVENTS = "events"
    PODCASTS = "podcasts"
    RADIO = "radio"
    STREAMING = "streaming"
    TELEVISION = "television"
    SOCIAL_MEDIA = "social_media"


class PricingModel(StrEnum):
    """Canonical billing-unit tags for an advertising opportunity."""

    # Periodic
    FLAT = "flat"
    FLAT_RATE = "flat_rate"
    PER_MONTH = "per_month"
    MONTHLY = "monthly"
    PER_WEEK = "per_week"
    WEEKLY = "weekly"
    PER_DAY = "per_day"
    # Occurrence-based
    PER_SPOT = "per_spot"
    PER_SEND = "per_send"
    PER_EPISODE = "per_episode"
    PER_POST = "per_post"
    PER_STORY = "per_story"
    PER_AD = "per_ad"
    PER_LINE = "per_line"
    PER_VIDEO = "per_video"
    # Impression / audience-based
    CPM = "cpm"
    CPD = "cpd"
    CPV = "cpv"
    CPC = "cpc"
    # No amount
    CONTACT = "contact"


class Frequency(StrEnum):
    """Publishing cadence labels attached to channels, shows and events."""

    DAILY = "daily"
    DAILY_BUSINESS = "daily-business"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    BI_ANNUALLY = "bi-annually"
    ANNUAL = "annual"
    IRREGULAR = "irregular"
    ON_DEMAND = "on-demand"


class Timeframe(StrEnum):
    """Named revenue projection windows."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


# Models billed per calendar period, independent of channel cadence
PERIODIC_MODELS: frozenset[str] = frozenset({
    PricingModel.FLAT,
    PricingModel.MONTHLY,
    PricingModel.PER_MONTH,
    PricingModel.WEEKLY,
    PricingModel.PER_WEEK,
    PricingModel.PER_DAY,
})

# Models billed once per publishing instance
OCCURRENCE_MODELS: frozenset[str] = frozenset({
    PricingModel.PER_SPOT,
    PricingModel.PER_SEND,
    PricingModel.PER_EPISODE,
    PricingModel.PER_POST,
    PricingModel.PER_STORY,
    PricingModel.PER_AD,
    PricingModel.PER_LINE,
    PricingModel.PER_VIDEO,
})

# Models billed per thousand impressions, downloads or views
IMPRESSION_MODELS: frozenset[str] = frozenset({
    PricingModel.CPM,
    PricingModel.CPD,
    PricingModel.CPV,
})
