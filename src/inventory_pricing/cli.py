"""Command-line pricing report for one advertising opportunity.

Loads an opportunity record (JSON), shows its normalized price lines, the
projected revenue for a timeframe with its conservative/optimistic band, and
the valid hub overrides it carries.

Usage::

    python -m inventory_pricing.cli opportunity.json --channel radio --frequency weekly
    cat opportunity.json | python -m inventory_pricing.cli - --hub hub_1 --format json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from inventory_pricing.config import Settings, get_settings
from inventory_pricing.domain.errors import PricingInputError
from inventory_pricing.domain.types import Channel, Timeframe
from inventory_pricing.pricing import (
    effective_pricing,
    estimate_revenue_range,
    format_line,
    is_projectable,
    normalize,
    parse_overrides,
    resolve_pricing,
    select_base_tier,
)

logger = structlog.get_logger()


def configure_logging(production: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog for production (JSON) or development (console).

    Log output goes to stderr so reports on stdout stay machine-readable.

    Args:
        production: Render JSON if ``True``, colored console output otherwise.
        log_level: Minimum level name, e.g. ``"INFO"``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service="inventory-pricing")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for pricing reports.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(description="Normalize and project opportunity pricing")

    parser.add_argument(
        "source",
        type=str,
        help='Path to an opportunity JSON file, or "-" for stdin',
    )
    parser.add_argument(
        "--channel",
        type=str,
        choices=[channel.value for channel in Channel],
        help="Channel the opportunity belongs to",
    )
    parser.add_argument(
        "--frequency",
        type=str,
        help='Publishing cadence of the parent channel (e.g., "weekly")',
    )
    parser.add_argument(
        "--spots",
        type=int,
        default=1,
        help="Ad placements per publishing instance (default: 1)",
    )
    parser.add_argument(
        "--hub",
        type=str,
        help="Show the pricing this hub sees instead of the default pricing",
    )
    parser.add_argument(
        "--timeframe",
        type=str,
        choices=[timeframe.value for timeframe in Timeframe],
        default=Timeframe.MONTH.value,
        help="Revenue projection window (default: month)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        dest="output_format",
        help="Output format (default: table)",
    )

    return parser


def load_opportunity(source: str) -> dict[str, Any]:
    """Read an opportunity record from a JSON file or stdin.

    Args:
        source: A file path, or ``"-"`` for stdin.

    Returns:
        The opportunity record.

    Raises:
        PricingInputError: If the input cannot be read, is not valid JSON, or
            is not a JSON object.
    """
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise PricingInputError(source, exc.strerror or str(exc)) from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PricingInputError(source, f"invalid JSON ({exc.msg})") from exc

    if not isinstance(data, dict):
        raise PricingInputError(source, "expected a JSON object")
    return data


def build_report(
    opportunity: Mapping[str, Any],
    *,
    channel: str | None = None,
    frequency: str | None = None,
    spots: int = 1,
    hub_id: str | None = None,
    timeframe: str = Timeframe.MONTH,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Assemble the pricing report for one opportunity.

    Args:
        opportunity: The advertising opportunity record.
        channel: The opportunity's channel.
        frequency: Publishing cadence of the parent channel.
        spots: Ad placements per publishing instance.
        hub_id: Report the pricing seen by this hub.
        timeframe: The revenue projection window.
        settings: Settings for revenue variance.

    Returns:
        A JSON-serializable report dict.
    """
    pricing = effective_pricing(opportunity, hub_id)
    scoped = {**opportunity, "pricing": pricing}
    model, _ = resolve_pricing(select_base_tier(pricing))
    estimate = estimate_revenue_range(
        scoped,
        frequency,
        spots,
        timeframe=timeframe,
        channel=channel,
        settings=settings,
    )

    return {
        "name": opportunity.get("name"),
        "channel": channel,
        "hub": hub_id,
        "pricing_model": model,
        "prices": [format_line(line) for line in normalize(pricing, channel)],
        "projectable": is_projectable(scoped),
        "timeframe": str(timeframe),
        "revenue": {
            "conservative": str(estimate.conservative),
            "expected": str(estimate.expected),
            "optimistic": str(estimate.optimistic),
            "guaranteed": estimate.guaranteed,
        },
        "hub_overrides": [
            override.hub_id for override in parse_overrides(opportunity.get("hubPricing"))
        ],
    }


def format_table(report: Mapping[str, Any]) -> str:
    """Format a report as aligned ``label: value`` lines."""
    revenue = report["revenue"]
    if report["projectable"]:
        revenue_text = (
            f"${revenue['expected']} "
            f"(${revenue['conservative']} - ${revenue['optimistic']})"
        )
    else:
        revenue_text = "not projectable"

    rows = [
        ("Opportunity", report.get("name") or "(unnamed)"),
        ("Channel", report.get("channel") or "-"),
        ("Hub", report.get("hub") or "default"),
        ("Pricing model", report.get("pricing_model") or "N/A"),
        ("Prices", "; ".join(report["prices"])),
        (f"Revenue / {report['timeframe']}", revenue_text),
        ("Hub overrides", ", ".join(report["hub_overrides"]) or "none"),
    ]
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label.ljust(width)}  {value}" for label, value in rows)


def format_json(report: Mapping[str, Any]) -> str:
    """Format a report as pretty-printed JSON."""
    return json.dumps(report, indent=2)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, build the report, and print it.

    Returns:
        The process exit status: ``0`` on success, ``2`` on unreadable input.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(production=settings.production, log_level=settings.log_level)

    try:
        opportunity = load_opportunity(args.source)
    except PricingInputError as exc:
        logger.error("opportunity_load_failed", source=exc.source, reason=exc.reason)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    report = build_report(
        opportunity,
        channel=args.channel,
        frequency=args.frequency,
        spots=args.spots,
        hub_id=args.hub,
        timeframe=args.timeframe,
        settings=settings,
    )
    output = format_json(report) if args.output_format == "json" else format_table(report)
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
