"""
FreshTag - Command Line
=======================

Load a catalog snapshot, print its freshness summary and optionally
export the report files.

Usage:
    freshtag data/catalog.csv
    freshtag data/catalog.json --now 2024-01-25 --tag critical --output outputs

The evaluation instant defaults to the current UTC time; this is the only
place the wall clock is read.
"""

import argparse
import sys
from datetime import datetime, timezone
from typing import List, Optional

from freshtag.config import Config
from freshtag.models.errors import FreshTagError, UndefinedStatistic
from freshtag.models.product import Tag
from freshtag.services.catalog_analytics import CatalogSummary, summarize
from freshtag.services.catalog_filter import filter_catalog, partition_valid
from freshtag.services.data_loader import CatalogLoader
from freshtag.services.notifications import generate_alerts
from freshtag.services.output_generator import ReportGenerator
from freshtag.utils.logger import attach_log_file, get_logger, set_package_level

logger = get_logger(__name__)


def parse_instant(value: str) -> datetime:
    """ISO-8601 instant; aware values become naive UTC to match loaded dates."""
    instant = datetime.fromisoformat(value)
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc).replace(tzinfo=None)
    return instant


def current_instant() -> datetime:
    """Wall-clock now as naive UTC, the same convention as loaded dates."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='freshtag',
        description='Freshness tags, mitigation recommendations and catalog analytics'
    )
    parser.add_argument('catalog', help='Catalog file (.csv or .json)')
    parser.add_argument(
        '--now', type=parse_instant, default=None,
        help='Evaluation instant, ISO-8601 (default: current UTC time)'
    )
    parser.add_argument('--tag', default=None, help='Only Critical/Warning/Good (or red/yellow/green)')
    parser.add_argument('--search', default=None, help='Case-insensitive search term')
    parser.add_argument('--output', default=None, help='Write report files to this directory')
    parser.add_argument('--log-level', default=None, help='Logging level (default: INFO)')
    return parser.parse_args(argv)


def _format_statistic(summary: CatalogSummary, name: str, suffix: str = '') -> str:
    try:
        return f"{getattr(summary, name):.1f}{suffix}"
    except UndefinedStatistic:
        return "n/a"


def print_summary(summary: CatalogSummary, alert_count: int) -> None:
    """Print the catalog summary banner."""
    print("=" * 60)
    print("  FRESHTAG CATALOG SUMMARY")
    print("=" * 60)
    print(f"  Products:          {summary.item_count}")
    print(f"  Total value:       ${summary.total_value:,.2f}")
    print(f"  Total quantity:    {summary.total_quantity}")
    for tag in Tag:
        print(
            f"  {tag.label + ':':<19}{summary.tag_counts[tag]:>4} items, "
            f"${summary.value_at_risk[tag]:,.2f} at risk"
        )
    print(f"  Health score:      {_format_statistic(summary, 'health_score', '%')}")
    print(f"  Average price:     {_format_statistic(summary, 'average_price')}")
    print(f"  Potential savings: ${summary.potential_savings:,.2f}")

    if summary.top_categories:
        top = ", ".join(f"{name} ({count})" for name, count in summary.top_categories)
        print(f"  Top categories:    {top}")
    for label, count in summary.expiry_buckets.items():
        print(f"  Expiring {label + ':':<12}{count}")

    print(f"  Active alerts:     {alert_count}")
    if summary.skipped_ids:
        print(f"  Skipped (invalid dates): {', '.join(summary.skipped_ids)}")
    print("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    now = args.now or current_instant()

    try:
        config = Config.from_env()
        set_package_level(args.log_level or config.log_level)
        if config.log_file:
            attach_log_file(config.log_file)

        products = CatalogLoader(args.catalog).load()
        searched = filter_catalog(products, now, search_term=args.search)
        valid, invalid = partition_valid(searched, now)
        selected = filter_catalog(valid, now, tag=args.tag)

        summary = summarize(
            selected + invalid,
            now,
            skip_invalid=True,
            top_n=config.top_categories,
            clamp_health_score=config.clamp_health_score
        )
        alerts = generate_alerts(selected, now, {'max_alerts': config.max_alerts})

        print_summary(summary, len(alerts))

        if args.output:
            paths = ReportGenerator(args.output).export(
                products, now, tag=args.tag, search_term=args.search
            )
            for path in paths.values():
                print(f"  Saved {path}")

    except (FreshTagError, FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        print(f"freshtag: error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
