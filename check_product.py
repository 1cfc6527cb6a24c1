#!/usr/bin/env python3
"""
Product Check

Extracts material composition and size availability for one or more
product URLs. Site is auto-detected from each URL.

Usage:
    python3 check_product.py --url https://www.cos.com/en-de/men/product/...
    python3 check_product.py --url URL1 --url URL2 --json
"""

import argparse
import json
import logging
import sys

from fabric_check.common import CONFIG_ERRORS, ResultCache, setup_logging
from fabric_check.extraction import extract_product_cached
from fabric_check.extraction.orchestrator import create_fetcher
from fabric_check.models import ExtractionResult

logger = logging.getLogger("fabric_check.cli")


def print_report(url: str, result: ExtractionResult) -> None:
    """Print a readable report for one product."""
    print("\n" + "=" * 80)
    print(f"Product URL: {url}")
    print("-" * 80)

    if result.error:
        print(f"  [ERROR  ] {result.error}")
        return

    status = "OK" if result.material else "MISSING"
    print(f"  [{status:7}] {'Material':10} {result.material or 'MISSING'}")

    if result.sizes is None:
        print(f"  [{'MISSING':7}] {'Sizes':10} MISSING")
        return

    print(f"\nSIZES ({len(result.sizes)} entries):")
    for entry in result.sizes:
        marker = "in stock" if entry.in_stock else "sold out"
        print(f"  {entry.name:10} {marker}")


def main():
    parser = argparse.ArgumentParser(
        description="Extract material composition and size stock for product URLs"
    )
    parser.add_argument(
        "--url",
        action="append",
        required=True,
        help="Product URL (repeatable)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as a JSON array instead of a report"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        fetcher = create_fetcher()
    except CONFIG_ERRORS as e:
        logger.error("Could not load configuration: %s", e)
        return 2

    cache = ResultCache()
    results = []
    with fetcher:
        for url in args.url:
            results.append((url, extract_product_cached(url, cache, fetcher)))

    if args.json:
        records = [dict(url=url, **result.to_dict()) for url, result in results]
        print(json.dumps(records, ensure_ascii=False, indent=2))
    else:
        for url, result in results:
            print_report(url, result)
        print("\n" + "=" * 80)

    failed = [url for url, result in results if result.error]
    if failed:
        logger.warning("%d of %d URLs failed", len(failed), len(results))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
