#!/usr/bin/env python3
"""CLI entry point for the nearby store stock checker."""

import argparse
import json
import logging
import sys

from stock_locator.config import Settings
from stock_locator.errors import InvalidPostcode, InvalidRequest, StockLookupError
from stock_locator.models import StockResult, StockStatus
from stock_locator.postcodes_client import PostcodesIoGeocoder
from stock_locator.render import (
    NO_QUALIFYING_STORE_MESSAGE,
    OUT_OF_STOCK_MESSAGE,
    render_error_html,
    render_html,
    result_to_dict,
)
from stock_locator.resolver import StockResolver, name_contains
from stock_locator.shopify_client import ShopifyClient


def _print_stores(result: StockResult):
    """Print the resolved stores to stdout."""
    if result.status is StockStatus.OUT_OF_STOCK:
        print(OUT_OF_STOCK_MESSAGE)
        return
    if result.status is StockStatus.NO_QUALIFYING_STORE:
        print(NO_QUALIFYING_STORE_MESSAGE)
        return

    heading = "NEARBY STORES" if result.ranked_by_distance else "STORES (distance unavailable)"
    print(f"\n{'=' * 70}")
    print(f"  {heading}")
    print(f"  {len(result.stores)} store(s) with stock")
    print(f"{'=' * 70}\n")

    for i, store in enumerate(result.stores, 1):
        print(f"  {i}. {store.name}")
        print(f"    Address:  {', '.join(p for p in (store.address_line, store.city, store.postal_code) if p)}")
        if store.phone:
            print(f"    Phone:    {store.phone}")
        print(f"    In stock: {store.available}")
        if store.distance_miles is not None:
            print(f"    Distance: {store.distance_miles:.1f} miles")
        print()


def _report_error(exc: StockLookupError, output_format: str):
    """Report a failed lookup; HTML callers get the storefront error snippet."""
    if output_format == "html":
        print(render_error_html(exc))
    print(f"Error: {exc}", file=sys.stderr)


def _build_resolver(args, settings: Settings) -> StockResolver:
    """Wire the Shopify client, geocoder and exclusion rule together.

    Command-line options take precedence over the environment.
    """
    client = ShopifyClient(
        store_url=args.store_url or settings.store_url,
        access_token=args.access_token or settings.access_token,
        timeout=settings.http_timeout,
    )
    geocoder = PostcodesIoGeocoder(
        base_url=settings.postcodes_io_url,
        timeout=settings.http_timeout,
    )
    excluded = args.exclude if args.exclude is not None else settings.excluded_locations
    return StockResolver(
        client,
        geocoder,
        exclude_location=name_contains(*excluded) if excluded else None,
        max_results=settings.max_results,
        geocode_workers=settings.geocode_workers,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Find nearby stores that have a product variant in stock.",
    )
    parser.add_argument("variant_id", help="Shopify product variant ID.")
    parser.add_argument("postcode", help="Customer's UK postcode.")
    parser.add_argument(
        "--max-results",
        type=int,
        help="Maximum number of stores to list (overrides STOCK_LOCATOR_MAX_RESULTS).",
    )
    parser.add_argument(
        "--exclude",
        nargs="*",
        metavar="TEXT",
        help="Location name fragments to exclude as warehouses "
        "(overrides STOCK_LOCATOR_EXCLUDE_LOCATIONS).",
    )
    parser.add_argument(
        "--format",
        default="text",
        choices=["text", "json", "html"],
        help='Output format (default: "text").',
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log pipeline progress to stderr.",
    )

    shopify_group = parser.add_argument_group("Shopify options")
    shopify_group.add_argument(
        "--store-url",
        help="Shopify store URL (overrides SHOPIFY_STORE_URL env var).",
    )
    shopify_group.add_argument(
        "--access-token",
        help="Admin API access token (overrides SHOPIFY_ACCESS_TOKEN env var).",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_env()
        resolver = _build_resolver(args, settings)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        result = resolver.resolve(args.variant_id, args.postcode, max_results=args.max_results)
    except StockLookupError as exc:
        _report_error(exc, args.format)
        sys.exit(2 if isinstance(exc, (InvalidRequest, InvalidPostcode)) else 1)

    if args.format == "json":
        print(json.dumps(result_to_dict(result), indent=2))
    elif args.format == "html":
        print(render_html(result))
    else:
        _print_stores(result)


if __name__ == "__main__":
    main()
