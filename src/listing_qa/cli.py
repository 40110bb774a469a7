"""Command-line interface for auditing listings."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from listing_qa.config import get_settings
from listing_qa.qa.analyzer import analyze_listing
from listing_qa.qa.models import ListingContent, get_grade, get_listing_status
from listing_qa.qa.registry import UnknownMarketplace, get_default_registry


EXAMPLE_LISTINGS: dict[str, ListingContent] = {
    "amazon": ListingContent(
        title=(
            "TrailPro Stainless Steel Insulated Water Bottle 32 oz, Leak-Proof Lid, "
            "Keeps Drinks Cold 24 Hours, BPA-Free for Hiking, Gym and Travel"
        ),
        bullets=[
            "Durable double-wall stainless steel keeps water cold for 24 hours and "
            "coffee hot for 12, so every sip tastes the way you poured it.",
            "Leak-proof lid with a carry loop that seals tight in a gym bag, "
            "backpack or car cup holder without spills.",
            "Lightweight 32 oz bottle weighs just 14 oz empty, ideal for long "
            "hikes, commutes and daily hydration goals.",
            "BPA-free, non-toxic materials with a powder-coated finish that resists "
            "scratches and gives a secure grip when wet.",
            "Easy to clean wide mouth fits ice cubes and a bottle brush; "
            "dishwasher safe lid for quick care after 7 days of use.",
        ],
        description=(
            "Stay hydrated wherever the day takes you.\n\n"
            "The TrailPro bottle is designed for hikers, athletes and commuters who "
            "want cold water all day. Double-wall vacuum insulation keeps drinks "
            "cold for 24 hours and hot for 12.\n\n"
            "<ul><li>32 oz capacity</li><li>Leak-proof lid</li>"
            "<li>Powder-coated grip</li></ul>"
        ),
        backend_keywords=(
            "flask canteen thermos sports outdoor camping cycling school office "
            "reusable eco friendly vacuum metal jug tumbler hydration"
        ),
        attributes={"brand": "TrailPro", "condition": "New", "material": "Stainless steel"},
    ),
    "ebay": ListingContent(
        title="Apple iPhone 12 64GB Blue Unlocked Smartphone Good Condition",
        description=(
            "Used Apple iPhone 12 in good condition. Light wear on the frame, "
            "no scratches on the screen. Battery health 88%. Fully tested."
        ),
        item_specifics={
            "Brand": "Apple",
            "Model": "iPhone 12",
            "Storage Capacity": "64 GB",
            "Color": "Blue",
            "Network": "Unlocked",
            "Condition": "Used",
            "Screen Size": "6.1 in",
        },
        condition_notes=["Light wear on the frame", "Screen has no scratches"],
        shipping_notes="Ships within 1 business day via USPS Priority",
        returns_notes="30-day returns, buyer pays return shipping",
        category_hint="Cell Phones & Smartphones",
    ),
}


def load_listing(args: argparse.Namespace) -> ListingContent:
    """Read listing JSON from --json or --file."""
    if args.json:
        raw = args.json
    else:
        raw = Path(args.file).read_text(encoding="utf-8")
    return ListingContent.model_validate(json.loads(raw))


def audit_command(args: argparse.Namespace) -> int:
    """Audit a listing and print the result."""
    try:
        content = load_listing(args)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"Error: could not read listing: {e}", file=sys.stderr)
        return 2

    try:
        result = analyze_listing(content, args.marketplace)
    except UnknownMarketplace as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    title = content.title or "(untitled)"
    print(f"Listing: {title}")
    print(f"Marketplace: {args.marketplace}")
    print(f"{'=' * 50}")
    print(f"\nScore:  {result.score}/100")
    print(f"Grade:  {get_grade(result.score)}")
    print(f"Status: {get_listing_status(result.score)}")

    print(f"\nBreakdown:")
    for criterion, criterion_score in result.breakdown.items():
        print(f"  {criterion:34}: {criterion_score.value:.2f}")

    if result.validation:
        print(f"\nDiagnostics:")
        for diagnostic in result.validation:
            where = f" [{diagnostic.field}]" if diagnostic.field else ""
            print(
                f"  {diagnostic.severity.value.upper():7} {diagnostic.code}{where}: "
                f"{diagnostic.message}"
            )

    print(f"\n{'=' * 50}")
    return 0


def example_command(args: argparse.Namespace) -> int:
    """Print an example listing as JSON."""
    listing = EXAMPLE_LISTINGS.get(args.marketplace)
    if listing is None:
        print(
            f"Error: no example for '{args.marketplace}' "
            f"(available: {', '.join(EXAMPLE_LISTINGS)})",
            file=sys.stderr,
        )
        return 2

    data = listing.model_dump(mode="json", exclude_none=True)
    if args.pretty:
        print(json.dumps(data, indent=2))
    else:
        print(json.dumps(data))
    return 0


def marketplaces_command(args: argparse.Namespace) -> int:
    """List enabled marketplaces."""
    registry = get_default_registry()
    for profile in registry.get_all_profiles():
        if not registry.is_enabled(profile.id):
            continue
        print(f"{profile.id:10} {profile.display_name}")
        print(f"  fields: {', '.join(profile.field_names)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="listing-qa",
        description="Marketplace-aware listing quality audits",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Audit command
    audit_parser = subparsers.add_parser("audit", help="Audit a listing")
    audit_parser.add_argument(
        "--marketplace",
        required=True,
        help="Marketplace id (e.g. amazon, ebay)",
    )
    source = audit_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--json",
        type=str,
        help="Listing data as JSON string",
    )
    source.add_argument(
        "--file",
        type=str,
        help="Path to a listing JSON file",
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example",
        help="Show example listing JSON",
    )
    example_parser.add_argument(
        "--marketplace",
        default="amazon",
        help="Marketplace to show an example for (default: amazon)",
    )
    example_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print JSON",
    )

    # Marketplaces command
    subparsers.add_parser("marketplaces", help="List enabled marketplaces")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "audit":
        return audit_command(args)
    elif args.command == "example":
        return example_command(args)
    elif args.command == "marketplaces":
        return marketplaces_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
