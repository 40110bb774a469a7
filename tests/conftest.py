"""Shared pytest fixtures for listing audits."""

from collections.abc import Callable

import pytest

from listing_qa.qa.models import (
    CriterionScore,
    FieldSpec,
    ListingContent,
    MarketplaceProfile,
    ScoringWeight,
)
from listing_qa.qa.profiles import BUILTIN_PROFILES
from listing_qa.qa.registry import ProfileRegistry


@pytest.fixture
def amazon_listing() -> ListingContent:
    """A complete Amazon listing that should score well."""
    return ListingContent(
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
            "Non-toxic BPA-free materials with a powder-coated finish that resists "
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
        attributes={"brand": "TrailPro", "condition": "New"},
    )


@pytest.fixture
def ebay_listing() -> ListingContent:
    """A complete eBay listing."""
    return ListingContent(
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
    )


@pytest.fixture
def registry() -> ProfileRegistry:
    """Registry with every built-in marketplace enabled."""
    return ProfileRegistry(BUILTIN_PROFILES)


@pytest.fixture
def make_profile() -> Callable[..., MarketplaceProfile]:
    """Factory for small isolated profiles."""

    def _make(
        weights: dict[str, float],
        profile_id: str = "test",
        shape: tuple[FieldSpec, ...] = (FieldSpec(name="title", max_length=50, required=True),),
    ) -> MarketplaceProfile:
        return MarketplaceProfile(
            id=profile_id,
            display_name=profile_id.title(),
            listing_shape=shape,
            scoring_weights=[
                ScoringWeight(criterion=name, weight=weight) for name, weight in weights.items()
            ],
        )

    return _make


@pytest.fixture
def constant_criterion() -> Callable[..., Callable]:
    """Factory for criteria that always return the same value."""

    def _make(value: float) -> Callable[[ListingContent, MarketplaceProfile], CriterionScore]:
        def _criterion(content: ListingContent, profile: MarketplaceProfile) -> CriterionScore:
            return CriterionScore(value=value)

        return _criterion

    return _make
