"""Tests for the built-in marketplace profiles."""

import re

import pytest

from listing_qa.config import Settings
from listing_qa.qa.criteria import CRITERION_FUNCTIONS
from listing_qa.qa.profiles import BUILTIN_PROFILES, EBAY_PROFILE


@pytest.mark.parametrize("profile", BUILTIN_PROFILES, ids=lambda p: p.id)
class TestBuiltinProfiles:
    """Consistency checks every built-in profile must pass."""

    def test_weights_sum_to_one(self, profile):
        total = sum(w.weight for w in profile.scoring_weights)

        assert total == pytest.approx(1.0, abs=0.001)

    def test_weights_reference_known_criteria(self, profile):
        for entry in profile.scoring_weights:
            assert entry.criterion in CRITERION_FUNCTIONS

    def test_no_duplicate_criteria(self, profile):
        names = [w.criterion for w in profile.scoring_weights]

        assert len(names) == len(set(names))

    def test_title_and_description_required(self, profile):
        assert profile.field_spec("title").required
        assert profile.field_spec("description").required

    def test_banned_term_patterns_compile(self, profile):
        for rule in profile.banned_terms:
            re.compile(rule.pattern)


class TestEbayProfile:
    """eBay field shape."""

    def test_listing_shape_order(self):
        assert EBAY_PROFILE.field_names == [
            "title",
            "subtitle",
            "description",
            "item_specifics",
            "condition_notes",
            "shipping_notes",
            "returns_notes",
            "category_hint",
            "compliance_notes",
            "assumptions",
        ]

    def test_title_limit(self):
        assert EBAY_PROFILE.field_spec("title").max_length == 80
        assert EBAY_PROFILE.field_spec("subtitle").max_length == 55

    def test_undeclared_field(self):
        assert EBAY_PROFILE.field_spec("bullets") is None
        assert not EBAY_PROFILE.has_field("backend_keywords")


class TestEnablementSettings:
    """Marketplace enablement flags."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.enabled_marketplaces() == {"amazon", "ebay"}

    def test_flags_from_environment(self, monkeypatch):
        monkeypatch.setenv("MARKETPLACE_ENABLED_SHOPIFY", "true")
        monkeypatch.setenv("MARKETPLACE_ENABLED_EBAY", "false")

        settings = Settings(_env_file=None)

        assert settings.enabled_marketplaces() == {"amazon", "shopify"}
