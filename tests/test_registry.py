"""Tests for the marketplace profile registry."""

import logging

import pytest

from listing_qa.config import Settings
from listing_qa.qa.models import BannedTerm
from listing_qa.qa.profiles import BUILTIN_PROFILES
from listing_qa.qa.registry import (
    ConfigurationDefect,
    ProfileRegistry,
    UnknownMarketplace,
    build_registry,
)


class TestRegistryChecks:
    """Profiles are checked when the registry is built."""

    def test_builtin_profiles_register(self, registry):
        assert registry.get_marketplace_ids() == ["amazon", "ebay", "walmart", "shopify"]

    def test_weights_must_sum_to_one(self, make_profile):
        profile = make_profile({"readability": 0.5, "title_keyword_richness": 0.4})

        with pytest.raises(ConfigurationDefect, match="sum to 0.9000"):
            ProfileRegistry([profile])

    def test_small_rounding_tolerated(self, make_profile):
        profile = make_profile({"readability": 0.5, "title_keyword_richness": 0.5005})

        registry = ProfileRegistry([profile])

        assert registry.get_marketplace_profile("test") is profile

    def test_unknown_criterion(self, make_profile):
        profile = make_profile({"readability": 0.5, "sparkle_factor": 0.5})

        with pytest.raises(ConfigurationDefect, match="sparkle_factor"):
            ProfileRegistry([profile])

    def test_duplicate_criterion(self, make_profile):
        profile = make_profile({"readability": 0.5})
        profile = profile.model_copy(
            update={"scoring_weights": profile.scoring_weights * 2}
        )

        with pytest.raises(ConfigurationDefect, match="more than once"):
            ProfileRegistry([profile])

    def test_weight_out_of_range(self, make_profile):
        profile = make_profile({"readability": 1.2, "title_keyword_richness": -0.2})

        with pytest.raises(ConfigurationDefect, match="within"):
            ProfileRegistry([profile])

    def test_no_criteria(self, make_profile):
        with pytest.raises(ConfigurationDefect, match="no scoring criteria"):
            ProfileRegistry([make_profile({})])

    def test_duplicate_marketplace_id(self, make_profile):
        profile = make_profile({"readability": 1.0})

        with pytest.raises(ConfigurationDefect, match="Duplicate"):
            ProfileRegistry([profile, profile])

    def test_enabled_id_without_profile(self):
        with pytest.raises(ConfigurationDefect, match="etsy"):
            ProfileRegistry(BUILTIN_PROFILES, enabled={"amazon", "etsy"})

    def test_invalid_banned_term_pattern(self, make_profile):
        profile = make_profile({"readability": 1.0}).model_copy(
            update={
                "banned_terms": (
                    BannedTerm(pattern=r"(?i)\b(best|", term="best", reason="Unverifiable claim"),
                )
            }
        )

        with pytest.raises(ConfigurationDefect, match="banned term 'best' has an invalid pattern"):
            ProfileRegistry([profile])

    def test_defect_is_logged(self, make_profile, caplog):
        profile = make_profile({"readability": 0.5})

        with caplog.at_level(logging.ERROR, logger="listing_qa.qa.registry"):
            with pytest.raises(ConfigurationDefect):
                ProfileRegistry([profile])

        assert "Configuration defect" in caplog.text

    def test_custom_criteria_registry(self, make_profile, constant_criterion):
        profile = make_profile({"always_half": 1.0})

        registry = ProfileRegistry([profile], criteria={"always_half": constant_criterion(0.5)})

        assert registry.get_criterion("always_half") is not None


class TestLookup:
    """Tests for marketplace resolution."""

    def test_resolve_enabled(self, registry):
        assert registry.get_marketplace_profile("ebay").display_name == "eBay"

    def test_unknown_marketplace(self, registry):
        with pytest.raises(UnknownMarketplace) as exc_info:
            registry.get_marketplace_profile("etsy")

        assert exc_info.value.marketplace_id == "etsy"
        assert isinstance(exc_info.value, LookupError)

    def test_disabled_marketplace(self):
        registry = ProfileRegistry(BUILTIN_PROFILES, enabled={"amazon", "ebay"})

        with pytest.raises(UnknownMarketplace, match="disabled"):
            registry.get_marketplace_profile("walmart")

    def test_enabled_ids(self):
        registry = ProfileRegistry(BUILTIN_PROFILES, enabled=["amazon"])

        enabled = registry.get_enabled_marketplace_ids()

        assert enabled == frozenset({"amazon"})
        assert isinstance(enabled, frozenset)
        assert registry.is_enabled("amazon")
        assert not registry.is_enabled("ebay")

    def test_all_enabled_by_default(self, registry):
        assert registry.get_enabled_marketplace_ids() == {"amazon", "ebay", "walmart", "shopify"}


class TestBuildRegistry:
    """Registry built from settings."""

    def test_default_settings(self):
        registry = build_registry(Settings(_env_file=None))

        assert registry.get_enabled_marketplace_ids() == {"amazon", "ebay"}
        assert registry.get_marketplace_ids() == ["amazon", "ebay", "walmart", "shopify"]

    def test_enable_walmart(self):
        settings = Settings(_env_file=None, marketplace_enabled_walmart=True)

        registry = build_registry(settings)

        assert registry.get_marketplace_profile("walmart").id == "walmart"
