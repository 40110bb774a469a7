"""Marketplace profile registry.

The registry is built once at startup and is read-only afterwards. Every
profile is checked when it is registered:

- it declares at least one weighted criterion
- each weight is within [0, 1] and the weights sum to 1.0 (+/- 0.001)
- every criterion it names exists in the criterion registry
- no criterion is listed twice
- every banned-term pattern is a valid regular expression

A failed check raises ConfigurationDefect, so a misconfigured process stops
at boot instead of mis-scoring listings at request time.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import NoReturn, Optional

from listing_qa.config import Settings, get_settings
from listing_qa.qa.criteria import CRITERION_FUNCTIONS, CriterionFn
from listing_qa.qa.models import MarketplaceProfile
from listing_qa.qa.profiles import BUILTIN_PROFILES

logger = logging.getLogger(__name__)

WEIGHT_SUM_TOLERANCE = 0.001


class UnknownMarketplace(LookupError):
    """Marketplace has no registered profile, or is disabled."""

    def __init__(self, marketplace_id: str, reason: str = "not registered") -> None:
        self.marketplace_id = marketplace_id
        self.reason = reason
        super().__init__(f"Unknown marketplace '{marketplace_id}': {reason}")


class ConfigurationDefect(ValueError):
    """A marketplace profile or the enablement configuration is inconsistent."""


class ProfileRegistry:
    """Read-only lookup from marketplace id to its profile."""

    def __init__(
        self,
        profiles: Iterable[MarketplaceProfile],
        criteria: Optional[Mapping[str, CriterionFn]] = None,
        enabled: Optional[Iterable[str]] = None,
    ) -> None:
        """Register and check every profile.

        Args:
            profiles: Marketplace profiles to register
            criteria: Criterion registry (defaults to the built-in catalog)
            enabled: Marketplace ids open for traffic (None = all registered)

        Raises:
            ConfigurationDefect: If any profile or enabled id is inconsistent
        """
        self._criteria: Mapping[str, CriterionFn] = MappingProxyType(
            dict(CRITERION_FUNCTIONS if criteria is None else criteria)
        )

        registered: dict[str, MarketplaceProfile] = {}
        for profile in profiles:
            if profile.id in registered:
                self._defect(f"Duplicate marketplace profile '{profile.id}'")
            self._check_profile(profile)
            registered[profile.id] = profile
            logger.info(
                f"Registered marketplace profile '{profile.id}' "
                f"({len(profile.listing_shape)} fields, "
                f"{len(profile.scoring_weights)} criteria)"
            )
        self._profiles: Mapping[str, MarketplaceProfile] = MappingProxyType(registered)

        enabled_ids = frozenset(registered) if enabled is None else frozenset(enabled)
        unknown = sorted(enabled_ids - frozenset(registered))
        if unknown:
            self._defect(f"Enabled marketplaces have no profile: {', '.join(unknown)}")
        self._enabled = enabled_ids

        disabled = sorted(frozenset(registered) - enabled_ids)
        if disabled:
            logger.info(f"Marketplaces registered but disabled: {', '.join(disabled)}")

    @staticmethod
    def _defect(message: str) -> NoReturn:
        logger.error(f"Configuration defect: {message}")
        raise ConfigurationDefect(message)

    def _check_profile(self, profile: MarketplaceProfile) -> None:
        weights = profile.scoring_weights
        if not weights:
            self._defect(f"Profile '{profile.id}' declares no scoring criteria")

        seen: set[str] = set()
        for entry in weights:
            if entry.criterion not in self._criteria:
                self._defect(
                    f"Profile '{profile.id}' references unknown criterion '{entry.criterion}'"
                )
            if entry.criterion in seen:
                self._defect(
                    f"Profile '{profile.id}' lists criterion '{entry.criterion}' more than once"
                )
            seen.add(entry.criterion)
            if not 0.0 <= entry.weight <= 1.0:
                self._defect(
                    f"Profile '{profile.id}' weight for '{entry.criterion}' "
                    f"is {entry.weight}, must be within [0, 1]"
                )

        total = sum(entry.weight for entry in weights)
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            self._defect(f"Profile '{profile.id}' weights sum to {total:.4f}, expected 1.0")

        for rule in profile.banned_terms:
            try:
                re.compile(rule.pattern)
            except re.error as e:
                self._defect(
                    f"Profile '{profile.id}' banned term '{rule.term}' has an invalid "
                    f"pattern: {e}"
                )

    def get_marketplace_profile(self, marketplace_id: str) -> MarketplaceProfile:
        """Resolve an enabled marketplace's profile.

        Raises:
            UnknownMarketplace: If the id is not registered or not enabled
        """
        profile = self._profiles.get(marketplace_id)
        if profile is None:
            raise UnknownMarketplace(marketplace_id)
        if marketplace_id not in self._enabled:
            raise UnknownMarketplace(marketplace_id, "marketplace is disabled")
        return profile

    def get_enabled_marketplace_ids(self) -> frozenset[str]:
        """Marketplace ids open for traffic."""
        return self._enabled

    def get_marketplace_ids(self) -> list[str]:
        """All registered marketplace ids, in registration order."""
        return list(self._profiles)

    def get_all_profiles(self) -> list[MarketplaceProfile]:
        return list(self._profiles.values())

    def is_enabled(self, marketplace_id: str) -> bool:
        return marketplace_id in self._enabled

    def get_criterion(self, name: str) -> CriterionFn:
        """Look up a criterion function by name."""
        return self._criteria[name]


def build_registry(settings: Optional[Settings] = None) -> ProfileRegistry:
    """Build the registry from the built-in profiles and enablement settings."""
    if settings is None:
        settings = get_settings()
    return ProfileRegistry(BUILTIN_PROFILES, enabled=settings.enabled_marketplaces())


@lru_cache
def get_default_registry() -> ProfileRegistry:
    """Get the cached process-wide registry."""
    return build_registry()


def get_marketplace_profile(marketplace_id: str) -> MarketplaceProfile:
    """Resolve a profile from the default registry."""
    return get_default_registry().get_marketplace_profile(marketplace_id)


def get_enabled_marketplace_ids() -> frozenset[str]:
    """Enabled marketplace ids of the default registry."""
    return get_default_registry().get_enabled_marketplace_ids()
