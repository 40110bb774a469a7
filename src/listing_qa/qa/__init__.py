"""Listing quality audit module."""

from listing_qa.qa.analyzer import analyze_listing, score_listing
from listing_qa.qa.criteria import CRITERION_FUNCTIONS, CriterionName
from listing_qa.qa.models import (
    AuditResult,
    BannedTerm,
    CriterionScore,
    Diagnostic,
    FieldSpec,
    ListingContent,
    MarketplaceProfile,
    ScoringWeight,
    Severity,
    get_grade,
    get_listing_status,
)
from listing_qa.qa.profiles import BUILTIN_PROFILES
from listing_qa.qa.registry import (
    ConfigurationDefect,
    ProfileRegistry,
    UnknownMarketplace,
    build_registry,
    get_default_registry,
    get_enabled_marketplace_ids,
    get_marketplace_profile,
)
from listing_qa.qa.validator import validate_listing

__all__ = [
    # Models
    "AuditResult",
    "BannedTerm",
    "CriterionScore",
    "Diagnostic",
    "FieldSpec",
    "ListingContent",
    "MarketplaceProfile",
    "ScoringWeight",
    "Severity",
    "get_grade",
    "get_listing_status",
    # Criteria
    "CRITERION_FUNCTIONS",
    "CriterionName",
    # Profiles / registry
    "BUILTIN_PROFILES",
    "ConfigurationDefect",
    "ProfileRegistry",
    "UnknownMarketplace",
    "build_registry",
    "get_default_registry",
    "get_enabled_marketplace_ids",
    "get_marketplace_profile",
    # Validation
    "validate_listing",
    # Analyzer
    "analyze_listing",
    "score_listing",
]
