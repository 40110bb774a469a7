"""Listing audit engine.

Audit steps:
1. Resolve the marketplace profile (UnknownMarketplace propagates)
2. Structural validation against the listing shape
3. Evaluate each weighted criterion, in declaration order
4. Score = round(sum(weight * value) * 100), .5 rounding up, clamped to 0-100
5. Diagnostics: structural first, then per-criterion in declaration order

Weights are validated at registration and never renormalized here. The
engine keeps no state between calls; criterion errors propagate unchanged.
"""

import logging
from typing import Optional

from listing_qa.qa.criteria import round_half_up
from listing_qa.qa.models import (
    AuditResult,
    CriterionScore,
    Diagnostic,
    ListingContent,
    MarketplaceProfile,
)
from listing_qa.qa.registry import ProfileRegistry, get_default_registry
from listing_qa.qa.validator import validate_listing

logger = logging.getLogger(__name__)


def score_listing(
    content: ListingContent,
    profile: MarketplaceProfile,
    registry: ProfileRegistry,
) -> tuple[int, dict[str, CriterionScore]]:
    """Evaluate every weighted criterion of a profile.

    Args:
        content: Listing to score
        profile: Marketplace profile with scoring weights
        registry: Registry providing the criterion functions

    Returns:
        Tuple of (score 0-100, breakdown by criterion name)
    """
    breakdown: dict[str, CriterionScore] = {}
    raw_score = 0.0

    for entry in profile.scoring_weights:
        criterion = registry.get_criterion(entry.criterion)
        result = criterion(content, profile)
        breakdown[entry.criterion] = result
        raw_score += entry.weight * result.value

    score = max(0, min(100, round_half_up(raw_score * 100)))
    return score, breakdown


def analyze_listing(
    content: ListingContent,
    marketplace_id: str,
    registry: Optional[ProfileRegistry] = None,
) -> AuditResult:
    """Audit one listing for one marketplace.

    This is the main entry point for auditing a listing.

    Args:
        content: Listing to audit (never modified)
        marketplace_id: Target marketplace identifier
        registry: Profile registry (uses the default registry if None)

    Returns:
        AuditResult with score, diagnostics and per-criterion breakdown

    Raises:
        UnknownMarketplace: If the marketplace is not registered or is disabled
    """
    if registry is None:
        registry = get_default_registry()

    profile = registry.get_marketplace_profile(marketplace_id)

    structural = validate_listing(content, profile)
    score, breakdown = score_listing(content, profile, registry)

    validation: list[Diagnostic] = list(structural)
    for criterion_score in breakdown.values():
        validation.extend(criterion_score.messages)

    logger.debug(
        f"Audited listing for {marketplace_id}: score={score}, "
        f"{len(structural)} structural / {len(validation)} total diagnostics"
    )

    return AuditResult(score=score, validation=validation, breakdown=breakdown)
