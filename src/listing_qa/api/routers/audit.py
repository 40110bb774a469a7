"""Listing audit API endpoints.

Endpoints:
- POST /audit - score a listing against one marketplace
- GET /marketplaces - list enabled marketplaces and their field shapes
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from listing_qa.qa.analyzer import analyze_listing
from listing_qa.qa.models import AuditResult, FieldSpec, ListingContent
from listing_qa.qa.registry import ProfileRegistry, UnknownMarketplace, get_default_registry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["audit"])


class AuditRequest(ListingContent):
    """Listing to audit plus the target marketplace."""

    marketplace: str = Field(..., min_length=1, description="Enabled marketplace id")
    title: str = Field(..., min_length=1, description="Product title")
    description: str = Field(..., min_length=1, description="Product description")


class MarketplaceSummary(BaseModel):
    """Enabled marketplace with its declared fields."""

    id: str
    display_name: str
    fields: list[FieldSpec]


def get_registry() -> ProfileRegistry:
    """Registry dependency (overridden in tests)."""
    return get_default_registry()


@router.post("/audit", response_model=AuditResult)
async def audit_listing(
    request: AuditRequest,
    registry: ProfileRegistry = Depends(get_registry),
) -> AuditResult:
    """Audit a listing for the requested marketplace.

    Returns 400 if the marketplace is unknown or disabled.
    """
    content = ListingContent.model_validate(request.model_dump(exclude={"marketplace"}))
    try:
        return analyze_listing(content, request.marketplace, registry)
    except UnknownMarketplace as e:
        logger.warning(f"Rejected audit request: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/marketplaces", response_model=list[MarketplaceSummary])
async def list_marketplaces(
    registry: ProfileRegistry = Depends(get_registry),
) -> list[MarketplaceSummary]:
    """List enabled marketplaces in registration order."""
    return [
        MarketplaceSummary(
            id=profile.id,
            display_name=profile.display_name,
            fields=list(profile.listing_shape),
        )
        for profile in registry.get_all_profiles()
        if registry.is_enabled(profile.id)
    ]
