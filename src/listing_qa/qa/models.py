"""Data models for listing audits."""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Severity(str, Enum):
    """How serious a diagnostic is.

    ERROR means the listing should not be considered sellable as-is.
    WARNING and INFO are advisory.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# Lower rank sorts first
SEVERITY_RANK: dict[Severity, int] = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}


class APlusModuleType(str, Enum):
    """Standard A+ content module layouts."""

    STANDARD_HEADER_IMAGE_TEXT = "STANDARD_HEADER_IMAGE_TEXT"
    STANDARD_IMAGE_TEXT_OVERLAY = "STANDARD_IMAGE_TEXT_OVERLAY"
    STANDARD_SINGLE_SIDE_IMAGE = "STANDARD_SINGLE_SIDE_IMAGE"
    STANDARD_IMAGE_SIDEBAR = "STANDARD_IMAGE_SIDEBAR"
    STANDARD_THREE_IMAGE_TEXT = "STANDARD_THREE_IMAGE_TEXT"
    STANDARD_FOUR_IMAGE_TEXT = "STANDARD_FOUR_IMAGE_TEXT"
    STANDARD_FOUR_IMAGE_TEXT_QUADRANT = "STANDARD_FOUR_IMAGE_TEXT_QUADRANT"
    STANDARD_MULTIPLE_IMAGE_TEXT = "STANDARD_MULTIPLE_IMAGE_TEXT"
    STANDARD_SINGLE_IMAGE_HIGHLIGHTS = "STANDARD_SINGLE_IMAGE_HIGHLIGHTS"
    STANDARD_SINGLE_IMAGE_SPECS_DETAIL = "STANDARD_SINGLE_IMAGE_SPECS_DETAIL"
    STANDARD_TEXT = "STANDARD_TEXT"
    STANDARD_PRODUCT_DESCRIPTION = "STANDARD_PRODUCT_DESCRIPTION"
    STANDARD_TECH_SPECS = "STANDARD_TECH_SPECS"
    STANDARD_COMPARISON_TABLE = "STANDARD_COMPARISON_TABLE"
    STANDARD_COMPANY_LOGO = "STANDARD_COMPANY_LOGO"


class APlusImageSlot(BaseModel):
    """Image slot inside an A+ module."""

    model_config = ConfigDict(frozen=True)

    alt_text: str = Field("", description="Keyword-rich alt text (max 100 chars)")
    image_guidance: str = Field("", description="Describes the photo to use")


class APlusModule(BaseModel):
    """One block of A+ (enhanced brand) content."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: APlusModuleType
    position: int = Field(..., ge=1, le=7, description="Display position (1-7)")
    headline: Optional[str] = None
    body: Optional[str] = None
    caption: Optional[str] = None
    image: Optional[APlusImageSlot] = None
    images: Optional[list[APlusImageSlot]] = None
    highlights: Optional[list[str]] = Field(
        None, description="Highlight bullets (max 8, 100 chars each)"
    )
    specs: Optional[dict[str, str]] = Field(None, description="Tech spec label -> value")


class PhotoRecommendation(BaseModel):
    """Suggested product photo for one image slot."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    slot: int = Field(..., description="Image slot number (1 = main image)")
    description: str = Field("", description="What the photo should show")
    type: Optional[
        Literal["main", "lifestyle", "infographic", "detail", "scale", "packaging"]
    ] = None
    tips: list[str] = Field(default_factory=list, description="Shooting tips")


class ListingContent(BaseModel):
    """Listing content under audit.

    The core fields and photo recommendations are shared by every marketplace.
    The remaining fields are marketplace extensions; a marketplace only looks
    at the ones declared in its listing shape and ignores the rest.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Core
    title: str = Field("", description="Product title")
    bullets: list[str] = Field(default_factory=list, description="Bullet points / key features")
    description: str = Field("", description="Product description, may contain HTML")
    backend_keywords: Optional[str] = Field(None, description="Hidden search terms")

    # Storefront / SEO
    subtitle: Optional[str] = None
    seo_title: Optional[str] = None
    meta_description: Optional[str] = None
    tags: Optional[list[str]] = None
    collections: Optional[list[str]] = None
    shelf_description: Optional[str] = None

    # Structured metadata
    item_specifics: Optional[dict[str, str]] = Field(
        None, description="Auction-style name -> value specifics"
    )
    attributes: Optional[dict[str, str]] = Field(
        None, description="Catalog attributes (brand, condition, color, ...)"
    )
    a_plus_modules: Optional[list[APlusModule]] = None
    photo_recommendations: Optional[list[PhotoRecommendation]] = None

    # Disclosure notes
    condition_notes: Optional[list[str]] = None
    shipping_notes: Optional[str] = None
    returns_notes: Optional[str] = None
    category_hint: Optional[str] = None
    compliance_notes: Optional[list[str]] = None
    assumptions: Optional[list[str]] = None


class FieldSpec(BaseModel):
    """One declared field in a marketplace's listing shape."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="ListingContent attribute name")
    max_length: Optional[int] = Field(
        None, ge=0, description="Max characters (None = unlimited)"
    )
    max_bytes: Optional[int] = Field(None, ge=0, description="Max UTF-8 bytes")
    required: bool = Field(False, description="Must be present and non-blank")
    html_allowed: bool = Field(False, description="May contain HTML markup")
    description: str = Field("", description="Human guidance for this field")

    # List fields
    min_items: Optional[int] = Field(None, ge=0, description="Minimum entries")
    max_items: Optional[int] = Field(None, ge=0, description="Maximum entries")
    item_max_length: Optional[int] = Field(None, ge=0, description="Max characters per entry")
    item_min_length: Optional[int] = Field(
        None, ge=0, description="Entries shorter than this are flagged"
    )


class BannedTerm(BaseModel):
    """Claim language a marketplace does not allow."""

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(..., description="Regular expression (use inline flags)")
    term: str = Field(..., description="Human-readable term")
    reason: str = Field(..., description="Why the marketplace disallows it")
    severity: Severity = Field(Severity.ERROR, description="error or warning")


class ScoringWeight(BaseModel):
    """Weight of one criterion within a marketplace profile."""

    model_config = ConfigDict(frozen=True)

    criterion: str = Field(..., description="Criterion registry name")
    weight: float = Field(..., description="Share of the total score (0-1)")
    description: str = ""

    @field_validator("criterion", mode="before")
    @classmethod
    def _criterion_name(cls, value: object) -> object:
        # Accept CriterionName members, store the plain name
        if isinstance(value, Enum):
            return value.value
        return value


class MarketplaceProfile(BaseModel):
    """Declared shape and weighting rules for one sales channel."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Marketplace identifier")
    display_name: str = Field(..., description="Human-readable name")
    listing_shape: tuple[FieldSpec, ...] = Field(
        ..., description="Expected fields, in display/export order"
    )
    scoring_weights: tuple[ScoringWeight, ...] = Field(
        ..., description="Weighted criteria, in evaluation order"
    )
    banned_terms: tuple[BannedTerm, ...] = ()

    def field_spec(self, name: str) -> Optional[FieldSpec]:
        """Return the FieldSpec named `name`, if declared."""
        for spec in self.listing_shape:
            if spec.name == name:
                return spec
        return None

    def has_field(self, name: str) -> bool:
        return self.field_spec(name) is not None

    @property
    def field_names(self) -> list[str]:
        return [spec.name for spec in self.listing_shape]


class Diagnostic(BaseModel):
    """A severity-tagged note about a listing."""

    model_config = ConfigDict(frozen=True)

    field: Optional[str] = Field(None, description="Field the note refers to")
    severity: Severity
    code: str = Field(..., description="Stable rule identifier")
    message: str


class CriterionScore(BaseModel):
    """Outcome of one criterion."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(..., ge=0.0, le=1.0, description="0 = failure, 1 = ideal")
    messages: tuple[Diagnostic, ...] = ()


class AuditResult(BaseModel):
    """Score and diagnostics for one listing against one marketplace."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100, description="Weighted score (0-100)")
    validation: tuple[Diagnostic, ...] = Field(
        (), description="Structural diagnostics first, then per-criterion"
    )
    breakdown: Mapping[str, CriterionScore] = Field(
        default_factory=lambda: MappingProxyType({}), description="Score per criterion name"
    )

    @field_validator("breakdown")
    @classmethod
    def _read_only_breakdown(
        cls, value: Mapping[str, CriterionScore]
    ) -> Mapping[str, CriterionScore]:
        return MappingProxyType(dict(value))

    @field_serializer("breakdown")
    def _serialize_breakdown(
        self, value: Mapping[str, CriterionScore]
    ) -> dict[str, CriterionScore]:
        return dict(value)


QAGrade = Literal["A", "B", "C", "D", "F"]
ListingStatus = Literal["ready", "needs_revision", "regenerate"]


def get_grade(score: int) -> QAGrade:
    """Letter grade for a 0-100 score."""
    if score >= 90:
        return "A"
    if score >= 75:
        return "B"
    if score >= 60:
        return "C"
    if score >= 40:
        return "D"
    return "F"


def get_listing_status(score: int) -> ListingStatus:
    """Next action for a listing with this score."""
    if score >= 85:
        return "ready"
    if score >= 70:
        return "needs_revision"
    return "regenerate"
