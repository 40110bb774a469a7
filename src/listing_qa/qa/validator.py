"""Structural validation of a listing against a marketplace's field schema.

Structural problems are reported as diagnostics, never raised: the caller
still gets a score and guidance for a listing that needs correction.

Checks per declared field:
- Required field absent or blank              -> error   missing_required_field
- More characters than max_length             -> warning field_too_long
- More UTF-8 bytes than max_bytes             -> warning field_too_many_bytes
- HTML in a field that does not allow it      -> warning html_not_allowed
- Entry count outside min_items..max_items    -> error   item_count_out_of_range
- Blank entry in a list field                 -> error   empty_item
- Entry longer than item_max_length           -> warning item_too_long
- Entry shorter than item_min_length          -> warning item_too_short
- Mapping entry with a blank value            -> warning empty_mapping_value

Cross-field checks:
- Title in ALL CAPS                           -> warning title_all_caps
- Title opens with a "Brand - " prefix        -> info    title_brand_prefix
- Required description under 100 characters   -> warning description_too_short
- A+ modules: duplicate positions, too many highlights, long alt text
- Photo recommendations: duplicate slots (warning), missing description or
  tips (info)
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from listing_qa.qa.fields import (
    HTML_TAG_PATTERN,
    byte_length,
    field_text,
    field_value,
    is_all_caps,
    is_blank,
    label,
)
from listing_qa.qa.models import (
    SEVERITY_RANK,
    APlusModule,
    Diagnostic,
    FieldSpec,
    ListingContent,
    MarketplaceProfile,
    PhotoRecommendation,
    Severity,
)

MIN_DESCRIPTION_LENGTH = 100
MAX_A_PLUS_HIGHLIGHTS = 8
MAX_ALT_TEXT_LENGTH = 100

BRAND_PREFIX_PATTERN = re.compile(r"^[A-Z][a-zA-Z0-9]{0,20}\s*[-|–—]\s*")


@dataclass
class ValidationResult:
    """Diagnostics collected by structural validation."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add(
        self,
        severity: Severity,
        code: str,
        message: str,
        field_name: Optional[str] = None,
    ) -> None:
        """Add a diagnostic."""
        self.diagnostics.append(
            Diagnostic(field=field_name, severity=severity, code=code, message=message)
        )

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    def sorted(self) -> list[Diagnostic]:
        """Diagnostics ordered error, warning, info (stable within a severity)."""
        return sorted(self.diagnostics, key=lambda d: SEVERITY_RANK[d.severity])


def _check_field(result: ValidationResult, spec: FieldSpec, value: Any) -> None:
    name = spec.name

    if is_blank(value):
        if spec.required:
            result.add(
                Severity.ERROR,
                "missing_required_field",
                f"{label(name)} is required but missing or empty",
                name,
            )
        return

    text = field_text(value)

    if spec.max_length is not None and len(text) > spec.max_length:
        result.add(
            Severity.WARNING,
            "field_too_long",
            f"{label(name)} is {len(text)} chars, max is {spec.max_length}",
            name,
        )

    if spec.max_bytes is not None and byte_length(text) > spec.max_bytes:
        result.add(
            Severity.WARNING,
            "field_too_many_bytes",
            f"{label(name)} is {byte_length(text)} bytes, max is {spec.max_bytes} bytes",
            name,
        )

    if not spec.html_allowed and HTML_TAG_PATTERN.search(text):
        result.add(
            Severity.WARNING,
            "html_not_allowed",
            f"{label(name)} contains HTML tags but HTML is not allowed for this field",
            name,
        )

    if isinstance(value, (list, tuple)):
        _check_items(result, spec, list(value))
    elif isinstance(value, dict):
        for key, item in value.items():
            if is_blank(item):
                result.add(
                    Severity.WARNING,
                    "empty_mapping_value",
                    f'{label(name)} entry "{key}" has an empty value',
                    name,
                )


def _check_items(result: ValidationResult, spec: FieldSpec, items: list[Any]) -> None:
    name = spec.name
    count = len(items)

    too_few = spec.min_items is not None and count < spec.min_items
    too_many = spec.max_items is not None and count > spec.max_items
    if too_few or too_many:
        if spec.min_items == spec.max_items:
            expected = f"exactly {spec.min_items}"
        elif spec.max_items is None:
            expected = f"at least {spec.min_items}"
        elif spec.min_items is None:
            expected = f"at most {spec.max_items}"
        else:
            expected = f"{spec.min_items}-{spec.max_items}"
        result.add(
            Severity.ERROR,
            "item_count_out_of_range",
            f"{label(name)} needs {expected} entries; found {count}",
            name,
        )

    for index, item in enumerate(items, start=1):
        if not isinstance(item, str):
            continue
        entry = item.strip()
        if not entry:
            result.add(
                Severity.ERROR,
                "empty_item",
                f"{label(name)} entry {index} must be non-empty",
                name,
            )
            continue
        if spec.item_max_length is not None and len(entry) > spec.item_max_length:
            result.add(
                Severity.WARNING,
                "item_too_long",
                f"{label(name)} entry {index} is {len(entry)} chars; max is {spec.item_max_length}",
                name,
            )
        if spec.item_min_length is not None and len(entry) < spec.item_min_length:
            result.add(
                Severity.WARNING,
                "item_too_short",
                f"{label(name)} entry {index} is only {len(entry)} chars; "
                f"aim for at least {spec.item_min_length}",
                name,
            )


def _check_title(result: ValidationResult, title: str) -> None:
    if not title.strip():
        return

    if is_all_caps(title):
        result.add(
            Severity.WARNING,
            "title_all_caps",
            "Title is in ALL CAPS; use title case or sentence case for better readability",
            "title",
        )

    if BRAND_PREFIX_PATTERN.match(title):
        result.add(
            Severity.INFO,
            "title_brand_prefix",
            "Title appears to start with a brand name prefix; "
            "consider integrating the brand name naturally",
            "title",
        )


def _check_description(
    result: ValidationResult,
    content: ListingContent,
    profile: MarketplaceProfile,
) -> None:
    for name in ("description", "shelf_description"):
        spec = profile.field_spec(name)
        if spec is None or not spec.required:
            continue
        text = field_text(field_value(content, profile, name)).strip()
        if text and len(text) < MIN_DESCRIPTION_LENGTH:
            result.add(
                Severity.WARNING,
                "description_too_short",
                f"{label(name)} is only {len(text)} chars; aim for at least "
                f"{MIN_DESCRIPTION_LENGTH} chars for a complete description",
                name,
            )


def _check_a_plus_modules(result: ValidationResult, modules: list[APlusModule]) -> None:
    seen: set[int] = set()
    for module in modules:
        if module.position in seen:
            result.add(
                Severity.WARNING,
                "duplicate_a_plus_position",
                f"Duplicate A+ module position {module.position}; each position should be unique",
                "a_plus_modules",
            )
        seen.add(module.position)

        if module.highlights and len(module.highlights) > MAX_A_PLUS_HIGHLIGHTS:
            result.add(
                Severity.WARNING,
                "too_many_highlights",
                f"A+ module {module.position} has {len(module.highlights)} highlights; "
                f"max is {MAX_A_PLUS_HIGHLIGHTS}",
                "a_plus_modules",
            )

        slots = ([module.image] if module.image else []) + list(module.images or [])
        for slot in slots:
            if len(slot.alt_text) > MAX_ALT_TEXT_LENGTH:
                result.add(
                    Severity.WARNING,
                    "alt_text_too_long",
                    f"A+ module {module.position} alt text is {len(slot.alt_text)} chars; "
                    f"max is {MAX_ALT_TEXT_LENGTH}",
                    "a_plus_modules",
                )


def _check_photo_recommendations(
    result: ValidationResult, photos: list[PhotoRecommendation]
) -> None:
    seen: set[int] = set()
    for photo in photos:
        if photo.slot in seen:
            result.add(
                Severity.WARNING,
                "duplicate_slot",
                f"Duplicate photo slot {photo.slot}; each slot should be unique",
                "photo_recommendations",
            )
        seen.add(photo.slot)

        if not photo.description.strip():
            result.add(
                Severity.INFO,
                "missing_photo_description",
                f"Photo slot {photo.slot} is missing a description",
                "photo_recommendations",
            )

        if not photo.tips:
            result.add(
                Severity.INFO,
                "missing_photo_tips",
                f"Photo slot {photo.slot} has no tips",
                "photo_recommendations",
            )


def validate_listing(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> list[Diagnostic]:
    """Validate a listing against a marketplace's listing shape.

    Args:
        content: Listing to validate (never modified)
        profile: Marketplace profile whose listing shape applies

    Returns:
        Diagnostics ordered by severity (error, warning, info)
    """
    result = ValidationResult()

    for spec in profile.listing_shape:
        _check_field(result, spec, field_value(content, profile, spec.name))

    _check_title(result, content.title)
    _check_description(result, content, profile)

    modules = field_value(content, profile, "a_plus_modules")
    if modules:
        _check_a_plus_modules(result, list(modules))

    photos = field_value(content, profile, "photo_recommendations")
    if photos:
        _check_photo_recommendations(result, list(photos))

    return result.sorted()
