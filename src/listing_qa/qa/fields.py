"""Field access and text helpers shared by the validator and the criteria.

Every lookup goes through the marketplace profile: a field that is not in the
profile's listing shape reads as absent, so content a marketplace does not
declare never influences its audit.
"""

import re
from typing import Any, Optional

from listing_qa.qa.models import ListingContent, MarketplaceProfile

# Opening or closing tag, e.g. <br>, </li>, <p class="x">
HTML_TAG_PATTERN = re.compile(r"</?[a-z][\s\S]*?>", re.IGNORECASE)

# Words that carry no keyword value in titles
FILLER_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "and", "or", "for", "of", "in", "on", "to", "by",
        "is", "it", "at", "as", "with", "&",
    }
)

# Always part of every shape, whatever the profile declares
CORE_FIELDS: frozenset[str] = frozenset({"title", "description", "photo_recommendations"})


def field_value(
    content: ListingContent,
    profile: MarketplaceProfile,
    name: str,
) -> Any:
    """Return the content value for `name`, or None if the profile does not declare it."""
    if name not in CORE_FIELDS and not profile.has_field(name):
        return None
    return getattr(content, name, None)


def field_text(value: Any) -> str:
    """Flatten a field value to text for length and content checks."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return "\n".join(f"{key}: {item}" for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return "\n".join(field_text(item) for item in value)
    if hasattr(value, "model_dump"):
        parts = [
            field_text(item)
            for item in value.model_dump(exclude_none=True, mode="json").values()
        ]
        return "\n".join(part for part in parts if part)
    return str(value)


def is_blank(value: Any) -> bool:
    """True when a value is absent or empty after trimming whitespace."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, dict):
        return len(value) == 0
    if isinstance(value, (list, tuple)):
        return all(is_blank(item) for item in value)
    return False


def text_of(content: ListingContent, profile: MarketplaceProfile, name: str) -> str:
    """Trimmed text of a declared field ('' when absent)."""
    return field_text(field_value(content, profile, name)).strip()


def list_of(
    content: ListingContent,
    profile: MarketplaceProfile,
    name: str,
) -> list[Any]:
    """A declared list field as a list ([] when absent)."""
    value = field_value(content, profile, name)
    return list(value) if isinstance(value, (list, tuple)) else []


def mapping_of(
    content: ListingContent,
    profile: MarketplaceProfile,
    name: str,
) -> dict[str, str]:
    """A declared mapping field as a dict ({} when absent)."""
    value = field_value(content, profile, name)
    return dict(value) if isinstance(value, dict) else {}


def byte_length(text: str) -> int:
    """UTF-8 byte length."""
    return len(text.encode("utf-8"))


def is_all_caps(text: str) -> bool:
    """True when every ASCII letter in `text` is uppercase."""
    letters = re.sub(r"[^a-zA-Z]", "", text)
    return len(letters) > 0 and letters == letters.upper()


def is_filled(value: Optional[str]) -> bool:
    """A metadata value counts as filled when it is non-blank and not 'null'."""
    if not isinstance(value, str):
        return False
    trimmed = value.strip()
    return len(trimmed) > 0 and trimmed.lower() != "null"


def words(text: str) -> list[str]:
    return [word for word in text.split() if word]


def label(name: str) -> str:
    """Human label for a field name, e.g. 'backend_keywords' -> 'Backend Keywords'."""
    return name.replace("_", " ").title()
