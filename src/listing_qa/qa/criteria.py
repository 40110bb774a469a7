"""Criterion catalog for listing scoring.

Each criterion is a pure function of (ListingContent, MarketplaceProfile)
returning a CriterionScore with a value in [0, 1]. Internally every criterion
works in points (0-100) the way the bands below read, and converts once at
the end. Criteria never depend on each other or on validation output, so
each can be tested on its own.

| Criterion                         | Dimension                                        |
|-----------------------------------|--------------------------------------------------|
| title_keyword_richness            | Word count and keyword variety of the title      |
| title_length_optimization         | Title length vs the marketplace limit            |
| bullet_quality                    | Enough distinct, substantive bullets             |
| backend_keywords_utilization      | Search-term coverage without stuffing            |
| keyword_integration               | Title keywords carried into supporting fields    |
| banned_terms_absence              | Disallowed claim language                        |
| compliance_safety                 | Same check, eBay naming                          |
| description_completeness          | Description length and structure                 |
| field_completeness                | Required/optional fields filled                  |
| readability                       | Word length, sentence variety                    |
| formatting_compliance             | Caps, punctuation, markup hygiene                |
| formatting_richness               | Headings, lists, paragraphs in the description   |
| benefit_driven_language           | Benefit words and power phrases                  |
| item_specifics_completeness       | eBay item specifics coverage                     |
| attribute_completeness            | Catalog attributes coverage                      |
| condition_disclosure              | Condition transparency                           |
| listing_completeness              | Shipping / returns / category present            |
| seo_optimization                  | SEO title, meta description, tags                |
| shelf_description_effectiveness   | Walmart shelf description                        |
| tag_and_collection_strategy       | Storefront tags and collections                  |
"""

import math
import re
from collections import Counter
from enum import Enum
from typing import Callable, Optional

from listing_qa.qa.fields import (
    FILLER_WORDS,
    HTML_TAG_PATTERN,
    byte_length,
    field_value,
    is_all_caps,
    is_blank,
    is_filled,
    list_of,
    mapping_of,
    text_of,
    words,
)
from listing_qa.qa.models import (
    CriterionScore,
    Diagnostic,
    ListingContent,
    MarketplaceProfile,
    Severity,
)


class CriterionName(str, Enum):
    """Stable criterion identifiers."""

    TITLE_KEYWORD_RICHNESS = "title_keyword_richness"
    TITLE_LENGTH_OPTIMIZATION = "title_length_optimization"
    BULLET_QUALITY = "bullet_quality"
    BACKEND_KEYWORDS_UTILIZATION = "backend_keywords_utilization"
    KEYWORD_INTEGRATION = "keyword_integration"
    BANNED_TERMS_ABSENCE = "banned_terms_absence"
    COMPLIANCE_SAFETY = "compliance_safety"
    DESCRIPTION_COMPLETENESS = "description_completeness"
    FIELD_COMPLETENESS = "field_completeness"
    READABILITY = "readability"
    FORMATTING_COMPLIANCE = "formatting_compliance"
    FORMATTING_RICHNESS = "formatting_richness"
    BENEFIT_DRIVEN_LANGUAGE = "benefit_driven_language"
    ITEM_SPECIFICS_COMPLETENESS = "item_specifics_completeness"
    ATTRIBUTE_COMPLETENESS = "attribute_completeness"
    CONDITION_DISCLOSURE = "condition_disclosure"
    LISTING_COMPLETENESS = "listing_completeness"
    SEO_OPTIMIZATION = "seo_optimization"
    SHELF_DESCRIPTION_EFFECTIVENESS = "shelf_description_effectiveness"
    TAG_AND_COLLECTION_STRATEGY = "tag_and_collection_strategy"


CriterionFn = Callable[[ListingContent, MarketplaceProfile], CriterionScore]


BENEFIT_WORDS: frozenset[str] = frozenset(
    {
        "easy", "fast", "premium", "durable", "comfortable", "lightweight",
        "portable", "versatile", "powerful", "efficient", "reliable", "secure",
        "safe", "natural", "organic", "eco-friendly", "waterproof", "adjustable",
        "ergonomic", "compact", "professional", "heavy-duty", "long-lasting",
        "non-toxic", "hypoallergenic", "breathable", "stainless", "rechargeable",
        "cordless", "universal", "multi-purpose", "high-quality", "ultra",
        "perfect", "designed", "ideal", "enhanced", "improved", "advanced",
        "innovative", "seamless", "smooth", "sturdy", "flexible", "maximize",
        "protect", "save", "enjoy", "transform", "upgrade", "boost",
        "includes", "features", "delivers", "ensures", "provides", "supports",
    }
)

POWER_PHRASES: tuple[str, ...] = (
    "you can", "you'll", "perfect for", "designed for", "ideal for",
    "great for", "works with", "compatible with", "comes with", "backed by",
    "easy to use", "ready to use", "no assembly", "plug and play",
    "all-in-one", "step by step",
)

CONDITION_TERMS: tuple[str, ...] = (
    "condition", "used", "like new", "refurbished", "wear", "scratch",
    "flaw", "open box", "new",
)

# Fields scanned for banned claim language
COMPLIANCE_SCAN_FIELDS: tuple[str, ...] = (
    "title",
    "bullets",
    "description",
    "backend_keywords",
    "seo_title",
    "meta_description",
    "subtitle",
    "shelf_description",
)

REQUIRED_ATTRIBUTES: tuple[str, ...] = ("brand", "condition")
OPTIONAL_ATTRIBUTES: tuple[str, ...] = ("material", "color", "size", "model")

DEFAULT_TITLE_LENGTH = 200
DEFAULT_BACKEND_BYTES = 250
DEFAULT_BULLET_COUNT = 5
# Descriptions are judged against at most this many characters
DESCRIPTION_REFERENCE_LENGTH = 2000
# Share of description words one keyword may take before it reads as stuffing
KEYWORD_STUFFING_DENSITY = 0.05


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 rounding up."""
    return math.floor(value + 0.5)


def _score(points: float, messages: Optional[list[Diagnostic]] = None) -> CriterionScore:
    """Convert 0-100 points to a clamped CriterionScore."""
    points = max(0.0, min(100.0, float(points)))
    return CriterionScore(value=points / 100, messages=messages or [])


def _note(
    criterion: CriterionName,
    message: str,
    field: Optional[str] = None,
    severity: Severity = Severity.INFO,
) -> Diagnostic:
    return Diagnostic(field=field, severity=severity, code=criterion.value, message=message)


def _normalize(text: str) -> str:
    return " ".join(text.lower().split())


def _listing_text(content: ListingContent, profile: MarketplaceProfile) -> str:
    """Customer-visible prose: title, bullets and description."""
    parts = [content.title] if content.title else []
    parts.extend(b for b in list_of(content, profile, "bullets") if isinstance(b, str))
    if content.description:
        parts.append(content.description)
    return " ".join(parts)


def _meaningful_words(text: str) -> list[str]:
    tokens = [re.sub(r"[^a-z0-9-]", "", w.lower()) for w in words(text)]
    return [t for t in tokens if len(t) > 2 and t not in FILLER_WORDS]


# --- title_keyword_richness ---


def score_title_keyword_richness(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Reward titles with enough distinct keywords, penalize stuffing."""
    name = CriterionName.TITLE_KEYWORD_RICHNESS
    title = content.title.strip()
    if not title:
        return _score(0, [_note(name, "Title is empty", "title")])

    title_words = words(title)
    word_count = len(title_words)
    unique_meaningful = {
        w.lower() for w in title_words if w.lower() not in FILLER_WORDS
    }

    # 11-15 words = 100, 7-10 = 90, 5-6 = 65, 3-4 = 40, 1-2 = 15
    # More than 15 reads as keyword-stuffed
    if word_count <= 2:
        points = 15
    elif word_count <= 4:
        points = 40
    elif word_count <= 6:
        points = 65
    elif word_count <= 10:
        points = 90
    elif word_count <= 15:
        points = 100
    else:
        points = 85

    # Variety bonus
    if len(unique_meaningful) / max(word_count, 1) >= 0.7:
        points = min(100, points + 5)

    messages = [
        _note(name, f"{word_count} words, {len(unique_meaningful)} unique keywords", "title")
    ]
    if word_count > 15:
        messages.append(
            _note(name, "Title may be keyword-stuffed", "title", Severity.WARNING)
        )
    return _score(points, messages)


# --- title_length_optimization ---


def score_title_length_optimization(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Length fitness of the title against the marketplace limit.

    Sweet spot is 60-90% of max. Right up to the limit still scores well;
    only going over is penalized below the short-title bands.
    """
    name = CriterionName.TITLE_LENGTH_OPTIMIZATION
    title = content.title.strip()
    if not title:
        return _score(0, [_note(name, "Title is empty", "title")])

    spec = profile.field_spec("title")
    max_length = spec.max_length if spec and spec.max_length else DEFAULT_TITLE_LENGTH
    length = len(title)
    ratio = length / max_length

    if 0.6 <= ratio <= 0.9:
        points = 100
        note = f"{length}/{max_length} chars, optimal length"
    elif 0.9 < ratio <= 1.0:
        points = 85
        note = f"{length}/{max_length} chars"
    elif 0.45 <= ratio < 0.6:
        points = 80
        note = f"{length}/{max_length} chars"
    elif 0.25 <= ratio < 0.45:
        points = 55
        note = f"{length}/{max_length} chars, title is underutilized, add more keywords"
    elif ratio < 0.25:
        points = 25
        note = f"{length}/{max_length} chars, title is underutilized, add more keywords"
    else:
        points = 40
        note = f"{length}/{max_length} chars, exceeds maximum"

    return _score(points, [_note(name, note, "title")])


# --- bullet_quality ---


def _bullet_points(bullet: str) -> tuple[int, Optional[str]]:
    """Score one bullet (0-100) and return an issue, if any."""
    points = 0
    issue = None

    # Length: 150+ = 35, 100+ = 30, 50+ = 20, 20+ = 10
    if len(bullet) >= 150:
        points += 35
    elif len(bullet) >= 100:
        points += 30
    elif len(bullet) >= 50:
        points += 20
    elif len(bullet) >= 20:
        points += 10
    else:
        points += 2
        issue = f"too short ({len(bullet)} chars)"

    # Leads with a benefit
    tokens = bullet.split()
    first_word = re.sub(r"[^a-z]", "", tokens[0].lower()) if tokens else ""
    if first_word in BENEFIT_WORDS:
        points += 25
    elif any(re.sub(r"[^a-z-]", "", t.lower()) in BENEFIT_WORDS for t in tokens[:5]):
        points += 15

    # Complete thought
    if re.search(r"[.!)]$", bullet):
        points += 10

    # Specific detail (numbers, measurements)
    if re.search(r"\d", bullet):
        points += 15

    # Enough distinct words to say something
    if len({t.lower() for t in tokens}) >= 8:
        points += 15

    return min(100, points), issue


def score_bullet_quality(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Reward enough distinct, substantive bullets."""
    name = CriterionName.BULLET_QUALITY
    bullets = [b.strip() for b in list_of(content, profile, "bullets") if isinstance(b, str)]
    if not bullets:
        return _score(0, [_note(name, "No bullets provided", "bullets", Severity.WARNING)])

    spec = profile.field_spec("bullets")
    target = spec.min_items if spec and spec.min_items else DEFAULT_BULLET_COUNT

    messages: list[Diagnostic] = []
    total = 0
    seen: dict[str, int] = {}
    duplicates = 0
    for index, bullet in enumerate(bullets, start=1):
        points, issue = _bullet_points(bullet)
        total += points
        if issue:
            messages.append(
                _note(name, f"Bullet {index} {issue}", "bullets", Severity.WARNING)
            )
        key = _normalize(bullet)
        if key and key in seen:
            duplicates += 1
            messages.append(
                _note(
                    name,
                    f"Bullet {index} duplicates bullet {seen[key]}",
                    "bullets",
                    Severity.WARNING,
                )
            )
        elif key:
            seen[key] = index

    average = round_half_up(total / len(bullets))
    distinct = len(seen)

    # Duplicates add nothing
    final = average * distinct / len(bullets)

    # Too few distinct bullets
    if distinct < 3:
        final *= 0.7
        messages.append(
            _note(
                name,
                f"Only {distinct} distinct bullets, aim for {target}",
                "bullets",
                Severity.WARNING,
            )
        )
    elif distinct < target:
        final *= 0.85

    messages.insert(
        0, _note(name, f"{len(bullets)} bullets, avg quality {average}/100", "bullets")
    )
    return _score(round_half_up(final), messages)


# --- backend_keywords_utilization ---


def score_backend_keywords_utilization(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Search-term coverage with diminishing returns.

    Marketplaces with a hidden search-term field are scored on how much of the
    byte budget is used, minus penalties for commas, repeated words and words
    already in the title. Others fall back to their structured metadata.
    """
    name = CriterionName.BACKEND_KEYWORDS_UTILIZATION

    spec = profile.field_spec("backend_keywords")
    if spec is None:
        return _score_metadata_keywords(content, profile)

    max_bytes = spec.max_bytes or DEFAULT_BACKEND_BYTES
    keywords = text_of(content, profile, "backend_keywords")
    if not keywords:
        return _score(
            0,
            [
                _note(
                    name,
                    "Backend keywords empty, wasting indexing opportunity",
                    "backend_keywords",
                    Severity.WARNING,
                )
            ],
        )

    used = byte_length(keywords)
    utilization = round_half_up(used / max_bytes * 100)

    # Plateau at 90%: the last few bytes add little
    if used > max_bytes:
        points = 50
    elif utilization >= 90:
        points = 100
    elif utilization >= 70:
        points = 85
    elif utilization >= 50:
        points = 65
    elif utilization >= 25:
        points = 40
    else:
        points = 20

    messages = [
        _note(name, f"{used}/{max_bytes} bytes used ({utilization}%)", "backend_keywords")
    ]
    if used > max_bytes:
        messages.append(
            _note(
                name,
                "Search terms past the byte limit are ignored",
                "backend_keywords",
                Severity.WARNING,
            )
        )

    if "," in keywords:
        points -= 10
        messages.append(
            _note(name, "Separate terms with spaces, not commas", "backend_keywords")
        )

    terms = [w.lower() for w in words(keywords.replace(",", " "))]
    if terms and len(set(terms)) < len(terms) * 0.8:
        points -= 15
        messages.append(
            _note(
                name,
                "Repeated words in backend keywords add no coverage",
                "backend_keywords",
                Severity.WARNING,
            )
        )

    title_terms = {w.lower() for w in words(content.title)}
    overlap = [t for t in set(terms) if t in title_terms and t not in FILLER_WORDS]
    if terms and len(overlap) / len(set(terms)) > 0.3:
        points -= 10
        messages.append(
            _note(
                name,
                "Backend keywords repeat words already in the title",
                "backend_keywords",
            )
        )

    return _score(points, messages)


def _score_metadata_keywords(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    name = CriterionName.BACKEND_KEYWORDS_UTILIZATION

    if profile.has_field("tags"):
        points = 0
        parts = []
        if text_of(content, profile, "seo_title"):
            points += 35
            parts.append("SEO title present")
        else:
            parts.append("missing SEO title")
        if text_of(content, profile, "meta_description"):
            points += 35
            parts.append("meta description present")
        else:
            parts.append("missing meta description")
        tags = list_of(content, profile, "tags")
        points += min(30, len(tags) * 5)
        parts.append(f"{len(tags)} tags")
        return _score(points, [_note(name, ", ".join(parts))])

    specifics = mapping_of(content, profile, "item_specifics")
    attributes = mapping_of(content, profile, "attributes")
    if not specifics and not attributes:
        return _score(30, [_note(name, "No structured metadata provided")])

    points = 50
    parts = []
    if specifics:
        points += min(30, len(specifics) * 5)
        parts.append(f"{len(specifics)} item specifics")
    if attributes:
        points += min(30, len(attributes) * 5)
        parts.append(f"{len(attributes)} attributes")
    return _score(points, [_note(name, ", ".join(parts))])


# --- keyword_integration ---


def score_keyword_integration(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Title keywords should reappear in the supporting fields, without stuffing."""
    name = CriterionName.KEYWORD_INTEGRATION
    keywords = set(_meaningful_words(content.title))
    if not keywords:
        return _score(0, [_note(name, "No title keywords to integrate", "title")])

    supporting = " ".join(
        [
            text_of(content, profile, "description"),
            text_of(content, profile, "seo_title"),
            text_of(content, profile, "meta_description"),
            text_of(content, profile, "tags"),
        ]
    )
    supporting_words = set(_meaningful_words(supporting))
    coverage = len(keywords & supporting_words) / len(keywords)

    # 80%+ = 100, 60%+ = 85, 40%+ = 65, 20%+ = 40, else 20
    if coverage >= 0.8:
        points = 100
    elif coverage >= 0.6:
        points = 85
    elif coverage >= 0.4:
        points = 65
    elif coverage >= 0.2:
        points = 40
    else:
        points = 20

    messages = [
        _note(
            name,
            f"{round_half_up(coverage * 100)}% of title keywords used in supporting fields",
        )
    ]

    description_words = _meaningful_words(HTML_TAG_PATTERN.sub(" ", content.description))
    if len(description_words) >= 20:
        counts = Counter(w for w in description_words if w in keywords)
        if counts:
            keyword, hits = counts.most_common(1)[0]
            density = hits / len(description_words)
            if density > KEYWORD_STUFFING_DENSITY:
                points -= 20
                messages.append(
                    _note(
                        name,
                        f"'{keyword}' makes up {density:.0%} of the description; "
                        "this reads as keyword stuffing",
                        "description",
                        Severity.WARNING,
                    )
                )

    return _score(points, messages)


# --- banned_terms_absence / compliance_safety ---


def score_banned_terms_absence(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Scan customer-visible fields for the profile's banned claim language.

    Each error-level hit costs 25 points, each warning-level hit 10.
    """
    name = CriterionName.BANNED_TERMS_ABSENCE
    messages: list[Diagnostic] = []
    points = 100

    for rule in profile.banned_terms:
        pattern = re.compile(rule.pattern)
        for field_name in COMPLIANCE_SCAN_FIELDS:
            text = text_of(content, profile, field_name)
            if not text or not pattern.search(text):
                continue
            messages.append(
                Diagnostic(
                    field=field_name,
                    severity=rule.severity,
                    code="banned_term",
                    message=f"Banned term '{rule.term}' found in {field_name}: {rule.reason}",
                )
            )
            points -= 25 if rule.severity == Severity.ERROR else 10

    if not messages:
        messages.append(_note(name, "No banned terms detected"))
    return _score(points, messages)


# --- description_completeness ---


def score_description_completeness(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Length fitness and structure of the description.

    Sweet spot is 30-80% of the reference length (the field limit, capped at
    2000 characters). Paragraphs, formatting and benefit language add a bonus.
    """
    name = CriterionName.DESCRIPTION_COMPLETENESS
    description = content.description.strip()
    if not description:
        return _score(0, [_note(name, "Description is empty", "description")])

    spec = profile.field_spec("description")
    max_length = spec.max_length if spec else None
    reference = min(max_length or DESCRIPTION_REFERENCE_LENGTH, DESCRIPTION_REFERENCE_LENGTH)
    length = len(description)
    ratio = length / reference
    issues = []

    if max_length is not None and length > max_length:
        points = 70
    elif 0.3 <= ratio <= 0.8:
        points = 90
    elif ratio > 0.8:
        points = 80
    elif ratio >= 0.15:
        points = 60
    else:
        points = 30
        issues.append("very short")

    paragraphs = [p for p in re.split(r"\n\s*\n", description) if p.strip()]
    if len(paragraphs) >= 2:
        points += 5
    else:
        issues.append("single block of text")

    has_formatting = (
        HTML_TAG_PATTERN.search(description)
        or re.search(r"^[-*•]\s", description, re.MULTILINE)
        or re.search(r"^\d+\.\s", description, re.MULTILINE)
    )
    if has_formatting:
        points += 5

    lowered = description.lower()
    benefit_hits = sum(1 for w in BENEFIT_WORDS if w in lowered)
    if benefit_hits >= 5:
        points += 5
    elif benefit_hits >= 2:
        points += 3

    note = f"{length}/{reference} chars ({round_half_up(ratio * 100)}%)"
    if issues:
        note += f". {', '.join(issues)}"
    return _score(points, [_note(name, note, "description")])


# --- field_completeness ---


def score_field_completeness(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Share of schema fields filled: required fields 80%, optional fields 20%."""
    name = CriterionName.FIELD_COMPLETENESS
    required = [s.name for s in profile.listing_shape if s.required]
    optional = [s.name for s in profile.listing_shape if not s.required]

    missing_required = [n for n in required if is_blank(field_value(content, profile, n))]
    missing_optional = [n for n in optional if is_blank(field_value(content, profile, n))]

    required_ratio = 1 - len(missing_required) / len(required) if required else 1.0
    optional_ratio = 1 - len(missing_optional) / len(optional) if optional else 1.0
    if required and optional:
        ratio = 0.8 * required_ratio + 0.2 * optional_ratio
    elif required:
        ratio = required_ratio
    else:
        ratio = optional_ratio

    messages = [
        _note(
            name,
            f"{len(required) - len(missing_required)}/{len(required)} required and "
            f"{len(optional) - len(missing_optional)}/{len(optional)} optional fields filled",
        )
    ]
    if missing_optional:
        messages.append(
            _note(name, f"Optional fields left empty: {', '.join(missing_optional)}")
        )
    return _score(ratio * 100, messages)


# --- readability ---


def score_readability(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Short words, varied sentences, broken-up text."""
    name = CriterionName.READABILITY
    full_text = _listing_text(content, profile)
    tokens = words(full_text)
    if not tokens:
        return _score(0, [_note(name, "No text content to analyze")])

    avg_word_length = sum(len(re.sub(r"[^a-zA-Z]", "", w)) for w in tokens) / len(tokens)

    # <= 5 = 95, <= 6 = 90, <= 7 = 80, <= 8 = 65, else 45
    if avg_word_length <= 5:
        points = 95
    elif avg_word_length <= 6:
        points = 90
    elif avg_word_length <= 7:
        points = 80
    elif avg_word_length <= 8:
        points = 65
    else:
        points = 45

    sentences = [s for s in re.split(r"[.!?]+", full_text) if s.strip()]
    if len(sentences) >= 3:
        lengths = [len(s.split()) for s in sentences]
        mean = sum(lengths) / len(lengths)
        std_dev = math.sqrt(sum((n - mean) ** 2 for n in lengths) / len(lengths))
        if std_dev >= 5:
            points += 5
        elif std_dev < 2:
            points -= 10

    # Long unbroken block
    if len(full_text) > 500 and "\n" not in full_text:
        points -= 10

    return _score(
        points,
        [
            _note(
                name,
                f"Avg word length: {avg_word_length:.1f} chars, {len(sentences)} sentence(s)",
            )
        ],
    )


# --- formatting_compliance ---


def score_formatting_compliance(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Penalize shouting, punctuation runs and broken markup."""
    name = CriterionName.FORMATTING_COMPLIANCE
    points = 100
    issues = []

    title = content.title.strip()
    if title:
        if is_all_caps(title):
            points -= 25
            issues.append("title is ALL CAPS")
        if re.search(r"[!?]{2,}", title):
            points -= 15
            issues.append("excessive punctuation in title")
        if re.search(r"\s{2,}", title):
            points -= 5
            issues.append("double spaces in title")

    bullets = [b for b in list_of(content, profile, "bullets") if isinstance(b, str)]
    if bullets:
        caps = sum(
            1 for b in bullets if len(re.sub(r"[^a-zA-Z]", "", b)) > 5 and is_all_caps(b)
        )
        if caps:
            points -= caps * 10
            issues.append(f"{caps} bullet(s) in ALL CAPS")

        lowercase_starts = sum(1 for b in bullets if re.match(r"[a-z]", b.strip()))
        if 0 < lowercase_starts < len(bullets):
            points -= 5
            issues.append("inconsistent bullet capitalization")

    if content.description:
        open_tags = len(re.findall(r"<[a-z][^/]*?>", content.description, re.IGNORECASE))
        close_tags = len(re.findall(r"</[a-z]+>", content.description, re.IGNORECASE))
        if open_tags > 0 and abs(open_tags - close_tags) > 1:
            points -= 10
            issues.append("possible unclosed HTML tags in description")

    if not issues:
        return _score(points, [_note(name, "Formatting looks clean")])
    return _score(
        points, [_note(name, "; ".join(issues), severity=Severity.WARNING)]
    )


# --- formatting_richness ---


def score_formatting_richness(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Headings, lists, paragraphs and emphasis in the description, 25 points each."""
    name = CriterionName.FORMATTING_RICHNESS
    description = content.description
    if not description.strip():
        return _score(0, [_note(name, "Description is empty", "description")])

    found = []
    if re.search(r"<h[1-6][\s>]", description, re.IGNORECASE) or re.search(
        r"^#{1,6}\s", description, re.MULTILINE
    ):
        found.append("headings")
    if re.search(r"<(ul|ol|li)[\s>]", description, re.IGNORECASE) or re.search(
        r"^[-*•]\s", description, re.MULTILINE
    ):
        found.append("lists")
    if re.search(r"<p[\s>]", description, re.IGNORECASE) or re.search(
        r"\n\s*\n", description
    ):
        found.append("paragraphs")
    if re.search(r"<(b|strong|em|i)[\s>]", description, re.IGNORECASE) or re.search(
        r"\*\*[^*]+\*\*", description
    ):
        found.append("emphasis")

    note = f"Uses {', '.join(found)}" if found else "Plain text without structure"
    return _score(len(found) * 25, [_note(name, note, "description")])


# --- benefit_driven_language ---


def score_benefit_driven_language(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Count distinct benefit words and power phrases across the copy."""
    name = CriterionName.BENEFIT_DRIVEN_LANGUAGE
    full_text = _listing_text(content, profile).lower()
    if not full_text.strip():
        return _score(0, [_note(name, "No text to analyze")])

    benefits = sum(1 for w in BENEFIT_WORDS if w in full_text)
    phrases = sum(1 for p in POWER_PHRASES if p in full_text)
    density = benefits + phrases

    # 15+ = 100, 10+ = 90, 7+ = 75, 4+ = 60, 2+ = 40, else 15
    if density >= 15:
        points = 100
    elif density >= 10:
        points = 90
    elif density >= 7:
        points = 75
    elif density >= 4:
        points = 60
    elif density >= 2:
        points = 40
    else:
        points = 15

    return _score(
        points,
        [_note(name, f"{benefits} benefit word(s), {phrases} power phrase(s) detected")],
    )


# --- item_specifics_completeness ---


def score_item_specifics_completeness(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """eBay item specifics: how many, and how many actually filled."""
    name = CriterionName.ITEM_SPECIFICS_COMPLETENESS
    specifics = mapping_of(content, profile, "item_specifics")
    if not specifics:
        return _score(
            0,
            [_note(name, "No item specifics provided", "item_specifics", Severity.WARNING)],
        )

    total = len(specifics)
    filled = sum(1 for value in specifics.values() if is_filled(value))
    fill_rate = filled / total

    if total >= 10 and fill_rate >= 0.9:
        points = 100
    elif total >= 7 and fill_rate >= 0.8:
        points = 85
    elif total >= 5 and fill_rate >= 0.7:
        points = 70
    elif total >= 3:
        points = 50
    else:
        points = 25

    return _score(
        points,
        [
            _note(
                name,
                f"{filled}/{total} item specifics filled ({round_half_up(fill_rate * 100)}%)",
                "item_specifics",
            )
        ],
    )


# --- attribute_completeness ---


def score_attribute_completeness(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Catalog attributes: brand and condition first, then up to 5 more keys."""
    name = CriterionName.ATTRIBUTE_COMPLETENESS
    attributes = {k.lower(): v for k, v in mapping_of(content, profile, "attributes").items()}
    filled = sum(1 for value in attributes.values() if is_filled(value))
    missing = [k for k in REQUIRED_ATTRIBUTES if not is_filled(attributes.get(k))]

    points = 20 if missing else 60
    points += min(40, filled * 8)

    messages = [
        _note(
            name,
            f"{filled} of {len(REQUIRED_ATTRIBUTES) + len(OPTIONAL_ATTRIBUTES)} attributes filled",
            "attributes",
        )
    ]
    if missing:
        messages.append(
            _note(
                name,
                f"Missing key attributes: {', '.join(missing)}",
                "attributes",
                Severity.WARNING,
            )
        )
    return _score(points, messages)


# --- condition_disclosure ---


def score_condition_disclosure(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Condition notes present, condition spelled out in the description."""
    name = CriterionName.CONDITION_DISCLOSURE
    has_notes = not is_blank(field_value(content, profile, "condition_notes"))
    description = content.description.lower()
    found = sum(
        1 for term in CONDITION_TERMS if re.search(rf"\b{re.escape(term)}\b", description)
    )

    points = 70 if has_notes else 30
    points += min(30, found * 6)

    if has_notes:
        note = f"Condition notes present; {found} condition term(s) in description"
    else:
        note = f"No condition notes; {found} condition term(s) in description"
    return _score(points, [_note(name, note, "condition_notes")])


# --- listing_completeness ---


def score_listing_completeness(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Shipping 35, returns 35, category 30."""
    name = CriterionName.LISTING_COMPLETENESS
    points = 0
    present = []
    missing = []
    for field_name, share in (
        ("shipping_notes", 35),
        ("returns_notes", 35),
        ("category_hint", 30),
    ):
        if text_of(content, profile, field_name):
            points += share
            present.append(field_name.replace("_", " "))
        else:
            missing.append(field_name.replace("_", " "))

    messages = []
    if present:
        messages.append(_note(name, f"{', '.join(present).capitalize()} present"))
    if missing:
        messages.append(
            _note(name, f"Missing {', '.join(missing)}", severity=Severity.WARNING)
        )
    return _score(points, messages)


# --- seo_optimization ---


def score_seo_optimization(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """SEO title 50-60 chars, meta description 120-160 chars, 10+ tags."""
    name = CriterionName.SEO_OPTIMIZATION
    points = 0
    parts = []

    seo_title = text_of(content, profile, "seo_title")
    if seo_title:
        length = len(seo_title)
        if 50 <= length <= 60:
            points += 35
            parts.append(f"SEO title optimal ({length} chars)")
        elif 30 <= length <= 70:
            points += 25
            parts.append(f"SEO title acceptable ({length} chars)")
        else:
            points += 10
            parts.append(f"SEO title suboptimal ({length} chars)")
    else:
        parts.append("missing SEO title")

    meta = text_of(content, profile, "meta_description")
    if meta:
        length = len(meta)
        if 120 <= length <= 160:
            points += 35
            parts.append(f"meta description optimal ({length} chars)")
        elif 80 <= length <= 200:
            points += 25
            parts.append(f"meta description acceptable ({length} chars)")
        else:
            points += 10
            parts.append(f"meta description suboptimal ({length} chars)")
    else:
        parts.append("missing meta description")

    tags = [t for t in list_of(content, profile, "tags") if not is_blank(t)]
    if len(tags) >= 10:
        points += 30
    elif len(tags) >= 5:
        points += 20
    elif tags:
        points += 10
    parts.append(f"{len(tags)} tag(s)")

    return _score(points, [_note(name, ", ".join(parts))])


# --- shelf_description_effectiveness ---


def score_shelf_description_effectiveness(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """Short, scannable shelf copy with benefits up front."""
    name = CriterionName.SHELF_DESCRIPTION_EFFECTIVENESS
    shelf = text_of(content, profile, "shelf_description")
    if not shelf:
        return _score(
            0,
            [
                _note(
                    name,
                    "Shelf description is empty",
                    "shelf_description",
                    Severity.WARNING,
                )
            ],
        )

    spec = profile.field_spec("shelf_description")
    max_length = spec.max_length if spec and spec.max_length else 500
    length = len(shelf)

    if length > max_length:
        points = 50
    elif length >= 150:
        points = 85
    elif length >= 50:
        points = 60
    else:
        points = 30

    lowered = shelf.lower()
    benefits = sum(1 for w in BENEFIT_WORDS if w in lowered)
    lines = [line for line in re.split(r"\n|<li[\s>]", shelf, flags=re.IGNORECASE) if line.strip()]
    if benefits >= 2 or len(lines) >= 3:
        points += 15

    return _score(
        points,
        [
            _note(
                name,
                f"{length}/{max_length} chars, {benefits} benefit word(s)",
                "shelf_description",
            )
        ],
    )


# --- tag_and_collection_strategy ---


def score_tag_and_collection_strategy(
    content: ListingContent,
    profile: MarketplaceProfile,
) -> CriterionScore:
    """5-15 distinct tags plus at least one collection.

    Tags: none = 0, < 5 = 30, 5-15 = 60, more = 45 (diluted).
    Collections: 1-3 = 40, more = 30.
    """
    name = CriterionName.TAG_AND_COLLECTION_STRATEGY
    tags = [t.strip() for t in list_of(content, profile, "tags") if not is_blank(t)]
    collections = [c for c in list_of(content, profile, "collections") if not is_blank(c)]
    messages = []

    distinct = {_normalize(t) for t in tags}
    if not distinct:
        points = 0
    elif len(distinct) < 5:
        points = 30
    elif len(distinct) <= 15:
        points = 60
    else:
        points = 45

    if len(distinct) < len(tags):
        points -= 10
        messages.append(
            _note(name, "Duplicate tags add nothing", "tags", Severity.WARNING)
        )

    if 1 <= len(collections) <= 3:
        points += 40
    elif collections:
        points += 30

    messages.insert(
        0, _note(name, f"{len(distinct)} distinct tag(s), {len(collections)} collection(s)")
    )
    return _score(points, messages)


# --- Registry ---

CRITERION_FUNCTIONS: dict[str, CriterionFn] = {
    CriterionName.TITLE_KEYWORD_RICHNESS.value: score_title_keyword_richness,
    CriterionName.TITLE_LENGTH_OPTIMIZATION.value: score_title_length_optimization,
    CriterionName.BULLET_QUALITY.value: score_bullet_quality,
    CriterionName.BACKEND_KEYWORDS_UTILIZATION.value: score_backend_keywords_utilization,
    CriterionName.KEYWORD_INTEGRATION.value: score_keyword_integration,
    CriterionName.BANNED_TERMS_ABSENCE.value: score_banned_terms_absence,
    CriterionName.COMPLIANCE_SAFETY.value: score_banned_terms_absence,
    CriterionName.DESCRIPTION_COMPLETENESS.value: score_description_completeness,
    CriterionName.FIELD_COMPLETENESS.value: score_field_completeness,
    CriterionName.READABILITY.value: score_readability,
    CriterionName.FORMATTING_COMPLIANCE.value: score_formatting_compliance,
    CriterionName.FORMATTING_RICHNESS.value: score_formatting_richness,
    CriterionName.BENEFIT_DRIVEN_LANGUAGE.value: score_benefit_driven_language,
    CriterionName.ITEM_SPECIFICS_COMPLETENESS.value: score_item_specifics_completeness,
    CriterionName.ATTRIBUTE_COMPLETENESS.value: score_attribute_completeness,
    CriterionName.CONDITION_DISCLOSURE.value: score_condition_disclosure,
    CriterionName.LISTING_COMPLETENESS.value: score_listing_completeness,
    CriterionName.SEO_OPTIMIZATION.value: score_seo_optimization,
    CriterionName.SHELF_DESCRIPTION_EFFECTIVENESS.value: score_shelf_description_effectiveness,
    CriterionName.TAG_AND_COLLECTION_STRATEGY.value: score_tag_and_collection_strategy,
}
