"""Built-in marketplace profiles.

Static configuration: field shapes, banned claim language and criterion
weights per marketplace. Weights in each profile sum to 1.0; the registry
checks this when the profiles are registered.
"""

from listing_qa.qa.criteria import CriterionName
from listing_qa.qa.models import (
    BannedTerm,
    FieldSpec,
    MarketplaceProfile,
    ScoringWeight,
    Severity,
)

EMOJI_PATTERN = (
    "[\U0001F600-\U0001F64F\U0001F300-\U0001F5FF\U0001F680-\U0001F6FF"
    "\U0001F1E0-\U0001F1FF\u2600-\u26FF\u2700-\u27BF]"
)


def _term(
    pattern: str,
    term: str,
    reason: str,
    severity: Severity = Severity.ERROR,
) -> BannedTerm:
    return BannedTerm(pattern=pattern, term=term, reason=reason, severity=severity)


def _weight(criterion: CriterionName, weight: float, description: str = "") -> ScoringWeight:
    return ScoringWeight(criterion=criterion, weight=weight, description=description)


# --- Shared banned terms ---

NUMBER_ONE = _term(r"(?i)#\s*1\b", "#1", "Unverifiable ranking claim")
BEST_SELLER = _term(r"(?i)\bbest\s+seller\b", "best seller", "Sales rank claims are not allowed")
GUARANTEE = _term(r"(?i)\bguarantee\b", "guarantee", "Guarantee claims are not allowed in listing copy")
HUNDRED_PERCENT = _term(r"100\s*%", "100%", "Absolute claims cannot be substantiated")
FREE_SHIPPING = _term(
    r"(?i)\bfree\s+shipping\b", "free shipping", "Shipping offers belong in shipping settings"
)
ACT_NOW = _term(r"(?i)\bact\s+now\b", "act now", "Urgency language is not allowed")
LIMITED_TIME = _term(r"(?i)\blimited\s+time\b", "limited time", "Time-limited offers are not allowed")
FDA_APPROVED = _term(
    r"(?i)\bFDA\s+approved\b", "FDA approved", "Regulatory claims require documentation"
)
CLINICALLY_PROVEN = _term(
    r"(?i)\bclinically\s+proven\b", "clinically proven", "Medical claims require substantiation"
)
CURE = _term(r"(?i)\bcure\b", "cure", "Disease claims are prohibited")
CHEAP = _term(r"(?i)\bcheap\b", "cheap", "Signals low quality", Severity.WARNING)
HURRY = _term(r"(?i)\bhurry\b", "hurry", "Pressure language", Severity.WARNING)
EMOJI = _term(EMOJI_PATTERN, "emoji", "Emoji are not allowed in listing text")


# --- Amazon ---

AMAZON_PROFILE = MarketplaceProfile(
    id="amazon",
    display_name="Amazon",
    listing_shape=[
        FieldSpec(
            name="title",
            max_length=200,
            required=True,
            description="Brand + key feature + product type + size/quantity. No ALL CAPS.",
        ),
        FieldSpec(
            name="bullets",
            required=True,
            min_items=5,
            max_items=5,
            item_max_length=500,
            item_min_length=20,
            description="Exactly five bullets, each leading with a benefit.",
        ),
        FieldSpec(
            name="description",
            max_length=2000,
            required=True,
            html_allowed=True,
            description="Expands on the bullets. Basic HTML (<br>, <b>, <ul>, <li>).",
        ),
        FieldSpec(
            name="backend_keywords",
            max_bytes=250,
            description="Hidden search terms, space separated, no title repeats.",
        ),
        FieldSpec(name="attributes", description="Brand, condition, material, color, size."),
        FieldSpec(name="a_plus_modules", max_items=7, description="Up to seven A+ modules."),
        FieldSpec(name="compliance_notes", description="Claims the seller must substantiate."),
        FieldSpec(name="assumptions", description="Details assumed while writing the listing."),
    ],
    banned_terms=[
        NUMBER_ONE,
        _term(r"(?i)\bnumber\s+one\b", "number one", "Unverifiable ranking claim"),
        BEST_SELLER,
        GUARANTEE,
        _term(r"(?i)\bguaranteed\b", "guaranteed", "Guarantee claims are not allowed in listing copy"),
        HUNDRED_PERCENT,
        FREE_SHIPPING,
        ACT_NOW,
        LIMITED_TIME,
        FDA_APPROVED,
        CLINICALLY_PROVEN,
        CURE,
        _term(r"(?i)\btreats\b", "treats", "Disease claims are prohibited"),
        EMOJI,
        CHEAP,
        _term(r"(?i)\bbuy\s+now\b", "buy now", "Calls to action are not allowed", Severity.WARNING),
        HURRY,
    ],
    scoring_weights=[
        _weight(CriterionName.TITLE_KEYWORD_RICHNESS, 0.20, "Keyword-rich title"),
        _weight(CriterionName.BULLET_QUALITY, 0.20, "Five distinct, benefit-led bullets"),
        _weight(CriterionName.BACKEND_KEYWORDS_UTILIZATION, 0.15, "Search term coverage"),
        _weight(CriterionName.BANNED_TERMS_ABSENCE, 0.15, "No prohibited claims"),
        _weight(CriterionName.DESCRIPTION_COMPLETENESS, 0.10, "Complete description"),
        _weight(CriterionName.TITLE_LENGTH_OPTIMIZATION, 0.05, "Title uses the length limit"),
        _weight(CriterionName.READABILITY, 0.05, "Easy to read"),
        _weight(CriterionName.FORMATTING_COMPLIANCE, 0.05, "Clean formatting"),
        _weight(CriterionName.BENEFIT_DRIVEN_LANGUAGE, 0.05, "Benefit-driven copy"),
    ],
)


# --- eBay ---

EBAY_PROFILE = MarketplaceProfile(
    id="ebay",
    display_name="eBay",
    listing_shape=[
        FieldSpec(
            name="title",
            max_length=80,
            required=True,
            description="Brand, model, key specs and condition keywords.",
        ),
        FieldSpec(name="subtitle", max_length=55, description="Optional paid subtitle."),
        FieldSpec(
            name="description",
            required=True,
            html_allowed=True,
            description="Accurate description; disclose flaws.",
        ),
        FieldSpec(
            name="item_specifics",
            required=True,
            description="Name/value specifics (Brand, Model, Color, ...).",
        ),
        FieldSpec(name="condition_notes", description="Wear, flaws and included accessories."),
        FieldSpec(name="shipping_notes", description="Handling time and carrier."),
        FieldSpec(name="returns_notes", description="Return window and who pays."),
        FieldSpec(name="category_hint", description="Suggested category path."),
        FieldSpec(name="compliance_notes", description="Claims the seller must substantiate."),
        FieldSpec(name="assumptions", description="Details assumed while writing the listing."),
    ],
    banned_terms=[
        _term(r"(?i)\bfake\b", "fake", "Counterfeit items are prohibited"),
        _term(r"(?i)\breplica\b", "replica", "Counterfeit items are prohibited"),
        _term(r"(?i)\bcounterfeit\b", "counterfeit", "Counterfeit items are prohibited"),
        _term(r"(?i)\bknockoff\b", "knockoff", "Counterfeit items are prohibited"),
        _term(r"(?i)\bunauthorized\b", "unauthorized", "Implies an unauthorized replica"),
        NUMBER_ONE,
        GUARANTEE,
        HUNDRED_PERCENT,
        _term(
            r"(?i)\bfree\s+shipping\b",
            "free shipping",
            "Set shipping cost in the shipping policy instead",
            Severity.WARNING,
        ),
        _term(r"(?i)\bact\s+now\b", "act now", "Urgency language", Severity.WARNING),
        _term(r"(?i)\blimited\s+time\b", "limited time", "Urgency language", Severity.WARNING),
        _term(EMOJI_PATTERN, "emoji", "Emoji reduce readability", Severity.WARNING),
    ],
    scoring_weights=[
        _weight(CriterionName.TITLE_KEYWORD_RICHNESS, 0.20, "Title relevance"),
        _weight(CriterionName.ITEM_SPECIFICS_COMPLETENESS, 0.30, "Item specifics completeness"),
        _weight(CriterionName.DESCRIPTION_COMPLETENESS, 0.15, "Description clarity"),
        _weight(CriterionName.CONDITION_DISCLOSURE, 0.15, "Condition transparency"),
        _weight(CriterionName.LISTING_COMPLETENESS, 0.10, "Shipping/returns/category present"),
        _weight(CriterionName.COMPLIANCE_SAFETY, 0.10, "Policy safety"),
    ],
)


# --- Walmart ---

WALMART_PROFILE = MarketplaceProfile(
    id="walmart",
    display_name="Walmart",
    listing_shape=[
        FieldSpec(
            name="title",
            max_length=75,
            required=True,
            description="Brand + product type + key attribute.",
        ),
        FieldSpec(
            name="bullets",
            required=True,
            min_items=5,
            max_items=5,
            item_max_length=500,
            item_min_length=20,
            description="Five key features.",
        ),
        FieldSpec(
            name="shelf_description",
            max_length=500,
            required=True,
            description="Short scannable summary shown near the price.",
        ),
        FieldSpec(
            name="description",
            max_length=4000,
            required=True,
            html_allowed=True,
            description="Long-form description.",
        ),
        FieldSpec(name="attributes", description="Brand, condition, material, color, size."),
    ],
    banned_terms=[
        _term(r"(?i)\bamazon\b", "Amazon", "Competitor names are not allowed"),
        _term(r"(?i)\bprime\b", "Prime", "Competitor programs are not allowed"),
        _term(r"(?i)\bcheap\b", "cheap", "Signals low quality"),
        BEST_SELLER,
        NUMBER_ONE,
        GUARANTEE,
        HUNDRED_PERCENT,
        LIMITED_TIME,
        FREE_SHIPPING,
        FDA_APPROVED,
        CLINICALLY_PROVEN,
        EMOJI,
    ],
    scoring_weights=[
        _weight(CriterionName.TITLE_KEYWORD_RICHNESS, 0.20, "Keyword-rich title"),
        _weight(CriterionName.BULLET_QUALITY, 0.20, "Key features quality"),
        _weight(CriterionName.SHELF_DESCRIPTION_EFFECTIVENESS, 0.10, "Shelf description"),
        _weight(CriterionName.DESCRIPTION_COMPLETENESS, 0.15, "Complete description"),
        _weight(CriterionName.BANNED_TERMS_ABSENCE, 0.10, "No prohibited claims"),
        _weight(CriterionName.ATTRIBUTE_COMPLETENESS, 0.10, "Attributes filled"),
        _weight(CriterionName.READABILITY, 0.05, "Easy to read"),
        _weight(CriterionName.FORMATTING_COMPLIANCE, 0.05, "Clean formatting"),
        _weight(CriterionName.BENEFIT_DRIVEN_LANGUAGE, 0.05, "Benefit-driven copy"),
    ],
)


# --- Shopify ---

SHOPIFY_PROFILE = MarketplaceProfile(
    id="shopify",
    display_name="Shopify",
    listing_shape=[
        FieldSpec(name="title", max_length=255, required=True, description="Product name."),
        FieldSpec(
            name="description",
            max_length=50000,
            required=True,
            html_allowed=True,
            description="Rich product page copy.",
        ),
        FieldSpec(
            name="seo_title",
            max_length=60,
            required=True,
            description="Search result title, 50-60 chars.",
        ),
        FieldSpec(
            name="meta_description",
            max_length=160,
            required=True,
            description="Search result snippet, 120-160 chars.",
        ),
        FieldSpec(name="tags", description="Storefront search and filter tags."),
        FieldSpec(name="collections", description="Collections the product belongs to."),
    ],
    banned_terms=[
        CURE,
        CLINICALLY_PROVEN,
        FDA_APPROVED,
        _term(
            r"(?i)\bbuy\s+now\s+or\s+miss\s+out\b",
            "buy now or miss out",
            "High-pressure sales language",
        ),
        _term(r"(?i)\bact\s+now\s+before\b", "act now before", "High-pressure sales language"),
        _term(r"(?i)\bmiracle\b", "miracle", "Unsubstantiated efficacy claim"),
        _term(r"(?i)\b100\s*%\s+guarantee\b", "100% guarantee", "Absolute guarantee claim"),
        _term(r"(?i)\bguaranteed\s+results\b", "guaranteed results", "Absolute guarantee claim"),
        CHEAP,
        HURRY,
        _term(r"(?i)\blimited\s+stock\b", "limited stock", "Scarcity language", Severity.WARNING),
    ],
    scoring_weights=[
        _weight(CriterionName.SEO_OPTIMIZATION, 0.25, "SEO title, meta description, tags"),
        _weight(CriterionName.DESCRIPTION_COMPLETENESS, 0.20, "Description content"),
        _weight(CriterionName.KEYWORD_INTEGRATION, 0.15, "Keywords carried through"),
        _weight(CriterionName.BANNED_TERMS_ABSENCE, 0.10, "No prohibited claims"),
        _weight(CriterionName.TAG_AND_COLLECTION_STRATEGY, 0.10, "Tags and collections"),
        _weight(CriterionName.READABILITY, 0.05, "Easy to read"),
        _weight(CriterionName.FORMATTING_RICHNESS, 0.05, "Structured description"),
        _weight(CriterionName.BENEFIT_DRIVEN_LANGUAGE, 0.05, "Benefit-driven copy"),
        _weight(CriterionName.FIELD_COMPLETENESS, 0.05, "All fields filled"),
    ],
)


BUILTIN_PROFILES: tuple[MarketplaceProfile, ...] = (
    AMAZON_PROFILE,
    EBAY_PROFILE,
    WALMART_PROFILE,
    SHOPIFY_PROFILE,
)
