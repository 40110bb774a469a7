"""Tests for structural listing validation."""

from listing_qa.qa.models import APlusModule, ListingContent, PhotoRecommendation, Severity
from listing_qa.qa.profiles import AMAZON_PROFILE, EBAY_PROFILE, WALMART_PROFILE
from listing_qa.qa.validator import validate_listing


def codes(diagnostics, field=None):
    return [d.code for d in diagnostics if field is None or d.field == field]


class TestRequiredFields:
    """Tests for missing_required_field."""

    def test_complete_listing_has_no_diagnostics(self, amazon_listing, ebay_listing):
        assert validate_listing(amazon_listing, AMAZON_PROFILE) == []
        assert validate_listing(ebay_listing, EBAY_PROFILE) == []

    def test_empty_listing_reports_every_required_field(self):
        diagnostics = validate_listing(ListingContent(), AMAZON_PROFILE)

        missing = {d.field for d in diagnostics if d.code == "missing_required_field"}
        assert missing == {"title", "bullets", "description"}
        assert all(
            d.severity == Severity.ERROR
            for d in diagnostics
            if d.code == "missing_required_field"
        )

    def test_whitespace_only_counts_as_missing(self, amazon_listing):
        listing = amazon_listing.model_copy(update={"title": "   \n"})

        diagnostics = validate_listing(listing, AMAZON_PROFILE)

        assert codes(diagnostics, "title") == ["missing_required_field"]

    def test_list_of_blank_entries_counts_as_missing(self, amazon_listing):
        listing = amazon_listing.model_copy(update={"bullets": ["", "  "]})

        diagnostics = validate_listing(listing, AMAZON_PROFILE)

        assert codes(diagnostics, "bullets") == ["missing_required_field"]

    def test_optional_field_may_be_absent(self, amazon_listing):
        listing = amazon_listing.model_copy(update={"backend_keywords": None})

        assert validate_listing(listing, AMAZON_PROFILE) == []


class TestLengthLimits:
    """Tests for field_too_long and field_too_many_bytes."""

    def test_overrun_is_one_warning(self, amazon_listing):
        listing = amazon_listing.model_copy(update={"title": "x" * 201})

        diagnostics = validate_listing(listing, AMAZON_PROFILE)

        too_long = [d for d in diagnostics if d.code == "field_too_long"]
        assert len(too_long) == 1
        assert too_long[0].field == "title"
        assert too_long[0].severity == Severity.WARNING
        assert "201" in too_long[0].message

    def test_exactly_at_limit_is_fine(self, amazon_listing):
        listing = amazon_listing.model_copy(update={"title": "x" * 200})

        assert "field_too_long" not in codes(validate_listing(listing, AMAZON_PROFILE))

    def test_byte_limit_counts_utf8_bytes(self, amazon_listing):
        # 130 characters, 260 bytes
        listing = amazon_listing.model_copy(update={"backend_keywords": "é" * 130})

        diagnostics = validate_listing(listing, AMAZON_PROFILE)

        assert codes(diagnostics, "backend_keywords") == ["field_too_many_bytes"]

    def test_undeclared_fields_are_ignored(self, amazon_listing):
        # Amazon declares no subtitle, so its length does not matter
        listing = amazon_listing.model_copy(update={"subtitle": "y" * 500})

        assert validate_listing(listing, AMAZON_PROFILE) == []

    def test_ebay_subtitle_limit(self, ebay_listing):
        listing = ebay_listing.model_copy(update={"subtitle": "y" * 56})

        assert codes(validate_listing(listing, EBAY_PROFILE)) == ["field_too_long"]


class TestFieldContent:
    """Tests for HTML, list entries and mappings."""

    def test_html_in_plain_text_field(self, amazon_listing):
        listing = amazon_listing.model_copy(
            update={"title": "TrailPro <b>Insulated</b> Water Bottle 32 oz for Hiking and Travel"}
        )

        assert codes(validate_listing(listing, AMAZON_PROFILE), "title") == ["html_not_allowed"]

    def test_html_allowed_in_description(self, amazon_listing):
        assert "<ul>" in amazon_listing.description
        assert "html_not_allowed" not in codes(validate_listing(amazon_listing, AMAZON_PROFILE))

    def test_wrong_bullet_count(self, amazon_listing):
        listing = amazon_listing.model_copy(update={"bullets": amazon_listing.bullets[:3]})

        diagnostics = validate_listing(listing, AMAZON_PROFILE)

        count_errors = [d for d in diagnostics if d.code == "item_count_out_of_range"]
        assert len(count_errors) == 1
        assert count_errors[0].severity == Severity.ERROR
        assert "exactly 5" in count_errors[0].message

    def test_blank_and_short_bullets(self, amazon_listing):
        bullets = list(amazon_listing.bullets[:3]) + ["  ", "Too short"]
        listing = amazon_listing.model_copy(update={"bullets": bullets})

        diagnostics = validate_listing(listing, AMAZON_PROFILE)

        assert codes(diagnostics, "bullets") == ["empty_item", "item_too_short"]

    def test_long_bullet(self, amazon_listing):
        bullets = list(amazon_listing.bullets[:4]) + ["Durable " * 70]
        listing = amazon_listing.model_copy(update={"bullets": bullets})

        assert codes(validate_listing(listing, AMAZON_PROFILE), "bullets") == ["item_too_long"]

    def test_empty_item_specific_value(self, ebay_listing):
        specifics = dict(ebay_listing.item_specifics, MPN="")
        listing = ebay_listing.model_copy(update={"item_specifics": specifics})

        diagnostics = validate_listing(listing, EBAY_PROFILE)

        assert codes(diagnostics, "item_specifics") == ["empty_mapping_value"]
        assert "MPN" in diagnostics[0].message


class TestCrossFieldChecks:
    """Tests for title and description rules."""

    def test_all_caps_title(self, amazon_listing):
        listing = amazon_listing.model_copy(update={"title": amazon_listing.title.upper()})

        assert "title_all_caps" in codes(validate_listing(listing, AMAZON_PROFILE))

    def test_brand_prefix_title(self, amazon_listing):
        listing = amazon_listing.model_copy(
            update={"title": "TrailPro - Insulated Water Bottle 32 oz with Leak-Proof Lid"}
        )

        diagnostics = validate_listing(listing, AMAZON_PROFILE)

        prefix = [d for d in diagnostics if d.code == "title_brand_prefix"]
        assert len(prefix) == 1
        assert prefix[0].severity == Severity.INFO

    def test_short_description(self, amazon_listing):
        listing = amazon_listing.model_copy(update={"description": "A great bottle."})

        assert codes(validate_listing(listing, AMAZON_PROFILE), "description") == [
            "description_too_short"
        ]

    def test_short_shelf_description(self):
        listing = ListingContent(title="Bottle", description="d" * 200, shelf_description="Cold water")

        diagnostics = validate_listing(listing, WALMART_PROFILE)

        assert "description_too_short" in codes(diagnostics, "shelf_description")

    def test_a_plus_module_checks(self, amazon_listing):
        modules = [
            APlusModule(type="STANDARD_TEXT", position=1, body="Intro"),
            APlusModule(
                type="STANDARD_SINGLE_IMAGE_HIGHLIGHTS",
                position=1,
                highlights=[f"Highlight {i}" for i in range(9)],
                image={"alt_text": "a" * 101},
            ),
        ]
        listing = amazon_listing.model_copy(update={"a_plus_modules": modules})

        diagnostics = validate_listing(listing, AMAZON_PROFILE)

        assert codes(diagnostics, "a_plus_modules") == [
            "duplicate_a_plus_position",
            "too_many_highlights",
            "alt_text_too_long",
        ]

    def test_photo_recommendation_checks(self, ebay_listing):
        photos = [
            {"slot": 1, "description": "Front of the phone", "tips": ["Use a white backdrop"]},
            {"slot": 1, "description": "Back of the phone", "tips": ["Show the camera"]},
            {"slot": 2, "description": "   ", "tips": []},
        ]
        listing = ebay_listing.model_copy(
            update={"photo_recommendations": [PhotoRecommendation(**p) for p in photos]}
        )

        # Checked for every marketplace, whatever its listing shape declares
        diagnostics = validate_listing(listing, EBAY_PROFILE)

        assert [
            (d.code, d.severity) for d in diagnostics if d.field == "photo_recommendations"
        ] == [
            ("duplicate_slot", Severity.WARNING),
            ("missing_photo_description", Severity.INFO),
            ("missing_photo_tips", Severity.INFO),
        ]
        assert "slot 2" in diagnostics[-1].message

    def test_complete_photo_recommendations(self, amazon_listing):
        listing = amazon_listing.model_copy(
            update={
                "photo_recommendations": [
                    PhotoRecommendation(
                        slot=1, description="Bottle on white", type="main", tips=["Fill the frame"]
                    ),
                    PhotoRecommendation(
                        slot=2, description="Bottle on a trail", type="lifestyle", tips=["Daylight"]
                    ),
                ]
            }
        )

        assert validate_listing(listing, AMAZON_PROFILE) == []


class TestOrdering:
    """Diagnostics come back ordered by severity."""

    def test_errors_before_warnings_before_info(self):
        listing = ListingContent(
            title="ACME - " + "W" * 200,
            bullets=["Short"],
            description="",
        )

        diagnostics = validate_listing(listing, AMAZON_PROFILE)
        severities = [d.severity for d in diagnostics]

        assert severities == sorted(
            severities, key=[Severity.ERROR, Severity.WARNING, Severity.INFO].index
        )
        assert severities[0] == Severity.ERROR
        assert severities[-1] == Severity.INFO

    def test_validation_does_not_modify_content(self, amazon_listing):
        before = amazon_listing.model_dump()

        validate_listing(amazon_listing, AMAZON_PROFILE)

        assert amazon_listing.model_dump() == before
