"""Tests for audit data models and grading."""

import pytest
from pydantic import ValidationError

from listing_qa.qa.criteria import CriterionName
from listing_qa.qa.models import (
    APlusModule,
    APlusModuleType,
    AuditResult,
    CriterionScore,
    Diagnostic,
    ListingContent,
    ScoringWeight,
    Severity,
    get_grade,
    get_listing_status,
)


class TestGrades:
    """Tests for get_grade() and get_listing_status()."""

    @pytest.mark.parametrize(
        "score,grade",
        [(100, "A"), (90, "A"), (89, "B"), (75, "B"), (74, "C"), (60, "C"), (59, "D"), (40, "D"), (39, "F"), (0, "F")],
    )
    def test_grade_boundaries(self, score, grade):
        assert get_grade(score) == grade

    @pytest.mark.parametrize(
        "score,status",
        [(100, "ready"), (85, "ready"), (84, "needs_revision"), (70, "needs_revision"), (69, "regenerate"), (0, "regenerate")],
    )
    def test_status_boundaries(self, score, status):
        assert get_listing_status(score) == status


class TestListingContent:
    """Tests for the listing input model."""

    def test_defaults(self):
        listing = ListingContent()

        assert listing.title == ""
        assert listing.bullets == []
        assert listing.description == ""
        assert listing.item_specifics is None

    def test_unknown_keys_ignored(self):
        listing = ListingContent.model_validate({"title": "Mug", "sparkles": True})

        assert listing.title == "Mug"
        assert not hasattr(listing, "sparkles")

    def test_frozen(self):
        listing = ListingContent(title="Mug")

        with pytest.raises(ValidationError):
            listing.title = "Cup"

    def test_a_plus_modules_from_json(self):
        listing = ListingContent.model_validate(
            {
                "title": "Mug",
                "a_plus_modules": [
                    {"type": "STANDARD_TEXT", "position": 1, "body": "Hello"},
                ],
            }
        )

        assert listing.a_plus_modules[0].type == APlusModuleType.STANDARD_TEXT

    def test_a_plus_position_range(self):
        with pytest.raises(ValidationError):
            APlusModule(type="STANDARD_TEXT", position=8)


class TestScoringModels:
    """Tests for weights and criterion scores."""

    def test_weight_accepts_criterion_name(self):
        weight = ScoringWeight(criterion=CriterionName.READABILITY, weight=0.5)

        assert weight.criterion == "readability"
        assert type(weight.criterion) is str

    def test_criterion_score_bounds(self):
        with pytest.raises(ValidationError):
            CriterionScore(value=1.5)
        with pytest.raises(ValidationError):
            CriterionScore(value=-0.1)

    def test_criterion_score_messages_are_a_tuple(self):
        note = Diagnostic(severity=Severity.INFO, code="readability", message="Easy to read")

        score = CriterionScore(value=0.8, messages=[note])

        assert score.messages == (note,)


class TestAuditResult:
    """The audit result cannot be changed after it is built."""

    @pytest.fixture
    def result(self) -> AuditResult:
        note = Diagnostic(severity=Severity.INFO, code="readability", message="Easy to read")
        missing = Diagnostic(
            field="title",
            severity=Severity.ERROR,
            code="missing_required_field",
            message="Title is required but missing or empty",
        )
        return AuditResult(
            score=40,
            validation=[missing, note],
            breakdown={"readability": CriterionScore(value=0.8, messages=[note])},
        )

    def test_validation_is_read_only(self, result):
        assert isinstance(result.validation, tuple)
        with pytest.raises(AttributeError):
            result.validation.append(result.validation[0])

    def test_breakdown_is_read_only(self, result):
        with pytest.raises(TypeError):
            result.breakdown["readability"] = CriterionScore(value=0.0)
        with pytest.raises(AttributeError):
            result.breakdown.pop("readability")

        assert result.breakdown["readability"].value == 0.8

    def test_serializes_to_plain_json(self, result):
        data = result.model_dump(mode="json")

        assert data["validation"][0]["code"] == "missing_required_field"
        assert data["breakdown"] == {
            "readability": {
                "value": 0.8,
                "messages": [
                    {
                        "field": None,
                        "severity": "info",
                        "code": "readability",
                        "message": "Easy to read",
                    }
                ],
            }
        }
