# tests/test_recommendations.py
"""Tests for the recommendation generator."""

import pytest
from schema_intel.models import Issue, IssueKind, Priority, Severity
from schema_intel.recommendations import RecommendationGenerator


def _error(prop):
    return Issue(IssueKind.MISSING, Severity.ERROR, f"Missing required property: {prop}", property=prop)


def _warning(prop):
    return Issue(IssueKind.WEAK, Severity.WARNING, f"Missing recommended property: {prop}", property=prop)


class TestRecommendationGenerator:
    """Test suite for RecommendationGenerator."""

    @pytest.fixture
    def generator(self):
        """Create a RecommendationGenerator."""
        return RecommendationGenerator()

    @pytest.fixture
    def with_image(self):
        """Entities that already carry an image."""
        return [{"@type": "Product", "image": "x.jpg"}]

    def test_high_priority_capped_at_three(self, generator, with_image):
        """Test that only the first three errors become high priority."""
        issues = [_error(p) for p in ("headline", "image", "author", "datePublished")]

        recs = generator.generate(with_image, issues)

        assert [r.priority for r in recs] == [Priority.HIGH] * 3
        assert [r.title for r in recs] == [
            "Add missing headline",
            "Add missing image",
            "Add missing author",
        ]
        assert recs[0].description == "Missing required property: headline"
        assert recs[0].impact == "Required for rich result eligibility"

    def test_medium_priority_from_warnings(self, generator, with_image):
        """Test warnings become medium priority after the high band."""
        issues = [
            _warning("offers"),
            _error("name"),
            _warning("brand"),
            _warning("review"),
            _warning("aggregateRating"),
        ]

        recs = generator.generate(with_image, issues)

        assert [(r.priority, r.title) for r in recs] == [
            (Priority.HIGH, "Add missing name"),
            (Priority.MEDIUM, "Add missing offers"),
            (Priority.MEDIUM, "Add missing brand"),
            (Priority.MEDIUM, "Add missing review"),
        ]
        assert recs[1].description == "Missing recommended property: offers"
        assert recs[1].impact == "Increases confidence for rich results"

    def test_issues_without_property_are_skipped(self, generator, with_image):
        """Test that conflict and info issues produce no recommendations."""
        issues = [
            Issue(IssueKind.CONFLICT, Severity.WARNING, "Multiple Product entities detected (2)"),
            Issue(IssueKind.WEAK, Severity.INFO, "SoftwareApplication without linked Organization"),
        ]
        assert generator.generate(with_image, issues) == []

    def test_image_recommendation(self, generator):
        """Test the single low-priority recommendation."""
        recs = generator.generate([{"@type": "Organization", "name": "Acme"}], [])

        assert len(recs) == 1
        assert recs[0].priority == Priority.LOW
        assert recs[0].title == "Add image property"
        assert recs[0].description == "Images significantly increase rich result chances"
        assert recs[0].impact == "Visual enhancement in search results"

    def test_image_recommendation_for_empty_input(self, generator):
        """Test that no entities still recommends an image."""
        recs = generator.generate([], [])
        assert [r.priority for r in recs] == [Priority.LOW]

    def test_same_property_in_several_bands(self, generator):
        """Test that property names are not deduplicated across bands."""
        issues = [_error("image"), _warning("image")]
        recs = generator.generate([{"@type": "Article"}], issues)

        assert [(r.priority, r.title) for r in recs] == [
            (Priority.HIGH, "Add missing image"),
            (Priority.MEDIUM, "Add missing image"),
            (Priority.LOW, "Add image property"),
        ]
