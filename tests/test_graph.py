# tests/test_graph.py
"""Tests for the entity graph builder."""

import pytest
from schema_intel.graph import EntityGraphBuilder, extract_properties
from schema_intel.models import ConfidenceTier, IssueKind, Severity


class TestEntityGraphBuilder:
    """Test suite for EntityGraphBuilder."""

    @pytest.fixture
    def builder(self):
        """Create an EntityGraphBuilder with the default catalog."""
        return EntityGraphBuilder()

    @pytest.fixture
    def product(self):
        """A product with nested offers, reviews and scalar lists."""
        return {
            "@context": "https://schema.org",
            "@type": "Product",
            "name": "Widget",
            "image": ["a.jpg", "b.jpg"],
            "offers": {"@type": "Offer", "price": "9.99", "priceCurrency": "USD"},
            "review": [
                {"@type": "Review", "@id": "#review-1", "reviewBody": "Great"},
                "plain text review",
                {"@type": "Review", "reviewBody": "Fine"},
            ],
            "brand": {"name": "Acme"},
        }

    def test_top_level_nodes_in_input_order(self, builder):
        """Test one node per entity with positional ids."""
        nodes = builder.build([
            {"@type": "Organization", "name": "Acme"},
            {"@type": ["WebSite", "CreativeWork"], "@id": "https://example.com/#site"},
        ])

        assert [n.type for n in nodes] == ["Organization", "WebSite"]
        assert nodes[0].id == "entity-0"
        assert nodes[1].id == "https://example.com/#site"

    def test_properties_exclude_reserved_and_nested(self, builder, product):
        """Test that properties hold only non-reserved, non-nested values."""
        node = builder.build([product])[0]

        assert node.properties == {
            "name": "Widget",
            "image": ["a.jpg", "b.jpg"],
            "brand": {"name": "Acme"},
        }

    def test_children_in_discovery_order(self, builder, product):
        """Test that nested entities become children in property order."""
        node = builder.build([product])[0]

        assert [c.type for c in node.children] == ["Offer", "Review", "Review"]
        assert [c.id for c in node.children] == [
            "nested-offers",
            "#review-1",
            "nested-array-review",
        ]
        assert node.children[0].properties == {"price": "9.99", "priceCurrency": "USD"}

    def test_nested_nodes_are_medium_confidence(self, builder, product):
        """Test that nested nodes always get medium confidence."""
        node = builder.build([product])[0]
        assert all(c.confidence == ConfidenceTier.MEDIUM for c in node.children)

    def test_nested_nodes_get_their_own_issues(self, builder, product):
        """Test that nested entities are evaluated against the catalog."""
        node = builder.build([product])[0]
        review = node.children[1]

        missing = [i.property for i in review.issues if i.kind == IssueKind.MISSING]
        assert missing == ["itemReviewed", "reviewRating", "author"]
        # Offer matches no rule
        assert node.children[0].issues == ()

    def test_recursive_nesting(self, builder):
        """Test that nesting is extracted recursively."""
        entity = {
            "@type": "Article",
            "author": {
                "@type": "Person",
                "name": "Jane",
                "worksFor": {"@type": "Organization", "name": "Acme"},
            },
        }
        node = builder.build([entity])[0]

        person = node.children[0]
        assert person.type == "Person"
        assert person.properties == {"name": "Jane"}
        assert [c.type for c in person.children] == ["Organization"]
        assert person.children[0].id == "nested-worksFor"

    @pytest.mark.parametrize("issues_entity,expected", [
        ({"@type": "FAQPage", "mainEntity": []}, ConfidenceTier.HIGH),
        ({"@type": "WebSite", "url": "u", "potentialAction": "p"}, ConfidenceTier.MEDIUM),
        ({"@type": "Organization", "name": "Acme"}, ConfidenceTier.LOW),
        ({"@type": "FAQPage"}, ConfidenceTier.LOW),
        ({"@type": "Thing"}, ConfidenceTier.HIGH),
    ])
    def test_top_level_confidence(self, builder, issues_entity, expected):
        """Test top-level confidence from the node's own issues."""
        node = builder.build([issues_entity])[0]
        assert node.confidence == expected

    def test_untyped_entity(self, builder):
        """Test that untyped and non-mapping entities become Unknown nodes."""
        nodes = builder.build([{"name": "no type"}, "garbage"])

        assert [n.type for n in nodes] == ["Unknown", "Unknown"]
        assert [n.id for n in nodes] == ["entity-0", "entity-1"]
        assert nodes[0].properties == {"name": "no type"}
        assert nodes[0].issues == ()
        assert nodes[1].properties == {}

    def test_empty_input(self, builder):
        """Test that no entities yields no nodes."""
        assert builder.build([]) == []

    def test_properties_are_copied(self, builder):
        """Test that nodes do not share mutable values with the input."""
        entity = {"@type": "Organization", "name": "Acme", "sameAs": ["https://a.example"]}
        node = builder.build([entity])[0]

        entity["sameAs"].append("https://b.example")
        entity["name"] = "Changed"

        assert node.properties["sameAs"] == ["https://a.example"]
        assert node.properties["name"] == "Acme"


class TestNestingGuard:
    """Test the depth limit and self-reference guard."""

    def _chain(self, depth):
        entity = {"@type": "Thing", "name": f"level-{depth}"}
        for level in range(depth - 1, -1, -1):
            entity = {"@type": "Thing", "name": f"level-{level}", "child": entity}
        return entity

    def _depth(self, node):
        if not node.children:
            return 0
        return 1 + max(self._depth(c) for c in node.children)

    def test_depth_limit(self):
        """Test that children stop at max_depth."""
        builder = EntityGraphBuilder(max_depth=2)
        node = builder.build([self._chain(5)])[0]
        assert self._depth(node) == 2

    def test_zero_depth_means_no_children(self):
        """Test that max_depth=0 builds only top-level nodes."""
        builder = EntityGraphBuilder(max_depth=0)
        node = builder.build([self._chain(3)])[0]
        assert node.children == ()
        # Nested values still never leak into properties
        assert "child" not in node.properties

    def test_default_depth_handles_normal_nesting(self):
        """Test that ordinary nesting is fully built by default."""
        node = EntityGraphBuilder().build([self._chain(6)])[0]
        assert self._depth(node) == 6

    def test_self_reference_is_skipped(self, caplog):
        """Test that a self-referencing entity terminates."""
        entity = {"@type": "Organization", "name": "Loop"}
        entity["parentOrganization"] = entity
        entity["subOrganization"] = [entity]

        node = EntityGraphBuilder().build([entity])[0]

        assert node.children == ()
        assert node.properties == {"name": "Loop"}
        assert "Self-referencing" in caplog.text


def test_extract_properties_skips_entity_lists():
    """Test that a list containing entities contributes no property entry."""
    entity = {
        "@type": "FAQPage",
        "mainEntity": [{"@type": "Question", "name": "Why?"}, "stray"],
        "name": "FAQ",
    }
    assert extract_properties(entity) == {"name": "FAQ"}
