# tests/test_entity.py
"""Tests for entity property helpers."""

import pytest
from schema_intel.entity import (
    ValueKind,
    classify_value,
    entity_id,
    get_all_types,
    has_property,
    is_nested_entity,
    load_entities,
    missing_properties,
    primary_type,
)


class TestTypes:
    """Test type normalization."""

    def test_single_type(self):
        """Test a plain string @type."""
        entity = {"@type": "Product"}
        assert get_all_types(entity) == ["Product"]
        assert primary_type(entity) == "Product"

    def test_multiple_types(self):
        """Test that the first listed type is primary."""
        entity = {"@type": ["LocalBusiness", "Restaurant"]}
        assert get_all_types(entity) == ["LocalBusiness", "Restaurant"]
        assert primary_type(entity) == "LocalBusiness"

    @pytest.mark.parametrize("entity", [
        {},
        {"@type": ""},
        {"@type": []},
        {"@type": 42},
        {"@type": [None, 7]},
        "not an entity",
        None,
    ])
    def test_unrecognized_type_is_unknown(self, entity):
        """Test that unusable types degrade to Unknown."""
        assert get_all_types(entity) == ["Unknown"]
        assert primary_type(entity) == "Unknown"


class TestProperties:
    """Test property presence helpers."""

    def test_null_counts_as_missing(self):
        """Test that a None value is treated as absent."""
        entity = {"@type": "Product", "name": None, "image": "x.jpg"}
        assert has_property(entity, "image") is True
        assert has_property(entity, "name") is False
        assert has_property(entity, "brand") is False

    def test_falsy_values_are_present(self):
        """Test that empty strings and zero still count as present."""
        entity = {"@type": "Offer", "price": 0, "name": ""}
        assert has_property(entity, "price") is True
        assert has_property(entity, "name") is True

    def test_missing_properties_preserves_order(self):
        """Test that missing properties keep the requested order."""
        entity = {"@type": "Article", "headline": "Hi"}
        missing = missing_properties(entity, ["headline", "image", "author", "datePublished"])
        assert missing == ["image", "author", "datePublished"]

    def test_entity_id(self):
        """Test explicit @id handling."""
        assert entity_id({"@id": "https://example.com/#org"}) == "https://example.com/#org"
        assert entity_id({"@id": ""}) is None
        assert entity_id({"@type": "Thing"}) is None
        assert entity_id("oops") is None


class TestValueClassification:
    """Test property value classification."""

    def test_nested_entity(self):
        """Test that a mapping with @type is a nested entity."""
        assert is_nested_entity({"@type": "Offer"}) is True
        assert is_nested_entity({"price": "9.99"}) is False
        assert classify_value({"@type": "Offer"}) == ValueKind.NESTED_ENTITY

    def test_plain_mapping_is_scalar(self):
        """Test that an untyped mapping is not treated as an entity."""
        assert classify_value({"price": "9.99"}) == ValueKind.SCALAR

    def test_lists(self):
        """Test list classification."""
        assert classify_value(["a", "b"]) == ValueKind.SCALAR_LIST
        assert classify_value([]) == ValueKind.SCALAR_LIST
        assert classify_value(["a", {"@type": "Person"}]) == ValueKind.ENTITY_LIST

    def test_scalars(self):
        """Test scalar classification."""
        for value in ("text", 3, 2.5, True, None):
            assert classify_value(value) == ValueKind.SCALAR


class TestLoadEntities:
    """Test flattening parsed JSON-LD documents."""

    def test_single_entity(self):
        """Test a single JSON-LD object."""
        doc = {"@context": "https://schema.org", "@type": "Organization", "name": "Acme"}
        assert load_entities(doc) == [doc]

    def test_graph(self):
        """Test that @graph items are returned in order."""
        doc = {
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "WebSite", "url": "https://example.com"},
                {"@type": "Organization", "name": "Acme"},
            ],
        }
        entities = load_entities(doc)
        assert [e["@type"] for e in entities] == ["WebSite", "Organization"]

    def test_list_skips_untyped_items(self):
        """Test that untyped objects in a list are skipped."""
        doc = [
            {"@type": "Product", "name": "Widget"},
            {"name": "no type"},
            {"@graph": [{"@type": "BreadcrumbList"}]},
        ]
        entities = load_entities(doc)
        assert [e["@type"] for e in entities] == ["Product", "BreadcrumbList"]

    def test_unusable_document(self):
        """Test documents with no entities."""
        assert load_entities({"name": "nothing"}) == []
        assert load_entities("text") == []
        assert load_entities(None) == []
