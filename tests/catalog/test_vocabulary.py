"""Tests for facet vocabularies."""

from storefront.catalog.vocabulary import FacetOption, FacetVocabulary
from storefront.domain.filters import Facet


class TestFacetVocabulary:
    """Tests for FacetVocabulary class."""

    def test_default_vocabulary(self):
        """Test the golf club defaults."""
        vocabulary = FacetVocabulary.default()

        assert [o.value for o in vocabulary.options(Facet.CATEGORY)] == [
            "drivers",
            "irons",
            "wedges",
            "putters",
            "woods",
            "hybrids",
        ]
        assert vocabulary.label_for(Facet.BRAND, "ping") == "PING"

    def test_configured_mappings_keep_order(self):
        """Test configured vocabularies keep their display order."""
        vocabulary = FacetVocabulary.from_mappings(
            club_categories={"putters": "Putters", "drivers": "Drivers"},
            brands={"srixon": "Srixon"},
        )

        assert vocabulary.options("category") == (
            FacetOption("putters", "Putters"),
            FacetOption("drivers", "Drivers"),
        )
        assert vocabulary.options(Facet.BRAND) == (FacetOption("srixon", "Srixon"),)

    def test_fixed_enumerations(self):
        """Test hand, condition and level are always available."""
        vocabulary = FacetVocabulary.from_mappings({}, {})

        assert [o.label for o in vocabulary.options(Facet.HAND)] == [
            "Right Handed",
            "Left Handed",
        ]
        assert [o.value for o in vocabulary.options(Facet.CONDITION)] == [
            "new",
            "like-new",
            "good",
            "fair",
        ]
        assert vocabulary.label_for(Facet.LEVEL, "pro") == "Professional"

    def test_unknown_token_label(self):
        """Test unknown tokens have no label."""
        assert FacetVocabulary.default().label_for(Facet.BRAND, "acme") is None
