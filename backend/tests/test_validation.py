"""Tests for the boundary validation functions."""
from __future__ import annotations

import pytest

from search_fallback.errors import ValidationError
from search_fallback.validation import (
    validate_edge_selection,
    validate_interest,
    validate_new_item,
    validate_search_params,
    validate_seed_entry,
)


class TestSearchParams:
    @pytest.mark.parametrize("limit,min_probability", [(1, 0), (10, 100), (3, 50)])
    def test_bounds_inclusive(self, limit, min_probability):
        validate_search_params("iphone", limit, min_probability)

    def test_bool_is_not_a_limit(self):
        with pytest.raises(ValidationError, match="limit must be an integer"):
            validate_search_params("iphone", True, 50)

    def test_non_string_query(self):
        with pytest.raises(ValidationError, match="query is required"):
            validate_search_params(None, 3, 50)

    def test_overlong_query(self):
        with pytest.raises(ValidationError, match="at most 200"):
            validate_search_params("x" * 201, 3, 50)


class TestEdgeSelection:
    @pytest.mark.parametrize("selected_type", ["category", "auction", "tender", "directSale"])
    def test_known_destinations(self, selected_type):
        validate_edge_selection("iphone", "t1", selected_type, "X1")

    def test_destination_is_case_sensitive(self):
        with pytest.raises(ValidationError, match="selectedType"):
            validate_edge_selection("iphone", "t1", "directsale", "X1")


class TestInterest:
    def test_email_or_phone_is_enough(self):
        validate_interest("ps5", "a@b.com", None)
        validate_interest("ps5", None, "0501234567")

    def test_non_string_contact_is_ignored(self):
        with pytest.raises(ValidationError, match="contact channel"):
            validate_interest("ps5", 42, None)


class TestNewItem:
    @pytest.mark.parametrize(
        "title,item_type,item_id,field",
        [("", "auction", "A1", "title"), ("PS5", "", "A1", "itemType"), ("PS5", "auction", " ", "itemId")],
    )
    def test_required(self, title, item_type, item_id, field):
        with pytest.raises(ValidationError, match=field):
            validate_new_item(title, item_type, item_id)


class TestSeedEntry:
    def test_brand_type_allowed(self):
        validate_seed_entry("Apple", "brand", None)

    def test_aliases_must_be_strings(self):
        with pytest.raises(ValidationError, match="aliases"):
            validate_seed_entry("PlayStation 5", "product", {"aliases": ["PS5", 5]})

    def test_metadata_must_be_mapping(self):
        with pytest.raises(ValidationError, match="metadata must be an object"):
            validate_seed_entry("PlayStation 5", "product", ["PS5"])
