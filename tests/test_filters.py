"""
Tests for order option parsing
"""

import pytest

from usersvc.filters import parse_order


class TestParseOrder:
    def test_empty_order(self):
        assert parse_order(None) == []
        assert parse_order("") == []

    def test_single_entry_direction_upper_cased(self):
        assert parse_order("email:desc") == [("email", "DESC")]

    def test_multiple_entries(self):
        assert parse_order("role:asc, email:Desc") == [("role", "ASC"), ("email", "DESC")]

    def test_direction_is_not_validated(self):
        assert parse_order("email:sideways") == [("email", "SIDEWAYS")]

    def test_entry_without_separator_raises(self):
        with pytest.raises(ValueError):
            parse_order("email")

        with pytest.raises(ValueError):
            parse_order("email:asc,name")
