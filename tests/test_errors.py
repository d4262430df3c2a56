"""Tests for the path-indexed error accumulator."""

from __future__ import annotations

import pytest

from verity.config import VerityConfig, reset_config, set_config
from verity.errors import Errors, format_path


class TestErrorsAdd:
    """Test adding records."""

    def test_new_errors_are_empty(self):
        """Test a new Errors has no records and is falsy."""
        errors = Errors()

        assert len(errors) == 0
        assert not errors
        assert errors.to_list() == []
        assert errors.path == []

    def test_add_record(self):
        """Test a record carries type, data, message and path."""
        errors = Errors()
        errors.add("verity.constraints.invalid", message="is wrong", expected=3)

        assert errors.to_list() == [
            {
                "data": {"expected": 3},
                "message": "is wrong",
                "path": [],
                "type": "verity.constraints.invalid",
            }
        ]

    def test_add_is_chainable(self):
        """Test add returns the errors object."""
        errors = Errors()

        assert errors.add("a").add("b") is errors
        assert [record["type"] for record in errors] == ["a", "b"]

    def test_type_can_be_a_data_key(self):
        """Test a data item named type does not collide with the error type."""
        errors = Errors().add("verity.constraints.is_not_type", type=int, required=True)

        record = errors.to_list()[0]
        assert record["type"] == "verity.constraints.is_not_type"
        assert record["data"] == {"required": True, "type": int}


class TestScopedViews:
    """Test scoped views share records and prefix paths."""

    def test_item_view_prefixes_path(self):
        """Test records added through a view carry its path."""
        errors = Errors()
        errors["name"].add("verity.constraints.absent")

        assert errors.to_list()[0]["path"] == ["name"]

    def test_nested_views(self):
        """Test views of views concatenate their paths."""
        errors = Errors()
        errors["items"][0]["name"].add("x")

        assert errors.to_list()[0]["path"] == ["items", 0, "name"]

    def test_dig(self):
        """Test dig with several keys equals chained indexing."""
        errors = Errors()
        errors.dig("a", "b").add("x")
        errors.dig(["a", "c"]).add("y")

        assert [r["path"] for r in errors] == [["a", "b"], ["a", "c"]]

    def test_views_share_backing_records(self):
        """Test records added through a view are visible from the root."""
        errors = Errors()
        view = errors["a"]
        view.add("x")
        errors.add("y")

        assert len(errors) == 2
        assert len(view) == 1

    def test_view_lists_relative_paths(self):
        """Test a view lists only its own records, relative to its path."""
        errors = Errors()
        errors["a"]["b"].add("x")
        errors["c"].add("y")

        assert errors["a"].to_list() == [
            {"data": {}, "message": None, "path": ["b"], "type": "x"}
        ]
        assert errors["a"].path == ["a"]


class TestCombining:
    """Test update, merge and copy."""

    def test_update_appends_under_view_path(self):
        """Test update re-roots another collection's records."""
        inner = Errors()
        inner["x"].add("a", value=1)

        errors = Errors()
        errors["outer"].update(inner)

        assert errors.to_list() == [
            {"data": {"value": 1}, "message": None, "path": ["outer", "x"], "type": "a"}
        ]

    def test_update_accepts_plain_records(self):
        """Test update accepts a list of record dicts."""
        errors = Errors().update([{"type": "a", "path": ["k"]}])

        assert errors == [{"type": "a", "path": ["k"]}]

    def test_merge_returns_new_errors(self):
        """Test merge leaves both operands untouched."""
        first = Errors().add("a")
        second = Errors().add("b")

        merged = first.merge(second)

        assert [r["type"] for r in merged] == ["a", "b"]
        assert len(first) == 1
        assert len(second) == 1

    def test_copy_is_independent(self):
        """Test records added to a copy do not affect the original."""
        errors = Errors().add("a")
        duplicate = errors.copy()
        duplicate.add("b")

        assert len(errors) == 1
        assert len(duplicate) == 2


class TestEquality:
    """Test comparison of error collections."""

    def test_equal_records(self):
        """Test collections with the same records are equal."""
        assert Errors().add("a", x=1) == Errors().add("a", x=1)

    def test_order_matters(self):
        """Test equality is order-sensitive."""
        assert Errors().add("a").add("b") != Errors().add("b").add("a")

    def test_compare_to_list(self):
        """Test missing record keys default when comparing to a list."""
        errors = Errors()
        errors["a"].add("x")

        assert errors == [{"type": "x", "path": ["a"]}]
        assert errors != [{"type": "x"}]

    def test_unhashable(self):
        """Test Errors cannot be hashed."""
        with pytest.raises(TypeError):
            hash(Errors())


class TestReporting:
    """Test grouping and summaries."""

    def test_group_by_path(self):
        """Test records are grouped by path in first-seen order."""
        errors = Errors()
        errors["b"].add("x")
        errors["a"].add("y")
        errors["b"].add("z")

        groups = errors.group_by_path()

        assert list(groups) == [("b",), ("a",)]
        assert [r["type"] for r in groups[("b",)]] == ["x", "z"]

    def test_summary(self):
        """Test summary renders path and message or type."""
        errors = Errors()
        errors.add("root")
        errors["items"][0].add("verity.constraints.absent")
        errors["name"].add("x", message="is too short")

        assert errors.summary() == "root, items[0]: verity.constraints.absent, name: is too short"

    def test_summary_separator(self):
        """Test summary uses an explicit separator."""
        errors = Errors().add("a").add("b")

        assert errors.summary(separator="; ") == "a; b"

    def test_summary_separator_from_config(self):
        """Test summary defaults to the configured separator."""
        set_config(VerityConfig(summary_separator=" | "))
        try:
            assert Errors().add("a").add("b").summary() == "a | b"
        finally:
            reset_config()

    def test_format_path(self):
        """Test paths render keys with dots and indices with brackets."""
        assert format_path([]) == ""
        assert format_path(["a", "b", 0, "c"]) == "a.b[0].c"
        assert format_path([0, 1]) == "[0][1]"
