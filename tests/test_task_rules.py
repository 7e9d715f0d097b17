"""
Unit tests for list-parameter parsing and task field validation (pure, no DB).

Run with: python -m pytest tests/test_task_rules.py -v
"""
from __future__ import annotations

import pytest

from tasknest.domain.common.errors import MalformedFilterError, ValidationError
from tasknest.domain.tasks.models import FilterSpec, ListBody, SortKey, TextBody
from tasknest.domain.tasks.rules import (
    coerce_positive_int,
    make_body,
    parse_filter,
    parse_sort,
    validate_title,
)


# ----- page / limit -----


def test_page_and_limit_default_when_missing():
    assert coerce_positive_int("page", None, 1) == 1
    assert coerce_positive_int("limit", "", 10) == 10


def test_integer_strings_are_coerced():
    assert coerce_positive_int("limit", "25", 10) == 25
    assert coerce_positive_int("page", " 3 ", 1) == 3


@pytest.mark.parametrize("raw", ["abc", "0", "-2", "1.5", True])
def test_non_positive_or_garbage_is_rejected(raw):
    with pytest.raises(ValidationError):
        coerce_positive_int("page", raw, 1)


# ----- filter -----


def test_empty_filter_has_no_constraints():
    assert parse_filter(None) == FilterSpec()
    assert parse_filter("") == FilterSpec()


def test_filter_reads_category_name_and_shared():
    parsed = parse_filter('{"categoryName": "Work", "shared": false}')
    assert parsed.category_name == "Work"
    assert parsed.shared is False


def test_unknown_filter_keys_are_ignored():
    parsed = parse_filter('{"colour": "blue", "shared": true}')
    assert parsed == FilterSpec(shared=True)


def test_empty_category_name_means_no_constraint():
    assert parse_filter('{"categoryName": ""}').category_name is None


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"Work"', '{"shared": "yes"}', '{"categoryName": 5}'])
def test_malformed_filter_is_rejected(raw):
    with pytest.raises(MalformedFilterError):
        parse_filter(raw)


def test_deeply_nested_filter_is_malformed():
    with pytest.raises(MalformedFilterError):
        parse_filter("[" * 5000)


def test_malformed_filter_is_a_validation_error():
    """MalformedFilterError is caller-attributable, mapped like any validation error."""
    assert issubclass(MalformedFilterError, ValidationError)


# ----- sort -----


def test_sort_parses_direction_prefixes_and_aliases():
    keys = parse_sort("-createdAt title")
    assert keys == (SortKey("created_at", descending=True), SortKey("title", descending=False))


def test_sort_none_is_insertion_order():
    assert parse_sort(None) == ()


def test_sort_unknown_field_is_rejected():
    with pytest.raises(ValidationError):
        parse_sort("password")


# ----- body / title -----


def test_body_matches_type():
    assert make_body("text", "Finish the report") == TextBody("Finish the report")
    assert make_body("list", ["Milk", "Bread"]) == ListBody(("Milk", "Bread"))


@pytest.mark.parametrize(
    "task_type, raw",
    [("text", ["a"]), ("list", "a"), ("list", ["a", 1]), ("text", None)],
)
def test_body_shape_mismatch_is_rejected(task_type, raw):
    with pytest.raises(ValidationError):
        make_body(task_type, raw)


def test_blank_title_is_rejected():
    with pytest.raises(ValidationError):
        validate_title("   ")
