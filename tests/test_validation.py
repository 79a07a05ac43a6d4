"""Tests for tool argument validation."""

import pytest

from litsearch.errors import InvalidInputError
from litsearch.validation import (
    clamp_max_results,
    normalize_pmid,
    normalize_query,
    parse_page,
    parse_search_id,
)


@pytest.mark.parametrize("value, expected", [
    (-7, 1),
    (0, 1),
    (5, 5),
    (7.9, 7),
    ("25", 25),
    (10_000, 500),
    (10 ** 400, 500),
    (-(10 ** 400), 1),
    ("1e400", 500),
    ("abc", 10),
    (None, 10),
    (float("nan"), 10),
    (True, 10),
])
def test_clamp_max_results_pubmed(value, expected):
    assert clamp_max_results(value, 500) == expected


def test_clamp_max_results_pmc_upper_bound():
    assert clamp_max_results(120, 50) == 50


def test_query_is_trimmed():
    assert normalize_query("  CRISPR[Title]  ") == "CRISPR[Title]"


@pytest.mark.parametrize("query", ["", "   ", None, 42])
def test_empty_query_is_rejected(query):
    with pytest.raises(InvalidInputError, match="search query"):
        normalize_query(query)


@pytest.mark.parametrize("value, expected", [
    ('"35504917"', "35504917"),
    ("'35504917'", "35504917"),
    (" 35504917 ", "35504917"),
    (35504917, "35504917"),
])
def test_pmid_forms_are_accepted(value, expected):
    assert normalize_pmid(value) == expected


@pytest.mark.parametrize("value", ["abc", "12a", '"12', "-5", "1.5", "٣٤"])
def test_non_numeric_pmid_is_rejected(value):
    with pytest.raises(InvalidInputError, match="Invalid PMID format"):
        normalize_pmid(value)


@pytest.mark.parametrize("value", [None, "", True])
def test_missing_pmid_is_rejected(value):
    with pytest.raises(InvalidInputError):
        normalize_pmid(value)


def test_search_id_and_page():
    assert parse_search_id("12") == 12
    assert parse_search_id(3) == 3
    with pytest.raises(InvalidInputError):
        parse_search_id("x1")

    assert parse_page(None) == 1
    assert parse_page("2") == 2
    assert parse_page(-4) == 1
    assert parse_page("last") == 1
    assert parse_page(10 ** 400) == 10 ** 400
    assert parse_page(2.5) == 2
