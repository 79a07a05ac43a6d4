"""Tool argument validation. Everything here runs before any remote call."""

import math
import re
from typing import Any

from litsearch.errors import InvalidInputError

DEFAULT_MAX_RESULTS = 10
MAX_PUBMED_RESULTS = 500
MAX_PMC_RESULTS = 50

_PMID = re.compile(r'^\d+$', re.ASCII)


def normalize_query(query: Any) -> str:
    if not isinstance(query, str) or not query.strip():
        raise InvalidInputError("Please provide a search query.")
    return query.strip()


def clamp_max_results(value: Any, upper: int, default: int = DEFAULT_MAX_RESULTS) -> int:
    """
    Coerce a requested result count into [1, upper].

    Missing, boolean, non-numeric and NaN values fall back to default.
    Numeric strings are accepted.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return max(1, min(value, upper))

    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default

    if math.isnan(number):
        return default
    if math.isinf(number):
        return upper if number > 0 else 1

    return max(1, min(math.floor(number), upper))


def normalize_pmid(pmid: Any) -> str:
    """Accept 35504917, '35504917' or '"35504917"'; reject anything non-numeric."""
    if pmid is None or isinstance(pmid, bool) or (isinstance(pmid, str) and not pmid.strip()):
        raise InvalidInputError("Please provide a valid PMID.")

    pmid_str = str(pmid).strip()
    if len(pmid_str) >= 2 and pmid_str[0] == pmid_str[-1] and pmid_str[0] in ('"', "'"):
        pmid_str = pmid_str[1:-1].strip()

    if not _PMID.match(pmid_str):
        raise InvalidInputError(f"Invalid PMID format: {pmid}. PMID should be a number.")

    return pmid_str


def parse_search_id(search_id: Any) -> int:
    if isinstance(search_id, bool):
        raise InvalidInputError(f"Invalid search ID: {search_id}. Search ID should be a number.")
    text = str(search_id).strip() if search_id is not None else ""
    if not _PMID.match(text):
        raise InvalidInputError(f"Invalid search ID: {search_id}. Search ID should be a number.")
    return int(text)


def parse_page(page: Any) -> int:
    """Page numbers start at 1; anything unusable means the first page."""
    if page is None or isinstance(page, bool):
        return 1
    if isinstance(page, int):
        return max(1, page)
    try:
        number = float(page)
    except (TypeError, ValueError, OverflowError):
        return 1
    if math.isnan(number) or math.isinf(number):
        return 1
    return max(1, math.floor(number))
