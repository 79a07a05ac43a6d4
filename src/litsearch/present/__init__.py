from .formatter import (
    format_article,
    format_full_abstract,
    format_search_history,
    format_search_results,
    format_stored_page,
    truncate_abstract,
)

__all__ = [
    "format_article",
    "format_full_abstract",
    "format_search_history",
    "format_search_results",
    "format_stored_page",
    "truncate_abstract",
]
