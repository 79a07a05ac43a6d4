"""
Load module - Optional search history storage

Components for persisting completed searches in SQLite:
- SearchStore: Transactional save, listing and pagination of stored searches
"""

from .search_store import SearchStore, SearchSummary, StoredPage

__all__ = ["SearchStore", "SearchSummary", "StoredPage"]
