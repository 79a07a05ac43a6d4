"""SQLite search history: stores completed searches and serves them back in pages."""

import json
import logging
import sqlite3
from contextlib import closing
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from litsearch.errors import StorageError
from litsearch.transform.models import ArticleRecord

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS searches (
    search_id INTEGER PRIMARY KEY AUTOINCREMENT,
    database TEXT NOT NULL,
    query TEXT NOT NULL,
    total_count INTEGER NOT NULL,
    result_count INTEGER NOT NULL,
    failure_count INTEGER NOT NULL DEFAULT 0,
    search_date TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS search_results (
    search_id INTEGER NOT NULL REFERENCES searches (search_id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    pmid TEXT NOT NULL,
    record_json TEXT NOT NULL,
    PRIMARY KEY (search_id, position)
);
"""


@dataclass(frozen=True)
class SearchSummary:
    search_id: int
    database: str
    query: str
    total_count: int
    result_count: int
    failure_count: int
    search_date: str


@dataclass
class StoredPage:
    search: SearchSummary
    page: int
    per_page: int
    total_pages: int
    records: List[ArticleRecord] = field(default_factory=list)


class SearchStore:
    """
    Persists search results so they can be listed and paged later.

    Transaction strategy: one transaction per saved search. Every operation
    opens its own connection so the store can be used from worker threads.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self.connect()

    def connect(self) -> None:
        """Create the database file and schema if needed."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with closing(self._open()) as conn:
                conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialize search store at {self.db_path}: {e}") from e
        logger.info(f"Search store ready: {self.db_path}")

    def save(
        self,
        database: str,
        query: str,
        total_count: int,
        records: Sequence[ArticleRecord],
        failure_count: int = 0
    ) -> int:
        """Insert one search with its records in a single transaction. Returns the search_id."""
        with closing(self._open()) as conn:
            cursor = conn.cursor()
            try:
                cursor.execute("BEGIN TRANSACTION")
                cursor.execute("""
                    INSERT INTO searches (database, query, total_count, result_count, failure_count, search_date)
                    VALUES (?, ?, ?, ?, ?, ?)
                """, (database, query, total_count, len(records), failure_count, datetime.now().isoformat()))
                search_id = cursor.lastrowid

                cursor.executemany("""
                    INSERT INTO search_results (search_id, position, pmid, record_json)
                    VALUES (?, ?, ?, ?)
                """, [
                    (search_id, position, record.pmid, json.dumps(record.to_dict()))
                    for position, record in enumerate(records, start=1)
                ])

                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Failed to save search '{query}': {e}")
                raise StorageError(f"Failed to save search: {e}") from e

        logger.debug(f"Saved search {search_id} with {len(records)} records")
        return search_id

    def list_searches(self) -> List[SearchSummary]:
        """All stored searches, newest first."""
        with closing(self._open()) as conn:
            try:
                rows = conn.execute("""
                    SELECT search_id, database, query, total_count, result_count, failure_count, search_date
                    FROM searches
                    ORDER BY search_id DESC
                """).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to list searches: {e}") from e

        return [SearchSummary(*row) for row in rows]

    def get_page(self, search_id: int, page: int = 1, per_page: int = 10) -> Optional[StoredPage]:
        """
        One page of a stored search, or None if search_id is unknown.

        Pages start at 1. A page past the end comes back with no records.
        """
        if page < 1 or per_page < 1:
            raise ValueError("page and per_page must be at least 1")

        with closing(self._open()) as conn:
            try:
                row = conn.execute("""
                    SELECT search_id, database, query, total_count, result_count, failure_count, search_date
                    FROM searches WHERE search_id = ?
                """, (search_id,)).fetchone()
                if row is None:
                    return None

                offset = (page - 1) * per_page
                result_rows = []
                if offset < row[4]:
                    result_rows = conn.execute("""
                        SELECT record_json FROM search_results
                        WHERE search_id = ?
                        ORDER BY position
                        LIMIT ? OFFSET ?
                    """, (search_id, per_page, offset)).fetchall()
            except OverflowError:
                # ids beyond SQLite INTEGER range cannot exist
                return None
            except sqlite3.Error as e:
                raise StorageError(f"Failed to read search {search_id}: {e}") from e

        summary = SearchSummary(*row)
        total_pages = max(1, (summary.result_count + per_page - 1) // per_page)
        records = [ArticleRecord.from_dict(json.loads(record_json)) for (record_json,) in result_rows]

        return StoredPage(
            search=summary,
            page=page,
            per_page=per_page,
            total_pages=total_pages,
            records=records,
        )

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path), isolation_level=None)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def __repr__(self) -> str:
        return f"SearchStore(db_path={self.db_path})"
