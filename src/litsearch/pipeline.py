"""
Search Orchestrator

Runs ESearch, fetches article details in batches and normalizes them.
Validates user input before any remote call and optionally records
completed searches in the search store.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from litsearch.errors import InvalidInputError, StorageError
from litsearch.extract.api_client import PubMedAPIClient
from litsearch.extract.batch_fetcher import BatchFetcher
from litsearch.load.search_store import SearchStore
from litsearch.transform.models import ArticleRecord
from litsearch.transform.xml_parser import parse_summary_result
from litsearch.validation import (
    DEFAULT_MAX_RESULTS,
    MAX_PMC_RESULTS,
    MAX_PUBMED_RESULTS,
    clamp_max_results,
    normalize_pmid,
    normalize_query,
)

logger = logging.getLogger(__name__)

PUBMED = "pubmed"
PMC = "pmc"

RESULT_LIMITS = {
    PUBMED: MAX_PUBMED_RESULTS,
    PMC: MAX_PMC_RESULTS,
}


@dataclass
class SearchOutcome:
    database: str
    query: str
    max_results: int
    total_count: int = 0
    records: List[ArticleRecord] = field(default_factory=list)
    failure_count: int = 0
    search_id: Optional[int] = None


class SearchPipeline:
    """
    Answers "find articles matching query" and "fetch one article by PMID".

    Handles:
    - Input validation (query, result count, PMID format)
    - PubMed detail fetch through the BatchFetcher (partial failures counted)
    - PMC summary fetch (PMC has no EFetch equivalent used here)
    - Optional search history
    """

    def __init__(self, client: PubMedAPIClient, fetcher: BatchFetcher, store: Optional[SearchStore] = None):
        self.client = client
        self.fetcher = fetcher
        self.store = store

    def search(self, database: str, query: Any, max_results: Any = DEFAULT_MAX_RESULTS) -> SearchOutcome:
        if database not in RESULT_LIMITS:
            raise InvalidInputError(f"Unsupported database: {database}")

        query = normalize_query(query)
        max_results = clamp_max_results(max_results, RESULT_LIMITS[database])

        logger.info(f"Searching {database} for '{query}' (max {max_results})")
        search_result = self.client.search(database, query, retmax=max_results)

        outcome = SearchOutcome(
            database=database,
            query=query,
            max_results=max_results,
            total_count=search_result.count,
        )

        ids = search_result.ids[:max_results]
        if search_result.count == 0 or not ids:
            logger.info(f"No results for '{query}'")
            return outcome

        if database == PUBMED:
            fetched = self.fetcher.fetch_all(ids)
            outcome.records = fetched.records
            outcome.failure_count = fetched.failure_count
        else:
            summaries = self.client.summary(PMC, ids)
            outcome.records = parse_summary_result(summaries, ids, full_text=True)

        logger.info(
            f"Search complete: {outcome.total_count} total, {len(outcome.records)} retrieved, "
            f"{outcome.failure_count} failed batch(es)"
        )

        if self.store is not None and outcome.records:
            try:
                outcome.search_id = self.store.save(
                    database=database,
                    query=query,
                    total_count=outcome.total_count,
                    records=outcome.records,
                    failure_count=outcome.failure_count,
                )
            except StorageError as e:
                logger.error(f"Search results not stored: {e}")

        return outcome

    def fetch_by_id(self, pmid: Any) -> Optional[ArticleRecord]:
        """Single PubMed record, or None if nothing could be retrieved."""
        pmid = normalize_pmid(pmid)

        result = self.fetcher.fetch_all([pmid])
        if not result.records:
            logger.info(f"No article retrieved for PMID {pmid}")
            return None

        return next((record for record in result.records if record.pmid == pmid), result.records[0])
