"""
Tool operations exposed to the protocol layer.

Every operation returns user-facing text. Invalid input, NCBI failures and
unexpected errors are all reported in the text payload instead of raised.
"""

import logging
from typing import Any, Callable, Optional

from litsearch.config import ConfigManager
from litsearch.errors import InvalidInputError, RemoteAccessError, StorageError
from litsearch.extract.api_client import PubMedAPIClient
from litsearch.extract.batch_fetcher import BatchFetcher
from litsearch.extract.rate_limiter import RateLimiter
from litsearch.load.search_store import SearchStore
from litsearch.pipeline import PMC, PUBMED, SearchPipeline
from litsearch.present.formatter import (
    format_full_abstract,
    format_search_history,
    format_search_results,
    format_stored_page,
)
from litsearch.validation import (
    DEFAULT_MAX_RESULTS,
    MAX_PMC_RESULTS,
    clamp_max_results,
    parse_page,
    parse_search_id,
)

logger = logging.getLogger(__name__)

STORAGE_UNAVAILABLE = (
    "📋 **Feature unavailable**: Search history storage is disabled. "
    "Set `storage.enabled: true` in your settings file, or use the search functions directly."
)

ABSTRACT_HELP = """
📋 **Help: How to Use get_full_abstract Function**

**✅ Both formats work:**
- `get_full_abstract("35504917")`   # String format (with quotes)
- `get_full_abstract(35504917)`     # Number format (without quotes)

**📈 Example PMIDs to try:**
- **35504917** - COVID-19 vaccine development review
- **38810186** - Medical AI and human values
- **36656942** - CRISPR technology (by Jennifer Doudna)
- **34465179** - Machine learning for healthcare
- **38301492** - AI-enhanced electrocardiography

**💡 Tips:**
1. PMIDs are usually 8 digits long
2. You can copy PMIDs directly from search results
3. Both `12345678` and `"12345678"` formats work
4. Function retrieves complete abstracts, MeSH terms, and keywords
5. Provides direct PubMed links for full articles

**🔍 What this function does:**
- Fetches complete abstracts (not truncated)
- Extracts MeSH terms and keywords
- Provides bibliographic information
- Generates direct PubMed links
- Works with any valid PMID"""


class LiteratureTools:

    def __init__(self, pipeline: SearchPipeline, store: Optional[SearchStore] = None):
        self.pipeline = pipeline
        self.store = store

    @classmethod
    def from_config(cls, config: ConfigManager) -> "LiteratureTools":
        """Wire one rate limiter, client, fetcher and (optional) store from settings."""
        rate_limiter = RateLimiter(min_interval=config.min_interval)
        client = PubMedAPIClient(
            rate_limiter=rate_limiter,
            base_url=config.base_url,
            email=config.pubmed_email,
            api_key=config.pubmed_api_key,
            tool=config.pubmed_tool,
            timeout=config.timeout
        )
        fetcher = BatchFetcher(client, batch_size=config.batch_size)
        store = SearchStore(config.storage_path) if config.storage_enabled else None

        logger.info(
            f"Tools ready: {rate_limiter!r}, batch size {config.batch_size}, "
            f"storage {'enabled' if store else 'disabled'}"
        )
        return cls(SearchPipeline(client, fetcher, store), store)

    def search_pubmed(self, query: Any, max_results: Any = DEFAULT_MAX_RESULTS) -> str:
        return self._guard("PubMed", lambda: format_search_results(
            self.pipeline.search(PUBMED, query, max_results)
        ))

    def search_pmc_fulltext(self, query: Any, max_results: Any = DEFAULT_MAX_RESULTS) -> str:
        return self._guard("PMC", lambda: format_search_results(
            self.pipeline.search(PMC, query, max_results)
        ))

    def get_full_abstract(self, pmid: Any) -> str:
        def action() -> str:
            record = self.pipeline.fetch_by_id(pmid)
            if record is None:
                return f"❌ No article found for PMID: {str(pmid).strip()}"
            return format_full_abstract(record)

        return self._guard("PubMed", action)

    def list_pubmed_searches(self) -> str:
        if self.store is None:
            return STORAGE_UNAVAILABLE
        return self._guard("Storage", lambda: format_search_history(self.store.list_searches()))

    def retrieve_pubmed_results(
        self,
        search_id: Any,
        page: Any = 1,
        results_per_page: Any = DEFAULT_MAX_RESULTS
    ) -> str:
        if self.store is None:
            return STORAGE_UNAVAILABLE

        def action() -> str:
            parsed_id = parse_search_id(search_id)
            stored = self.store.get_page(
                parsed_id,
                page=parse_page(page),
                per_page=clamp_max_results(results_per_page, MAX_PMC_RESULTS)
            )
            if stored is None:
                return f"❌ No stored search with ID {parsed_id}. Use list_pubmed_searches to see stored searches."
            return format_stored_page(stored)

        return self._guard("Storage", action)

    def get_abstract_help(self) -> str:
        return ABSTRACT_HELP

    def close(self) -> None:
        self.pipeline.client.close()

    def _guard(self, source: str, action: Callable[[], str]) -> str:
        try:
            return action()
        except InvalidInputError as e:
            return f"❌ {e}"
        except (RemoteAccessError, StorageError) as e:
            logger.error(f"{source} request failed: {e}")
            return f"❌ {source} Error: {e}"
        except Exception as e:
            logger.exception(f"Unexpected error during {source} tool call")
            return f"❌ An unexpected error occurred: {e}"
