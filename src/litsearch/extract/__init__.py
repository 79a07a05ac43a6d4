"""
Extract module - NCBI E-utilities interaction

Components for extracting data from the E-utilities API:
- RateLimiter: FIFO, process-wide request spacing
- PubMedAPIClient: ESearch, EFetch and ESummary through the rate limiter
- BatchFetcher: Sequential 200-id EFetch batches with a failure manifest
"""

from .api_client import PubMedAPIClient, SearchResult
from .batch_fetcher import BatchFailure, BatchFetcher, BatchFetchResult
from .rate_limiter import RateLimiter

__all__ = [
    "BatchFailure",
    "BatchFetcher",
    "BatchFetchResult",
    "PubMedAPIClient",
    "RateLimiter",
    "SearchResult",
]
