"""PubMed API client for ESearch/EFetch/ESummary behind a shared rate limiter."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import requests

from litsearch import __version__
from litsearch.errors import RemoteAccessError
from litsearch.extract.rate_limiter import RateLimiter


@dataclass
class SearchResult:
    count: int
    ids: list[str] = field(default_factory=list)


class PubMedAPIClient:
    """NCBI E-utilities client. Every request goes through the injected RateLimiter."""

    BASE_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/"
    USER_AGENT = f"litsearch/{__version__}"

    def __init__(
        self,
        rate_limiter: RateLimiter,
        base_url: str = BASE_URL,
        email: Optional[str] = None,
        api_key: Optional[str] = None,
        tool: str = "litsearch",
        timeout: float = 30
    ):
        self.rate_limiter = rate_limiter
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.email = email
        self.api_key = api_key
        self.tool = tool
        self.timeout = timeout

        self.session = requests.Session()
        self.logger = logging.getLogger(__name__)

        self.session.headers.update({"User-Agent": self.USER_AGENT})

    def request(self, endpoint: str, params: dict) -> str:
        """Issue one rate-limited GET and return the raw response body."""
        return self._get(endpoint, params).text

    def request_json(self, endpoint: str, params: dict) -> Any:
        response = self._get(endpoint, params)
        try:
            return response.json()
        except ValueError as e:
            raise RemoteAccessError(f"Failed to parse JSON response from {endpoint}: {e}") from e

    def search(self, database: str, term: str, retmax: int) -> SearchResult:
        params = {
            "db": database,
            "term": term,
            "retmax": retmax,
            "retmode": "json",
            "sort": "relevance",
        }

        self.logger.info(f"Executing ESearch on {database}: {term}")
        data = self.request_json("esearch.fcgi", params)

        result_data = data.get("esearchresult") if isinstance(data, dict) else None
        if not isinstance(result_data, dict):
            self.logger.warning(f"ESearch response without esearchresult for: {term}")
            return SearchResult(count=0)

        try:
            count = int(result_data.get("count") or 0)
        except (TypeError, ValueError):
            count = 0

        ids = [str(uid) for uid in result_data.get("idlist") or []]
        self.logger.info(f"ESearch found {count} total results ({len(ids)} ids returned)")
        return SearchResult(count=count, ids=ids)

    def fetch_by_pmids(self, pmids: Sequence[str]) -> str:
        params = {
            "db": "pubmed",
            "id": ",".join(str(pmid) for pmid in pmids),
            "retmode": "xml",
            "rettype": "abstract",
        }

        self.logger.info(f"Fetching {len(pmids)} PMIDs directly")
        return self.request("efetch.fcgi", params)

    def summary(self, database: str, ids: Sequence[str]) -> dict:
        """ESummary lookup. Returns the 'result' mapping keyed by uid."""
        params = {
            "db": database,
            "id": ",".join(str(uid) for uid in ids),
            "retmode": "json",
        }

        self.logger.info(f"Fetching {len(ids)} {database} summaries")
        data = self.request_json("esummary.fcgi", params)
        result = data.get("result") if isinstance(data, dict) else None
        return result if isinstance(result, dict) else {}

    def _build_params(self, params: dict) -> dict:
        built = dict(params)
        if self.tool:
            built["tool"] = self.tool
        if self.email:
            built["email"] = self.email
        if self.api_key:
            built["api_key"] = self.api_key
        return built

    def _get(self, endpoint: str, params: dict) -> requests.Response:
        """Rate limit, GET, and translate every transport failure into RemoteAccessError."""
        url = f"{self.base_url}{endpoint}"
        self.rate_limiter.acquire()

        try:
            response = self.session.get(url, params=self._build_params(params), timeout=self.timeout)
            response.raise_for_status()
            return response

        except requests.exceptions.Timeout as e:
            self.logger.warning(f"Request to {endpoint} timed out after {self.timeout}s")
            raise RemoteAccessError("Request timed out. Please try again.") from e

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            self.logger.warning(f"Request to {endpoint} failed with HTTP {status}")
            raise RemoteAccessError(f"API request failed with status {status}", status_code=status) from e

        except requests.exceptions.RequestException as e:
            self.logger.warning(f"Request to {endpoint} failed: {e}")
            raise RemoteAccessError(f"Failed to fetch data from NCBI: {e}") from e

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"PubMedAPIClient(base_url={self.base_url}, {self.rate_limiter!r})"
