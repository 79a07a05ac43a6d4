"""Sequential EFetch batching with per-batch failure tolerance."""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from litsearch.errors import RemoteAccessError
from litsearch.extract.api_client import PubMedAPIClient
from litsearch.transform.models import ArticleRecord
from litsearch.transform.xml_parser import parse_xml_batch

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 200


@dataclass(frozen=True)
class BatchFailure:
    pmids: tuple
    message: str


@dataclass
class BatchFetchResult:
    records: List[ArticleRecord] = field(default_factory=list)
    failures: List[BatchFailure] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failures)


class BatchFetcher:
    """
    Fetches PMIDs in contiguous batches, one batch at a time.

    A batch that fails to fetch or parse is recorded in the result's
    failures and the remaining batches are still processed.
    """

    def __init__(
        self,
        client: PubMedAPIClient,
        batch_size: int = DEFAULT_BATCH_SIZE,
        parser: Callable[[str], List[ArticleRecord]] = parse_xml_batch
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.client = client
        self.batch_size = batch_size
        self.parser = parser

    def fetch_all(self, pmids: Sequence[str]) -> BatchFetchResult:
        result = BatchFetchResult()
        if not pmids:
            return result

        total_batches = (len(pmids) + self.batch_size - 1) // self.batch_size

        for start in range(0, len(pmids), self.batch_size):
            batch = list(pmids[start:start + self.batch_size])
            batch_num = (start // self.batch_size) + 1

            try:
                xml_data = self.client.fetch_by_pmids(batch)
                records = self.parser(xml_data)
            except RemoteAccessError as e:
                result.failures.append(BatchFailure(pmids=tuple(batch), message=str(e)))
                logger.error(
                    f"Failed batch {batch_num}/{total_batches} "
                    f"({len(batch)} PMIDs, first: {', '.join(str(pmid) for pmid in batch[:5])}): {e}"
                )
                continue

            logger.info(f"Batch {batch_num}/{total_batches}: parsed {len(records)} articles")
            result.records.extend(records)

        if result.failures:
            logger.warning(
                f"Failed to fetch {result.failure_count} batch(es) out of {total_batches} total. "
                f"{len(result.records)} articles successfully retrieved."
            )

        return result
