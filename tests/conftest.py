"""Shared fixtures: XML fixture loading and a stub E-utilities client."""

from pathlib import Path

import pytest

from litsearch.errors import RemoteAccessError
from litsearch.extract.api_client import SearchResult

DATA_DIR = Path(__file__).parent / "data"


def make_article_xml(pmid, pmcid=None, abstract="Abstract text."):
    article_ids = f'<ArticleId IdType="pubmed">{pmid}</ArticleId>'
    if pmcid:
        article_ids += f'<ArticleId IdType="pmc">{pmcid}</ArticleId>'

    return f"""
    <PubmedArticle>
      <MedlineCitation>
        <PMID>{pmid}</PMID>
        <Article>
          <Journal>
            <JournalIssue><PubDate><Year>2024</Year></PubDate></JournalIssue>
            <Title>Journal {pmid}</Title>
          </Journal>
          <ArticleTitle>Article {pmid}</ArticleTitle>
          <Abstract><AbstractText>{abstract}</AbstractText></Abstract>
          <AuthorList>
            <Author><LastName>Smith</LastName><ForeName>Ann</ForeName></Author>
          </AuthorList>
        </Article>
      </MedlineCitation>
      <PubmedData><ArticleIdList>{article_ids}</ArticleIdList></PubmedData>
    </PubmedArticle>"""


def make_efetch_xml(pmids, full_text_pmids=()):
    articles = "".join(
        make_article_xml(pmid, pmcid=f"PMC9{pmid}" if pmid in full_text_pmids else None)
        for pmid in pmids
    )
    return f'<?xml version="1.0" ?><PubmedArticleSet>{articles}</PubmedArticleSet>'


class FakeClient:
    """Stands in for PubMedAPIClient and records every remote call."""

    def __init__(self, count=0, ids=(), fail_batches=(), full_text_pmids=(), summaries=None):
        self.count = count
        self.ids = [str(uid) for uid in ids]
        self.fail_batches = set(fail_batches)
        self.full_text_pmids = set(full_text_pmids)
        self.summaries = summaries or {}
        self.search_calls = []
        self.fetch_calls = []
        self.summary_calls = []
        self.closed = False

    @property
    def remote_calls(self):
        return len(self.search_calls) + len(self.fetch_calls) + len(self.summary_calls)

    def search(self, database, term, retmax):
        self.search_calls.append((database, term, retmax))
        return SearchResult(count=self.count, ids=self.ids[:retmax])

    def fetch_by_pmids(self, pmids):
        self.fetch_calls.append(list(pmids))
        if len(self.fetch_calls) in self.fail_batches:
            raise RemoteAccessError("API request failed with status 502", status_code=502)
        return make_efetch_xml(pmids, self.full_text_pmids)

    def summary(self, database, ids):
        self.summary_calls.append((database, list(ids)))
        return self.summaries

    def close(self):
        self.closed = True


@pytest.fixture
def sample_xml():
    with open(DATA_DIR / "pubmed_sample.xml", "r") as f:
        return f.read()


@pytest.fixture
def fake_client():
    """Factory: fake_client(count=..., ids=..., fail_batches=..., ...)."""
    return FakeClient


@pytest.fixture
def efetch_xml():
    return make_efetch_xml
