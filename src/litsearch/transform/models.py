"""Canonical article record shared by the normalizer, presenter and store."""

from dataclasses import asdict, dataclass

NO_PMID = "No PMID"
NO_TITLE = "No title available"
NO_AUTHORS = "No authors listed"
NO_JOURNAL = "Unknown journal"
NO_DATE = "No date available"
NO_ABSTRACT = "No abstract available"


@dataclass(frozen=True)
class ArticleRecord:
    pmid: str = NO_PMID
    pmcid: str = ""
    title: str = NO_TITLE
    authors: str = NO_AUTHORS
    journal: str = NO_JOURNAL
    pub_date: str = NO_DATE
    doi: str = ""
    abstract: str = NO_ABSTRACT
    keywords: str = ""
    mesh_terms: str = ""
    has_full_text: bool = False
    # A PMC copy counts as open access; license terms are not checked
    is_open_access: bool = False

    @property
    def pubmed_url(self) -> str:
        return f"https://pubmed.ncbi.nlm.nih.gov/{self.pmid}/" if self.pmid != NO_PMID else ""

    @property
    def pmc_url(self) -> str:
        return f"https://www.ncbi.nlm.nih.gov/pmc/articles/{self.pmcid}/" if self.pmcid else ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ArticleRecord":
        known = {key: value for key, value in data.items() if key in cls.__dataclass_fields__}
        return cls(**known)
