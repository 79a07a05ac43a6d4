"""PubMed XML and ESummary normalization using pure functions (functional programming approach)."""

import logging
import re
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence

from lxml import etree

from litsearch.errors import RemoteAccessError
from litsearch.transform.models import (
    NO_ABSTRACT,
    NO_AUTHORS,
    NO_DATE,
    NO_JOURNAL,
    NO_PMID,
    NO_TITLE,
    ArticleRecord,
)

logger = logging.getLogger(__name__)

_DOI_PREFIX = re.compile(r'^(?:doi:\s*|https?://(?:dx\.)?doi\.org/)', re.IGNORECASE)
_PMCID = re.compile(r'PMC\d+', re.IGNORECASE)
_WHITESPACE = re.compile(r'\s+')


def parse_xml_batch(xml_string: str) -> List[ArticleRecord]:
    """
    Parse an EFetch PubmedArticleSet into normalized article records.

    Raises RemoteAccessError if the document is not well-formed XML.
    """
    if not xml_string or not xml_string.strip():
        raise RemoteAccessError("Failed to parse XML: empty response")

    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml_string.encode('utf-8'), parser)
    except etree.XMLSyntaxError as e:
        raise RemoteAccessError(f"Failed to parse XML: {e}") from e

    return [normalize_article(article) for article in root.iter('PubmedArticle')]


def parse_summary_result(result: Mapping, uids: Sequence[str], full_text: bool = False) -> List[ArticleRecord]:
    """
    Normalize an ESummary 'result' mapping, keeping the order of uids.

    With full_text=True every document is a PMC article: it gets the
    full-text flag and a PMCID built from its uid.
    """
    records = []
    for uid in uids:
        doc = result.get(str(uid))
        if not isinstance(doc, Mapping) or doc.get('error'):
            logger.warning(f"No summary returned for uid {uid}")
            continue

        if full_text:
            doc = {**doc, 'is_pmc': True, 'pmcid': f"PMC{uid}"}
        records.append(normalize_summary(doc))

    return records


def normalize(raw: Any) -> ArticleRecord:
    """Normalize either an EFetch <PubmedArticle> element or an ESummary document."""
    if isinstance(raw, Mapping):
        return normalize_summary(raw)
    if etree.iselement(raw):
        return normalize_article(raw)
    raise TypeError(f"Unsupported raw record type: {type(raw).__name__}")


def normalize_article(article: etree._Element) -> ArticleRecord:
    """Map one <PubmedArticle> element to an ArticleRecord. Never raises on missing fields."""
    citation = _find(article, 'MedlineCitation')
    art = _find(citation, 'Article')
    article_ids = _article_ids(article)

    return _build_record(
        pmid=_first_text(_get_text(citation, 'PMID'), article_ids.get('pubmed')),
        pmcid=article_ids.get('pmc'),
        title=_first_text(_get_text(art, 'ArticleTitle'), _get_text(art, 'VernacularTitle')),
        authors=_xml_authors(art),
        journal=_first_text(
            _get_text(art, 'Journal/Title'),
            _get_text(art, 'Journal/ISOAbbreviation'),
            _get_text(citation, 'MedlineJournalInfo/MedlineTA'),
        ),
        pub_date=_xml_pub_date(_find(art, 'Journal/JournalIssue/PubDate')),
        doi=article_ids.get('doi'),
        abstract=_xml_abstract(art),
        keywords=_findall(citation, 'KeywordList/Keyword'),
        mesh_terms=_findall(citation, 'MeshHeadingList/MeshHeading/DescriptorName'),
    )


def normalize_summary(doc: Mapping) -> ArticleRecord:
    """Map one ESummary JSON document to an ArticleRecord. Never raises on missing fields."""
    article_ids = _summary_ids(doc.get('articleids'))

    pmid = article_ids.get('pmid')
    if pmid == '0':
        pmid = None
    # A PMC uid is not a PubMed id
    if not pmid and not doc.get('is_pmc'):
        pmid = _as_str(doc.get('uid'))

    elocation = _as_str(doc.get('elocationid'))
    if elocation and not _DOI_PREFIX.match(elocation):
        elocation = None

    return _build_record(
        pmid=pmid,
        pmcid=_first_text(_as_str(doc.get('pmcid')), article_ids.get('pmcid'), article_ids.get('pmc')),
        title=_as_str(doc.get('title')),
        authors=_join([_summary_author(entry) for entry in _as_list(doc.get('authors'))]),
        journal=_first_text(_as_str(doc.get('fulljournalname')), _as_str(doc.get('source'))),
        pub_date=_first_text(_as_str(doc.get('pubdate')), _as_str(doc.get('epubdate'))),
        doi=_first_text(article_ids.get('doi'), elocation),
        abstract=_as_str(doc.get('abstract')),
        keywords=_as_list(doc.get('keywords')),
        mesh_terms=_as_list(doc.get('mesh_terms')),
        full_text_flag=bool(doc.get('is_pmc') or doc.get('pmc_available')),
        open_access_flag=bool(doc.get('is_open_access')),
    )


def _build_record(
    pmid: Optional[str],
    pmcid: Optional[str],
    title: Optional[str],
    authors: Optional[str],
    journal: Optional[str],
    pub_date: Optional[str],
    doi: Optional[str],
    abstract: Optional[str],
    keywords: Iterable[Any],
    mesh_terms: Iterable[Any],
    full_text_flag: bool = False,
    open_access_flag: bool = False
) -> ArticleRecord:
    pmcid = _normalize_pmcid(pmcid)
    has_full_text = bool(pmcid) or full_text_flag

    return ArticleRecord(
        pmid=pmid or NO_PMID,
        pmcid=pmcid,
        title=title or NO_TITLE,
        authors=authors or NO_AUTHORS,
        journal=journal or NO_JOURNAL,
        pub_date=pub_date or NO_DATE,
        doi=_strip_doi(doi),
        abstract=abstract or NO_ABSTRACT,
        keywords=_join([_term_text(entry) for entry in keywords]),
        mesh_terms=_join([_term_text(entry) for entry in mesh_terms]),
        has_full_text=has_full_text,
        is_open_access=has_full_text or open_access_flag,
    )


# XML extraction

def _article_ids(article: Optional[etree._Element]) -> dict:
    """First value per IdType from PubmedData/ArticleIdList (reference lists excluded)."""
    ids = {}
    for article_id in _findall(article, 'PubmedData/ArticleIdList/ArticleId'):
        id_type = (article_id.get('IdType') or '').lower()
        value = _text(article_id)
        if id_type and value and id_type not in ids:
            ids[id_type] = value
    return ids


def _xml_abstract(art: Optional[etree._Element]) -> Optional[str]:
    parts = []
    for fragment in _findall(art, 'Abstract/AbstractText'):
        text = _text(fragment)
        if not text:
            continue
        label = (fragment.get('Label') or '').strip()
        parts.append(f"{label}: {text}" if label else text)
    return ' '.join(parts) or None


def _xml_authors(art: Optional[etree._Element]) -> Optional[str]:
    names = []
    for author in _findall(art, 'AuthorList/Author'):
        last_name = _get_text(author, 'LastName')
        fore_name = _get_text(author, 'ForeName')
        if last_name and fore_name:
            names.append(f"{fore_name} {last_name}")
        elif last_name:
            names.append(last_name)
    return _join(names)


def _xml_pub_date(pub_date: Optional[etree._Element]) -> Optional[str]:
    parts = [_get_text(pub_date, tag) for tag in ('Year', 'Month', 'Day')]
    return ' '.join(part for part in parts if part) or _get_text(pub_date, 'MedlineDate')


# ESummary extraction

def _summary_ids(entries: Any) -> dict:
    ids = {}
    for entry in _as_list(entries):
        if not isinstance(entry, Mapping):
            continue
        id_type = (_as_str(entry.get('idtype')) or '').lower()
        value = _as_str(entry.get('value'))
        if id_type and value and id_type not in ids:
            ids[id_type] = value
    return ids


def _summary_author(entry: Any) -> Optional[str]:
    if isinstance(entry, Mapping):
        return _as_str(entry.get('name'))
    return _as_str(entry)


# Helper functions

def _find(element: Optional[etree._Element], xpath: str) -> Optional[etree._Element]:
    return element.find(xpath) if element is not None else None


def _findall(element: Optional[etree._Element], xpath: str) -> list:
    return element.findall(xpath) if element is not None else []


def _text(element: Optional[etree._Element]) -> Optional[str]:
    """Full text content of an element, inline markup flattened and whitespace collapsed."""
    if element is None:
        return None
    text = _WHITESPACE.sub(' ', ''.join(element.itertext())).strip()
    return text or None


def _get_text(element: Optional[etree._Element], xpath: str) -> Optional[str]:
    """Safely extract text content from element via XPath."""
    return _text(_find(element, xpath))


def _first_text(*values: Optional[str]) -> Optional[str]:
    return next((value for value in values if value), None)


def _term_text(entry: Any) -> Optional[str]:
    """Keyword/MeSH entry as text: element, plain string, or {'text'|'_': ...} mapping."""
    if etree.iselement(entry):
        return _text(entry)
    if isinstance(entry, Mapping):
        return _first_text(_as_str(entry.get('text')), _as_str(entry.get('_')))
    return _as_str(entry)


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _join(values: Iterable[Optional[str]]) -> str:
    return ', '.join(value for value in values if value)


def _strip_doi(doi: Optional[str]) -> str:
    if not doi:
        return ''
    return _DOI_PREFIX.sub('', doi.strip()).strip()


def _normalize_pmcid(value: Optional[str]) -> str:
    """'PMC123', 'pmc-id: PMC123;' and '123' all become 'PMC123'."""
    if not value:
        return ''
    match = _PMCID.search(value)
    if match:
        return match.group(0).upper()
    value = value.strip()
    return f"PMC{value}" if value.isdigit() else value
