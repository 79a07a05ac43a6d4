"""Text rendering of article records and search results."""

from typing import Sequence

from litsearch.load.search_store import SearchSummary, StoredPage
from litsearch.pipeline import PMC, SearchOutcome
from litsearch.transform.models import ArticleRecord

ABSTRACT_DISPLAY_LIMIT = 800
ELLIPSIS = "..."

PUBMED_DISCLAIMER = (
    "\n📋 **Disclaimer:** These results are for informational purposes only and should not be "
    "considered medical advice. Consult a healthcare professional for medical concerns."
)
PMC_NOTE = (
    "\n📖 **Note:** These are open access articles with full text available in PMC. "
    "Click the PMC links to access complete articles."
)


def truncate_abstract(abstract: str, limit: int = ABSTRACT_DISPLAY_LIMIT) -> str:
    if len(abstract) <= limit:
        return abstract
    return abstract[:limit] + ELLIPSIS


def format_article(record: ArticleRecord) -> str:
    """One search hit: bibliographic lines, truncated abstract, access and link lines."""
    id_line = f"**PMID:** {record.pmid}"
    if record.pmcid:
        id_line += f" | **PMCID:** {record.pmcid}"
    if record.doi:
        id_line += f" | **DOI:** {record.doi}"

    lines = [
        "",
        f"**Title:** {record.title}",
        f"**Authors:** {record.authors}",
        f"**Journal:** {record.journal} ({record.pub_date})",
        id_line,
        f"**Abstract:** {truncate_abstract(record.abstract)}",
    ]

    if record.has_full_text:
        if record.pmcid:
            lines.append(f"🔓 **Full Text Available:** {record.pmc_url}")
        else:
            lines.append("🔓 **Full Text Available in PMC**")
    if record.is_open_access:
        lines.append("✅ **Open Access**")

    if record.pubmed_url:
        lines.append(f"**PubMed Link:** {record.pubmed_url}")

    if record.keywords:
        lines.append(f"**Keywords:** {record.keywords}")
    if record.mesh_terms:
        lines.append(f"**MeSH Terms:** {record.mesh_terms}")

    lines.append("---")
    return "\n".join(lines)


def format_search_results(outcome: SearchOutcome) -> str:
    """Header with counts, every article, then the database-specific footer."""
    is_pmc = outcome.database == PMC
    query = outcome.query

    if outcome.total_count == 0:
        if is_pmc:
            return f"🔍 No full-text articles found in PMC for query: **{query}**"
        return f"🔍 No results found for query: **{query}**"

    if not outcome.records:
        return f"❌ No article details could be retrieved for query: **{query}**"

    total = outcome.total_count
    shown = len(outcome.records)

    if is_pmc:
        header = f"📖 **PMC Full-Text Search - Found {total:,} result{_plural(total)} for:** *{query}*\n"
    else:
        header = f"🔬 **PubMed Search - Found {total:,} result{_plural(total)} for:** *{query}*\n"

    if total > shown:
        header += f"📄 **Showing first {shown} result{_plural(shown)}**\n"

    if is_pmc:
        header += "🔓 **All results have full text available**\n"
    else:
        open_access = sum(1 for record in outcome.records if record.is_open_access)
        if open_access:
            header += (
                f"🔓 **{open_access} open access article{_plural(open_access)} "
                f"with full text in PMC**\n"
            )

    if outcome.failure_count:
        header += (
            f"⚠️ **{outcome.failure_count} batch{'es' if outcome.failure_count != 1 else ''} "
            f"could not be retrieved; results are incomplete**\n"
        )

    if outcome.search_id is not None:
        header += f"💾 **Stored as search #{outcome.search_id}**\n"

    articles = "\n".join(format_article(record) for record in outcome.records)
    return header + "\n" + articles + (PMC_NOTE if is_pmc else PUBMED_DISCLAIMER)


def format_full_abstract(record: ArticleRecord) -> str:
    """Single-article view with the complete, untruncated abstract."""
    lines = [
        "",
        f"**📄 Complete Abstract for PMID: {record.pmid}**",
        "",
        f"**Title:** {record.title}",
        f"**Authors:** {record.authors}",
        f"**Journal:** {record.journal} ({record.pub_date})",
    ]
    if record.doi:
        lines.append(f"**DOI:** {record.doi}")

    lines += [
        "",
        "**Abstract:**",
        record.abstract,
        "",
    ]

    if record.pubmed_url:
        lines.append(f"**PubMed Link:** {record.pubmed_url}")

    if record.has_full_text and record.pmcid:
        lines.append(f"🔓 **Full Text Available:** {record.pmc_url}")
    if record.keywords:
        lines.append(f"**Keywords:** {record.keywords}")
    if record.mesh_terms:
        lines.append(f"**MeSH Terms:** {record.mesh_terms}")

    return "\n".join(lines)


def format_search_history(searches: Sequence[SearchSummary]) -> str:
    if not searches:
        return "📚 No stored searches yet. Run search_pubmed or search_pmc_fulltext first."

    lines = [f"📚 **Stored Searches ({len(searches)})**", ""]
    for search in searches:
        lines.append(
            f"- **#{search.search_id}** [{search.database}] *{search.query}* | "
            f"{search.total_count:,} found, {search.result_count} stored | {search.search_date[:19]}"
        )
    return "\n".join(lines)


def format_stored_page(page: StoredPage) -> str:
    search = page.search
    header = (
        f"📄 **Stored search #{search.search_id}:** *{search.query}* ({search.database})\n"
        f"**Page {page.page} of {page.total_pages}** ({search.result_count} stored results)\n"
    )

    if not page.records:
        return header + f"\nNo results on page {page.page}. Valid pages: 1-{page.total_pages}."

    return header + "\n" + "\n".join(format_article(record) for record in page.records)


def _plural(count: int) -> str:
    return "" if count == 1 else "s"
