"""
MCP server exposing the literature tools over standard streams.

Run with: litsearch
Or: python -m litsearch
"""

import logging
from typing import Optional, Union

from fastmcp import FastMCP

from litsearch.tools import LiteratureTools

logger = logging.getLogger(__name__)

SERVER_NAME = "litsearch"

INSTRUCTIONS = """
Search PubMed and PubMed Central (PMC) through NCBI E-utilities.
Use search_pubmed for bibliographic search with abstracts, search_pmc_fulltext
for open access full-text articles and get_full_abstract for one complete
abstract by PMID. Requests are rate limited to NCBI policy automatically.
"""


def build_server(tools: LiteratureTools) -> FastMCP:
    mcp = FastMCP(name=SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool(description="Enhanced PubMed search with complete abstract retrieval and PMC integration")
    def search_pubmed(query: str, max_results: Optional[Union[int, float, str]] = 10) -> str:
        """
        query: PubMed search query (e.g. 'CRISPR[Title]', 'sepsis AND 2023[dp]').
        max_results: maximum number of results (default 10, max 500).
        """
        return tools.search_pubmed(query, max_results)

    @mcp.tool(description="Get the complete abstract for a specific PMID")
    def get_full_abstract(pmid: Union[int, float, str]) -> str:
        """pmid: PubMed ID of the article, as a number or a string."""
        return tools.get_full_abstract(pmid)

    @mcp.tool(description="Search PubMed Central (PMC) for full-text open access articles")
    def search_pmc_fulltext(query: str, max_results: Optional[Union[int, float, str]] = 10) -> str:
        """
        query: search query for full-text search.
        max_results: maximum number of results (default 10, max 50).
        """
        return tools.search_pmc_fulltext(query, max_results)

    @mcp.tool(description="Retrieve previously stored PubMed search results with pagination")
    def retrieve_pubmed_results(
        search_id: Union[int, float, str],
        page: Optional[Union[int, float, str]] = 1,
        results_per_page: Optional[Union[int, float, str]] = 10
    ) -> str:
        """
        search_id: ID of the stored search to retrieve.
        page: page number to retrieve (starts at 1).
        results_per_page: number of results per page (default 10, max 50).
        """
        return tools.retrieve_pubmed_results(search_id, page, results_per_page)

    @mcp.tool(description="List all previously stored PubMed and PMC searches")
    def list_pubmed_searches() -> str:
        return tools.list_pubmed_searches()

    @mcp.tool(description="Get help and examples for using the get_full_abstract function")
    def get_abstract_help() -> str:
        return tools.get_abstract_help()

    return mcp


def run(tools: LiteratureTools) -> None:
    """Serve on stdio until the client disconnects."""
    server = build_server(tools)
    logger.info(f"Starting {SERVER_NAME} MCP server on stdio")
    try:
        server.run(transport="stdio")
    finally:
        tools.close()
        logger.info("Server stopped")
