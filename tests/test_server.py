"""Tests that the MCP server registers every tool operation."""

import asyncio

from fastmcp import Client

from litsearch.extract.batch_fetcher import BatchFetcher
from litsearch.pipeline import SearchPipeline
from litsearch.server import build_server
from litsearch.tools import LiteratureTools

EXPECTED_TOOLS = {
    "search_pubmed",
    "get_full_abstract",
    "search_pmc_fulltext",
    "retrieve_pubmed_results",
    "list_pubmed_searches",
    "get_abstract_help",
}


def test_server_lists_all_tools(fake_client):
    client = fake_client()
    server = build_server(LiteratureTools(SearchPipeline(client, BatchFetcher(client))))

    async def list_tool_names():
        async with Client(server) as mcp_client:
            return {tool.name for tool in await mcp_client.list_tools()}

    assert asyncio.run(list_tool_names()) == EXPECTED_TOOLS
    assert client.remote_calls == 0


def call_tool(server, name, arguments):
    async def call():
        async with Client(server) as mcp_client:
            return await mcp_client.call_tool_mcp(name, arguments)

    return asyncio.run(call())


def test_float_arguments_reach_the_tools(fake_client):
    client = fake_client(count=8, ids=[str(n) for n in range(1, 9)])
    server = build_server(LiteratureTools(SearchPipeline(client, BatchFetcher(client))))

    result = call_tool(server, "search_pubmed", {"query": "q", "max_results": 5.5})

    assert result.isError is False
    assert "Showing first 5 results" in result.content[0].text
    assert client.search_calls == [("pubmed", "q", 5)]

    history = call_tool(server, "retrieve_pubmed_results", {"search_id": 1, "page": 1.5, "results_per_page": 2.0})
    assert history.isError is False


def test_invalid_pmid_is_reported_as_text(fake_client):
    client = fake_client()
    server = build_server(LiteratureTools(SearchPipeline(client, BatchFetcher(client))))

    result = call_tool(server, "get_full_abstract", {"pmid": "abc"})

    assert result.isError is False
    assert result.content[0].text == "❌ Invalid PMID format: abc. PMID should be a number."
    assert client.remote_calls == 0
