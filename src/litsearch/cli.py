#!/usr/bin/env python3
"""
Command-line entry point.

Without flags, starts the MCP server on standard streams. Logging goes to
stderr (and optionally a file) because stdout carries the protocol.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from litsearch import __version__
from litsearch.config import ConfigManager
from litsearch.server import run
from litsearch.tools import LiteratureTools

logger = logging.getLogger("litsearch")

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

DESCRIPTION = """\
🔬 PubMed / PMC literature search MCP server

Tools: search_pubmed, get_full_abstract, search_pmc_fulltext,
list_pubmed_searches, retrieve_pubmed_results, get_abstract_help
"""

EPILOG = """\
MCP client configuration:
{
  "mcpServers": {
    "pubmed": {
      "command": "litsearch",
      "args": []
    }
  }
}

Set NCBI_API_KEY to raise the request rate from 3 to 10 per second.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="litsearch",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"litsearch {__version__}",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="settings YAML file (default: $LITSEARCH_CONFIG or built-in defaults)",
    )
    return parser


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigManager(args.config)
        setup_logging(config.log_level, config.log_file)
        tools = LiteratureTools.from_config(config)
    except Exception as e:
        setup_logging()
        logger.error(f"Failed to start server: {e}")
        return 1

    try:
        run(tools)
    except KeyboardInterrupt:
        logger.info("Shutting down litsearch server")
    return 0


if __name__ == "__main__":
    sys.exit(main())
