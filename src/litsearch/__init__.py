"""
litsearch - PubMed and PMC literature search tools

Rate-limited access to NCBI E-utilities, batch fetching of article
metadata and normalization into display-ready article records.
"""

__version__ = "1.0.3"
