from .models import ArticleRecord
from .xml_parser import normalize, normalize_article, normalize_summary, parse_summary_result, parse_xml_batch

__all__ = [
    "ArticleRecord",
    "normalize",
    "normalize_article",
    "normalize_summary",
    "parse_summary_result",
    "parse_xml_batch",
]
