"""
KMP document search.

Substring search over a static corpus of extracted plain-text documents.
Every occurrence (overlaps included) is counted with the Knuth-Morris-Pratt
algorithm, a few surrounding-text snippets are cut per document, and
documents are ranked by occurrence count.

Main entry points:
    Engine(data_dir).search(query, case_sensitive)  -> SearchResponse
    Engine(data_dir).health()                       -> dict
    Engine(data_dir).build(source_dir)              -> Catalog

Lower level:
    kmp.build_failure_table / kmp.search            one pattern, one text
    snippets.extract                                preview windows
    search.run                                      scan + rank a Catalog
"""

from .engine import Engine
from .errors import SearchError, EmptyQuery, CatalogUnavailable, DocumentUnreadable, IngestError
from .kmp import build_failure_table, compile_pattern
from .models import Catalog, Document, MatchSet, Pattern, SearchResponse, SearchResult, Snippet

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "SearchError", "EmptyQuery", "CatalogUnavailable", "DocumentUnreadable", "IngestError",
    "build_failure_table", "compile_pattern",
    "Catalog", "Document", "MatchSet", "Pattern", "SearchResponse", "SearchResult", "Snippet",
]
