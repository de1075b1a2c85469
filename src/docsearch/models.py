from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class Pattern:
    text: str                 # query as matched (already case-folded if case-insensitive)
    failure: Tuple[int, ...]  # failure[i] = longest proper prefix that is also a suffix of text[:i+1]

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class Document:
    """One catalog entry. The catalog owns the text on disk; the core only reads it."""
    id: str
    title: str
    text_path: str                    # as recorded in the manifest (absolute or relative to catalog root)
    bytes: int = 0
    source_file_name: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Catalog:
    documents: List[Document]
    root: Path
    generated_at: Optional[str] = None


@dataclass(frozen=True)
class MatchSet:
    count: int
    positions: List[int] = field(default_factory=list)   # ascending, capped; count is not


@dataclass(frozen=True)
class Snippet:
    start: int
    end: int        # exclusive
    preview: str    # single line, whitespace collapsed

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end, "preview": self.preview}


@dataclass(frozen=True)
class SearchResult:
    id: str
    title: str
    count: int
    snippets: List[Snippet]
    source_file_name: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "sourceFileName": self.source_file_name,
            "count": self.count,
            "snippets": [s.to_dict() for s in self.snippets],
        }


@dataclass
class SearchResponse:
    """
    Everything one search produces. ``to_dict()`` is the wire shape used by
    the HTTP layer and the ``--json`` CLI output (camelCase keys).
    """
    query: str
    case_sensitive: bool
    total_docs: int
    matched_docs: int
    took_ms: float
    results: List[SearchResult]
    timed_out: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "caseSensitive": self.case_sensitive,
            "totalDocs": self.total_docs,
            "matchedDocs": self.matched_docs,
            "tookMs": self.took_ms,
            "timedOut": self.timed_out,
            "results": [r.to_dict() for r in self.results],
        }
