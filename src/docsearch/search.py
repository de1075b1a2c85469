from __future__ import annotations
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

from . import config as CFG
from .catalog import read_text as catalog_read_text
from .errors import DocumentUnreadable, EmptyQuery
from .kmp import compile_pattern, search_pattern
from .models import Catalog, Document, Pattern, SearchResponse, SearchResult
from .normalize import fold_case
from .snippets import extract

log = logging.getLogger(__name__)

TextReader = Callable[[Document], str]

def scan_document(doc: Document,
                  text: str,
                  pattern: Pattern,
                  *,
                  case_sensitive: bool,
                  max_positions: int = CFG.MAX_POSITIONS,
                  radius: int = CFG.SNIPPET_RADIUS,
                  limit: int = CFG.SNIPPET_LIMIT) -> Optional[SearchResult]:
    """
    Match one document's text against the pattern.
    Returns None when the pattern does not occur. Snippets are cut from the
    original text; only the comparison copy is case-folded.
    """
    haystack = text if case_sensitive else fold_case(text)
    matches = search_pattern(haystack, pattern, max_positions=max_positions)
    if matches.count == 0:
        return None
    return SearchResult(
        id=doc.id,
        title=doc.title,
        count=matches.count,
        snippets=extract(text, matches.positions, len(pattern), radius=radius, limit=limit),
        source_file_name=doc.source_file_name,
    )

def validate_limits(max_positions: int, radius: int, limit: int) -> None:
    """Reject negative knobs up front instead of failing midway through a scan."""
    for name, value in (("max_positions", max_positions), ("radius", radius), ("limit", limit)):
        if value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}")

def rank(results: List[SearchResult]) -> List[SearchResult]:
    """Descending count; list.sort is stable, so ties keep catalog order."""
    return sorted(results, key=lambda r: r.count, reverse=True)

def run(catalog: Catalog,
        query: str,
        case_sensitive: bool = False,
        max_positions: int = CFG.MAX_POSITIONS,
        *,
        radius: int = CFG.SNIPPET_RADIUS,
        limit: int = CFG.SNIPPET_LIMIT,
        read_text: Optional[TextReader] = None,
        workers: int = CFG.SEARCH_WORKERS,
        timeout: Optional[float] = CFG.SEARCH_TIMEOUT,
        cancel: Optional[threading.Event] = None) -> SearchResponse:
    """
    Search every catalog document for ``query`` and rank the matches.

    A document whose text cannot be loaded is skipped (it still counts in
    totalDocs). With ``workers > 1`` documents are scanned on a thread pool;
    the outcome is the same as a sequential scan. ``timeout``/``cancel`` stop
    new document loads; the partial response is flagged ``timed_out``.
    """
    t0 = time.perf_counter()
    validate_limits(max_positions, radius, limit)

    query = (query or "").strip()
    if not query:
        raise EmptyQuery()

    pattern = compile_pattern(query if case_sensitive else fold_case(query))
    reader: TextReader = read_text or (lambda doc: catalog_read_text(catalog, doc))
    deadline = t0 + timeout if timeout is not None else None

    def stop_requested() -> bool:
        if cancel is not None and cancel.is_set():
            return True
        return deadline is not None and time.perf_counter() >= deadline

    # (scanned, result); scanned=False means the load was never issued
    def scan_one(doc: Document) -> Tuple[bool, Optional[SearchResult]]:
        if stop_requested():
            return False, None
        try:
            text = reader(doc)
        except (DocumentUnreadable, OSError) as exc:
            log.warning("Skipping document %s: %s", doc.id, exc)
            return True, None
        return True, scan_document(
            doc, text, pattern,
            case_sensitive=case_sensitive, max_positions=max_positions,
            radius=radius, limit=limit,
        )

    outcomes: List[Tuple[bool, Optional[SearchResult]]] = []
    if workers > 1 and len(catalog.documents) > 1:
        with ThreadPoolExecutor(max_workers=workers) as ex:
            outcomes = list(ex.map(scan_one, catalog.documents))
    else:
        for doc in catalog.documents:
            outcome = scan_one(doc)
            outcomes.append(outcome)
            if not outcome[0]:
                break

    timed_out = any(not scanned for scanned, _ in outcomes)
    results = rank([r for _, r in outcomes if r is not None])

    took_ms = round((time.perf_counter() - t0) * 1000, 2)
    if timed_out:
        log.warning("Search %r stopped early after %.2f ms", query, took_ms)
    log.info("Search %r: %d/%d documents matched in %.2f ms",
             query, len(results), len(catalog.documents), took_ms)

    return SearchResponse(
        query=query,
        case_sensitive=case_sensitive,
        total_docs=len(catalog.documents),
        matched_docs=len(results),
        took_ms=took_ms,
        results=results,
        timed_out=timed_out,
    )
