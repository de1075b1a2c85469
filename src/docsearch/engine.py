# docsearch/engine.py
from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Optional

from . import config as CFG
from .catalog import health, load_catalog
from .ingest import build_dataset
from .models import Catalog, SearchResponse
from .search import run, validate_limits

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that binds a data directory to:
      - the dataset builder (ingest.build_dataset),
      - the manifest reader (catalog.load_catalog / catalog.health),
      - the scan + rank pipeline (search.run).

    Public API (used by CLI/Flask):
      * build(source_dir): extract texts and write the manifest
      * search(query, case_sensitive): one search, manifest re-read every call
      * health(): catalog status without scanning any text
      * shutdown(): release resources

    No catalog is held between calls, so a rebuilt dataset is picked up by
    the next request and concurrent requests share no mutable state.
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        data_dir: Optional[str | os.PathLike] = None,
        *,
        radius: int = CFG.SNIPPET_RADIUS,
        limit: int = CFG.SNIPPET_LIMIT,
        max_positions: int = CFG.MAX_POSITIONS,
        workers: int = CFG.SEARCH_WORKERS,
        timeout: Optional[float] = CFG.SEARCH_TIMEOUT,
    ) -> None:
        validate_limits(max_positions, radius, limit)
        self.data_dir = Path(data_dir) if data_dir is not None else CFG.DATA_DIR
        self.radius = radius
        self.limit = limit
        self.max_positions = max_positions
        self.workers = max(1, int(workers))
        self.timeout = timeout

    @property
    def manifest_path(self) -> Path:
        return self.data_dir / CFG.MANIFEST_NAME

    # /* ~~~ Extract source files into texts + manifest ~~~ */
    def build(self, source_dir: Optional[str | os.PathLike] = None, *, pdftotext: Optional[str] = None) -> Catalog:
        src = Path(source_dir) if source_dir is not None else self.data_dir / CFG.SOURCES_DIRNAME
        log.info("Building dataset from %s into %s", src, self.data_dir)
        return build_dataset(src, self.data_dir, pdftotext=pdftotext)

    # ------------- query -------------

    def catalog(self) -> Catalog:
        return load_catalog(self.manifest_path)

    # /* ~~~ Run one search against a freshly loaded manifest ~~~ */
    def search(self, query: str, case_sensitive: bool = False, *,
               cancel: Optional[threading.Event] = None) -> SearchResponse:
        return run(
            self.catalog(), query, case_sensitive, self.max_positions,
            radius=self.radius, limit=self.limit,
            workers=self.workers, timeout=self.timeout, cancel=cancel,
        )

    def health(self) -> dict:
        return health(self.manifest_path)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        log.info("Engine shutdown complete")
