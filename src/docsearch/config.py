from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

# where the dataset (manifest + extracted texts) lives
DATA_DIR: Path = Path(os.environ.get("DOCSEARCH_DATA_DIR", "data"))
MANIFEST_NAME: str = "manifest.json"
TEXTS_DIRNAME: str = "texts"
SOURCES_DIRNAME: str = "pdfs"

# Snippet preview settings
SNIPPET_RADIUS: int = 70    # chars of context on each side of a match
SNIPPET_LIMIT: int = 3      # snippets per document

# /* ~~~ only the first few match offsets are kept for snippets; count is never capped ~~~ */
MAX_POSITIONS: int = 12

# Scan settings: 1 worker = sequential scan in catalog order
SEARCH_WORKERS: int = 1
SEARCH_TIMEOUT: Optional[float] = None   # seconds; None = no deadline

# Dataset builder
PDFTOTEXT: str = os.environ.get("PDFTOTEXT_PATH", "pdftotext")
PDFTOTEXT_ARGS: tuple[str, ...] = ("-enc", "UTF-8", "-layout")
SOURCE_EXTS: tuple[str, ...] = (".pdf", ".txt")
