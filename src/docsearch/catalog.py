from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

from .errors import CatalogUnavailable, DocumentUnreadable
from .models import Catalog, Document

log = logging.getLogger(__name__)

def _to_document(entry: Any, idx: int) -> Optional[Document]:
    if not isinstance(entry, dict) or not entry.get("textPath"):
        log.warning("Manifest entry #%d has no textPath; skipped", idx)
        return None
    doc_id = str(entry.get("id") or idx)
    try:
        size = int(entry.get("bytes") or 0)
    except (TypeError, ValueError):
        size = 0
    return Document(
        id=doc_id,
        title=str(entry.get("title") or doc_id),
        text_path=str(entry["textPath"]),
        bytes=size,
        source_file_name=entry.get("sourceFileName") or entry.get("pdfFileName"),
        updated_at=entry.get("updatedAt"),
    )

def load_catalog(manifest_path: str | os.PathLike, root: str | os.PathLike | None = None) -> Catalog:
    """
    Parse manifest.json into a Catalog.
    Relative text paths resolve against ``root`` (default: the manifest's folder).
    Raises CatalogUnavailable when the manifest is missing or not a JSON object.
    """
    path = Path(manifest_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            parsed = json.load(f)
    except OSError as exc:
        raise CatalogUnavailable(str(path), exc.strerror or str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise CatalogUnavailable(str(path), f"invalid JSON: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise CatalogUnavailable(str(path), "manifest is not a JSON object")

    raw_docs = parsed.get("documents")
    if not isinstance(raw_docs, list):
        raw_docs = []
    documents: List[Document] = []
    for i, entry in enumerate(raw_docs):
        doc = _to_document(entry, i)
        if doc is not None:
            documents.append(doc)

    return Catalog(
        documents=documents,
        root=Path(root) if root is not None else path.parent,
        generated_at=parsed.get("generatedAt"),
    )

def resolve_text_path(catalog: Catalog, doc: Document) -> Path:
    """
    Absolute paths are used as-is. Relative ones resolve against the catalog
    root; manifests that record paths from the project root (data/texts/...)
    resolve against the root's parent instead.
    """
    p = Path(doc.text_path)
    if p.is_absolute():
        return p
    candidate = catalog.root / p
    if not candidate.exists():
        fallback = catalog.root.parent / p
        if fallback.exists():
            return fallback
    return candidate

def read_text(catalog: Catalog, doc: Document) -> str:
    """Full text of one document. OSError surfaces as DocumentUnreadable."""
    path = resolve_text_path(catalog, doc)
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as exc:
        raise DocumentUnreadable(doc.id, str(path), exc.strerror or str(exc)) from exc

def health(manifest_path: str | os.PathLike) -> dict:
    """Catalog status for the health endpoint; never touches document texts."""
    try:
        catalog = load_catalog(manifest_path)
    except CatalogUnavailable as exc:
        log.info("Health check: %s", exc)
        return {
            "ok": True,
            "hasManifest": False,
            "totalDocs": 0,
            "generatedAt": None,
            "message": "Manifest not found. Build the dataset first: python -m docsearch --build",
        }
    return {
        "ok": True,
        "hasManifest": True,
        "totalDocs": len(catalog.documents),
        "generatedAt": catalog.generated_at,
        "message": "Dataset ready.",
    }
