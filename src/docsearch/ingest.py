"""
Dataset builder: turns a folder of source files into extracted texts + manifest.

    data_dir/
      manifest.json        {generatedAt, total, documents: [...]}
      texts/<id>.txt       UTF-8 plain text, one per document

PDFs go through poppler's ``pdftotext``; ``.txt`` files are copied as-is.
A file that fails to convert is logged and left out of the manifest.
"""
from __future__ import annotations
import hashlib
import json
import logging
import os
import subprocess
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from . import config as CFG
from .catalog import load_catalog
from .errors import IngestError
from .models import Catalog

log = logging.getLogger(__name__)

def document_id(file_name: str, size: int, mtime_ms: float) -> str:
    """Stable id: first 12 hex chars of sha1("name|size|mtime_ms")."""
    return hashlib.sha1(f"{file_name}|{size}|{mtime_ms}".encode("utf-8")).hexdigest()[:12]

def _iso(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat().replace("+00:00", "Z")

def _iter_sources(source_dir: Path) -> List[Path]:
    exts = {e.lower() for e in CFG.SOURCE_EXTS}
    return sorted(
        (p for p in source_dir.iterdir() if p.is_file() and p.suffix.lower() in exts),
        key=lambda p: p.name,
    )

def run_pdftotext(pdf: Path, out: Path, executable: Optional[str] = None) -> None:
    args = [executable or CFG.PDFTOTEXT, *CFG.PDFTOTEXT_ARGS, str(pdf), str(out)]
    proc = subprocess.run(args, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
    if proc.returncode != 0:
        raise RuntimeError(f"pdftotext exit code {proc.returncode}: {proc.stderr.strip()}")

def _copy_text(src: Path, out: Path) -> None:
    raw = src.read_bytes()
    out.write_text(raw.decode("utf-8", errors="replace"), encoding="utf-8")

def _write_manifest(path: Path, payload: dict) -> None:
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    os.replace(tmp, path)

def build_dataset(source_dir: str | os.PathLike,
                  data_dir: str | os.PathLike,
                  pdftotext: Optional[str] = None) -> Catalog:
    source_dir = Path(source_dir)
    data_dir = Path(data_dir)
    if not source_dir.is_dir():
        raise IngestError(f"source folder not found: {source_dir}")

    texts_dir = data_dir / CFG.TEXTS_DIRNAME
    texts_dir.mkdir(parents=True, exist_ok=True)

    files = _iter_sources(source_dir)
    log.info("Found %d source files in %s", len(files), source_dir)

    entries: List[dict] = []
    for n, src in enumerate(files, 1):
        st = src.stat()
        doc_id = document_id(src.name, st.st_size, st.st_mtime * 1000)
        out = texts_dir / f"{doc_id}.txt"
        try:
            if src.suffix.lower() == ".pdf":
                run_pdftotext(src, out, pdftotext)
            else:
                _copy_text(src, out)
        except (OSError, RuntimeError) as exc:
            # FileNotFoundError here usually means pdftotext is not installed
            log.warning("[%d/%d] %s failed, skipped: %s", n, len(files), src.name, exc)
            continue
        log.info("[%d/%d] extracted %s -> %s", n, len(files), src.name, out.name)
        entries.append({
            "id": doc_id,
            "title": src.stem,
            "sourceFileName": src.name,
            "sourcePath": str(src),
            "textPath": f"{CFG.TEXTS_DIRNAME}/{out.name}",
            "bytes": st.st_size,
            "updatedAt": _iso(st.st_mtime),
        })

    manifest = data_dir / CFG.MANIFEST_NAME
    _write_manifest(manifest, {
        "generatedAt": _iso(time.time()),
        "total": len(entries),
        "documents": entries,
    })
    log.info("Manifest written to %s (%d/%d documents)", manifest, len(entries), len(files))
    return load_catalog(manifest)
