from __future__ import annotations
import argparse
import logging
from flask import Flask, request, jsonify
from docsearch.engine import Engine
from docsearch.errors import CatalogUnavailable, EmptyQuery
from docsearch import config as CFG

log = logging.getLogger(__name__)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024   # 1 MB request bodies
_engine: Engine | None = None

def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = Engine()
    return _engine

# ---------- API ----------
@app.get("/api/health")
def api_health():
    return jsonify(_get_engine().health())

@app.post("/api/search")
def api_search():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    query = str(body.get("query") or "")
    case_sensitive = bool(body.get("caseSensitive"))
    try:
        resp = _get_engine().search(query, case_sensitive)
    except EmptyQuery as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    except CatalogUnavailable as exc:
        log.warning("Search rejected: %s", exc)
        return jsonify({"ok": False, "error": str(exc)}), 400
    return jsonify({"ok": True, **resp.to_dict()})

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the JSON search API on top of Engine")
    ap.add_argument("--data-dir", default=str(CFG.DATA_DIR))
    ap.add_argument("--workers", type=int, default=CFG.SEARCH_WORKERS)
    ap.add_argument("--timeout", type=float, default=CFG.SEARCH_TIMEOUT)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=3000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    global _engine
    _engine = Engine(args.data_dir, workers=args.workers, timeout=args.timeout)
    health = _engine.health()
    if not health["hasManifest"]:
        log.warning("No manifest in %s yet: run python -m docsearch --build", args.data_dir)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
