from __future__ import annotations
import argparse, json, logging, sys
from . import config as CFG
from .engine import Engine
from .errors import CatalogUnavailable, EmptyQuery, IngestError
from .models import SearchResponse

def _print_table(resp: SearchResponse) -> None:
    print(f"{resp.matched_docs}/{resp.total_docs} documents matched in {resp.took_ms} ms"
          + ("  (stopped early)" if resp.timed_out else ""))
    if not resp.results:
        print("(no matches)"); return
    print("#  Count  Id            Title")
    for i, r in enumerate(resp.results, 1):
        print(f"{i:<2} {r.count:<6} {r.id:<13} {r.title}")
        for s in r.snippets:
            print(f"     [{s.start}:{s.end}] {s.preview}")

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="KMP document search CLI")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--build", action="store_true", help="Extract --sources into texts + manifest")
    g.add_argument("--q", default=None, help="Single query to run once")
    g.add_argument("--repl", action="store_true", help="Interactive query loop")
    g.add_argument("--health", action="store_true", help="Print catalog status")

    p.add_argument("--data-dir", default=str(CFG.DATA_DIR), help="Folder holding manifest.json and texts/")
    p.add_argument("--sources", default=None, help="Folder of .pdf/.txt files (default: <data-dir>/pdfs)")
    p.add_argument("--pdftotext", default=None, help="pdftotext executable (default: $PDFTOTEXT_PATH or pdftotext)")
    p.add_argument("--case-sensitive", action="store_true")
    p.add_argument("--radius", type=int, default=CFG.SNIPPET_RADIUS, help="Snippet context width")
    p.add_argument("--limit", type=int, default=CFG.SNIPPET_LIMIT, help="Max snippets per document")
    p.add_argument("--max-positions", type=int, default=CFG.MAX_POSITIONS)
    p.add_argument("--workers", type=int, default=CFG.SEARCH_WORKERS)
    p.add_argument("--timeout", type=float, default=CFG.SEARCH_TIMEOUT, help="Seconds before new loads stop")
    p.add_argument("--json", action="store_true", help="Emit JSON")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    try:
        eng = Engine(args.data_dir, radius=args.radius, limit=args.limit,
                     max_positions=args.max_positions, workers=args.workers, timeout=args.timeout)
    except ValueError as exc:
        p.error(str(exc))
    try:
        if args.build:
            try:
                catalog = eng.build(args.sources, pdftotext=args.pdftotext)
            except IngestError as exc:
                print(f"error: {exc}", file=sys.stderr); return 1
            print(f"Extracted {len(catalog.documents)} documents into {eng.data_dir}")
            return 0

        if args.health:
            print(json.dumps(eng.health(), ensure_ascii=False, indent=2))
            return 0

        def run_query(q: str) -> int:
            try:
                resp = eng.search(q, args.case_sensitive)
            except (EmptyQuery, CatalogUnavailable) as exc:
                print(f"error: {exc}", file=sys.stderr); return 1
            if args.json:
                print(json.dumps(resp.to_dict(), ensure_ascii=False, indent=2))
            else:
                _print_table(resp)
            return 0

        if args.q is not None:
            return run_query(args.q)

        print("Type a query (empty line to exit).")
        while True:
            try:
                q = input("> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not q.strip():
                break
            run_query(q)
        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
