# src/e2e/test_search_ranking.py

import threading
from pathlib import Path

import pytest

from docsearch.errors import DocumentUnreadable, EmptyQuery
from docsearch.models import Catalog, Document
from docsearch.search import run


class FakeCorpus:
    """
    Catalog double with texts in memory:
      - ids listed in `missing` raise DocumentUnreadable on load
      - `loads` records every id whose text was requested
    """
    def __init__(self, texts: dict[str, str], missing: tuple[str, ...] = ()):
        self.texts = texts
        self.missing = set(missing)
        self.loads: list[str] = []
        ids = list(texts) + [m for m in missing if m not in texts]
        self.catalog = Catalog(
            documents=[Document(id=i, title=f"Title {i}", text_path=f"texts/{i}.txt") for i in ids],
            root=Path("."),
        )

    def read(self, doc: Document) -> str:
        self.loads.append(doc.id)
        if doc.id in self.missing:
            raise DocumentUnreadable(doc.id, doc.text_path, "No such file or directory")
        return self.texts[doc.id]


def _comparable(resp) -> dict:
    d = resp.to_dict()
    d.pop("tookMs")
    return d


def test_sorted_by_count_ties_keep_catalog_order():
    fc = FakeCorpus({"A": "foo foo", "B": "foo foo foo foo foo", "C": "foo bar foo", "D": "nothing"})
    resp = run(fc.catalog, "foo", read_text=fc.read)
    assert [r.id for r in resp.results] == ["B", "A", "C"]
    assert [r.count for r in resp.results] == [5, 2, 2]
    assert resp.total_docs == 4
    assert resp.matched_docs == 3


def test_unreadable_document_is_skipped_not_fatal():
    fc = FakeCorpus({"A": "needle", "C": "needle needle"}, missing=("B",))
    resp = run(fc.catalog, "needle", read_text=fc.read)
    assert [r.id for r in resp.results] == ["C", "A"]
    assert resp.total_docs == 3
    assert "B" in fc.loads


def test_case_sensitivity():
    fc = FakeCorpus({"A": "Hello hello"})
    assert run(fc.catalog, "hello", case_sensitive=False, read_text=fc.read).results[0].count == 2
    assert run(fc.catalog, "hello", case_sensitive=True, read_text=fc.read).results[0].count == 1


def test_snippets_keep_original_casing():
    fc = FakeCorpus({"A": "The QUICK brown fox"})
    resp = run(fc.catalog, "quick", read_text=fc.read)
    (snip,) = resp.results[0].snippets
    assert "QUICK" in snip.preview


def test_empty_query_rejected_before_any_load():
    fc = FakeCorpus({"A": "text"})
    for q in ("", "   ", "\n\t"):
        with pytest.raises(EmptyQuery):
            run(fc.catalog, q, read_text=fc.read)
    assert fc.loads == []


def test_query_is_trimmed():
    fc = FakeCorpus({"A": "a foo b"})
    resp = run(fc.catalog, "  foo ", read_text=fc.read)
    assert resp.query == "foo"
    assert resp.results[0].count == 1


def test_snippet_and_position_knobs():
    fc = FakeCorpus({"A": "ab " * 20})
    resp = run(fc.catalog, "ab", max_positions=2, limit=5, radius=0, read_text=fc.read)
    r = resp.results[0]
    assert r.count == 20
    assert len(r.snippets) == 2              # only 2 positions retained
    assert [s.preview for s in r.snippets] == ["ab", "ab"]


def test_parallel_scan_matches_sequential():
    texts = {f"d{i}": ("needle " * (i % 4)) + "hay " * i for i in range(20)}
    fc = FakeCorpus(texts, missing=("d7x",))
    seq = run(fc.catalog, "needle", read_text=fc.read, workers=1)
    par = run(fc.catalog, "needle", read_text=fc.read, workers=4)
    assert _comparable(seq) == _comparable(par)


def test_repeated_search_is_identical():
    fc = FakeCorpus({"A": "x y x", "B": "x", "C": "y x x x"})
    first = _comparable(run(fc.catalog, "x", read_text=fc.read))
    second = _comparable(run(fc.catalog, "x", read_text=fc.read))
    assert first == second


def test_cancel_stops_new_loads():
    fc = FakeCorpus({"A": "x", "B": "x"})
    ev = threading.Event(); ev.set()
    resp = run(fc.catalog, "x", read_text=fc.read, cancel=ev)
    assert resp.timed_out is True
    assert resp.results == [] and fc.loads == []
    assert resp.total_docs == 2


def test_zero_timeout_stops_scan():
    fc = FakeCorpus({"A": "x"})
    resp = run(fc.catalog, "x", read_text=fc.read, timeout=0)
    assert resp.timed_out is True
    assert resp.matched_docs == 0


def test_wire_shape():
    fc = FakeCorpus({"A": "find me"})
    d = run(fc.catalog, "me", read_text=fc.read).to_dict()
    for key in ("query", "caseSensitive", "totalDocs", "matchedDocs", "tookMs", "results"):
        assert key in d
    res = d["results"][0]
    assert res["id"] == "A" and res["title"] == "Title A" and res["count"] == 1
    assert res["snippets"][0]["preview"] == "find me"
    assert isinstance(d["tookMs"], float)


def test_final_sigma_match_ignores_unrelated_characters():
    fc = FakeCorpus({"plain": "ΟΔΟΣ", "with_dotted_i": "ΟΔΟΣ İstanbul"})
    for q in ("οδος", "οδοσ", "ΟΔΟΣ"):
        resp = run(fc.catalog, q, read_text=fc.read)
        assert {r.id: r.count for r in resp.results} == {"plain": 1, "with_dotted_i": 1}
    snip = run(fc.catalog, "οδος", read_text=fc.read).results[1].snippets[0]
    assert snip.preview == "ΟΔΟΣ İstanbul"


@pytest.mark.parametrize("knobs", [{"radius": -1}, {"limit": -1}, {"max_positions": -1}])
def test_negative_knobs_rejected_before_scanning(knobs):
    fc = FakeCorpus({"A": "abc"})
    with pytest.raises(ValueError):
        run(fc.catalog, "zzz", read_text=fc.read, **knobs)
    assert fc.loads == []


def test_engine_rejects_negative_knobs():
    from docsearch.engine import Engine
    with pytest.raises(ValueError):
        Engine(".", radius=-1)
