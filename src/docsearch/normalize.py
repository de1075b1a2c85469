from __future__ import annotations
import re

_WS = re.compile(r"\s+")

def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run (space, tab, newline, ...) to one space and trim."""
    return _WS.sub(" ", text).strip()

def _fold_char(ch: str) -> str:
    # casefold maps final sigma 'ς' to 'σ'; 'ß' -> 'ss' is too long, so try lower()
    for folded in (ch.casefold(), ch.lower()):
        if len(folded) == 1:
            return folded
    # e.g. 'İ' lowercases to two code points; keep the original so offsets stay aligned
    return ch

def fold_case(text: str) -> str:
    """
    Case-fold text one character at a time without changing its length.

    Match offsets found in the folded text must index the original text
    (snippets are cut from the original), so any character whose folded
    form is longer than one code point is left as-is. Folding never looks
    at neighbouring characters, so a query and a document fold the same way.
    """
    return "".join(_fold_char(ch) for ch in text)
