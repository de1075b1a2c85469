from __future__ import annotations
from typing import Iterable, List

from .config import SNIPPET_RADIUS, SNIPPET_LIMIT
from .models import Snippet
from .normalize import normalize_whitespace

def window(text_len: int, pos: int, pattern_length: int, radius: int) -> tuple[int, int]:
    """Clamp [pos - radius, pos + pattern_length + radius) to the text bounds."""
    return max(0, pos - radius), min(text_len, pos + pattern_length + radius)

def extract(text: str,
            positions: Iterable[int],
            pattern_length: int,
            radius: int = SNIPPET_RADIUS,
            limit: int = SNIPPET_LIMIT) -> List[Snippet]:
    """Build up to ``limit`` single-line previews around the given match offsets."""
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    out: List[Snippet] = []
    for pos in positions:
        if len(out) >= limit:
            break
        start, end = window(len(text), pos, pattern_length, radius)
        out.append(Snippet(start=start, end=end, preview=normalize_whitespace(text[start:end])))
    return out
