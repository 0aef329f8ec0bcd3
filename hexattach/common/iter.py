# hexattach/common/iter.py
from __future__ import annotations

from itertools import islice
from typing import Iterable, Iterator, TypeVar

T = TypeVar("T")


def chunked(it: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield lists of at most `size` items (last chunk may be smaller)."""
    if size < 1:
        raise ValueError("size must be >= 1")
    src = iter(it)
    while True:
        buf = list(islice(src, size))
        if not buf:
            return
        yield buf


def unique_everseen(it: Iterable[T]) -> list[T]:
    """Drop repeats, keep first-seen order."""
    seen: set = set()
    out: list[T] = []
    for x in it:
        if x in seen:
            continue
        seen.add(x)
        out.append(x)
    return out
