# hexattach/common/strings/splitters.py
from typing import Iterable, List


def csv_to_list(v: str | Iterable[str] | None, *, sep: str = ",") -> List[str]:
    """
    Accept 'a,b , c' or ['a', ' b'] (or a mix: ['a,b', 'c']) and return
    stripped, non-empty items in order.
    """
    if v is None:
        return []
    parts = [v] if isinstance(v, str) else list(v)
    out: List[str] = []
    for part in parts:
        if part is None:
            continue
        out.extend(s.strip() for s in str(part).split(sep) if s.strip())
    return out
