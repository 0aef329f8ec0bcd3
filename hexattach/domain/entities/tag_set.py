# hexattach/domain/entities/tag_set.py
from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, Optional, Union

TagsInput = Union[str, "TagSet", Iterable[str], None]


class TagSet:
    """
    Unordered collection of unique, non-empty string tags.

    Immutable: every operation returns a new TagSet. Comparison is exact and
    case-sensitive; no trimming or case folding happens here (callers own that).
    Iteration is sorted so persisted arrays and log lines stay stable.
    """

    __slots__ = ("_tags",)

    def __init__(self, tags: Iterable[str] = ()) -> None:
        self._tags: FrozenSet[str] = frozenset(_validated(tags))

    # ---- construction --------------------------------------------------------

    @classmethod
    def normalize(cls, value: TagsInput) -> "TagSet":
        """
        Accept a single tag, a sequence of tags, a TagSet or None.
        Empty strings are dropped; duplicates collapse.
        """
        if value is None:
            return EMPTY
        if isinstance(value, TagSet):
            return value
        if isinstance(value, str):
            return cls((value,)) if value else EMPTY
        return cls(t for t in value if t != "")

    # ---- set operations ------------------------------------------------------

    def union(self, other: TagsInput) -> "TagSet":
        other_set = TagSet.normalize(other)
        if not other_set:
            return self
        return TagSet(self._tags | other_set._tags)

    def difference(self, other: TagsInput) -> "TagSet":
        other_set = TagSet.normalize(other)
        if not other_set:
            return self
        return TagSet(self._tags - other_set._tags)

    def intersection(self, other: TagsInput) -> "TagSet":
        return TagSet(self._tags & TagSet.normalize(other)._tags)

    def intersects(self, other: TagsInput) -> bool:
        return not self._tags.isdisjoint(TagSet.normalize(other)._tags)

    def issuperset(self, other: TagsInput) -> bool:
        return self._tags >= TagSet.normalize(other)._tags

    def issubset(self, other: TagsInput) -> bool:
        return self._tags <= TagSet.normalize(other)._tags

    # ---- dunder --------------------------------------------------------------

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __bool__(self) -> bool:
        return bool(self._tags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TagSet):
            return self._tags == other._tags
        if isinstance(other, (set, frozenset)):
            return self._tags == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._tags)

    def __repr__(self) -> str:
        return f"TagSet({sorted(self._tags)!r})"

    def as_list(self) -> list[str]:
        return sorted(self._tags)

    def as_frozenset(self) -> FrozenSet[str]:
        return self._tags


def _validated(tags: Iterable[str]) -> Iterator[str]:
    for t in tags:
        if not isinstance(t, str):
            raise TypeError(f"tags must be strings, got {type(t).__name__}: {t!r}")
        if not t:
            raise ValueError("tags must be non-empty strings")
        yield t


EMPTY = TagSet()


def normalize(value: TagsInput) -> TagSet:
    """Module-level alias of TagSet.normalize."""
    return TagSet.normalize(value)


def optional_tags(value: TagsInput) -> Optional[TagSet]:
    """None stays None ('all tags'); anything else is normalized."""
    return None if value is None else TagSet.normalize(value)
