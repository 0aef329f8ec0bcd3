# hexattach/domain/policies/dirty_tracking.py
from __future__ import annotations

from typing import Optional, Set

from hexattach.domain.entities.tag_set import TagSet, TagsInput


class DirtyTagTracker:
    """
    Tags mutated on one host since its media relation was last loaded.

    Transient: never persisted, emptied by every explicit (re)load.
    `mark_dirty(None)` records "everything changed" (e.g. a full detach).
    """

    __slots__ = ("_tags", "_all")

    def __init__(self) -> None:
        self._tags: Set[str] = set()
        self._all: bool = False

    def mark_dirty(self, tags: TagsInput = None) -> None:
        if tags is None:
            self._all = True
            return
        self._tags.update(TagSet.normalize(tags))

    def is_dirty(self, tags: TagsInput = None) -> bool:
        if tags is None:
            return self._all or bool(self._tags)
        if self._all:
            return True
        return not self._tags.isdisjoint(TagSet.normalize(tags).as_frozenset())

    def clear(self) -> None:
        self._tags.clear()
        self._all = False

    @property
    def all_dirty(self) -> bool:
        return self._all

    @property
    def tags(self) -> TagSet:
        return TagSet(self._tags)

    def __repr__(self) -> str:
        state: Optional[str] = "ALL" if self._all else None
        return f"DirtyTagTracker({state or sorted(self._tags)!r})"
