# hexattach/domain/policies/tag_filter.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, TypeVar

from hexattach.domain.entities.tag_set import TagSet, TagsInput

M = TypeVar("M")


def matches_any(media_tags: TagsInput, requested: TagsInput) -> bool:
    """True iff the two tag sets share at least one tag. Empty request matches nothing."""
    return TagSet.normalize(media_tags).intersects(requested)


def matches_all(media_tags: TagsInput, requested: TagsInput) -> bool:
    """True iff every requested tag is present on the media (requested is a subset)."""
    return TagSet.normalize(media_tags).issuperset(requested)


@dataclass(frozen=True)
class TagFilter:
    """
    A (tags, match_all) read request. Stores translate it to their own query
    language; `apply` is the in-memory rendition and the reference semantics.
    """
    tags: TagSet
    match_all: bool = False

    @classmethod
    def build(cls, tags: TagsInput, match_all: bool = False) -> "TagFilter":
        return cls(tags=TagSet.normalize(tags), match_all=bool(match_all))

    @property
    def is_empty(self) -> bool:
        return not self.tags

    def matches(self, media_tags: TagsInput) -> bool:
        if self.match_all:
            return matches_all(media_tags, self.tags)
        return matches_any(media_tags, self.tags)

    def apply(self, media: Iterable[M]) -> List[M]:
        """Keep items (anything with a `.tags`) that satisfy the filter, order preserved."""
        return [m for m in media if self.matches(getattr(m, "tags"))]

    def describe(self) -> str:
        mode = "all" if self.match_all else "any"
        return f"{mode}{self.tags.as_list()}"
