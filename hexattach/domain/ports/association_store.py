from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple
from uuid import UUID

from hexattach.domain.entities.host import HostRef
from hexattach.domain.entities.media import Media
from hexattach.domain.policies.tag_filter import TagFilter


class AssociationStorePort(Protocol):
    """
    Backing store of host<->media associations (media records carrying tags and
    a host reference). Every method may raise StoreError.

    Reads return non-trashed media in insertion order. `find_by_tags` must give
    the same result as TagFilter.apply(find_all(host)).
    """

    def get(self, media_id: UUID) -> Optional[Media]: ...

    def find_all(self, host: HostRef) -> List[Media]: ...

    def find_by_tags(self, host: HostRef, tag_filter: TagFilter) -> List[Media]: ...

    def find_for_hosts(
        self,
        hosts: Sequence[HostRef],
        tag_filter: Optional[TagFilter] = None,
    ) -> Dict[Tuple[str, str], List[Media]]: ...

    def find_host_ids_with_media(self, host_type: str, tag_filter: TagFilter) -> List[str]:
        """
        Host ids in order of their first matching media. An empty filter
        places no tag restriction. May raise UnsupportedOperationError where
        the store cannot express it.
        """
        ...

    def save(self, media: Media) -> Media: ...

    def save_many(self, media: Iterable[Media]) -> List[Media]: ...

    def delete(self, media: Media) -> None: ...

    def trash(self, media: Media) -> Media:
        """Soft delete: the record stays but disappears from every read."""
        ...
