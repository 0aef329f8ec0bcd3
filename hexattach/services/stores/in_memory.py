from __future__ import annotations

import copy
from datetime import datetime, timezone
from itertools import count
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID, uuid4

from hexattach.domain.entities.host import HostRef
from hexattach.domain.entities.media import Media
from hexattach.domain.errors import StoreConflictError, StoreError, UnsupportedOperationError
from hexattach.domain.policies.tag_filter import TagFilter
from hexattach.domain.ports.association_store import AssociationStorePort


class InMemoryAssociationStore(AssociationStorePort):
    """
    Process-local association store. Filters in Python with TagFilter, so it
    doubles as the reference behaviour for stores that push filters down.

    Records are copied in and out: callers never share objects with the store,
    exactly like rows loaded from a database.
    """

    def __init__(self, *, supports_host_queries: bool = True) -> None:
        self._rows: Dict[UUID, Media] = {}
        self._seq: Dict[UUID, int] = {}
        self._counter = count(1)
        self.supports_host_queries = supports_host_queries

    # ---- reads ---------------------------------------------------------------

    def get(self, media_id: UUID) -> Optional[Media]:
        row = self._rows.get(media_id)
        if row is None or row.trashed:
            return None
        return copy.copy(row)

    def find_all(self, host: HostRef) -> List[Media]:
        return [copy.copy(m) for m in self._ordered() if m.belongs_to(host)]

    def find_by_tags(self, host: HostRef, tag_filter: TagFilter) -> List[Media]:
        return tag_filter.apply(self.find_all(host))

    def find_for_hosts(
        self,
        hosts: Sequence[HostRef],
        tag_filter: Optional[TagFilter] = None,
    ) -> Dict[Tuple[str, str], List[Media]]:
        keys = {h.key() for h in hosts}
        out: Dict[Tuple[str, str], List[Media]] = {}
        for m in self._ordered():
            key = (m.host_type, m.host_id)
            if key not in keys:
                continue
            if tag_filter is not None and not tag_filter.matches(m.tags):
                continue
            out.setdefault(key, []).append(copy.copy(m))  # type: ignore[arg-type]
        return out

    def find_host_ids_with_media(self, host_type: str, tag_filter: TagFilter) -> List[str]:
        if not self.supports_host_queries:
            raise UnsupportedOperationError("host-level media queries are disabled for this store")
        out: List[str] = []
        for m in self._ordered():
            if m.host_type != host_type or m.host_id in out:
                continue
            if tag_filter.is_empty or tag_filter.matches(m.tags):
                out.append(m.host_id)  # type: ignore[arg-type]
        return out

    # ---- writes --------------------------------------------------------------

    def save(self, media: Media) -> Media:
        now = datetime.now(timezone.utc)
        if media.id is not None and media.id not in self._rows:
            raise StoreError(f"Media {media.id} does not exist")

        for other_id, other in self._rows.items():
            if other_id != media.id and other.location_key() == media.location_key():
                raise StoreConflictError(f"storage location already in use: {media.location.disk_path()}")  # type: ignore[union-attr]

        if media.id is None:
            media.id = uuid4()
            media.date_created = now
            self._seq[media.id] = next(self._counter)
        media.last_updated = now
        self._rows[media.id] = copy.copy(media)
        return copy.copy(media)

    def save_many(self, media: Iterable[Media]) -> List[Media]:
        # one by one: a failure leaves earlier records saved
        return [self.save(m) for m in media]

    def delete(self, media: Media) -> None:
        if media.id is None or media.id not in self._rows:
            raise StoreError(f"Media {media.id} does not exist")
        del self._rows[media.id]
        self._seq.pop(media.id, None)

    def trash(self, media: Media) -> Media:
        if media.id is None or media.id not in self._rows:
            raise StoreError(f"Media {media.id} does not exist")
        media.trash()
        self._rows[media.id].deleted_at = media.deleted_at
        return copy.copy(media)

    # ---- helpers -------------------------------------------------------------

    def _ordered(self) -> List[Media]:
        live = [m for m in self._rows.values() if not m.trashed]
        return sorted(live, key=lambda m: self._seq[m.id])  # type: ignore[index]

    def __len__(self) -> int:
        return len(self._rows)
