# hexattach/services/associations/collection.py
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, overload

from hexattach.common.iter import unique_everseen
from hexattach.common.settings import AssociationConfig, get_settings
from hexattach.domain.entities.host import HostRef, HasMediaAssociations, host_ref_of
from hexattach.domain.entities.tag_set import TagsInput
from hexattach.domain.errors import UnsupportedOperationError
from hexattach.domain.policies.tag_filter import TagFilter
from hexattach.domain.ports.association_store import AssociationStorePort
from hexattach.services.associations.manager import MediaAssociations
from hexattach.services.associations.session import AssociationSession


class MediaAssociationCollection(Sequence[MediaAssociations]):
    """
    Several hosts handled together, sharing one AssociationSession.
    Eager-loads their media relations with a single store call.
    """

    def __init__(
        self,
        hosts: Iterable[HostRef | HasMediaAssociations],
        store: AssociationStorePort,
        *,
        session: Optional[AssociationSession] = None,
        config: Optional[AssociationConfig] = None,
    ) -> None:
        self.store = store
        self.session = session if session is not None else AssociationSession()
        cfg = config if config is not None else get_settings().associations
        refs = unique_everseen(host_ref_of(h) for h in hosts)
        self._members: List[MediaAssociations] = [
            MediaAssociations(ref, store, session=self.session, config=cfg) for ref in refs
        ]

    @overload
    def __getitem__(self, index: int) -> MediaAssociations: ...

    @overload
    def __getitem__(self, index: slice) -> List[MediaAssociations]: ...

    def __getitem__(self, index):
        return self._members[index]

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[MediaAssociations]:
        return iter(self._members)

    @property
    def hosts(self) -> List[HostRef]:
        return [m.host for m in self._members]

    def for_host(self, host: HostRef | HasMediaAssociations) -> MediaAssociations:
        ref = host_ref_of(host)
        for member in self._members:
            if member.host == ref:
                return member
        raise KeyError(str(ref))

    def load_media(self, tags: TagsInput = None, match_all: bool = False) -> "MediaAssociationCollection":
        """
        Eager-load every member's relation (optionally tag-filtered).
        Each member's dirty tags are cleared.
        """
        if not self._members:
            return self
        tag_filter = TagFilter.build(tags, match_all)
        effective = None if tag_filter.is_empty else tag_filter
        grouped = self.store.find_for_hosts(self.hosts, effective)
        for member in self._members:
            member.state.replace(grouped.get(member.host.key(), []), effective)
        return self

    def load_media_match_all(self, tags: TagsInput = None) -> "MediaAssociationCollection":
        return self.load_media(tags, match_all=True)

    def delete(self) -> None:
        """
        Bulk host deletion would skip the per-host cascade, so it is refused.
        Delete hosts one by one and call handle_host_deletion on each.
        """
        if not self._members:
            return
        raise UnsupportedOperationError(
            "bulk delete of hosts is not supported; delete each host and run its cascade"
        )
