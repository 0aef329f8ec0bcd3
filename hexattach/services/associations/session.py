# hexattach/services/associations/session.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from hexattach.domain.entities.host import HostRef
from hexattach.domain.entities.media import Media
from hexattach.domain.policies.dirty_tracking import DirtyTagTracker
from hexattach.domain.policies.tag_filter import TagFilter

HostKey = Tuple[str, str]


@dataclass
class HostMediaState:
    """
    Cached media relation of one host plus its dirty tags.
    `media is None` means the relation was never loaded in this session.
    `loaded_filter` remembers a filtered load (None = everything).
    """
    media: Optional[List[Media]] = None
    loaded_filter: Optional[TagFilter] = None
    dirty: DirtyTagTracker = field(default_factory=DirtyTagTracker)

    @property
    def loaded(self) -> bool:
        return self.media is not None

    def replace(self, media: List[Media], loaded_filter: Optional[TagFilter]) -> None:
        self.media = list(media)
        self.loaded_filter = loaded_filter
        self.dirty.clear()


class AssociationSession:
    """
    Request/unit-of-work scoped cache of host media relations.

    Owned by the caller (one per request, like the SQLAlchemy Session) and
    passed alongside hosts. Not thread-safe; no locking.
    """

    def __init__(self) -> None:
        self._states: Dict[HostKey, HostMediaState] = {}

    def state_for(self, host: HostRef) -> HostMediaState:
        key = host.key()
        state = self._states.get(key)
        if state is None:
            state = HostMediaState()
            self._states[key] = state
        return state

    def forget(self, host: HostRef) -> None:
        self._states.pop(host.key(), None)

    def clear(self) -> None:
        self._states.clear()

    def __contains__(self, host: object) -> bool:
        return isinstance(host, HostRef) and host.key() in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[HostKey]:
        return iter(self._states)
