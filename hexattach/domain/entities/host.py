# hexattach/domain/entities/host.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:
    from hexattach.services.associations.manager import MediaAssociations


@dataclass(frozen=True)
class HostRef:
    """
    Polymorphic reference to an entity media can be attached to
    (e.g. HostRef("article", "42")). Ids are stored as text so any key type fits.

    `soft_deletes` says whether deletes of this host type are soft by default.
    """
    host_type: str
    host_id: str
    soft_deletes: bool = False

    def __post_init__(self):
        if not self.host_type:
            raise ValueError("host_type is required")
        if self.host_id is None or str(self.host_id) == "":
            raise ValueError("host_id is required")
        if not isinstance(self.host_id, str):
            object.__setattr__(self, "host_id", str(self.host_id))

    @classmethod
    def of(cls, host_type: str, host_id: Any, *, soft_deletes: bool = False) -> "HostRef":
        return cls(host_type=host_type, host_id=str(host_id), soft_deletes=soft_deletes)

    def key(self) -> Tuple[str, str]:
        return (self.host_type, self.host_id)

    def __str__(self) -> str:
        return f"{self.host_type}:{self.host_id}"


@runtime_checkable
class HasMediaAssociations(Protocol):
    """
    Capability contract for host entities. Implement by composition: keep a
    MediaAssociations value and expose it here.
    """

    @property
    def media_ref(self) -> HostRef: ...

    @property
    def media(self) -> "MediaAssociations": ...


def host_ref_of(host: "HostRef | HasMediaAssociations") -> HostRef:
    if isinstance(host, HostRef):
        return host
    ref: Optional[HostRef] = getattr(host, "media_ref", None)
    if ref is None:
        raise TypeError(f"{type(host).__name__} does not expose a media_ref")
    return ref
