from hexattach.services.schemas.media import (
    MediaCreate,
    MediaRead,
    MediaLocationIn,
    MediaLocationOut,
)
from hexattach.services.schemas.host_media import (
    AttachMediaRequest,
    DetachMediaRequest,
    HostDeletedRequest,
    HostDeletedResult,
    MediaByTagRead,
    HasMediaRead,
    TagsRead,
)
__all__ = [
    "MediaCreate",
    "MediaRead",
    "MediaLocationIn",
    "MediaLocationOut",
    "AttachMediaRequest",
    "DetachMediaRequest",
    "HostDeletedRequest",
    "HostDeletedResult",
    "MediaByTagRead",
    "HasMediaRead",
    "TagsRead",
]
