# hexattach/domain/entities/media.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict, InitVar
from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import UUID

from hexattach.domain.entities.tag_set import TagSet, TagsInput
from hexattach.domain.entities.host import HostRef
from hexattach.domain.enums.aggregate_type import AggregateType


@dataclass(frozen=True)
class MediaLocation:
    """
    Storage location of a media file. Opaque to the association core; the
    (disk, directory, filename, extension) tuple is unique across all media.
    """
    disk: str
    directory: str
    filename: str
    extension: str

    def as_key(self) -> Tuple[str, str, str, str]:
        return (self.disk, self.directory, self.filename, self.extension)

    def basename(self) -> str:
        return f"{self.filename}.{self.extension}" if self.extension else self.filename

    def disk_path(self) -> str:
        return f"{self.directory}/{self.basename()}" if self.directory else self.basename()


@dataclass
class Media:
    """
    One media record. Its tags plus its host reference *are* the association:
    there is no separate join entity.

    Either pass `location` or the InitVar quartet (disk_in, directory_in,
    filename_in, extension_in).
    """

    # Persistence (optional until saved)
    id: Optional[UUID] = None
    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    location: Optional[MediaLocation] = None
    mime_type: Optional[str] = None
    aggregate_type: AggregateType = AggregateType.other
    size: int = 0

    tags: TagSet = field(default_factory=TagSet)
    host_type: Optional[str] = None
    host_id: Optional[str] = None

    deleted_at: Optional[datetime] = None

    disk_in: InitVar[Optional[str]] = None
    directory_in: InitVar[Optional[str]] = None
    filename_in: InitVar[Optional[str]] = None
    extension_in: InitVar[Optional[str]] = None

    def __post_init__(self, disk_in, directory_in, filename_in, extension_in):
        if self.location is None:
            if disk_in and filename_in is not None and directory_in is not None and extension_in is not None:
                self.location = MediaLocation(
                    disk=str(disk_in),
                    directory=str(directory_in),
                    filename=str(filename_in),
                    extension=str(extension_in),
                )
            else:
                raise ValueError(
                    "Media requires location (MediaLocation) or disk_in / directory_in / "
                    "filename_in / extension_in"
                )
        if not self.location.disk or not self.location.filename:
            raise ValueError("disk and filename must be non-empty")
        if self.size is not None and self.size < 0:
            raise ValueError("size must be >= 0")
        if not isinstance(self.tags, TagSet):
            self.tags = TagSet.normalize(self.tags)
        if (self.host_type is None) != (self.host_id is None):
            raise ValueError("host_type and host_id must be set together")

    # ---- tag mutation ------------------------------------------------------

    def add_tags(self, tags: TagsInput) -> None:
        self.tags = self.tags.union(tags)

    def remove_tags(self, tags: TagsInput) -> None:
        self.tags = self.tags.difference(tags)

    def clear_tags(self) -> None:
        self.tags = TagSet()

    # ---- host reference ----------------------------------------------------

    def attach_to(self, host: HostRef) -> None:
        self.host_type = host.host_type
        self.host_id = host.host_id

    def belongs_to(self, host: HostRef) -> bool:
        return self.host_type == host.host_type and self.host_id == host.host_id

    # ---- soft delete -------------------------------------------------------

    @property
    def trashed(self) -> bool:
        return self.deleted_at is not None

    def trash(self, when: Optional[datetime] = None) -> None:
        self.deleted_at = when or datetime.now(timezone.utc)

    # ---- proxies -----------------------------------------------------------

    @property
    def disk(self) -> str:
        return self.location.disk  # type: ignore[union-attr]

    @property
    def directory(self) -> str:
        return self.location.directory  # type: ignore[union-attr]

    @property
    def filename(self) -> str:
        return self.location.filename  # type: ignore[union-attr]

    @property
    def extension(self) -> str:
        return self.location.extension  # type: ignore[union-attr]

    def location_key(self) -> Tuple[str, str, str, str]:
        return self.location.as_key()  # type: ignore[union-attr]

    def as_dict(self):
        d = asdict(self)
        d["tags"] = self.tags.as_list()
        return d
