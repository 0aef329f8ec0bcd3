# hexattach/database/models/media.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    BigInteger, DateTime, Enum as SAEnum, String, Text, text, UniqueConstraint, Index,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from hexattach.database.core.main import Base
from hexattach.database.core.service_object import ServiceObject
from hexattach.domain.enums.aggregate_type import AggregateType


class Media(ServiceObject, Base):
    """
    One media record. `tags` + (host_type, host_id) form the association to a
    host; there is no join table.
    """
    __tablename__ = "media"
    __table_args__ = (
        UniqueConstraint("disk", "directory", "filename", "extension",
                         name="uq_media_disk_directory_filename_extension"),
        Index("ix_media_disk_directory", "disk", "directory"),
        Index("ix_media_aggregate_type", "aggregate_type"),
        Index("ix_media_host", "host_type", "host_id"),
        Index("ix_media_tags_gin", "tags", postgresql_using="gin"),
        Index("ix_media_deleted_at", "deleted_at"),
    )

    # storage location (opaque; unique as a whole)
    disk: Mapped[str] = mapped_column(String(32), nullable=False)
    directory: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    filename: Mapped[str] = mapped_column(Text, nullable=False)
    extension: Mapped[str] = mapped_column(String(32), nullable=False, server_default=text("''"))

    mime_type: Mapped[Optional[str]] = mapped_column(String(128))
    aggregate_type: Mapped[AggregateType] = mapped_column(
        SAEnum(AggregateType, name="media_aggregate_type"),
        nullable=False,
        server_default=AggregateType.other.value,
    )
    size: Mapped[int] = mapped_column(BigInteger, nullable=False, server_default=text("0"))

    # association
    tags: Mapped[List[str]] = mapped_column(
        ARRAY(Text), nullable=False, server_default=text("'{}'::text[]")
    )
    host_type: Mapped[Optional[str]] = mapped_column(String(128))
    host_id: Mapped[Optional[str]] = mapped_column(String(255))

    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<Media id={self.id} {self.disk}:{self.directory}/{self.filename}.{self.extension} tags={self.tags!r}>"
