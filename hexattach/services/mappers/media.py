# hexattach/services/mappers/media.py
from __future__ import annotations

from hexattach.domain.entities.media import Media, MediaLocation
from hexattach.services.schemas.media import MediaCreate, MediaRead, MediaLocationOut


def to_domain_from_create(s: MediaCreate) -> Media:
    return Media(
        location=MediaLocation(
            disk=s.location.disk,
            directory=s.location.directory,
            filename=s.location.filename,
            extension=s.location.extension,
        ),
        mime_type=s.mime_type,
        aggregate_type=s.aggregate_type,
        size=s.size,
    )


def to_read_schema(m: Media) -> MediaRead:
    if m.id is None:
        raise ValueError("cannot render unsaved media")
    return MediaRead(
        id=m.id,
        location=MediaLocationOut(
            disk=m.disk,
            directory=m.directory,
            filename=m.filename,
            extension=m.extension,
        ),
        mime_type=m.mime_type,
        aggregate_type=m.aggregate_type,
        size=m.size,
        tags=m.tags.as_list(),
        host_type=m.host_type,
        host_id=m.host_id,
        date_created=m.date_created,
        last_updated=m.last_updated,
    )
