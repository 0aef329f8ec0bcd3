# hexattach/database/repos/_mapping.py
from __future__ import annotations

from hexattach.database.models.media import Media as DBMedia
from hexattach.domain.entities.media import Media as DomainMedia, MediaLocation
from hexattach.domain.entities.tag_set import TagSet
from hexattach.domain.enums.aggregate_type import AggregateType


def to_domain_media(row: DBMedia) -> DomainMedia:
    return DomainMedia(
        id=row.id,
        date_created=getattr(row, "date_created", None),
        last_updated=getattr(row, "last_updated", None),
        location=MediaLocation(
            disk=row.disk,
            directory=row.directory or "",
            filename=row.filename,
            extension=row.extension or "",
        ),
        mime_type=row.mime_type,
        aggregate_type=AggregateType(row.aggregate_type) if row.aggregate_type else AggregateType.other,
        size=row.size or 0,
        tags=TagSet(row.tags or ()),
        host_type=row.host_type,
        host_id=row.host_id,
        deleted_at=row.deleted_at,
    )


def apply_domain_to_orm(orm: DBMedia, dom: DomainMedia) -> DBMedia:
    orm.disk = dom.disk
    orm.directory = dom.directory
    orm.filename = dom.filename
    orm.extension = dom.extension
    orm.mime_type = dom.mime_type
    orm.aggregate_type = dom.aggregate_type
    orm.size = dom.size or 0
    # sorted list keeps the stored array stable
    orm.tags = dom.tags.as_list()
    orm.host_type = dom.host_type
    orm.host_id = dom.host_id
    orm.deleted_at = dom.deleted_at
    return orm
