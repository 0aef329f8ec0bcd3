# hexattach/database/repos/_filters.py
from __future__ import annotations

from sqlalchemy import Text, cast
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.sql.elements import ColumnElement

from hexattach.database.models.media import Media as DBMedia
from hexattach.domain.entities.host import HostRef
from hexattach.domain.policies.tag_filter import TagFilter


def tag_filter_clause(tag_filter: TagFilter) -> ColumnElement[bool]:
    """
    match-any -> tags && ARRAY[...]   (overlap)
    match-all -> tags @> ARRAY[...]   (contains)
    Both are served by the GIN index on media.tags.
    """
    requested = cast(tag_filter.tags.as_list(), ARRAY(Text))
    if tag_filter.match_all:
        return DBMedia.tags.contains(requested)
    return DBMedia.tags.overlap(requested)


def host_clause(host: HostRef) -> ColumnElement[bool]:
    return (DBMedia.host_type == host.host_type) & (DBMedia.host_id == host.host_id)


def live_clause() -> ColumnElement[bool]:
    return DBMedia.deleted_at.is_(None)
