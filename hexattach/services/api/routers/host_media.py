# hexattach/services/api/routers/host_media.py
from __future__ import annotations

from http import HTTPStatus
from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from hexattach.common.settings import get_settings
from hexattach.domain.enums.delete_mode import DeleteMode
from hexattach.services.api.deps import host_media
from hexattach.services.associations.manager import MediaAssociations
from hexattach.services.mappers.media import to_read_schema
from hexattach.services.schemas.host_media import (
    AttachMediaRequest, DetachMediaRequest, HostDeletedRequest, HostDeletedResult,
    MediaByTagRead, HasMediaRead, TagsRead,
)
from hexattach.services.schemas.media import MediaRead

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/hosts/{{host_type}}/{{host_id}}", tags=["host-media"])

TagsParam = Annotated[List[str], Query(description="Repeat the parameter for several tags")]
MatchAllParam = Annotated[bool, Query(description="Require every tag instead of any")]


# ---- reads ----

@router.get("/media", response_model=List[MediaRead])
def list_host_media(
    tags: TagsParam = [],
    match_all: MatchAllParam = False,
    assoc: MediaAssociations = Depends(host_media),
) -> List[MediaRead]:
    return [to_read_schema(m) for m in assoc.get_media(tags, match_all)]


@router.get("/media/exists", response_model=HasMediaRead)
def host_has_media(
    tags: TagsParam = [],
    match_all: MatchAllParam = False,
    assoc: MediaAssociations = Depends(host_media),
) -> HasMediaRead:
    return HasMediaRead(has_media=assoc.has_media(tags, match_all))


@router.get("/media/first", response_model=MediaRead)
def first_host_media(
    tags: TagsParam = [],
    match_all: MatchAllParam = False,
    assoc: MediaAssociations = Depends(host_media),
) -> MediaRead:
    found = assoc.first_media(tags, match_all)
    if found is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="No matching media")
    return to_read_schema(found)


@router.get("/media/last", response_model=MediaRead)
def last_host_media(
    tags: TagsParam = [],
    match_all: MatchAllParam = False,
    assoc: MediaAssociations = Depends(host_media),
) -> MediaRead:
    found = assoc.last_media(tags, match_all)
    if found is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="No matching media")
    return to_read_schema(found)


@router.get("/media/by-tag", response_model=MediaByTagRead)
def host_media_by_tag(assoc: MediaAssociations = Depends(host_media)) -> MediaByTagRead:
    buckets = assoc.get_all_media_by_tag()
    return MediaByTagRead(buckets={tag: [to_read_schema(m) for m in ms] for tag, ms in buckets.items()})


@router.get("/media/{media_id}/tags", response_model=TagsRead)
def tags_for_media(media_id: UUID, assoc: MediaAssociations = Depends(host_media)) -> TagsRead:
    return TagsRead(media_id=media_id, tags=assoc.get_tags_for_media(media_id).as_list())


# ---- mutations ----

@router.post("/media", response_model=List[MediaRead], status_code=HTTPStatus.CREATED)
def attach_host_media(
    payload: AttachMediaRequest,
    assoc: MediaAssociations = Depends(host_media),
) -> List[MediaRead]:
    saved = assoc.attach_media(payload.media_ids, payload.tags)
    return [to_read_schema(m) for m in saved]


@router.put("/media", response_model=List[MediaRead])
def sync_host_media(
    payload: AttachMediaRequest,
    assoc: MediaAssociations = Depends(host_media),
) -> List[MediaRead]:
    saved = assoc.sync_media(payload.media_ids, payload.tags)
    return [to_read_schema(m) for m in saved]


@router.post("/media/{media_id}/detach", response_model=MediaRead)
def detach_host_media(
    media_id: UUID,
    payload: Optional[DetachMediaRequest] = None,
    assoc: MediaAssociations = Depends(host_media),
) -> MediaRead:
    tags = payload.tags if payload is not None else None
    return to_read_schema(assoc.detach_media(media_id, tags))


@router.delete("/media", response_model=List[MediaRead])
def detach_host_media_tags(
    tags: List[str] = Query(...),
    assoc: MediaAssociations = Depends(host_media),
) -> List[MediaRead]:
    return [to_read_schema(m) for m in assoc.detach_media_tags(tags)]


# ---- host lifecycle ----

@router.post("/deleted", response_model=HostDeletedResult)
def host_deleted(
    payload: HostDeletedRequest,
    assoc: MediaAssociations = Depends(host_media),
) -> HostDeletedResult:
    """Post-delete hook: the caller already deleted (or trashed) the host itself."""
    mode = DeleteMode.soft if payload.soft else DeleteMode.hard
    deleted = assoc.handle_host_deletion(mode)
    return HostDeletedResult(host_type=assoc.host.host_type, host_id=assoc.host.host_id, media_deleted=deleted)
