# hexattach/services/api/routers/media.py
from __future__ import annotations

from http import HTTPStatus
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from hexattach.common.settings import get_settings
from hexattach.domain.entities.media import Media
from hexattach.domain.errors import NotFoundError
from hexattach.domain.ports.association_store import AssociationStorePort
from hexattach.services.api.deps import get_association_store
from hexattach.services.mappers.media import to_domain_from_create, to_read_schema
from hexattach.services.schemas.media import MediaCreate, MediaRead

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/media", tags=["media"])


def _media_or_404(store: AssociationStorePort, media_id: UUID) -> Media:
    found = store.get(media_id)
    if found is None:
        raise NotFoundError(f"Media {media_id} not found", media_id=media_id)
    return found


@router.post("", response_model=MediaRead, status_code=HTTPStatus.CREATED)
def create_media(
    payload: MediaCreate,
    store: AssociationStorePort = Depends(get_association_store),
) -> MediaRead:
    saved = store.save(to_domain_from_create(payload))
    return to_read_schema(saved)


@router.get("/{media_id}", response_model=MediaRead)
def get_media(
    media_id: UUID = Path(...),
    store: AssociationStorePort = Depends(get_association_store),
) -> MediaRead:
    return to_read_schema(_media_or_404(store, media_id))


@router.delete("/{media_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_media(
    media_id: UUID,
    soft: bool = Query(False, description="Trash instead of deleting the record"),
    store: AssociationStorePort = Depends(get_association_store),
) -> None:
    medium = _media_or_404(store, media_id)
    if soft:
        store.trash(medium)
    else:
        store.delete(medium)
    return None
