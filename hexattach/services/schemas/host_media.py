# hexattach/services/schemas/host_media.py
from __future__ import annotations

from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from hexattach.services.schemas.media import MediaRead


class AttachMediaRequest(BaseModel):
    media_ids: List[UUID] = Field(..., min_length=1)
    tags: List[str] = Field(..., min_length=1)


class DetachMediaRequest(BaseModel):
    # None (omitted) detaches the media from every tag
    tags: Optional[List[str]] = None


class HostDeletedRequest(BaseModel):
    soft: bool = False


class HostDeletedResult(BaseModel):
    host_type: str
    host_id: str
    media_deleted: int


class MediaByTagRead(BaseModel):
    buckets: Dict[str, List[MediaRead]] = {}


class HasMediaRead(BaseModel):
    has_media: bool


class TagsRead(BaseModel):
    media_id: UUID
    tags: List[str] = []
