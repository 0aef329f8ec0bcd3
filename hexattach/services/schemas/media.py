# hexattach/services/schemas/media.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from hexattach.domain.enums.aggregate_type import AggregateType


class MediaLocationIn(BaseModel):
    disk: str = Field(..., min_length=1, max_length=32)
    directory: str = ""
    filename: str = Field(..., min_length=1)
    extension: str = Field("", max_length=32)


class MediaLocationOut(MediaLocationIn):
    pass


class MediaCreate(BaseModel):
    location: MediaLocationIn
    mime_type: Optional[str] = Field(None, max_length=128)
    aggregate_type: AggregateType = AggregateType.other
    size: int = Field(0, ge=0)


class MediaRead(BaseModel):
    model_config = ConfigDict(use_enum_values=False)

    id: UUID
    location: MediaLocationOut
    mime_type: Optional[str] = None
    aggregate_type: AggregateType
    size: int
    tags: List[str] = []
    host_type: Optional[str] = None
    host_id: Optional[str] = None
    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None
