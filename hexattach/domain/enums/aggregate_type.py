from __future__ import annotations
from enum import StrEnum

class AggregateType(StrEnum):
    image = "image"
    video = "video"
    audio = "audio"
    document = "document"
    archive = "archive"
    vector = "vector"
    presentation = "presentation"
    spreadsheet = "spreadsheet"
    other = "other"
