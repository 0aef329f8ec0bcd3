from __future__ import annotations
from enum import StrEnum

class DeleteMode(StrEnum):
    hard = "hard"
    soft = "soft"
