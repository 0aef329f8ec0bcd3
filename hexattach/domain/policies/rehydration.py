# hexattach/domain/policies/rehydration.py
from __future__ import annotations

from hexattach.domain.entities.tag_set import TagsInput
from hexattach.domain.policies.dirty_tracking import DirtyTagTracker


def should_rehydrate(enabled: bool, tracker: DirtyTagTracker, tags: TagsInput = None) -> bool:
    """
    Reload before a read only when rehydration is on AND the host's own writes
    touched the requested tags (any tag when `tags` is None).
    Other processes' writes are not detected.
    """
    return bool(enabled) and tracker.is_dirty(tags)


def should_refetch_before_write(enabled: bool, has_identity: bool) -> bool:
    """Re-read the authoritative copy of a media value before mutating its tags."""
    return bool(enabled) and has_identity
