# hexattach/domain/policies/cascade.py
from __future__ import annotations

from dataclasses import dataclass

from hexattach.domain.enums.delete_mode import DeleteMode


@dataclass(frozen=True)
class CascadeDecision:
    cascade: bool
    reason: str


def decide_cascade(mode: DeleteMode, *, detach_on_soft_delete: bool) -> CascadeDecision:
    """
    Hard deletes always cascade. Soft deletes cascade only when
    detach_on_soft_delete is enabled.
    """
    mode = DeleteMode(mode)
    if mode is DeleteMode.hard:
        return CascadeDecision(True, "hard delete")
    if detach_on_soft_delete:
        return CascadeDecision(True, "soft delete with detach_on_soft_delete")
    return CascadeDecision(False, "soft delete; detach_on_soft_delete disabled")


def resolve_delete_mode(soft_deletes: bool, force: bool = False) -> DeleteMode:
    """A host type without soft deletes, or a forced delete, is a hard delete."""
    if soft_deletes and not force:
        return DeleteMode.soft
    return DeleteMode.hard
