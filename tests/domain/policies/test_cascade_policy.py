import pytest

from hexattach.domain.enums.delete_mode import DeleteMode
from hexattach.domain.policies.cascade import decide_cascade, resolve_delete_mode


@pytest.mark.parametrize("flag", [True, False])
def test_hard_delete_always_cascades(flag):
    assert decide_cascade(DeleteMode.hard, detach_on_soft_delete=flag).cascade


def test_soft_delete_follows_flag():
    assert decide_cascade(DeleteMode.soft, detach_on_soft_delete=True).cascade
    kept = decide_cascade("soft", detach_on_soft_delete=False)  # type: ignore[arg-type]
    assert not kept.cascade
    assert "disabled" in kept.reason


def test_resolve_delete_mode():
    assert resolve_delete_mode(soft_deletes=False) is DeleteMode.hard
    assert resolve_delete_mode(soft_deletes=True) is DeleteMode.soft
    assert resolve_delete_mode(soft_deletes=True, force=True) is DeleteMode.hard
