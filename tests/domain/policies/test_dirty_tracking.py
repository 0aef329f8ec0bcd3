from hexattach.domain.policies.dirty_tracking import DirtyTagTracker
from hexattach.domain.policies.rehydration import should_refetch_before_write, should_rehydrate


def test_new_tracker_is_clean():
    t = DirtyTagTracker()
    assert not t.is_dirty()
    assert not t.is_dirty(["a"])


def test_marked_tags_are_dirty_by_intersection():
    t = DirtyTagTracker()
    t.mark_dirty(["a", "b"])
    assert t.is_dirty()
    assert t.is_dirty("a")
    assert t.is_dirty(["z", "b"])
    assert not t.is_dirty(["z"])
    assert t.tags == {"a", "b"}


def test_mark_dirty_none_marks_everything():
    t = DirtyTagTracker()
    t.mark_dirty(None)
    assert t.all_dirty
    assert t.is_dirty(["anything"])
    assert t.is_dirty()


def test_clear_resets_both_states():
    t = DirtyTagTracker()
    t.mark_dirty("a")
    t.mark_dirty(None)
    t.clear()
    assert not t.all_dirty
    assert not t.is_dirty()
    assert not t.tags


def test_should_rehydrate_needs_flag_and_dirty_tags():
    t = DirtyTagTracker()
    assert not should_rehydrate(True, t, "a")

    t.mark_dirty("a")
    assert should_rehydrate(True, t, "a")
    assert not should_rehydrate(True, t, "b")
    assert not should_rehydrate(False, t, "a")
    assert should_rehydrate(True, t)


def test_should_refetch_before_write():
    assert should_refetch_before_write(True, True)
    assert not should_refetch_before_write(True, False)
    assert not should_refetch_before_write(False, True)
