import pytest

from linkcell.core.weak import WeakHandle
from linkcell.errors import OwnerGoneError


class _Target:
    pass


def test_upgrade_returns_live_target():
    target = _Target()
    handle = WeakHandle(target, label="target")

    assert handle.alive
    assert handle.upgrade() is target
    assert handle.points_to(target)
    assert repr(handle) == "WeakHandle(target, alive)"


def test_upgrade_after_target_destroyed_fails():
    target = _Target()
    handle = WeakHandle(target)
    del target

    assert not handle.alive
    assert handle.try_upgrade() is None
    with pytest.raises(OwnerGoneError, match="_Target"):
        handle.upgrade()
    assert repr(handle) == "WeakHandle(_Target, gone)"
