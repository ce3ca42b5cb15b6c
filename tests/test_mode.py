"""Tests for the unsaved build mode."""

import threading

import pytest

from fixture_forge import is_unsaved, unsaved
from fixture_forge.builder import unsaved_depth


class TestUnsavedMode:
    """Test scoping of the unsaved flag."""

    def test_off_by_default(self):
        assert not is_unsaved()
        assert unsaved_depth() == 0

    def test_scopes_nest(self):
        with unsaved():
            assert is_unsaved()
            with unsaved():
                assert unsaved_depth() == 2
            assert unsaved_depth() == 1
            assert is_unsaved()
        assert not is_unsaved()

    def test_restored_after_exception(self):
        with pytest.raises(KeyError):
            with unsaved():
                raise KeyError("boom")
        assert not is_unsaved()

    def test_local_to_thread(self):
        seen = []
        worker = threading.Thread(target=lambda: seen.append(is_unsaved()))
        with unsaved():
            worker.start()
            worker.join()
        assert seen == [False]
