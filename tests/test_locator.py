"""Tests for the buffer locator."""

import pytest
from unittest.mock import MagicMock

from scratch_buffer.errors import ContractViolationError
from scratch_buffer.host import InMemoryEditor
from scratch_buffer.locator import BufferLocator


@pytest.fixture
def editor():
    return InMemoryEditor()


def test_locate_first_use_is_not_found(editor):
    """Nothing created yet is simply "not found"."""
    assert BufferLocator(editor).locate("_SCRATCH_") is None


def test_locate_existing(editor):
    state = editor.add_buffer("_SCRATCH_")
    assert BufferLocator(editor).locate("_SCRATCH_") == state.handle


def test_locate_matches_whole_name(editor):
    editor.add_buffer("_SCRATCH_.bak")
    assert BufferLocator(editor).locate("_SCRATCH_") is None


def test_locate_has_no_side_effects(editor):
    editor.add_buffer("_SCRATCH_")
    BufferLocator(editor).locate("_SCRATCH_")
    assert editor.calls == []
    assert editor.windows == [1]


def test_window_for_hidden_buffer(editor):
    state = editor.add_buffer("_SCRATCH_")
    assert BufferLocator(editor).find_window_showing(state.handle) is None


def test_window_for_visible_buffer(editor):
    state = editor.add_buffer("_SCRATCH_")
    editor.create_split_and_display(state.handle)
    assert BufferLocator(editor).find_window_showing(state.handle) == 1


def test_first_of_several_windows(editor):
    """With several windows showing the buffer, the lowest-numbered wins."""
    state = editor.add_buffer("_SCRATCH_")
    editor.windows = [1, state.handle, 1, state.handle]
    assert BufferLocator(editor).find_window_showing(state.handle) == 2


@pytest.mark.parametrize("bad", [None, -1, 0, "3", 2.0, True])
def test_invalid_handle_fails_fast(bad):
    host = MagicMock()
    with pytest.raises(ContractViolationError):
        BufferLocator(host).find_window_showing(bad)
    host.find_window_for_buffer.assert_not_called()
