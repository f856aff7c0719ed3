"""Placement policy: where the scratch buffer should appear.

:func:`resolve` turns the editor state gathered by the locator into a
single :class:`PlacementDecision`.  It is a pure function; carrying out the
decision is the controller's job.

Policy, in priority order:

1. An unsaved active buffer counts as a request for a new window, so the
   scratch buffer never replaces unsaved work in place.
2. An existing scratch buffer that is already visible is focused, whatever
   the new-window flag says.  A visible scratch buffer is never shown twice.
3. An existing but hidden scratch buffer is shown in a new split or in the
   current window.
4. A missing scratch buffer is created in a new split or edited into the
   current window.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scratch_buffer.errors import ContractViolationError, require_handle


class PlacementAction(str, Enum):
    """The one host operation a decision maps to."""

    FOCUS_WINDOW = "focus-window"
    SPLIT_EXISTING = "split-existing"
    SHOW_IN_CURRENT = "show-in-current"
    SPLIT_NEW = "split-new"
    EDIT_NEW = "edit-new"


@dataclass(frozen=True)
class PlacementDecision:
    """The outcome of one resolution.

    ``window`` is only set when ``reuse_window`` is true.  ``buffer`` is
    the existing scratch buffer, or None when one has to be created.
    """

    reuse_window: bool
    create_new: bool
    split: bool
    buffer: int | None = None
    window: int | None = None

    @property
    def action(self) -> PlacementAction:
        if self.reuse_window:
            return PlacementAction.FOCUS_WINDOW
        if self.create_new:
            return PlacementAction.SPLIT_NEW if self.split else PlacementAction.EDIT_NEW
        return PlacementAction.SPLIT_EXISTING if self.split else PlacementAction.SHOW_IN_CURRENT

    def describe(self) -> str:
        """Return a short human-readable summary, e.g. for logs."""
        if self.reuse_window:
            return f"focus window {self.window} (buffer {self.buffer})"
        where = "new split" if self.split else "current window"
        if self.create_new:
            return f"create scratch buffer in {where}"
        return f"show buffer {self.buffer} in {where}"


def resolve(
    force_new_window: bool,
    active_buffer_modified: bool,
    buffer: int | None = None,
    window: int | None = None,
) -> PlacementDecision:
    """Decide how to bring the scratch buffer on screen.

    Parameters
    ----------
    force_new_window:
        True when the caller explicitly asked for a split.
    active_buffer_modified:
        True when the buffer in the current window has unsaved changes.
    buffer:
        The existing scratch buffer, or None if there is none.
    window:
        The first window showing *buffer*, or None if it is hidden.

    Raises
    ------
    ContractViolationError
        If a handle is invalid, or a window is given without a buffer.
    """
    if buffer is None:
        if window is not None:
            raise ContractViolationError(
                f"Window {window!r} given for a buffer that does not exist"
            )
    else:
        require_handle(buffer)
    if window is not None:
        require_handle(window, "window")

    new_window = bool(force_new_window or active_buffer_modified)

    if buffer is None:
        return PlacementDecision(reuse_window=False, create_new=True, split=new_window)
    if window is not None:
        return PlacementDecision(
            reuse_window=True, create_new=False, split=False, buffer=buffer, window=window
        )
    return PlacementDecision(
        reuse_window=False, create_new=False, split=new_window, buffer=buffer
    )
