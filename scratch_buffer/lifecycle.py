"""Scratch buffer attributes and their one-time initialisation.

A buffer counts as scratch space when it carries all four attributes in
:class:`ScratchAttribute`.  They are applied once, right after the buffer
is created, and never re-applied on reuse.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from loguru import logger

from scratch_buffer.errors import require_handle
from scratch_buffer.host import HostEditor


class ScratchAttribute(Enum):
    """A buffer option and the value it takes on a scratch buffer."""

    # keep the buffer loaded when it is no longer shown in a window
    HIDE_ON_UNFOCUS = ("bufhidden", "hide")
    # include it in :bnext / :ls
    LISTED = ("buflisted", True)
    # not backed by a file; its name is ours to control
    NOT_FILE_BACKED = ("buftype", "nofile")
    # content is not crash-recoverable
    NO_SWAP = ("swapfile", False)

    @property
    def option(self) -> str:
        return self.value[0]

    @property
    def setting(self) -> Any:
        return self.value[1]


def initialize(host: HostEditor, buffer: int) -> None:
    """Apply every :class:`ScratchAttribute` to a freshly created *buffer*."""
    require_handle(buffer)
    for attribute in ScratchAttribute:
        host.set_buffer_attribute(buffer, attribute.option, attribute.setting)
    logger.debug(f"Initialised buffer {buffer} as scratch")


def is_scratch_buffer(host: HostEditor, buffer: int) -> bool:
    """Return True if *buffer* carries all scratch attributes."""
    require_handle(buffer)
    return all(
        host.get_buffer_attribute(buffer, attribute.option) == attribute.setting
        for attribute in ScratchAttribute
    )
