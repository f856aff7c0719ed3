"""Buffer lookup by name and by visibility."""

from __future__ import annotations

from loguru import logger

from scratch_buffer.errors import require_handle
from scratch_buffer.host import HostEditor


class BufferLocator:
    """Answers "does the scratch buffer exist, and where is it shown?"."""

    def __init__(self, host: HostEditor) -> None:
        self.host = host

    def locate(self, name: str) -> int | None:
        """Return the handle of the buffer named *name*, or None.

        Not finding a buffer is normal on first use and is not an error.
        """
        buffer = self.host.find_buffer_by_name(name)
        logger.debug(f"Locate {name!r}: {buffer if buffer is not None else 'not found'}")
        return buffer

    def find_window_showing(self, buffer: int) -> int | None:
        """Return the first window displaying *buffer*, or None.

        Raises
        ------
        ContractViolationError
            If *buffer* is not a valid handle.  Callers check existence
            with :meth:`locate` first.
        """
        require_handle(buffer)
        window = self.host.find_window_for_buffer(buffer)
        logger.debug(f"Buffer {buffer} visible in window: {window}")
        return window
