"""Error types raised by the scratch buffer controller.

Both errors abort the triggering invocation before any host mutation
happens, so neither leaves the editor in a half-updated state.
"""

from __future__ import annotations


class ScratchError(Exception):
    """Base class for all scratch buffer errors."""


class ConfigurationError(ScratchError, ValueError):
    """Invalid configuration, e.g. a non-string or empty ``buffer_name``."""


class ContractViolationError(ScratchError, ValueError):
    """An internal call received an invalid buffer or window handle."""


def require_handle(value: object, what: str = "buffer") -> int:
    """Return *value* if it is a valid (positive int) handle, else raise.

    ``bool`` is rejected explicitly because it is an ``int`` subclass.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ContractViolationError(f"Invalid {what} handle: {value!r}")
    return value
