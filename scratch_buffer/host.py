"""Host editor abstraction with swappable implementations.

The scratch buffer logic never talks to an editor directly.  It goes
through the narrow :class:`HostEditor` interface below, which has two
implementations:

* :class:`InMemoryEditor`: a small buffer/window model used by the tests
  and the ``simulate`` CLI command.
* :class:`VimEditor`: wraps the ``vim`` module that Vim (and Neovim's
  Python host) expose to embedded Python code.

Handles are plain positive ints.  "No such buffer" and "not visible" are
``None``, never ``-1``.
"""

from __future__ import annotations

import abc
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from scratch_buffer.config import ConfigNode
from scratch_buffer.errors import ConfigurationError, ContractViolationError, require_handle


class HostEditor(abc.ABC):
    """Capabilities the scratch buffer controller needs from an editor."""

    @abc.abstractmethod
    def get_active_buffer_id(self) -> int:
        """Return the handle of the buffer in the current window."""

    @abc.abstractmethod
    def get_buffer_modified(self, buffer: int) -> bool:
        """Return True if *buffer* has unsaved changes."""

    @abc.abstractmethod
    def find_buffer_by_name(self, name: str) -> int | None:
        """Return the handle of the buffer named *name*, or None."""

    @abc.abstractmethod
    def find_window_for_buffer(self, buffer: int) -> int | None:
        """Return the first window displaying *buffer*, or None."""

    @abc.abstractmethod
    def focus_window(self, window: int) -> None:
        """Make *window* the current window."""

    @abc.abstractmethod
    def display_buffer_in_current_window(self, buffer: int) -> None:
        """Replace the current window's buffer with *buffer*."""

    @abc.abstractmethod
    def create_split_and_display(self, buffer: int) -> None:
        """Open a new split showing *buffer* and focus it."""

    @abc.abstractmethod
    def create_buffer_by_editing(self, name: str, in_new_split: bool) -> int:
        """Create a buffer named *name*, show it, and return its handle.

        The returned handle must be valid: the buffer already exists by the
        time the caller sees it, so a bad handle cannot be rolled back.
        """

    @abc.abstractmethod
    def set_buffer_attribute(self, buffer: int, attribute: str, value: Any) -> None:
        """Set a buffer-local option."""

    @abc.abstractmethod
    def get_buffer_attribute(self, buffer: int, attribute: str) -> Any:
        """Read a buffer-local option."""

    @abc.abstractmethod
    def create_user_command(self, name: str, callback: Callable[[], Any]) -> None:
        """Bind the editor command *name* to *callback*."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


# ---------------------------------------------------------------------------
# In-memory editor
# ---------------------------------------------------------------------------


@dataclass
class BufferState:
    """One entry in the in-memory buffer table."""

    handle: int
    name: str
    modified: bool = False
    attributes: dict[str, Any] = field(default_factory=dict)


class InMemoryEditor(HostEditor):
    """A minimal editor model: a buffer table plus an ordered window list.

    Windows are numbered from 1 in display order, like Vim's window
    numbers.  Splitting inserts the new window before the current one and
    focuses it, so the numbers of the windows after it shift by one.

    Every mutating call is appended to :attr:`calls` as a tuple so tests
    can assert exactly which host operations ran.
    """

    def __init__(self) -> None:
        self.buffers: dict[int, BufferState] = {}
        self.windows: list[int] = []
        self.current = 0
        self.commands: dict[str, Callable[[], Any]] = {}
        self.calls: list[tuple[Any, ...]] = []
        self._next_handle = 1
        # An editor always starts with one unnamed buffer in one window.
        self.windows.append(self.add_buffer("").handle)

    # -- helpers for building editor state ---------------------------------

    def add_buffer(self, name: str, modified: bool = False) -> BufferState:
        """Add a buffer to the table without displaying it."""
        state = BufferState(handle=self._next_handle, name=name, modified=modified)
        self.buffers[state.handle] = state
        self._next_handle += 1
        return state

    def modify(self, buffer: int | None = None) -> None:
        """Mark *buffer* (default: the active buffer) as having unsaved changes."""
        handle = self.get_active_buffer_id() if buffer is None else buffer
        self._buffer(handle).modified = True

    def run_command(self, name: str) -> Any:
        """Invoke a registered user command, as if typed at the command line."""
        if name not in self.commands:
            raise KeyError(f"Not an editor command: {name}")
        return self.commands[name]()

    def buffers_named(self, name: str) -> list[int]:
        return [b.handle for b in self.buffers.values() if b.name == name]

    def _buffer(self, handle: int) -> BufferState:
        try:
            return self.buffers[handle]
        except KeyError:
            raise ContractViolationError(f"No buffer with handle {handle!r}") from None

    # -- HostEditor ---------------------------------------------------------

    def get_active_buffer_id(self) -> int:
        return self.windows[self.current]

    def get_buffer_modified(self, buffer: int) -> bool:
        return self._buffer(buffer).modified

    def find_buffer_by_name(self, name: str) -> int | None:
        for state in self.buffers.values():
            if state.name == name:
                return state.handle
        return None

    def find_window_for_buffer(self, buffer: int) -> int | None:
        for index, shown in enumerate(self.windows):
            if shown == buffer:
                return index + 1
        return None

    def focus_window(self, window: int) -> None:
        if not 1 <= window <= len(self.windows):
            raise ContractViolationError(f"No window numbered {window!r}")
        self.calls.append(("focus_window", window))
        self.current = window - 1

    def display_buffer_in_current_window(self, buffer: int) -> None:
        self._buffer(buffer)
        self.calls.append(("display_buffer_in_current_window", buffer))
        self.windows[self.current] = buffer

    def create_split_and_display(self, buffer: int) -> None:
        self._buffer(buffer)
        self.calls.append(("create_split_and_display", buffer))
        self.windows.insert(self.current, buffer)

    def create_buffer_by_editing(self, name: str, in_new_split: bool) -> int:
        self.calls.append(("create_buffer_by_editing", name, in_new_split))
        handle = self.add_buffer(name).handle
        if in_new_split:
            self.windows.insert(self.current, handle)
        else:
            self.windows[self.current] = handle
        return handle

    def set_buffer_attribute(self, buffer: int, attribute: str, value: Any) -> None:
        self._buffer(buffer).attributes[attribute] = value

    def get_buffer_attribute(self, buffer: int, attribute: str) -> Any:
        return self._buffer(buffer).attributes.get(attribute)

    def create_user_command(self, name: str, callback: Callable[[], Any]) -> None:
        self.commands[name] = callback

    def __repr__(self) -> str:
        return (
            f"InMemoryEditor(buffers={len(self.buffers)}, "
            f"windows={self.windows!r}, current={self.current + 1})"
        )


# ---------------------------------------------------------------------------
# Vim / Neovim editor
# ---------------------------------------------------------------------------

# Callbacks bound by VimEditor.create_user_command, keyed by command name.
# Vim reaches them through ``run_registered_command``.
_REGISTERED: dict[str, Callable[[], Any]] = {}


def run_registered_command(name: str) -> Any:
    """Entry point for the ``:Scratch``-style commands defined in Vim."""
    return _REGISTERED[name]()


# Characters that are special in the file pattern bufnr() takes.
_PATTERN_SPECIALS = "^$.*?/\\[]~"


def _vim_string(value: str) -> str:
    """Quote *value* as a Vim single-quoted string literal."""
    return "'" + value.replace("'", "''") + "'"


class VimEditor(HostEditor):
    """Host backed by the ``vim`` module of Vim's embedded Python.

    The module only exists inside a running editor, so it is imported on
    each call rather than at module import time.

    Parameters
    ----------
    python_command:
        The Ex command that runs a line of Python (``python3`` by default).
    """

    def __init__(self, python_command: str = "python3", **kwargs: Any) -> None:
        self.python_command = python_command

    @staticmethod
    def _vim() -> Any:
        import vim

        return vim

    def get_active_buffer_id(self) -> int:
        return int(self._vim().current.buffer.number)

    def get_buffer_modified(self, buffer: int) -> bool:
        return bool(self._vim().buffers[buffer].options["modified"])

    def find_buffer_by_name(self, name: str) -> int | None:
        # bufnr() falls back to partial matches, so anchor the whole name.
        pattern = f"'^' . escape({_vim_string(name)}, {_vim_string(_PATTERN_SPECIALS)}) . '$'"
        number = int(self._vim().eval(f"bufnr({pattern})"))
        return number if number > 0 else None

    def find_window_for_buffer(self, buffer: int) -> int | None:
        number = int(self._vim().eval(f"bufwinnr({buffer})"))
        return number if number > 0 else None

    def focus_window(self, window: int) -> None:
        self._vim().command(f"{window} wincmd w")

    def display_buffer_in_current_window(self, buffer: int) -> None:
        self._vim().command(f"buffer {buffer}")

    def create_split_and_display(self, buffer: int) -> None:
        self._vim().command(f"split +buffer {buffer}")

    def create_buffer_by_editing(self, name: str, in_new_split: bool) -> int:
        vim = self._vim()
        escaped = vim.eval(f"fnameescape({_vim_string(name)})")
        vim.command(("new " if in_new_split else "edit ") + escaped)
        return require_handle(int(vim.current.buffer.number))

    def set_buffer_attribute(self, buffer: int, attribute: str, value: Any) -> None:
        self._vim().buffers[buffer].options[attribute] = value

    def get_buffer_attribute(self, buffer: int, attribute: str) -> Any:
        value = self._vim().buffers[buffer].options[attribute]
        # Vim's Python 3 interface returns string options as bytes.
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def create_user_command(self, name: str, callback: Callable[[], Any]) -> None:
        _REGISTERED[name] = callback
        self._vim().command(
            f"command! {name} {self.python_command} "
            f"import scratch_buffer.host; "
            f"scratch_buffer.host.run_registered_command({name!r})"
        )

    def __repr__(self) -> str:
        return f"VimEditor(python_command={self.python_command!r})"


# ---------------------------------------------------------------------------
# Provider registry & factory
# ---------------------------------------------------------------------------

_PROVIDERS: dict[str, type[HostEditor]] = {
    "memory": InMemoryEditor,
    "vim": VimEditor,
}


def get_host(config: ConfigNode | None = None) -> HostEditor:
    """Instantiate the host editor named by ``config.host.provider``.

    The in-memory editor is the default.  Extra keys in the ``host``
    section are forwarded to the constructor of providers that accept
    them.

    Raises
    ------
    ConfigurationError
        If the configured provider is not recognised.
    """
    section = config.get("host") if config is not None else None
    data: dict[str, Any] = dict(section) if isinstance(section, dict) else {}
    provider = str(data.pop("provider", "memory")).lower()

    cls = _PROVIDERS.get(provider)
    if cls is None:
        raise ConfigurationError(
            f"Unknown host provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDERS))}"
        )
    if cls is InMemoryEditor:
        return cls()
    return cls(**data)
