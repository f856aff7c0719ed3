"""The scratch buffer controller: open or split to the one scratch buffer.

One :class:`ScratchController` is built at startup with an injected
:class:`~scratch_buffer.host.HostEditor` and held by whatever binds the
editor commands.  Each :meth:`~ScratchController.open` /
:meth:`~ScratchController.split` call runs locate -> resolve -> execute
synchronously and returns the decision it carried out.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from loguru import logger

from scratch_buffer.config import ScratchConfig, load_config
from scratch_buffer.errors import require_handle
from scratch_buffer.host import HostEditor, get_host
from scratch_buffer.lifecycle import initialize, is_scratch_buffer
from scratch_buffer.locator import BufferLocator
from scratch_buffer.placement import PlacementDecision, resolve

OPEN_COMMAND = "Scratch"
SPLIT_COMMAND = "ScratchSplit"


class ScratchController:
    """Brings the configured scratch buffer on screen without duplicating it.

    Parameters
    ----------
    host:
        The editor to act on.
    config:
        The scratch buffer identity.  Defaults to ``ScratchConfig()``,
        i.e. a buffer named ``_SCRATCH_``.
    """

    def __init__(self, host: HostEditor, config: ScratchConfig | None = None) -> None:
        self.host = host
        self.config = config or ScratchConfig()
        self.locator = BufferLocator(host)

    @property
    def buffer_name(self) -> str:
        return self.config.buffer_name

    def configure(self, options: Mapping[str, Any] | None = None) -> ScratchConfig:
        """Replace the configuration from an options mapping.

        The current configuration is kept if validation fails.
        """
        self.config = ScratchConfig.from_options(options)
        logger.debug(f"Scratch buffer name set to {self.config.buffer_name!r}")
        return self.config

    def open(self) -> PlacementDecision:
        """Show the scratch buffer, in the current window when that is safe."""
        return self._open_or_split(force_new_window=False)

    def split(self) -> PlacementDecision:
        """Show the scratch buffer in a new split unless it is already visible."""
        return self._open_or_split(force_new_window=True)

    def _open_or_split(self, force_new_window: bool) -> PlacementDecision:
        modified = False
        if not force_new_window:
            active = self.host.get_active_buffer_id()
            modified = self.host.get_buffer_modified(active)

        name = self.config.buffer_name
        buffer = self.locator.locate(name)
        window = self.locator.find_window_showing(buffer) if buffer is not None else None

        decision = resolve(force_new_window, modified, buffer, window)
        logger.info(f"Scratch {name!r}: {decision.describe()}")
        return self._execute(decision)

    def _execute(self, decision: PlacementDecision) -> PlacementDecision:
        host = self.host

        if decision.create_new:
            buffer = host.create_buffer_by_editing(self.config.buffer_name, decision.split)
            initialize(host, buffer)
            return dataclasses.replace(decision, buffer=buffer)

        buffer = require_handle(decision.buffer)
        # Reuse trusts the name alone; a same-named ordinary buffer is adopted.
        if not is_scratch_buffer(host, buffer):
            logger.warning(
                f"Buffer {buffer} named {self.config.buffer_name!r} "
                "lacks scratch attributes; reusing it anyway"
            )

        if decision.reuse_window:
            host.focus_window(require_handle(decision.window, "window"))
        elif decision.split:
            host.create_split_and_display(buffer)
        else:
            host.display_buffer_in_current_window(buffer)
        return decision

    def __repr__(self) -> str:
        return f"ScratchController(host={self.host!r}, buffer_name={self.buffer_name!r})"


def setup(host: HostEditor, options: Mapping[str, Any] | None = None) -> ScratchController:
    """Build a controller and bind the ``Scratch`` / ``ScratchSplit`` commands.

    Raises
    ------
    ConfigurationError
        If *options* contains an invalid ``buffer_name``.  No command is
        registered in that case.
    """
    controller = ScratchController(host, ScratchConfig.from_options(options))
    host.create_user_command(OPEN_COMMAND, controller.open)
    host.create_user_command(SPLIT_COMMAND, controller.split)
    logger.debug(f"Registered {OPEN_COMMAND} and {SPLIT_COMMAND} commands")
    return controller


def setup_from_config(path: Path | str | None = None) -> ScratchController:
    """Set up the editor named in ``scratch_config.yml``.

    Reads ``host.provider`` to pick the editor and the ``scratch`` section
    for the buffer name.  This is the entry point to call from inside the
    editor, e.g. ``:python3 from scratch_buffer.controller import
    setup_from_config; setup_from_config()`` with ``provider: "vim"``.

    Raises
    ------
    FileNotFoundError
        If the config file does not exist.
    ConfigurationError
        If the provider or the buffer name is invalid.
    """
    node = load_config(path)
    scratch = ScratchConfig.from_node(node)
    host = get_host(node)
    logger.info(f"Setting up scratch buffer {scratch.buffer_name!r} on {host!r}")
    return setup(host, {"buffer_name": scratch.buffer_name})
