"""Configuration loading and scratch buffer identity.

Loads ``scratch_config.yml`` and exposes settings via attribute access,
e.g. ``config.scratch.buffer_name``, ``config.host.provider``.  The
validated buffer name lives in an immutable :class:`ScratchConfig` that a
single controller instance holds.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from scratch_buffer.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "scratch_config.yml"
DEFAULT_BUFFER_NAME = "_SCRATCH_"


class ConfigNode:
    """Recursive wrapper that turns a dict into an object with attribute access."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data
        for key, value in data.items():
            if isinstance(value, dict):
                setattr(self, key, ConfigNode(value))
            else:
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"ConfigNode({self._data!r})"

    def __getattr__(self, name: str) -> Any:
        # Only reached for keys that are missing, so getattr(obj, key, default)
        # keeps working.
        if name.startswith("_"):
            raise AttributeError(name)
        raise AttributeError(
            f"Config has no attribute {name!r}. "
            f"Available keys: {', '.join(sorted(self._data)) or '(none)'}"
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for *key* if present, else *default*."""
        return self._data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def to_dict(self) -> dict[str, Any]:
        """Return the raw dictionary."""
        return self._data


def load_config(path: Path | str | None = None) -> ConfigNode:
    """Load YAML config and return a ConfigNode with dot-path access.

    Parameters
    ----------
    path:
        Path to the YAML config file.  Defaults to ``scratch_config.yml``
        in the project root.

    Raises
    ------
    FileNotFoundError
        If the config file does not exist.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path) as f:
        data = yaml.safe_load(f)
    return ConfigNode(data or {})


@dataclass(frozen=True)
class ScratchConfig:
    """The scratch buffer's identity: the one configured buffer name."""

    buffer_name: str = DEFAULT_BUFFER_NAME

    def __post_init__(self) -> None:
        validate_buffer_name(self.buffer_name)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> ScratchConfig:
        """Build a config from a ``{"buffer_name": ...}`` options mapping.

        A missing or ``None`` ``buffer_name`` falls back to the default.
        Unknown keys are ignored.

        Raises
        ------
        ConfigurationError
            If *options* is not a mapping, or ``buffer_name`` is present but
            not a non-empty string.
        """
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            raise ConfigurationError(
                f"Options must be a mapping, got {type(options).__name__}"
            )
        name = options.get("buffer_name")
        if name is None:
            return cls()
        return cls(buffer_name=name)

    @classmethod
    def from_node(cls, node: ConfigNode) -> ScratchConfig:
        """Read the ``scratch`` section of a loaded config file."""
        section = node.get("scratch")
        if section is None:
            return cls()
        if isinstance(section, ConfigNode):
            section = section.to_dict()
        return cls.from_options(section)


def validate_buffer_name(name: Any) -> str:
    """Return *name* unchanged if it is a usable buffer name."""
    if not isinstance(name, str):
        raise ConfigurationError(
            f"Invalid buffer name: expected a string, got {type(name).__name__}"
        )
    if not name.strip():
        raise ConfigurationError("Invalid buffer name: must not be empty")
    return name
