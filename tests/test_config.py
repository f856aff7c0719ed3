"""Tests for the config loader and scratch buffer identity."""

import pytest

from scratch_buffer.config import (
    DEFAULT_BUFFER_NAME,
    ConfigNode,
    ScratchConfig,
    load_config,
    validate_buffer_name,
)
from scratch_buffer.errors import ConfigurationError


@pytest.fixture
def sample_config(tmp_path):
    """Write a minimal config YAML and return its path."""
    cfg = tmp_path / "config.yml"
    cfg.write_text(
        "scratch:\n"
        '  buffer_name: "notes"\n'
        "host:\n"
        '  provider: "vim"\n'
        '  python_command: "py3"\n'
    )
    return cfg


# ---------------------------------------------------------------------------
# load_config / ConfigNode
# ---------------------------------------------------------------------------


def test_load_config_dot_access(sample_config):
    """Config values are accessible via dot-path notation."""
    cfg = load_config(sample_config)
    assert cfg.scratch.buffer_name == "notes"
    assert cfg.host.provider == "vim"
    assert cfg.host.python_command == "py3"


def test_load_config_bracket_access(sample_config):
    """Config values are also accessible via bracket notation."""
    cfg = load_config(sample_config)
    assert cfg["scratch"]["buffer_name"] == "notes"


def test_load_config_to_dict(sample_config):
    """to_dict() returns the raw dictionary."""
    d = load_config(sample_config).to_dict()
    assert isinstance(d, dict)
    assert d["host"]["provider"] == "vim"


def test_load_config_missing_file():
    """FileNotFoundError is raised for a non-existent config."""
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/path.yml")


def test_load_config_empty_file(tmp_path):
    """An empty YAML file loads as an empty config."""
    cfg_path = tmp_path / "empty.yml"
    cfg_path.write_text("")
    assert len(load_config(cfg_path)) == 0


def test_load_default_config():
    """The default scratch_config.yml loads without error."""
    cfg = load_config()
    assert cfg.scratch.buffer_name == "_SCRATCH_"
    assert cfg.host.provider == "memory"


def test_missing_attribute_lists_available_keys():
    """Unknown attributes raise AttributeError naming the available keys."""
    node = ConfigNode({"alpha": 1})
    with pytest.raises(AttributeError, match="alpha"):
        node.beta


def test_config_node_repr():
    """ConfigNode has a meaningful repr."""
    assert "key" in repr(ConfigNode({"key": "value"}))


def test_config_node_contains():
    """ConfigNode supports 'in' membership checks."""
    node = ConfigNode({"alpha": 1, "beta": {"nested": True}})
    assert "alpha" in node
    assert "beta" in node
    assert "gamma" not in node


def test_config_node_iter():
    """ConfigNode supports iteration over top-level keys."""
    assert set(ConfigNode({"x": 1, "y": 2, "z": 3})) == {"x", "y", "z"}


def test_config_node_len():
    """ConfigNode supports len()."""
    assert len(ConfigNode({})) == 0
    assert len(ConfigNode({"a": 1, "b": 2})) == 2


# ---------------------------------------------------------------------------
# ScratchConfig
# ---------------------------------------------------------------------------


class TestScratchConfig:
    """Validation of the configured buffer name."""

    def test_default_name(self):
        assert ScratchConfig().buffer_name == "_SCRATCH_"
        assert DEFAULT_BUFFER_NAME == "_SCRATCH_"

    def test_from_empty_options(self):
        """configure({}) keeps the default name."""
        assert ScratchConfig.from_options({}).buffer_name == "_SCRATCH_"

    def test_from_none(self):
        assert ScratchConfig.from_options(None).buffer_name == "_SCRATCH_"

    def test_explicit_name_used_verbatim(self):
        assert ScratchConfig.from_options({"buffer_name": "notes"}).buffer_name == "notes"

    def test_unknown_keys_ignored(self):
        config = ScratchConfig.from_options({"buffer_name": "notes", "colour": "red"})
        assert config.buffer_name == "notes"

    @pytest.mark.parametrize("bad", [123, 1.5, ["notes"], {"name": "x"}, True])
    def test_non_string_name_rejected(self, bad):
        with pytest.raises(ConfigurationError, match="expected a string"):
            ScratchConfig.from_options({"buffer_name": bad})

    @pytest.mark.parametrize("bad", ["", "   "])
    def test_empty_name_rejected(self, bad):
        with pytest.raises(ConfigurationError, match="must not be empty"):
            ScratchConfig.from_options({"buffer_name": bad})

    def test_non_mapping_options_rejected(self):
        with pytest.raises(ConfigurationError, match="mapping"):
            ScratchConfig.from_options("notes")

    def test_direct_construction_validates(self):
        with pytest.raises(ConfigurationError):
            ScratchConfig(buffer_name="")

    def test_is_immutable(self):
        config = ScratchConfig()
        with pytest.raises(AttributeError):
            config.buffer_name = "other"

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_buffer_name(None)

    def test_from_node(self, sample_config):
        assert ScratchConfig.from_node(load_config(sample_config)).buffer_name == "notes"

    def test_from_node_without_scratch_section(self):
        assert ScratchConfig.from_node(ConfigNode({"host": {}})).buffer_name == "_SCRATCH_"

    def test_from_node_with_invalid_name(self):
        node = ConfigNode({"scratch": {"buffer_name": 42}})
        with pytest.raises(ConfigurationError):
            ScratchConfig.from_node(node)
