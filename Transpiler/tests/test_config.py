"""Tests for config.py — YAML loading and defaults."""
import os
import tempfile

import pytest

from Transpiler.config import Config, default_config, load_config

EXAMPLE_CONFIG = os.path.join(os.path.dirname(__file__), "..", "..", "configs", "config.example.yaml")


def _write(text):
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    f.write(text)
    f.close()
    return f.name


def test_defaults():
    config = default_config()
    assert isinstance(config, Config)
    assert config.transpiler.function_prefix == ""
    assert config.transpiler.binary_calls is False
    assert config.transpiler.progress_field == "progressField"
    assert config.catalog.path is None


def test_empty_file_gives_defaults():
    path = _write("")
    try:
        assert load_config(path) == default_config()
    finally:
        os.unlink(path)


def test_partial_override():
    path = _write("transpiler:\n  nested: true\n  function_prefix: null\n")
    try:
        config = load_config(path)
    finally:
        os.unlink(path)
    assert config.transpiler.nested is True
    assert config.transpiler.function_prefix == ""
    assert config.transpiler.check_consistency is False


def test_example_config():
    config = load_config(EXAMPLE_CONFIG)
    assert config.transpiler.function_prefix == "T(Math)."
    assert config.transpiler.binary_calls is True
    assert config.transpiler.check_consistency is True
    assert config.catalog.path.endswith("variables.json")


def test_unknown_key_rejected():
    path = _write("transpiler:\n  colour: blue\n")
    try:
        with pytest.raises(TypeError):
            load_config(path)
    finally:
        os.unlink(path)


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/config.yaml")
