"""Tests for scan configuration validation."""

from pathlib import Path

import pytest

from typehunt.engine import FILE_READ_CONCURRENCY, ScanConfig
from typehunt.errors import ConfigurationError
from typehunt.grouping import GroupingMode


@pytest.mark.unit
def test_defaults() -> None:
    """Test default configuration values."""
    config = ScanConfig()

    assert config.root == Path("src")
    assert config.tsconfig is None
    assert config.exclude == []
    assert config.mode is GroupingMode.BOTH
    assert config.min_group_size == 2
    assert config.include_enums is True
    assert config.skip_reexports is True
    assert config.concurrency == FILE_READ_CONCURRENCY == 50


@pytest.mark.unit
def test_mode_string_coerced() -> None:
    """Test string modes are converted to GroupingMode."""
    assert ScanConfig(mode="shape").mode is GroupingMode.SHAPE


@pytest.mark.unit
def test_paths_coerced() -> None:
    """Test string paths are converted to Path."""
    config = ScanConfig(root="lib", tsconfig="tsconfig.json")

    assert config.root == Path("lib")
    assert config.tsconfig == Path("tsconfig.json")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"mode": "fuzzy"}, "Invalid mode"),
        ({"min_group_size": 1}, "min_group_size must be >= 2"),
        ({"min_group_size": 0}, "min_group_size must be >= 2"),
        ({"min_group_size": 2.5}, "must be an integer"),
        ({"min_group_size": True}, "must be an integer"),
        ({"concurrency": 0}, "concurrency must be >= 1"),
    ],
)
def test_invalid_values_raise(kwargs: dict, message: str) -> None:
    """Test invalid values raise ConfigurationError."""
    with pytest.raises(ConfigurationError, match=message):
        ScanConfig(**kwargs)


@pytest.mark.unit
def test_configuration_error_is_value_error() -> None:
    """Test ConfigurationError can be caught as ValueError."""
    with pytest.raises(ValueError):
        ScanConfig(min_group_size=1)


@pytest.mark.unit
def test_to_dict_is_json_friendly() -> None:
    """Test to_dict serializes paths and mode as strings."""
    data = ScanConfig(mode="name", exclude=["gen"]).to_dict()

    assert data["root"] == "src"
    assert data["tsconfig"] is None
    assert data["mode"] == "name"
    assert data["exclude"] == ["gen"]
