"""Tests for verity configuration."""

import logging

import pytest

from verity.config import (
    DEFAULT_FILTER_PARAMETERS,
    VerityConfig,
    get_config,
    reset_config,
    set_config,
)
from verity.constraints import Presence
from verity.contracts import Contract


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for name in ("VERITY_FILTER_PARAMETERS", "VERITY_FILTERED_VALUE", "VERITY_LOG_EVALUATIONS"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


def test_default_config():
    """Test default configuration values."""
    config = VerityConfig()
    assert config.filter_parameters == DEFAULT_FILTER_PARAMETERS
    assert config.filtered_value == "[FILTERED]"
    assert config.log_evaluations is False
    assert config.summary_separator == ", "


def test_is_filtered():
    """Test property names are matched against filter fragments."""
    config = VerityConfig()
    assert config.is_filtered("password") is True
    assert config.is_filtered("email", "api_key") is True
    assert config.is_filtered("email") is False

    assert VerityConfig(filter_parameters=()).is_filtered("password") is False


def test_config_validation():
    """Test configuration validation."""
    with pytest.raises(ValueError, match="filter_parameters"):
        VerityConfig(filter_parameters="password")

    with pytest.raises(ValueError, match="filter_parameters"):
        VerityConfig(filter_parameters=("password", ""))

    with pytest.raises(ValueError, match="filtered_value"):
        VerityConfig(filtered_value=None)


def test_config_from_env(monkeypatch):
    """Test configuration from environment variables."""
    monkeypatch.setenv("VERITY_FILTER_PARAMETERS", "pin, cvv")
    monkeypatch.setenv("VERITY_FILTERED_VALUE", "***")
    monkeypatch.setenv("VERITY_LOG_EVALUATIONS", "true")

    config = VerityConfig.from_env()

    assert config.filter_parameters == ("pin", "cvv")
    assert config.filtered_value == "***"
    assert config.log_evaluations is True


def test_config_from_dict():
    """Test configuration from a dictionary."""
    config = VerityConfig.from_dict({
        "filter_parameters": ["pin"],
        "filtered_value": "<hidden>",
        "summary_separator": "; ",
    })

    assert config.filter_parameters == ("pin",)
    assert config.filtered_value == "<hidden>"
    assert config.summary_separator == "; "
    assert config.log_evaluations is False


def test_config_from_dict_unknown_keys(caplog):
    """Test unknown keys are ignored with a warning."""
    with caplog.at_level(logging.WARNING, logger="verity.config"):
        config = VerityConfig.from_dict({"colour": "blue"})

    assert config == VerityConfig()
    assert "colour" in caplog.text


def test_config_from_yaml(tmp_path):
    """Test configuration from a YAML file."""
    path = tmp_path / "verity.yaml"
    path.write_text("filter_parameters:\n  - pin\nlog_evaluations: true\n")

    config = VerityConfig.from_yaml(path)

    assert config.filter_parameters == ("pin",)
    assert config.log_evaluations is True


def test_config_from_yaml_invalid(tmp_path):
    """Test non-mapping YAML is rejected."""
    path = tmp_path / "verity.yaml"
    path.write_text("- pin\n")

    with pytest.raises(ValueError, match="Invalid configuration"):
        VerityConfig.from_yaml(path)


def test_config_to_dict():
    """Test configuration round trips through a dictionary."""
    config = VerityConfig(filter_parameters=("pin",), log_evaluations=True)

    assert VerityConfig.from_dict(config.to_dict()) == config


def test_global_config(monkeypatch):
    """Test global configuration management."""
    monkeypatch.setenv("VERITY_FILTERED_VALUE", "xxx")
    assert get_config().filtered_value == "xxx"

    custom = VerityConfig(filtered_value="***")
    set_config(custom)
    assert get_config() is custom

    reset_config()
    assert get_config().filtered_value == "xxx"


def test_log_evaluations(caplog):
    """Test contract evaluations are logged only when enabled."""
    contract = Contract().add_constraint(Presence())

    with caplog.at_level(logging.DEBUG, logger="verity.contracts.base"):
        contract.match("")
    assert "failed" not in caplog.text

    set_config(VerityConfig(log_evaluations=True))
    with caplog.at_level(logging.DEBUG, logger="verity.contracts.base"):
        contract.match("")
    assert "Contract failed for str: verity.constraints.absent" in caplog.text
