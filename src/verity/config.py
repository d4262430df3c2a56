"""
Configuration for verity.

Supports:
- Environment variable configuration
- YAML file configuration
- Runtime overrides via set_config()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_FILTER_PARAMETERS = (
    "passw",
    "secret",
    "token",
    "_key",
    "crypt",
    "salt",
    "certificate",
    "otp",
    "ssn",
)


@dataclass
class VerityConfig:
    """
    Process-wide settings for constraint evaluation and reporting.

    Defaults:
    - filter_parameters: common credential fragments
    - filtered_value: "[FILTERED]"
    - log_evaluations: False (no per-evaluation debug logging)
    """

    # Property name fragments whose values are masked in error data
    filter_parameters: tuple[str, ...] = field(default_factory=lambda: DEFAULT_FILTER_PARAMETERS)
    filtered_value: str = "[FILTERED]"

    log_evaluations: bool = False
    summary_separator: str = ", "

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.filter_parameters, str):
            raise ValueError("filter_parameters must be a sequence of strings, got a string")
        self.filter_parameters = tuple(self.filter_parameters)

        for fragment in self.filter_parameters:
            if not isinstance(fragment, str) or not fragment:
                raise ValueError(f"filter_parameters entries must be non-empty strings, got {fragment!r}")

        if not isinstance(self.filtered_value, str):
            raise ValueError(f"filtered_value must be a string, got {type(self.filtered_value).__name__}")

    def is_filtered(self, *names: Any) -> bool:
        """Check if any of the given property names matches a filter fragment."""
        return any(
            fragment in str(name)
            for name in names
            for fragment in self.filter_parameters
        )

    @classmethod
    def from_env(cls) -> VerityConfig:
        """
        Create configuration from environment variables.

        Environment variables:
            VERITY_FILTER_PARAMETERS: Comma-separated name fragments
            VERITY_FILTERED_VALUE: Replacement for masked values
            VERITY_LOG_EVALUATIONS: Debug-log every contract evaluation (true/false)
        """
        filters = os.getenv("VERITY_FILTER_PARAMETERS")
        if filters is None:
            filter_parameters = DEFAULT_FILTER_PARAMETERS
        else:
            filter_parameters = tuple(f.strip() for f in filters.split(",") if f.strip())

        return cls(
            filter_parameters=filter_parameters,
            filtered_value=os.getenv("VERITY_FILTERED_VALUE", "[FILTERED]"),
            log_evaluations=os.getenv("VERITY_LOG_EVALUATIONS", "false").lower() == "true",
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VerityConfig:
        """Create configuration from dictionary (e.g., YAML)."""
        known = {"filter_parameters", "filtered_value", "log_evaluations", "summary_separator"}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {unknown}")

        return cls(
            filter_parameters=tuple(data.get("filter_parameters", DEFAULT_FILTER_PARAMETERS)),
            filtered_value=data.get("filtered_value", "[FILTERED]"),
            log_evaluations=bool(data.get("log_evaluations", False)),
            summary_separator=data.get("summary_separator", ", "),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> VerityConfig:
        """Load configuration from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration format in {path}")
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "filter_parameters": list(self.filter_parameters),
            "filtered_value": self.filtered_value,
            "log_evaluations": self.log_evaluations,
            "summary_separator": self.summary_separator,
        }


# Global configuration instance
_config: VerityConfig | None = None


def get_config() -> VerityConfig:
    """Get the global configuration, reading the environment on first use."""
    global _config
    if _config is None:
        _config = VerityConfig.from_env()
    return _config


def set_config(config: VerityConfig) -> None:
    """Replace the global configuration."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
