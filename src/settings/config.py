"""Loading and validation of classinspect.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reflection.assignability import NonePolicy

CONFIG_FILENAME = "classinspect.toml"

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class InspectorConfig(BaseModel):
    """Configuration for ClassInspector behaviour and logging."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    none_policy: NonePolicy = Field(
        default="typed",
        description=(
            "How None arguments match constructor parameters: 'typed' (only "
            "types admitting None), 'any' (every parameter) or 'never'"
        ),
    )
    include_dunder_methods: bool = Field(
        default=True,
        description=(
            "Report user-written __dunder__ methods from "
            "get_all_declared_methods; false keeps only regular names"
        ),
    )
    log_level: str = Field(default="WARNING", description="Root log level")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer used by the command line",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: object) -> object:
        """Normalize the level name and reject unknown levels."""
        if not isinstance(v, str):
            msg = "log_level must be a string"
            raise ValueError(msg)

        level = v.upper()
        if level not in _LOG_LEVELS:
            msg = (
                f"Invalid log_level '{v}'. "
                f"Valid levels: {', '.join(sorted(_LOG_LEVELS))}"
            )
            raise ValueError(msg)
        return level


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> InspectorConfig:
    """Load configuration from classinspect.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return InspectorConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return InspectorConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
