from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "msgkeys.toml"


class ChecksConfig(BaseModel):
    """Toggles for the individual checks."""

    model_config = ConfigDict(extra="forbid")

    placeholders: bool = Field(
        default=True,
        description="Compare placeholder counts with supplied arguments",
    )
    undefined_keys: bool = Field(
        default=True,
        description="Warn about keys missing from every catalog file",
    )


class MsgKeysConfig(BaseModel):
    """Configuration for message-key checking."""

    model_config = ConfigDict(extra="forbid")

    message_key_extraction_patterns: list[str] = Field(
        default_factory=list,
        description="Method names whose first argument is a message key",
    )
    annotation_key_extraction_patterns: list[str] = Field(
        default_factory=list,
        description="Regular expressions capturing an annotation key in group 1",
    )
    property_file_globs: list[str] = Field(
        default_factory=list,
        description="Glob patterns (relative to root) for .properties catalogs",
    )
    source_suffixes: list[str] = Field(
        default_factory=lambda: [".java"],
        description="File suffixes scanned for call sites",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all sources)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    checks: ChecksConfig = Field(
        default_factory=ChecksConfig,
        description="Enabled checks",
    )

    @field_validator("annotation_key_extraction_patterns")
    @classmethod
    def validate_annotation_patterns(cls, v: list[str]) -> list[str]:
        """Each pattern must compile and capture the key in group 1."""
        for pattern in v:
            try:
                compiled = re.compile(pattern)
            except re.error as exc:
                msg = f"Invalid annotation pattern '{pattern}': {exc}"
                raise ValueError(msg) from exc
            if compiled.groups < 1:
                msg = f"Annotation pattern '{pattern}' has no capture group"
                raise ValueError(msg)
        return v

    @field_validator("property_file_globs")
    @classmethod
    def validate_property_file_globs(cls, v: list[str]) -> list[str]:
        for pattern in v:
            if not pattern or Path(pattern).is_absolute():
                msg = f"property_file_globs entry '{pattern}' must be a relative glob"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> MsgKeysConfig:
    """Load configuration from msgkeys.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return MsgKeysConfig()

    try:
        with config_path.open("rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return MsgKeysConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
