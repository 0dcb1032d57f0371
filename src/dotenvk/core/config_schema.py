"""Pydantic models for dotenvk config files."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ENV_FILE = ".env"
DEFAULT_SECRET_LENGTH = 32
DEFAULT_XKCD_COMMAND = ["xkcdpass", "-d-"]


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Optional[str] = None
    format: Optional[Literal["kv", "json", "pretty"]] = None
    console: Optional[bool] = None
    file: Optional[bool] = None
    dev_file: Optional[bool] = Field(None, alias="devFile")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class RandomizeConfig(BaseModel):
    """Defaults for ``dotenvk randomize``."""
    length: int = DEFAULT_SECRET_LENGTH
    numeric: bool = False
    symbol: bool = False
    xkcd: bool = False
    xkcd_command: List[str] = Field(
        default_factory=lambda: list(DEFAULT_XKCD_COMMAND),
        alias="xkcdCommand",
    )

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("length")
    @classmethod
    def _positive_length(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("length must be a positive integer")
        return value

    @field_validator("xkcd_command")
    @classmethod
    def _non_empty_command(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("xkcdCommand must name an executable")
        return value


class ExportConfig(BaseModel):
    """Defaults for ``dotenvk export``."""
    format: Literal["bash", "json"] = "bash"

    model_config = ConfigDict(extra="forbid")


class Config(BaseModel):
    """Main configuration schema."""
    schema_: Optional[str] = Field(None, alias="$schema")
    file: str = DEFAULT_ENV_FILE
    logging: Optional[LoggingConfig] = None
    randomize: RandomizeConfig = Field(default_factory=RandomizeConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
