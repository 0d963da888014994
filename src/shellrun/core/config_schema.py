"""Configuration schema: Pydantic models for shellrun config files."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Optional[str] = None
    format: Optional[Literal["kv", "json", "pretty"]] = None
    console: Optional[bool] = None
    file: Optional[bool] = None
    dev_file: Optional[bool] = Field(None, alias="devFile")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ShellConfig(BaseModel):
    """Defaults applied to commands that do not set them explicitly."""
    prefer_powershell: bool = Field(True, alias="preferPowershell")
    interpreter: Optional[str] = None
    timeout: Optional[float] = None

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        return value


class Config(BaseModel):
    """Root configuration."""
    schema_: Optional[str] = Field(None, alias="$schema")
    shell: ShellConfig = Field(default_factory=ShellConfig)
    logging: Optional[LoggingConfig] = None

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
