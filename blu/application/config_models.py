"""Configuration models.

Config structure (.blu/config.yml):
    materialize:
      max_workers: 4
    logging:
      level: INFO
    events:
      stderr: true
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blu.domain.constants import DEFAULT_MAX_WORKERS


class MaterializeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown logging level: {value}")
        return normalized


class EventsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    stderr: bool = False


class BluConfig(BaseModel):
    """Top-level configuration, after layering defaults, user and project files."""

    model_config = ConfigDict(extra="forbid")

    materialize: MaterializeConfig = Field(default_factory=MaterializeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
