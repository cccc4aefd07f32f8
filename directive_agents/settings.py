"""Application settings and configuration.

This module provides Pydantic settings classes loaded from environment
variables with support for nested configuration, e.g. ``LLM__API_KEY`` or
``LOG__LEVEL``.
"""

import logging

import pydantic_settings
from pydantic import BaseModel, Field, field_validator

DEFAULT_MODEL = "gpt-4o-mini"


class LlmSettings(BaseModel):
    model: str = Field(DEFAULT_MODEL)
    api_key: str | None = Field(None)
    api_base: str | None = Field(None)
    temperature: float = Field(0.2, ge=0.0, le=2.0)


class LogSettings(BaseModel):
    level: str = Field("INFO")
    json_output: bool | None = Field(
        None, description="Override log format: True=JSON, False=console, None=auto"
    )

    @field_validator("level")
    @classmethod
    def _validate_level(cls, v):
        v_upper = v.upper()
        if v_upper not in logging._nameToLevel:
            raise ValueError(f'invalid value "{v}"')
        return v_upper


class RunSettings(BaseModel):
    max_tool_passes: int = Field(3, ge=0)


class Settings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(env_nested_delimiter="__")

    llm: LlmSettings = LlmSettings()
    log: LogSettings = LogSettings()
    run: RunSettings = RunSettings()
