# -*- coding: utf-8 -*-
"""Location: ./modtranscoder/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Transcoder configuration.
Settings are loaded from environment variables (prefix ``MODTRANSCODER_``) or
a ``.env`` file, with sensible defaults.

Environment variables:
- MODTRANSCODER_DEFAULT_NOTATION: Notation for new command sessions (default: "indented")
- MODTRANSCODER_DEFAULT_PROPERTY_VIEW: View for new material sessions (default: "form")
- MODTRANSCODER_JSON_INDENT: Indent of structured output (default: 2, the only supported value)
- MODTRANSCODER_LOG_LEVEL: Logging level (default: "INFO")
- MODTRANSCODER_ALLOW_SIGNATURE_EDIT: Let material forms change Signature/Version (default: False)

Examples:
    >>> s = Settings(default_notation="format2", log_level="debug")
    >>> s.default_notation, s.log_level
    (<Notation.INLINE: 'inline'>, 'DEBUG')
    >>> try:
    ...     Settings(json_indent=4)
    ... except ValueError:
    ...     print("error")
    error
    >>> SessionConfig.from_settings(Settings()).notation
    <Notation.INDENTED: 'indented'>
"""

# Standard
from functools import lru_cache
from typing import Any, Optional

# Third-Party
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# First-Party
from modtranscoder.models import Notation, PropertyView


class Settings(BaseSettings):
    """Process-wide defaults for transcoder sessions and the CLI."""

    default_notation: Notation = Field(default=Notation.INDENTED, description="Notation used when a command session starts")
    default_property_view: PropertyView = Field(default=PropertyView.FORM, description="View used when a material session starts")
    json_indent: int = Field(default=2, description="Indent of structured JSON output")
    log_level: str = Field(default="INFO", description="Logging level")
    allow_signature_edit: bool = Field(default=False, description="Allow material forms to change Signature and Version")

    model_config = SettingsConfigDict(env_prefix="MODTRANSCODER_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    @field_validator("json_indent")
    @classmethod
    def validate_json_indent(cls, v: int) -> int:
        """Only two-space indentation is produced by the JSON encoder.

        Args:
            v (int): Requested indent.

        Returns:
            int: The indent, unchanged.

        Raises:
            ValueError: If the indent is not 2.
        """
        if v != 2:
            raise ValueError(f"Unsupported json_indent: {v} (only 2 is supported)")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Normalize and validate the log level value.

        Args:
            v (str): The log level string provided via configuration or environment.

        Returns:
            str: The validated and normalized (uppercase) log level.

        Raises:
            ValueError: If the provided value is not one of
                {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}.
        """
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_up = str(v).upper()
        if v_up not in allowed:
            raise ValueError(f"Invalid log_level: {v}")
        return v_up


class SessionConfig(BaseModel):
    """Per-session view state, passed explicitly to each transcoder.

    Examples:
        >>> SessionConfig(notation="json").notation
        <Notation.STRUCTURED: 'structured'>
    """

    model_config = ConfigDict(validate_assignment=True)

    notation: Notation = Notation.INDENTED
    property_view: PropertyView = PropertyView.FORM
    allow_signature_edit: bool = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SessionConfig":
        """Build a session config from process settings.

        Args:
            settings: Settings to read; the cached settings when omitted.

        Returns:
            SessionConfig: New config seeded with the defaults.
        """
        cfg = settings or get_settings()
        return cls(notation=cfg.default_notation, property_view=cfg.default_property_view, allow_signature_edit=cfg.allow_signature_edit)


@lru_cache()
def get_settings(**kwargs: Any) -> Settings:
    """Get cached settings instance.

    Args:
        **kwargs: Keyword arguments to pass to the Settings setup.

    Returns:
        Settings: A cached instance of the Settings class.

    Examples:
        >>> get_settings() is get_settings()
        True
    """
    return Settings(**kwargs)
