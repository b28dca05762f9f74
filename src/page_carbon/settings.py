"""Environment-backed settings primitives for :mod:`page_carbon`."""

from __future__ import annotations

import math

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["PageCarbonSettings", "get_settings"]


class PageCarbonSettings(BaseSettings):
    """Expose environment-derived configuration knobs for page-carbon.

    All environment lookups go through this class. Every attribute maps to a
    documented environment variable and defaults to ``None`` (or an inline
    default) when the variable is not present.

    Attributes:
        profile_name: Registered model profile to start from.
        config_path: Explicit path to a profile override file.
        carbon_intensity_g_per_wh: Grid intensity override in gCO2/Wh.
        log_level: Logging level used by the command line tool.
    """

    profile_name: str | None = Field(default=None, alias="PAGE_CARBON_PROFILE")
    config_path: str | None = Field(default=None, alias="PAGE_CARBON_CONFIG_PATH")
    carbon_intensity_g_per_wh: float | None = Field(
        default=None, alias="PAGE_CARBON_CARBON_INTENSITY"
    )
    log_level: str = Field(default="WARNING", alias="PAGE_CARBON_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("carbon_intensity_g_per_wh", mode="before")
    @classmethod
    def _parse_optional_float(cls, value: object) -> float | None:
        """Parse optional float fields while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed non-negative float when conversion succeeds, otherwise
            ``None``.
        """

        parsed: float | None = None
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            parsed = float(value)
        elif isinstance(value, str):
            try:
                parsed = float(value.strip())
            except ValueError:
                return None
        if parsed is None or parsed < 0 or not math.isfinite(parsed):
            return None
        return parsed

    @field_validator("profile_name", "config_path", mode="before")
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def get_settings() -> PageCarbonSettings:
    """Return a :class:`PageCarbonSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return PageCarbonSettings()
