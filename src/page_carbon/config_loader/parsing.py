"""Parsing and transformation helpers for :mod:`page_carbon.config_loader`."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Final

from page_carbon.model_profile import ModelProfile
from page_carbon.settings import PageCarbonSettings

_LOGGER = logging.getLogger(__name__)

_SCALAR_FIELDS: Final[tuple[str, ...]] = (
    "text_page_bytes",
    "video_bytes_per_second_default",
    "video_bytes_per_second_optimized",
    "audio_bytes_per_second",
    "origin_energy_per_request_joules",
    "server_joules_per_byte",
    "network_joules_per_byte",
    "wifi_joules_per_second",
    "carbon_grams_per_wh",
    "light_bulb_watts",
    "car_kg_co2_per_km",
    "video_device_multiplier",
    "page_load_duration_seconds",
    "default_page_loads",
)

_KEYED_FIELDS: Final[tuple[str, ...]] = (
    "device_power_watts",
    "video_bytes_per_second_by_site",
    "radio_joules_per_byte",
)


def apply_environment_overrides(
    profile: ModelProfile, settings: PageCarbonSettings
) -> ModelProfile:
    """Apply environment-derived overrides to the profile.

    Args:
        profile: Base profile.
        settings: Environment-derived settings.

    Returns:
        Profile with environment overrides applied.
    """

    if settings.carbon_intensity_g_per_wh is not None:
        return replace(profile, carbon_grams_per_wh=settings.carbon_intensity_g_per_wh)
    return profile


def apply_structured_overrides(
    profile: ModelProfile, data: Mapping[str, object]
) -> ModelProfile:
    """Apply overrides sourced from a structured configuration file.

    Scalars replace the base value. Keyed tables (device power, site
    bitrates, radio coefficients) are merged entry by entry. Traffic-share
    rows are replaced whole so that every row still sums to one. Values
    that cannot be parsed are logged and skipped.

    Args:
        profile: Base profile.
        data: Mapping parsed from the configuration file.

    Returns:
        A new profile with the overrides applied.

    Raises:
        ValueError: The merged profile fails validation, for example when
            a traffic-share row no longer sums to one.
    """

    changes: dict[str, object] = {}

    name = _coerce_str(data.get("name"))
    if name is not None:
        changes["name"] = name

    for field_name in _SCALAR_FIELDS:
        if field_name not in data:
            continue
        value = _coerce_float(data[field_name])
        if value is None:
            _LOGGER.warning("Skipping invalid value for %s: %r", field_name, data[field_name])
            continue
        changes[field_name] = value

    for field_name in _KEYED_FIELDS:
        section = _expect_mapping(data.get(field_name))
        if section is None:
            continue
        merged = {key.value: value for key, value in getattr(profile, field_name).items()}
        merged.update(_coerce_float_mapping(section, field_name))
        changes[field_name] = merged

    shares_section = _expect_mapping(data.get("traffic_shares"))
    if shares_section is not None:
        rows = {
            key.value: {method.value: share for method, share in row.items()}
            for key, row in profile.traffic_shares.items()
        }
        for row_name, row in shares_section.items():
            row_mapping = _expect_mapping(row)
            if row_mapping is None:
                _LOGGER.warning("Skipping invalid traffic_shares row %s", row_name)
                continue
            rows[row_name] = _coerce_float_mapping(
                row_mapping, f"traffic_shares.{row_name}"
            )
        changes["traffic_shares"] = rows

    if "charge_idle_wifi" in data:
        flag = _coerce_bool(data["charge_idle_wifi"])
        if flag is None:
            _LOGGER.warning(
                "Skipping invalid value for charge_idle_wifi: %r",
                data["charge_idle_wifi"],
            )
        else:
            changes["charge_idle_wifi"] = flag

    if not changes:
        return profile
    return ModelProfile.from_mapping({**profile.to_dict(), **changes})


def _coerce_float_mapping(
    section: Mapping[str, object], label: str
) -> dict[str, float]:
    parsed: dict[str, float] = {}
    for key, raw in section.items():
        value = _coerce_float(raw)
        if value is None:
            _LOGGER.warning("Skipping invalid value for %s.%s: %r", label, key, raw)
            continue
        parsed[key] = value
    return parsed


def _coerce_float(value: object) -> float | None:
    """Parse a float from arbitrary input.

    Args:
        value: Raw value.

    Returns:
        Parsed float when conversion succeeds, otherwise ``None``.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _coerce_bool(value: object) -> bool | None:
    """Parse a boolean from arbitrary input.

    Args:
        value: Raw value.

    Returns:
        Parsed boolean when conversion succeeds, otherwise ``None``.
    """

    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes"}:
            return True
        if lowered in {"false", "0", "no"}:
            return False
    if isinstance(value, (int, float)):
        if value == 0:
            return False
        if value == 1:
            return True
    return None


def _coerce_str(value: object) -> str | None:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def _expect_mapping(value: object) -> Mapping[str, object] | None:
    """Return the value when it is a mapping with string keys.

    Args:
        value: Raw configuration value.

    Returns:
        Mapping with string keys suitable for further parsing, or ``None``.
    """

    if not isinstance(value, Mapping):
        return None
    if not all(isinstance(key, str) for key in value.keys()):
        return None
    return value
