"""Per-component energy formulas.

Each function is pure and returns joules. ``page_loads`` defaults to the
profile's ``default_page_loads`` when left as ``None``.
"""

from __future__ import annotations

from page_carbon.model_profile import DEFAULT_PROFILE, ModelProfile
from page_carbon.types import (
    ALL_CONNECTIVITY_METHODS,
    ConnectivityMethod,
    ContentType,
    DeviceType,
    device_class_for,
)

__all__ = [
    "connectivity_energy",
    "data_transfer_energy",
    "device_energy",
    "device_power",
    "network_energy",
    "server_energy",
]


def _require_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ValueError(f"{name} must be >= 0")


def _page_loads(page_loads: float | None, profile: ModelProfile) -> float:
    if page_loads is None:
        return profile.default_page_loads
    _require_non_negative("page_loads", page_loads)
    return page_loads


def device_power(
    device_type: DeviceType,
    content_type: ContentType | None = None,
    *,
    profile: ModelProfile = DEFAULT_PROFILE,
) -> float:
    """Return the device draw in watts, boosted while playing video."""

    device_type = DeviceType(device_type)
    if content_type is not None:
        content_type = ContentType(content_type)
    power = profile.device_power_watts[device_type]
    if content_type is ContentType.VIDEO:
        return power * profile.video_device_multiplier
    return power


def device_energy(
    device_type: DeviceType,
    duration_seconds: float,
    content_type: ContentType | None = None,
    *,
    profile: ModelProfile = DEFAULT_PROFILE,
) -> float:
    """Energy drawn by the device while the page is on screen."""

    _require_non_negative("duration_seconds", duration_seconds)
    return device_power(device_type, content_type, profile=profile) * duration_seconds


def server_energy(
    data_volume: float,
    page_loads: float | None = None,
    *,
    profile: ModelProfile = DEFAULT_PROFILE,
) -> float:
    """Origin server energy: a fixed cost per request plus a per-byte cost."""

    _require_non_negative("data_volume", data_volume)
    loads = _page_loads(page_loads, profile)
    return (
        profile.origin_energy_per_request_joules
        + profile.server_joules_per_byte * data_volume
    ) * loads


def network_energy(
    data_volume: float,
    page_loads: float | None = None,
    *,
    profile: ModelProfile = DEFAULT_PROFILE,
) -> float:
    """Backbone network energy for moving ``data_volume`` bytes."""

    _require_non_negative("data_volume", data_volume)
    return profile.network_joules_per_byte * data_volume * _page_loads(page_loads, profile)


def connectivity_energy(
    method: ConnectivityMethod,
    data_volume: float,
    page_loads: float | None,
    duration_seconds: float,
    *,
    profile: ModelProfile = DEFAULT_PROFILE,
) -> float:
    """Radio access energy if all traffic went over ``method``.

    Cellular methods are charged per byte; Wi-Fi is charged per second
    of connection time.
    """

    _require_non_negative("data_volume", data_volume)
    _require_non_negative("duration_seconds", duration_seconds)
    method = ConnectivityMethod(method)
    if method is ConnectivityMethod.WIFI:
        if data_volume == 0 and not profile.charge_idle_wifi:
            return 0.0
        return profile.wifi_joules_per_second * duration_seconds
    coefficient = profile.radio_joules_per_byte[method]
    return coefficient * data_volume * _page_loads(page_loads, profile)


def data_transfer_energy(
    device_type: DeviceType,
    data_volume: float,
    page_loads: float | None,
    duration_seconds: float,
    *,
    profile: ModelProfile = DEFAULT_PROFILE,
) -> float:
    """Expected radio access energy across the connectivity mix.

    The cost of each method is weighted by its traffic share for the
    device class (phones are ``mobile``, everything else ``computer``).
    """

    shares = profile.traffic_shares[device_class_for(device_type)]
    return sum(
        connectivity_energy(
            method,
            data_volume,
            page_loads,
            duration_seconds,
            profile=profile,
        )
        * shares[method]
        for method in ALL_CONNECTIVITY_METHODS
    )
