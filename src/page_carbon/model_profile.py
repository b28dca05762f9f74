"""Versioned constant tables for the page impact model.

Every coefficient used by :mod:`page_carbon.estimation` lives on a
:class:`ModelProfile`. Recalibrating the model means registering a new
profile (or loading overrides through :mod:`page_carbon.config_loader`)
rather than editing the formulas.

A second calibration is added with :func:`register_profile`, typically built
from :meth:`ModelProfile.from_mapping` on a stored table, and selected with
:func:`get_profile` or the ``PAGE_CARBON_PROFILE`` environment variable.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Final, TypeVar

from page_carbon.types import ConnectivityMethod, DeviceClass, DeviceType, Site

__all__ = [
    "DEFAULT_PROFILE",
    "DEFAULT_PROFILE_NAME",
    "ModelProfile",
    "available_profiles",
    "get_profile",
    "kwh_per_gb_to_joules_per_byte",
    "register_profile",
]

_E = TypeVar("_E", bound=Enum)

_SHARE_TOLERANCE: Final[float] = 1e-9
_RADIO_METHODS: Final[tuple[ConnectivityMethod, ...]] = (
    ConnectivityMethod.G3,
    ConnectivityMethod.G4,
    ConnectivityMethod.G5,
)
_PUBLISHER_SITES: Final[tuple[Site, ...]] = tuple(
    site for site in Site if site is not Site.DEFAULT
)


def kwh_per_gb_to_joules_per_byte(kwh_per_gb: float) -> float:
    """Convert a published kWh/GB efficiency figure to joules per byte."""

    return (kwh_per_gb * 3.6e6) / 1e9


def _enum_mapping(
    enum_type: type[_E],
    raw: Mapping[object, object],
    label: str,
    *,
    required: tuple[_E, ...] | None = None,
) -> Mapping[_E, float]:
    """Normalise ``raw`` into a read-only mapping keyed by ``enum_type``.

    Raises:
        ValueError: Keys are unknown, values are not finite numbers, or
            any of ``required`` (all members by default) is missing.
    """

    parsed: dict[_E, float] = {}
    for key, value in raw.items():
        try:
            member = key if isinstance(key, enum_type) else enum_type(key)
        except ValueError as exc:
            raise ValueError(f"{label}: unknown key {key!r}") from exc
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{label}[{member.value}] must be a number")
        if not math.isfinite(value):
            raise ValueError(f"{label}[{member.value}] must be finite")
        parsed[member] = float(value)

    expected = required if required is not None else tuple(enum_type)
    missing = [member.value for member in expected if member not in parsed]
    if missing:
        raise ValueError(f"{label} is missing entries for: {', '.join(missing)}")
    return MappingProxyType(parsed)


@dataclass(frozen=True)
class ModelProfile:
    """Named set of coefficients driving every page impact formula.

    Attributes:
        name: Identifier of the calibration.
        device_power_watts: Average power draw per device type (W).
        video_device_multiplier: Extra decode/display draw while playing video.
        text_page_bytes: Typical payload of a text page (bytes).
        video_bytes_per_second_default: Generic video bitrate (B/s).
        video_bytes_per_second_by_site: Measured video bitrate per publisher
            (B/s). Sites without an entry use the generic bitrate.
        video_bytes_per_second_optimized: Bitrate of an optimised stream (B/s).
        audio_bytes_per_second: Audio stream bitrate (B/s).
        origin_energy_per_request_joules: Fixed server cost per page load (J).
        server_joules_per_byte: Server cost per byte served (J/B).
        network_joules_per_byte: Backbone network cost per byte (J/B).
        radio_joules_per_byte: Radio access cost per byte for 3G/4G/5G (J/B).
        wifi_joules_per_second: Wi-Fi access cost per second (J/s).
        traffic_shares: Share of traffic per connectivity method, per device
            class. Each row sums to one.
        carbon_grams_per_wh: Grid carbon intensity (gCO2/Wh).
        light_bulb_watts: Reference light bulb power (W).
        car_kg_co2_per_km: Reference petrol car emissions (kgCO2/km).
        page_load_duration_seconds: Assumed time to load a page (s).
        default_page_loads: Page loads charged when a caller passes none.
        charge_idle_wifi: Charge Wi-Fi time even when no bytes are moved.
    """

    name: str
    device_power_watts: Mapping[DeviceType, float]
    text_page_bytes: float
    video_bytes_per_second_default: float
    video_bytes_per_second_by_site: Mapping[Site, float]
    video_bytes_per_second_optimized: float
    audio_bytes_per_second: float
    origin_energy_per_request_joules: float
    server_joules_per_byte: float
    network_joules_per_byte: float
    radio_joules_per_byte: Mapping[ConnectivityMethod, float]
    wifi_joules_per_second: float
    traffic_shares: Mapping[DeviceClass, Mapping[ConnectivityMethod, float]]
    carbon_grams_per_wh: float
    light_bulb_watts: float
    car_kg_co2_per_km: float
    video_device_multiplier: float = 1.15
    page_load_duration_seconds: float = 5.0
    default_page_loads: float = 1.0
    charge_idle_wifi: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("profile name must be non-empty")

        set_attr = object.__setattr__
        set_attr(
            self,
            "device_power_watts",
            _enum_mapping(DeviceType, self.device_power_watts, "device_power_watts"),
        )
        set_attr(
            self,
            "video_bytes_per_second_by_site",
            _enum_mapping(
                Site,
                self.video_bytes_per_second_by_site,
                "video_bytes_per_second_by_site",
                required=_PUBLISHER_SITES,
            ),
        )
        set_attr(
            self,
            "radio_joules_per_byte",
            _enum_mapping(
                ConnectivityMethod,
                self.radio_joules_per_byte,
                "radio_joules_per_byte",
                required=_RADIO_METHODS,
            ),
        )
        set_attr(self, "traffic_shares", self._parse_shares(self.traffic_shares))

        for attr in (
            "text_page_bytes",
            "video_bytes_per_second_default",
            "video_bytes_per_second_optimized",
            "audio_bytes_per_second",
            "origin_energy_per_request_joules",
            "server_joules_per_byte",
            "network_joules_per_byte",
            "wifi_joules_per_second",
            "carbon_grams_per_wh",
            "video_device_multiplier",
            "page_load_duration_seconds",
        ):
            value = getattr(self, attr)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{attr} must be a finite value >= 0")
        for attr in ("light_bulb_watts", "car_kg_co2_per_km", "default_page_loads"):
            value = getattr(self, attr)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{attr} must be a finite value > 0")

    @staticmethod
    def _parse_shares(
        raw: Mapping[object, Mapping[object, object]],
    ) -> Mapping[DeviceClass, Mapping[ConnectivityMethod, float]]:
        rows: dict[DeviceClass, Mapping[ConnectivityMethod, float]] = {}
        for key, row in raw.items():
            try:
                device_class = key if isinstance(key, DeviceClass) else DeviceClass(key)
            except ValueError as exc:
                raise ValueError(f"traffic_shares: unknown key {key!r}") from exc
            if not isinstance(row, Mapping):
                raise ValueError(f"traffic_shares[{device_class.value}] must be a mapping")
            shares = _enum_mapping(
                ConnectivityMethod, row, f"traffic_shares[{device_class.value}]"
            )
            if any(share < 0 for share in shares.values()):
                raise ValueError(
                    f"traffic_shares[{device_class.value}] must not be negative"
                )
            if abs(sum(shares.values()) - 1.0) > _SHARE_TOLERANCE:
                raise ValueError(
                    f"traffic_shares[{device_class.value}] must sum to 1.0"
                )
            rows[device_class] = shares

        missing = [member.value for member in DeviceClass if member not in rows]
        if missing:
            raise ValueError(
                f"traffic_shares is missing entries for: {', '.join(missing)}"
            )
        return MappingProxyType(rows)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> ModelProfile:
        """Build a profile from a plain mapping such as :meth:`to_dict` output.

        Keyed tables may use enum members or their string values as keys.

        Raises:
            ValueError: The mapping has unknown or missing fields, or the
                values fail validation.
        """

        known = {item.name for item in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(unknown)}")
        try:
            return cls(**data)  # type: ignore[arg-type]
        except TypeError as exc:
            raise ValueError(f"Incomplete profile mapping: {exc}") from exc

    def video_bitrate(self, site: Site, optimize_video: bool) -> float:
        """Return the video bitrate in bytes per second for ``site``."""

        site = Site(site)
        if optimize_video:
            return self.video_bytes_per_second_optimized
        return self.video_bytes_per_second_by_site.get(
            site, self.video_bytes_per_second_default
        )

    def to_dict(self) -> dict[str, object]:
        """Return a plain mapping with enum values as keys."""

        def _plain(mapping: Mapping[Enum, float]) -> dict[str, float]:
            return {key.value: value for key, value in mapping.items()}

        return {
            "name": self.name,
            "device_power_watts": _plain(self.device_power_watts),
            "text_page_bytes": self.text_page_bytes,
            "video_bytes_per_second_default": self.video_bytes_per_second_default,
            "video_bytes_per_second_by_site": _plain(
                self.video_bytes_per_second_by_site
            ),
            "video_bytes_per_second_optimized": self.video_bytes_per_second_optimized,
            "audio_bytes_per_second": self.audio_bytes_per_second,
            "origin_energy_per_request_joules": self.origin_energy_per_request_joules,
            "server_joules_per_byte": self.server_joules_per_byte,
            "network_joules_per_byte": self.network_joules_per_byte,
            "radio_joules_per_byte": _plain(self.radio_joules_per_byte),
            "wifi_joules_per_second": self.wifi_joules_per_second,
            "traffic_shares": {
                device_class.value: _plain(row)
                for device_class, row in self.traffic_shares.items()
            },
            "carbon_grams_per_wh": self.carbon_grams_per_wh,
            "light_bulb_watts": self.light_bulb_watts,
            "car_kg_co2_per_km": self.car_kg_co2_per_km,
            "video_device_multiplier": self.video_device_multiplier,
            "page_load_duration_seconds": self.page_load_duration_seconds,
            "default_page_loads": self.default_page_loads,
            "charge_idle_wifi": self.charge_idle_wifi,
        }


_VIDEO_BPS_DEFAULT: Final[float] = 4_000_000 / 8  # fairly standard 720p
_VIDEO_BPS_YLE: Final[float] = 3_670_450 / 8  # measured from an Yle video
_VIDEO_BPS_SANOMA: Final[float] = 5_312_785 / 8  # measured from a Sanoma video

DEFAULT_PROFILE_NAME: Final[str] = "2024-share-weighted"

DEFAULT_PROFILE: Final[ModelProfile] = ModelProfile(
    name=DEFAULT_PROFILE_NAME,
    device_power_watts={
        DeviceType.PHONE: 1.0,
        DeviceType.TABLET: 3.0,
        DeviceType.PC: 115.0,
        DeviceType.LAPTOP: 32.0,
    },
    text_page_bytes=8_000_000,
    video_bytes_per_second_default=_VIDEO_BPS_DEFAULT,
    video_bytes_per_second_by_site={
        Site.YLE: _VIDEO_BPS_YLE,
        Site.AREENA: _VIDEO_BPS_YLE,
        Site.HS: _VIDEO_BPS_SANOMA,
    },
    video_bytes_per_second_optimized=1_100_000 / 8,
    audio_bytes_per_second=128_000 / 8,  # typical podcast
    origin_energy_per_request_joules=306.0,
    server_joules_per_byte=6.9e-6,
    network_joules_per_byte=4.5e-5,
    radio_joules_per_byte={
        ConnectivityMethod.G3: 4.55e-5,
        ConnectivityMethod.G4: kwh_per_gb_to_joules_per_byte(0.117),
        ConnectivityMethod.G5: kwh_per_gb_to_joules_per_byte(0.501),
    },
    wifi_joules_per_second=10.0,
    traffic_shares={
        DeviceClass.MOBILE: {
            ConnectivityMethod.G3: 0.0,
            ConnectivityMethod.G4: 0.4,
            ConnectivityMethod.G5: 0.3,
            ConnectivityMethod.WIFI: 0.3,
        },
        DeviceClass.COMPUTER: {
            ConnectivityMethod.G3: 0.0,
            ConnectivityMethod.G4: 0.3,
            ConnectivityMethod.G5: 0.1,
            ConnectivityMethod.WIFI: 0.6,
        },
    },
    carbon_grams_per_wh=0.11,  # Finnish grid, Statistics Finland 2022
    light_bulb_watts=40.0,
    car_kg_co2_per_km=0.20864,
)

_PROFILES: Final[dict[str, ModelProfile]] = {DEFAULT_PROFILE.name: DEFAULT_PROFILE}


def available_profiles() -> tuple[str, ...]:
    """Return the names of the registered profiles."""

    return tuple(sorted(_PROFILES))


def register_profile(profile: ModelProfile, *, replace: bool = False) -> None:
    """Make ``profile`` available to :func:`get_profile` under its name.

    Raises:
        ValueError: A different profile is already registered under the
            same name and ``replace`` is false.
    """

    existing = _PROFILES.get(profile.name)
    if existing is not None and existing != profile and not replace:
        raise ValueError(f"Model profile {profile.name!r} is already registered")
    _PROFILES[profile.name] = profile


def get_profile(name: str | None = None) -> ModelProfile:
    """Return the registered profile called ``name``.

    Args:
        name: Profile identifier. ``None`` selects :data:`DEFAULT_PROFILE`.

    Raises:
        KeyError: No profile is registered under ``name``.
    """

    if name is None:
        return DEFAULT_PROFILE
    try:
        return _PROFILES[name]
    except KeyError:
        known = ", ".join(available_profiles())
        raise KeyError(f"Unknown model profile {name!r}; known profiles: {known}") from None
