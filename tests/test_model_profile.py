"""Tests for the model profile constant tables."""

from __future__ import annotations

from dataclasses import replace

import pytest

from page_carbon import model_profile
from page_carbon.model_profile import (
    DEFAULT_PROFILE,
    DEFAULT_PROFILE_NAME,
    ModelProfile,
    available_profiles,
    get_profile,
    kwh_per_gb_to_joules_per_byte,
    register_profile,
)
from page_carbon.types import (
    ConnectivityMethod,
    DeviceClass,
    DeviceType,
    Site,
    device_class_for,
)


def test_default_profile_constants() -> None:
    """The default calibration carries the published coefficients."""

    profile = DEFAULT_PROFILE
    assert profile.device_power_watts[DeviceType.PHONE] == 1.0
    assert profile.device_power_watts[DeviceType.TABLET] == 3.0
    assert profile.device_power_watts[DeviceType.PC] == 115.0
    assert profile.device_power_watts[DeviceType.LAPTOP] == 32.0
    assert profile.text_page_bytes == 8_000_000
    assert profile.video_bytes_per_second_default == 500_000
    assert profile.audio_bytes_per_second == 16_000
    assert profile.video_bytes_per_second_optimized == 137_500
    assert profile.origin_energy_per_request_joules == 306.0
    assert profile.carbon_grams_per_wh == 0.11
    assert profile.page_load_duration_seconds == 5.0
    assert profile.default_page_loads == 1.0
    assert profile.charge_idle_wifi is False


def test_radio_coefficients_converted_from_kwh_per_gb() -> None:
    """4G and 5G coefficients derive from kWh/GB figures."""

    radio = DEFAULT_PROFILE.radio_joules_per_byte
    assert radio[ConnectivityMethod.G3] == pytest.approx(4.55e-5)
    assert radio[ConnectivityMethod.G4] == pytest.approx(4.212e-4)
    assert radio[ConnectivityMethod.G5] == pytest.approx(1.8036e-3)
    assert kwh_per_gb_to_joules_per_byte(1.0) == pytest.approx(3.6e-3)


def test_traffic_shares_sum_to_one() -> None:
    """Each device class row splits all traffic across the methods."""

    for device_class in DeviceClass:
        row = DEFAULT_PROFILE.traffic_shares[device_class]
        assert set(row) == set(ConnectivityMethod)
        assert sum(row.values()) == pytest.approx(1.0)


def test_video_bitrate_fallback_chain() -> None:
    """Optimised beats site, site beats the generic default."""

    profile = DEFAULT_PROFILE
    assert profile.video_bitrate(Site.HS, optimize_video=True) == 137_500
    assert profile.video_bitrate(Site.YLE, False) == pytest.approx(3_670_450 / 8)
    assert profile.video_bitrate(Site.AREENA, False) == pytest.approx(3_670_450 / 8)
    assert profile.video_bitrate(Site.HS, False) == pytest.approx(5_312_785 / 8)
    assert profile.video_bitrate(Site.DEFAULT, False) == 500_000


def test_missing_device_entry_rejected() -> None:
    """Every device type needs a power entry."""

    with pytest.raises(ValueError, match="device_power_watts is missing entries for: Laptop"):
        replace(
            DEFAULT_PROFILE,
            device_power_watts={"Phone": 1.0, "Tablet": 3.0, "PC": 115.0},
        )


def test_unknown_key_rejected() -> None:
    """Keys outside the enumeration are rejected instead of ignored."""

    with pytest.raises(ValueError, match="unknown key 'Watch'"):
        replace(
            DEFAULT_PROFILE,
            device_power_watts={
                "Phone": 1.0,
                "Tablet": 3.0,
                "PC": 115.0,
                "Laptop": 32.0,
                "Watch": 0.5,
            },
        )


def test_share_row_must_sum_to_one() -> None:
    """A traffic-share row that does not cover all traffic is invalid."""

    shares = {
        "mobile": {"3G": 0.0, "4G": 0.4, "5G": 0.3, "WIFI": 0.2},
        "computer": {"3G": 0.0, "4G": 0.3, "5G": 0.1, "WIFI": 0.6},
    }
    with pytest.raises(ValueError, match=r"traffic_shares\[mobile\] must sum to 1.0"):
        replace(DEFAULT_PROFILE, traffic_shares=shares)


def test_share_row_needs_every_method() -> None:
    """A share row must name every connectivity method."""

    shares = {
        "mobile": {"4G": 0.7, "WIFI": 0.3},
        "computer": {"3G": 0.0, "4G": 0.3, "5G": 0.1, "WIFI": 0.6},
    }
    with pytest.raises(ValueError, match="missing entries for: 3G, 5G"):
        replace(DEFAULT_PROFILE, traffic_shares=shares)


def test_negative_coefficient_rejected() -> None:
    """Coefficients must not be negative."""

    with pytest.raises(ValueError, match="carbon_grams_per_wh"):
        replace(DEFAULT_PROFILE, carbon_grams_per_wh=-0.1)


def test_zero_divisor_rejected() -> None:
    """Comparison references are divisors and must be positive."""

    with pytest.raises(ValueError, match="light_bulb_watts"):
        replace(DEFAULT_PROFILE, light_bulb_watts=0.0)


def test_tables_are_read_only() -> None:
    """Profiles cannot be mutated after construction."""

    with pytest.raises(TypeError):
        DEFAULT_PROFILE.device_power_watts[DeviceType.PC] = 1.0  # type: ignore[index]


def test_string_keys_normalised_to_enums() -> None:
    """Profiles built from plain mappings expose enum keys."""

    profile = replace(
        DEFAULT_PROFILE,
        device_power_watts={"Phone": 2, "Tablet": 3, "PC": 100, "Laptop": 30},
    )
    assert profile.device_power_watts[DeviceType.PHONE] == 2.0


def test_to_dict_round_trips_through_replace() -> None:
    """``to_dict`` output is accepted back as constructor input."""

    payload = DEFAULT_PROFILE.to_dict()
    assert payload["device_power_watts"] == {
        "Phone": 1.0,
        "Tablet": 3.0,
        "PC": 115.0,
        "Laptop": 32.0,
    }
    rebuilt = replace(
        DEFAULT_PROFILE,
        traffic_shares=payload["traffic_shares"],  # type: ignore[arg-type]
    )
    assert rebuilt == DEFAULT_PROFILE


def test_profile_registry() -> None:
    """Named profiles resolve; unknown names raise ``KeyError``."""

    assert DEFAULT_PROFILE_NAME in available_profiles()
    assert get_profile() is DEFAULT_PROFILE
    assert get_profile(DEFAULT_PROFILE_NAME) is DEFAULT_PROFILE
    with pytest.raises(KeyError, match="Unknown model profile 'nope'"):
        get_profile("nope")


def test_device_class_mapping() -> None:
    """Only phones count as mobile for traffic shares."""

    assert device_class_for(DeviceType.PHONE) is DeviceClass.MOBILE
    for device_type in (DeviceType.TABLET, DeviceType.PC, DeviceType.LAPTOP):
        assert device_class_for(device_type) is DeviceClass.COMPUTER
    assert device_class_for("Phone") is DeviceClass.MOBILE
    assert device_class_for("Laptop") is DeviceClass.COMPUTER
    with pytest.raises(ValueError, match="Watch"):
        device_class_for("Watch")


def test_from_mapping_rebuilds_default_profile() -> None:
    """``from_mapping`` accepts ``to_dict`` output unchanged."""

    assert ModelProfile.from_mapping(DEFAULT_PROFILE.to_dict()) == DEFAULT_PROFILE


def test_from_mapping_rejects_unknown_fields() -> None:
    payload = {**DEFAULT_PROFILE.to_dict(), "solar_bonus": 1.0}
    with pytest.raises(ValueError, match="Unknown profile fields: solar_bonus"):
        ModelProfile.from_mapping(payload)


def test_from_mapping_rejects_missing_fields() -> None:
    payload = DEFAULT_PROFILE.to_dict()
    del payload["carbon_grams_per_wh"]
    with pytest.raises(ValueError, match="Incomplete profile mapping"):
        ModelProfile.from_mapping(payload)


def test_from_mapping_validates_tables() -> None:
    payload = DEFAULT_PROFILE.to_dict()
    payload["device_power_watts"] = {"Phone": 1.0}
    with pytest.raises(ValueError, match="Tablet"):
        ModelProfile.from_mapping(payload)


def test_register_second_calibration(monkeypatch: pytest.MonkeyPatch) -> None:
    """A registered calibration is selectable by name."""

    monkeypatch.setattr(model_profile, "_PROFILES", dict(model_profile._PROFILES))
    payload = {
        **DEFAULT_PROFILE.to_dict(),
        "name": "2025-grid",
        "carbon_grams_per_wh": 0.08,
    }
    calibration = ModelProfile.from_mapping(payload)

    register_profile(calibration)

    assert get_profile("2025-grid") is calibration
    assert available_profiles() == (DEFAULT_PROFILE_NAME, "2025-grid")
    # Re-registering the same table is harmless.
    register_profile(ModelProfile.from_mapping(payload))
    assert get_profile("2025-grid") is calibration


def test_register_refuses_to_shadow_existing_name(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(model_profile, "_PROFILES", dict(model_profile._PROFILES))
    altered = replace(DEFAULT_PROFILE, carbon_grams_per_wh=0.5)

    with pytest.raises(ValueError, match="already registered"):
        register_profile(altered)
    assert get_profile(DEFAULT_PROFILE_NAME) is DEFAULT_PROFILE

    register_profile(altered, replace=True)
    assert get_profile(DEFAULT_PROFILE_NAME) is altered
