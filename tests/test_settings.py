"""Tests for environment-backed settings."""

from __future__ import annotations

import pytest

from page_carbon.settings import get_settings


def test_defaults() -> None:
    """Unset variables resolve to ``None`` or inline defaults."""

    settings = get_settings()
    assert settings.profile_name is None
    assert settings.config_path is None
    assert settings.carbon_intensity_g_per_wh is None
    assert settings.log_level == "WARNING"


def test_intensity_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    """Numeric strings are parsed as floats."""

    monkeypatch.setenv("PAGE_CARBON_CARBON_INTENSITY", " 0.35 ")
    assert get_settings().carbon_intensity_g_per_wh == 0.35


@pytest.mark.parametrize("raw", ["invalid", "-1", "nan", "inf"])
def test_malformed_intensity_ignored(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    """Malformed or negative intensities are treated as unset."""

    monkeypatch.setenv("PAGE_CARBON_CARBON_INTENSITY", raw)
    assert get_settings().carbon_intensity_g_per_wh is None


def test_blank_paths_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    """Empty strings do not count as configured values."""

    monkeypatch.setenv("PAGE_CARBON_CONFIG_PATH", "  ")
    monkeypatch.setenv("PAGE_CARBON_PROFILE", "")
    settings = get_settings()
    assert settings.config_path is None
    assert settings.profile_name is None
