"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from page_carbon.config_loader import default_profile  # noqa: E402

_ENV_VARS = (
    "PAGE_CARBON_PROFILE",
    "PAGE_CARBON_CONFIG_PATH",
    "PAGE_CARBON_CARBON_INTENSITY",
    "PAGE_CARBON_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_configuration(
    monkeypatch: pytest.MonkeyPatch, tmp_path: os.PathLike[str]
) -> Iterator[None]:
    """Keep environment and working-directory config files out of tests."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    default_profile.cache_clear()
    yield
    default_profile.cache_clear()
