"""Public entry points for the :mod:`page_carbon` configuration loader."""

from __future__ import annotations

from functools import lru_cache

from page_carbon.config_loader.parsing import (
    apply_environment_overrides,
    apply_structured_overrides,
)
from page_carbon.config_loader.sources import load_structured_config
from page_carbon.model_profile import ModelProfile, get_profile
from page_carbon.settings import PageCarbonSettings, get_settings

__all__ = ["default_profile", "load_profile"]


def load_profile(
    path: str | None = None,
    *,
    settings: PageCarbonSettings | None = None,
    profile_name: str | None = None,
) -> ModelProfile:
    """Resolve the effective model profile.

    The base profile is ``profile_name`` when given, else the one named by
    the file's ``profile`` key, else ``PAGE_CARBON_PROFILE``, else the
    default calibration. Environment
    overrides are applied next, then the file's overrides.

    Args:
        path: Optional explicit path to a profile override file. When omitted
            the loader inspects ``PAGE_CARBON_CONFIG_PATH`` and the default
            search locations.
        settings: Optional pre-instantiated environment settings. When omitted
            :func:`page_carbon.settings.get_settings` is used.
        profile_name: Explicit base profile, taking precedence over the file
            and the environment.

    Returns:
        Fully validated :class:`ModelProfile`.

    Raises:
        KeyError: The requested base profile is not registered.
        ValueError: The overrides produce an invalid profile.
    """

    env_settings = settings or get_settings()
    structured = load_structured_config(path, env_settings)

    base_name = env_settings.profile_name
    if structured is not None:
        file_base = structured.get("profile")
        if isinstance(file_base, str) and file_base.strip():
            base_name = file_base.strip()
    if profile_name:
        base_name = profile_name

    profile = apply_environment_overrides(get_profile(base_name), env_settings)
    if structured is None:
        return profile
    return apply_structured_overrides(profile, structured)


@lru_cache(maxsize=1)
def default_profile() -> ModelProfile:
    """Return the profile configured through the environment, cached."""

    return load_profile()
