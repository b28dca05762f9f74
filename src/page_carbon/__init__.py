"""Page Carbon - energy and carbon estimates for loading and using web pages."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "Calculation",
    "ComparisonValues",
    "ConnectivityMethod",
    "ContentType",
    "DeviceType",
    "EnergyAndCarbon",
    "ModelProfile",
    "PageImpactCalculator",
    "PageLoadParams",
    "PageUseParams",
    "Site",
    "calculate_impact",
    "calculate_page_load_impact",
    "calculate_page_use_impact",
    "multiply_calculation",
]

if TYPE_CHECKING:
    from .calculation_models import Calculation, ComparisonValues, EnergyAndCarbon
    from .calculation_utils import multiply_calculation
    from .estimation import (
        PageImpactCalculator,
        calculate_impact,
        calculate_page_load_impact,
        calculate_page_use_impact,
    )
    from .model_profile import ModelProfile
    from .schemas import PageLoadParams, PageUseParams
    from .types import ConnectivityMethod, ContentType, DeviceType, Site


def __getattr__(name: str) -> Any:
    """Lazily import submodules so the enums load without pydantic."""

    module_map = {
        "Calculation": "calculation_models",
        "ComparisonValues": "calculation_models",
        "EnergyAndCarbon": "calculation_models",
        "multiply_calculation": "calculation_utils",
        "PageImpactCalculator": "estimation",
        "calculate_impact": "estimation",
        "calculate_page_load_impact": "estimation",
        "calculate_page_use_impact": "estimation",
        "ModelProfile": "model_profile",
        "PageLoadParams": "schemas",
        "PageUseParams": "schemas",
        "ConnectivityMethod": "types",
        "ContentType": "types",
        "DeviceType": "types",
        "Site": "types",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
