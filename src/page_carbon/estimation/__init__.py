"""Page impact estimation.

Provides :class:`PageImpactCalculator` and the module-level entry points
for page-load and page-use energy and carbon breakdowns.
"""

from __future__ import annotations

from .impact import (
    PageImpactCalculator,
    calculate_impact,
    calculate_page_load_impact,
    calculate_page_use_impact,
)

__all__ = [
    "PageImpactCalculator",
    "calculate_impact",
    "calculate_page_load_impact",
    "calculate_page_use_impact",
]
