"""Helpers operating on whole :class:`~page_carbon.calculation_models.Calculation` trees."""

from __future__ import annotations

import math
from dataclasses import fields, is_dataclass, replace
from typing import TypeVar

from page_carbon.calculation_models import Calculation

__all__ = ["multiply_calculation"]

_T = TypeVar("_T")


def _scale(node: _T, multiplier: float) -> _T:
    if is_dataclass(node) and not isinstance(node, type):
        changes = {
            item.name: _scale(getattr(node, item.name), multiplier)
            for item in fields(node)
        }
        return replace(node, **changes)
    if isinstance(node, bool):
        return node
    if isinstance(node, (int, float)):
        return node * multiplier  # type: ignore[return-value]
    return node


def multiply_calculation(calculation: Calculation, multiplier: float) -> Calculation:
    """Scale every numeric leaf of ``calculation`` by ``multiplier``.

    Used to turn a single-visitor result into an audience-wide one. The
    structure is preserved and no rounding is applied.

    Args:
        calculation: Result to scale.
        multiplier: Audience size or any other non-negative factor.

    Returns:
        A new :class:`Calculation`; ``calculation`` is left untouched.

    Raises:
        ValueError: ``multiplier`` is negative or not finite.
    """

    if isinstance(multiplier, bool) or not math.isfinite(multiplier):
        raise ValueError("multiplier must be a finite number")
    if multiplier < 0:
        raise ValueError("multiplier must be >= 0")
    return _scale(calculation, multiplier)
