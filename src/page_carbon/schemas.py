"""Pydantic models describing the inputs of the page impact calculators."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from page_carbon.types import ContentType, DeviceType, Site

__all__ = [
    "CalculationParams",
    "PageLoadParams",
    "PageUseParams",
    "parse_calculation_params",
]


class _ParamsBase(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    device_type: DeviceType = Field(
        ...,
        alias="deviceType",
        description="Device on which the page is loaded.",
    )
    user_amount: float = Field(
        default=1.0,
        alias="userAmount",
        ge=0.0,
        allow_inf_nan=False,
        description="Audience size the single-visitor result is scaled by.",
    )
    site: Site = Field(
        default=Site.DEFAULT,
        description="Content source, used to pick a measured video bitrate.",
    )


class PageLoadParams(_ParamsBase):
    """Parameters for the impact of loading a page once per visitor."""

    data_volume: float | None = Field(
        default=None,
        alias="dataVolume",
        ge=0.0,
        allow_inf_nan=False,
        description=(
            "Bytes transferred by the page load. Defaults to the model's "
            "typical text page payload."
        ),
    )


class PageUseParams(_ParamsBase):
    """Parameters for the impact of using a page after it has loaded."""

    content_type: ContentType = Field(
        ...,
        alias="contentType",
        description="Primary content consumed on the page.",
    )
    duration_in_seconds: float = Field(
        ...,
        alias="durationInSeconds",
        ge=0.0,
        allow_inf_nan=False,
        description="Time spent on the page in seconds.",
    )
    optimize_video: bool = Field(
        default=False,
        alias="optimizeVideo",
        description="Serve video at the optimised bitrate regardless of site.",
    )


CalculationParams = Union[PageLoadParams, PageUseParams]

_PAGE_USE_KEYS = frozenset(
    {"contentType", "content_type", "durationInSeconds", "duration_in_seconds"}
)


def parse_calculation_params(data: Mapping[str, object]) -> CalculationParams:
    """Validate a raw mapping into page-load or page-use parameters.

    Mappings carrying ``contentType``/``content_type`` become
    :class:`PageUseParams`; everything else is parsed as
    :class:`PageLoadParams`.

    Raises:
        pydantic.ValidationError: The mapping matches neither shape.
    """

    payload = dict(data)
    if _PAGE_USE_KEYS.intersection(payload):
        return PageUseParams.model_validate(payload)
    return PageLoadParams.model_validate(payload)
