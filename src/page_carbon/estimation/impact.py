"""Page-load and page-use impact entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from page_carbon.calculation_models import Calculation
from page_carbon.calculation_utils import multiply_calculation
from page_carbon.config_loader import default_profile
from page_carbon.estimation.aggregator import build_calculation
from page_carbon.estimation.components import (
    data_transfer_energy,
    device_energy,
    network_energy,
    server_energy,
)
from page_carbon.estimation.volume import estimate_data_volume
from page_carbon.model_profile import DEFAULT_PROFILE, ModelProfile
from page_carbon.schemas import CalculationParams, PageLoadParams, PageUseParams
from page_carbon.types import ContentType

__all__ = [
    "PageImpactCalculator",
    "calculate_impact",
    "calculate_page_load_impact",
    "calculate_page_use_impact",
]

_LOGGER = logging.getLogger("page_carbon.estimation.impact")


@dataclass(frozen=True, slots=True)
class PageImpactCalculator:
    """Computes page impact breakdowns against a fixed :class:`ModelProfile`."""

    profile: ModelProfile = DEFAULT_PROFILE
    logger: logging.Logger = _LOGGER

    def page_load(self, params: PageLoadParams) -> Calculation:
        """Impact of loading the page once per visitor.

        No video is assumed during the load. The load takes the profile's
        ``page_load_duration_seconds`` and is charged as a single request.
        """

        profile = self.profile
        duration = profile.page_load_duration_seconds
        data_volume = (
            params.data_volume
            if params.data_volume is not None
            else profile.text_page_bytes
        )

        device_j = device_energy(params.device_type, duration, profile=profile)
        server_j = server_energy(data_volume, profile=profile)
        network_j = network_energy(data_volume, profile=profile)
        transfer_j = data_transfer_energy(
            params.device_type, data_volume, None, duration, profile=profile
        )
        self.logger.debug(
            "Page load %s: volume=%.1fB device=%.3fJ server=%.3fJ network=%.3fJ "
            "transfer=%.3fJ",
            params.device_type.value,
            data_volume,
            device_j,
            server_j,
            network_j,
            transfer_j,
        )
        return self._finish(device_j, server_j, network_j, transfer_j, params.user_amount)

    def page_use(self, params: PageUseParams) -> Calculation:
        """Impact of using the page after it has loaded.

        Plain text is assumed to be fully loaded already, so it moves no
        bytes and costs the origin server nothing.
        """

        profile = self.profile
        duration = params.duration_in_seconds
        streams = params.content_type is not ContentType.TEXT

        data_volume = (
            estimate_data_volume(
                params.content_type,
                duration,
                params.optimize_video,
                params.site,
                profile=profile,
            )
            if streams
            else 0.0
        )

        device_j = device_energy(
            params.device_type, duration, params.content_type, profile=profile
        )
        server_j = server_energy(data_volume, profile=profile) if streams else 0.0
        network_j = network_energy(data_volume, profile=profile)
        transfer_j = data_transfer_energy(
            params.device_type, data_volume, None, duration, profile=profile
        )
        self.logger.debug(
            "Page use %s/%s for %.1fs: volume=%.1fB device=%.3fJ server=%.3fJ "
            "network=%.3fJ transfer=%.3fJ",
            params.device_type.value,
            params.content_type.value,
            duration,
            data_volume,
            device_j,
            server_j,
            network_j,
            transfer_j,
        )
        return self._finish(device_j, server_j, network_j, transfer_j, params.user_amount)

    def calculate(self, params: CalculationParams) -> Calculation:
        """Dispatch to :meth:`page_load` or :meth:`page_use`."""

        if isinstance(params, PageUseParams):
            return self.page_use(params)
        if isinstance(params, PageLoadParams):
            return self.page_load(params)
        raise TypeError(
            f"Expected PageLoadParams or PageUseParams, got {type(params).__name__}"
        )

    def _finish(
        self,
        device_j: float,
        server_j: float,
        network_j: float,
        transfer_j: float,
        user_amount: float,
    ) -> Calculation:
        calculation = build_calculation(
            device_joules=device_j,
            server_joules=server_j,
            network_joules=network_j,
            data_transfer_joules=transfer_j,
            profile=self.profile,
        )
        return multiply_calculation(calculation, user_amount)


def _default_calculator() -> PageImpactCalculator:
    return PageImpactCalculator(profile=default_profile())


def calculate_page_load_impact(
    params: PageLoadParams, *, profile: ModelProfile | None = None
) -> Calculation:
    """Impact of a page load, scaled by ``params.user_amount``.

    Args:
        params: Validated page-load parameters.
        profile: Constant table to use. Defaults to the configured profile
            (see :func:`page_carbon.config_loader.load_profile`).
    """

    calculator = (
        PageImpactCalculator(profile=profile)
        if profile is not None
        else _default_calculator()
    )
    return calculator.page_load(params)


def calculate_page_use_impact(
    params: PageUseParams, *, profile: ModelProfile | None = None
) -> Calculation:
    """Impact of page use, scaled by ``params.user_amount``."""

    calculator = (
        PageImpactCalculator(profile=profile)
        if profile is not None
        else _default_calculator()
    )
    return calculator.page_use(params)


def calculate_impact(
    params: CalculationParams, *, profile: ModelProfile | None = None
) -> Calculation:
    """Compute either impact depending on the parameter type."""

    calculator = (
        PageImpactCalculator(profile=profile)
        if profile is not None
        else _default_calculator()
    )
    return calculator.calculate(params)
