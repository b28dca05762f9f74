"""Conversion of component joules into the final breakdown."""

from __future__ import annotations

from page_carbon.calculation_models import (
    Calculation,
    ComparisonValues,
    EnergyAndCarbon,
)
from page_carbon.model_profile import DEFAULT_PROFILE, ModelProfile

__all__ = ["build_calculation", "comparison_values", "energy_and_carbon"]

JOULES_PER_WH = 3600.0


def energy_and_carbon(
    energy_joules: float, *, profile: ModelProfile = DEFAULT_PROFILE
) -> EnergyAndCarbon:
    """Convert joules to watt-hours and grams of CO2."""

    energy_wh = energy_joules / JOULES_PER_WH
    return EnergyAndCarbon(
        total_energy_consumption_wh=energy_wh,
        carbon_grams=profile.carbon_grams_per_wh * energy_wh,
    )


def comparison_values(
    carbon_grams: float,
    total_joules: float,
    *,
    profile: ModelProfile = DEFAULT_PROFILE,
) -> ComparisonValues:
    """Express a result as petrol-car kilometres and light-bulb seconds."""

    return ComparisonValues(
        driving_km_petrol_car=carbon_grams / 1000.0 / profile.car_kg_co2_per_km,
        light_bulb_duration_seconds=total_joules / profile.light_bulb_watts,
    )


def build_calculation(
    *,
    device_joules: float,
    server_joules: float,
    network_joules: float,
    data_transfer_joules: float,
    profile: ModelProfile = DEFAULT_PROFILE,
) -> Calculation:
    """Assemble a :class:`Calculation` from the four component energies.

    The total is converted once from the summed joules; each component is
    converted separately for the breakdown.
    """

    total_joules = server_joules + network_joules + data_transfer_joules + device_joules
    total = energy_and_carbon(total_joules, profile=profile)
    return Calculation(
        total=total,
        comparison_values=comparison_values(
            total.carbon_grams, total_joules, profile=profile
        ),
        server_energy_consumption=energy_and_carbon(server_joules, profile=profile),
        network_energy_consumption=energy_and_carbon(network_joules, profile=profile),
        data_transfer_energy_consumption=energy_and_carbon(
            data_transfer_joules, profile=profile
        ),
        energy_of_use=energy_and_carbon(device_joules, profile=profile),
    )
