"""Result value objects returned by the page impact calculators.

The dataclasses use Python attribute names; :meth:`Calculation.to_dict`
emits the field names consumed by existing dashboards
(``totalEnergyConsumptionWh``, ``comparisonValues`` and so on).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict


class EnergyAndCarbonDict(TypedDict):
    """Serialised :class:`EnergyAndCarbon`."""

    totalEnergyConsumptionWh: float
    carbonGrams: float


class ComparisonValuesDict(TypedDict):
    """Serialised :class:`ComparisonValues`."""

    drivingKMPetrolCar: float
    lightBulbDurationSeconds: float


class CalculationDict(TypedDict):
    """Serialised :class:`Calculation`."""

    total: EnergyAndCarbonDict
    comparisonValues: ComparisonValuesDict
    serverEnergyConsumption: EnergyAndCarbonDict
    networkEnergyConsumption: EnergyAndCarbonDict
    dataTransferEnergyConsumption: EnergyAndCarbonDict
    energyOfUse: EnergyAndCarbonDict


@dataclass(frozen=True, slots=True)
class EnergyAndCarbon:
    """Energy in watt-hours and the carbon it emits in grams of CO2."""

    total_energy_consumption_wh: float
    carbon_grams: float

    def to_dict(self) -> EnergyAndCarbonDict:
        return {
            "totalEnergyConsumptionWh": float(self.total_energy_consumption_wh),
            "carbonGrams": float(self.carbon_grams),
        }


@dataclass(frozen=True, slots=True)
class ComparisonValues:
    """Human-relatable equivalents of a calculation.

    Attributes:
        driving_km_petrol_car: Kilometres driven by the reference petrol car
            emitting the same carbon.
        light_bulb_duration_seconds: Seconds the reference light bulb runs on
            the same energy.
    """

    driving_km_petrol_car: float
    light_bulb_duration_seconds: float

    def to_dict(self) -> ComparisonValuesDict:
        return {
            "drivingKMPetrolCar": float(self.driving_km_petrol_car),
            "lightBulbDurationSeconds": float(self.light_bulb_duration_seconds),
        }


@dataclass(frozen=True, slots=True)
class Calculation:
    """Energy and carbon breakdown of a page load or page use.

    ``total`` is converted once from the summed component joules, so it
    matches the components up to floating-point rounding.
    """

    total: EnergyAndCarbon
    comparison_values: ComparisonValues
    server_energy_consumption: EnergyAndCarbon
    network_energy_consumption: EnergyAndCarbon
    data_transfer_energy_consumption: EnergyAndCarbon
    energy_of_use: EnergyAndCarbon

    def to_dict(self) -> CalculationDict:
        """Return the JSON-ready shape expected by existing consumers."""

        return {
            "total": self.total.to_dict(),
            "comparisonValues": self.comparison_values.to_dict(),
            "serverEnergyConsumption": self.server_energy_consumption.to_dict(),
            "networkEnergyConsumption": self.network_energy_consumption.to_dict(),
            "dataTransferEnergyConsumption": (
                self.data_transfer_energy_consumption.to_dict()
            ),
            "energyOfUse": self.energy_of_use.to_dict(),
        }
