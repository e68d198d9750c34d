"""
Coolant (chilled water) supply/return temperatures for a cooling coil.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from hvacengine.config import COOLANT_TEMPERATURE_MIN, COOLANT_TEMPERATURE_MAX
from hvacengine.engine.validators import require_in_range
from hvacengine.exceptions import PreconditionError


def _check_temperatures(supply_temperature: float, return_temperature: float) -> None:
    require_in_range(
        "Coolant supply temperature", supply_temperature,
        COOLANT_TEMPERATURE_MIN, COOLANT_TEMPERATURE_MAX, "°C",
    )
    require_in_range(
        "Coolant return temperature", return_temperature,
        COOLANT_TEMPERATURE_MIN, COOLANT_TEMPERATURE_MAX, "°C",
    )
    if supply_temperature > return_temperature:
        raise PreconditionError(
            f"Coolant supply temperature ({supply_temperature}) must not exceed "
            f"return temperature ({return_temperature})"
        )


class CoolantData(BaseModel):
    """
    Coolant temperatures. The arithmetic mean of supply and return is used as
    the average coil wall temperature.

    of_temperatures() raises PreconditionError on invalid values; direct
    construction (e.g. from a request body) reports the same checks as a
    pydantic ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    supply_temperature: float = Field(..., description="Coolant supply temperature, °C")
    return_temperature: float = Field(..., description="Coolant return temperature, °C")

    @model_validator(mode="after")
    def check_temperatures(self) -> "CoolantData":
        _check_temperatures(self.supply_temperature, self.return_temperature)
        return self

    @classmethod
    def of_temperatures(cls, supply_temperature: float, return_temperature: float) -> "CoolantData":
        _check_temperatures(supply_temperature, return_temperature)
        return cls(supply_temperature=supply_temperature, return_temperature=return_temperature)

    @computed_field
    @property
    def average_temperature(self) -> float:
        return (self.supply_temperature + self.return_temperature) / 2.0

    def with_supply_temperature(self, supply_temperature: float) -> "CoolantData":
        return self.of_temperatures(supply_temperature, self.return_temperature)

    def with_return_temperature(self, return_temperature: float) -> "CoolantData":
        return self.of_temperatures(self.supply_temperature, return_temperature)
