"""
Pydantic models for fluid states.

MoistAirState and LiquidWaterState are immutable value objects. Build them
through their factory classmethods, which validate the inputs and resolve the
complete property set; every with_* method returns a fully regenerated state.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hvacengine.config import (
    DEFAULT_PRESSURE_SI,
    PRESSURE_MIN,
    PRESSURE_MAX,
    TEMPERATURE_MIN,
    TEMPERATURE_MAX,
    HUMIDITY_RATIO_MAX,
)
from hvacengine.engine import state_resolver
from hvacengine.engine.validators import require_in_range


def _check_temperature_and_pressure(temperature: float, pressure: float) -> None:
    require_in_range("Pressure", pressure, PRESSURE_MIN, PRESSURE_MAX, "Pa")
    require_in_range("Temperature", temperature, TEMPERATURE_MIN, TEMPERATURE_MAX, "°C")


class MoistAirState(BaseModel):
    """Fully resolved moist air state."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(..., description="Dry-bulb temperature, °C")
    pressure: float = Field(..., description="Absolute pressure, Pa")
    humidity_ratio: float = Field(..., description="Humidity ratio, kg_w/kg_da")
    relative_humidity: float = Field(..., description="Relative humidity, %")
    specific_enthalpy: float = Field(..., description="Specific enthalpy, kJ/kg_da")
    dew_point: float = Field(..., description="Dew point temperature, °C")
    wet_bulb: float = Field(..., description="Wet-bulb temperature, °C")
    density: float = Field(..., description="Moist air density, kg/m³")

    @classmethod
    def of_humidity_ratio(
        cls,
        temperature: float,
        humidity_ratio: float,
        pressure: float = DEFAULT_PRESSURE_SI,
    ) -> "MoistAirState":
        _check_temperature_and_pressure(temperature, pressure)
        require_in_range("Humidity ratio", humidity_ratio, 0.0, HUMIDITY_RATIO_MAX, "kg/kg")
        return cls(**state_resolver.calc_all_from_tdb_w(temperature, humidity_ratio, pressure))

    @classmethod
    def of_relative_humidity(
        cls,
        temperature: float,
        relative_humidity: float,
        pressure: float = DEFAULT_PRESSURE_SI,
    ) -> "MoistAirState":
        _check_temperature_and_pressure(temperature, pressure)
        require_in_range("Relative humidity", relative_humidity, 0.0, 100.0, "%")
        W = state_resolver.humidity_ratio_from_rh(temperature, relative_humidity, pressure)
        return cls.of_humidity_ratio(temperature, W, pressure)

    @classmethod
    def of_input_pair(
        cls,
        input_pair: tuple[str, str],
        values: tuple[float, float],
        pressure: float = DEFAULT_PRESSURE_SI,
    ) -> "MoistAirState":
        """Resolve a state from one of the supported property pairs (Tdb+RH, Tdb+W, ...)."""
        _check_temperature_and_pressure(values[0], pressure)
        Tdb, W = state_resolver.humidity_ratio_from_input_pair(input_pair, values, pressure)
        return cls.of_humidity_ratio(Tdb, W, pressure)

    def with_temperature(self, temperature: float) -> "MoistAirState":
        return self.of_humidity_ratio(temperature, self.humidity_ratio, self.pressure)

    def with_humidity_ratio(self, humidity_ratio: float) -> "MoistAirState":
        return self.of_humidity_ratio(self.temperature, humidity_ratio, self.pressure)

    def with_relative_humidity(self, relative_humidity: float) -> "MoistAirState":
        return self.of_relative_humidity(self.temperature, relative_humidity, self.pressure)

    def with_pressure(self, pressure: float) -> "MoistAirState":
        return self.of_humidity_ratio(self.temperature, self.humidity_ratio, pressure)


class LiquidWaterState(BaseModel):
    """Liquid water (condensate or coolant) state."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(..., description="Temperature, °C")
    pressure: float = Field(default=DEFAULT_PRESSURE_SI, description="Pressure, Pa")
    specific_heat: float = Field(..., description="Isobaric specific heat, kJ/(kg·K)")
    specific_enthalpy: float = Field(..., description="Specific enthalpy, kJ/kg")
    density: float = Field(..., description="Density, kg/m³")

    @classmethod
    def of_temperature(
        cls, temperature: float, pressure: float = DEFAULT_PRESSURE_SI
    ) -> "LiquidWaterState":
        _check_temperature_and_pressure(temperature, pressure)
        return cls(
            temperature=temperature,
            pressure=pressure,
            specific_heat=state_resolver.liquid_water_specific_heat(temperature),
            specific_enthalpy=state_resolver.liquid_water_enthalpy(temperature),
            density=state_resolver.liquid_water_density(temperature),
        )


class StatePointInput(BaseModel):
    """Input model for resolving a moist air state from two known properties."""

    input_pair: tuple[str, str] = Field(
        default=("Tdb", "RH"),
        description="Pair of independent properties, e.g. ('Tdb', 'RH')",
        examples=[("Tdb", "RH"), ("Tdb", "W")],
    )
    values: tuple[float, float] = Field(
        ...,
        description="Values for the input pair, in order matching input_pair",
        examples=[(24.0, 50.0)],
    )
    pressure: float = Field(default=DEFAULT_PRESSURE_SI, description="Pressure, Pa")
    label: Optional[str] = None
