"""
Heating strategies: from power, from target temperature, from target RH.

All three are closed form; no iteration is needed.
"""

from hvacengine.config import TEMPERATURE_MAX
from hvacengine.engine.processes.heating import (
    heating_or_dry_cooling_from_power,
    heating_or_dry_cooling_from_outlet_temperature,
    heating_from_outlet_rh,
)
from hvacengine.engine.strategies.base import ProcessStrategy
from hvacengine.engine.validators import (
    require_in_range,
    require_non_negative,
    require_not_greater,
    require_not_lower,
    require_positive,
)
from hvacengine.models.flow import FlowOfMoistAir
from hvacengine.models.process import HeatingMode, HeatingResult


class HeatingFromPower(ProcessStrategy):

    def __init__(self, inlet_air_flow: FlowOfMoistAir, heating_power: float):
        super().__init__(inlet_air_flow)
        require_non_negative("Heating power", heating_power)
        self.heating_power = heating_power

    def solve(self) -> HeatingResult:
        outcome = heating_or_dry_cooling_from_power(self.inlet_air_flow, self.heating_power)
        return HeatingResult(
            process_mode=HeatingMode.FROM_POWER,
            inlet_air_flow=self.inlet_air_flow,
            outlet_air_flow=outcome.outlet_air_flow,
            heat_of_process=outcome.heat_of_process,
        )


class HeatingFromTemperature(ProcessStrategy):

    def __init__(self, inlet_air_flow: FlowOfMoistAir, target_temperature: float):
        super().__init__(inlet_air_flow)
        require_not_greater("Target temperature", target_temperature, TEMPERATURE_MAX)
        require_not_lower(
            "Target temperature", target_temperature, inlet_air_flow.temperature,
            hint="Use cooling to lower the temperature.",
        )
        self.target_temperature = target_temperature

    def solve(self) -> HeatingResult:
        outcome = heating_or_dry_cooling_from_outlet_temperature(
            self.inlet_air_flow, self.target_temperature
        )
        return HeatingResult(
            process_mode=HeatingMode.FROM_TEMPERATURE,
            inlet_air_flow=self.inlet_air_flow,
            outlet_air_flow=outcome.outlet_air_flow,
            heat_of_process=outcome.heat_of_process,
        )


class HeatingFromHumidity(ProcessStrategy):

    def __init__(self, inlet_air_flow: FlowOfMoistAir, target_relative_humidity: float):
        super().__init__(inlet_air_flow)
        require_in_range("Target relative humidity", target_relative_humidity, 0.0, 100.0, "%")
        require_positive("Target relative humidity", target_relative_humidity)
        require_not_greater(
            "Target relative humidity", target_relative_humidity,
            inlet_air_flow.relative_humidity,
            hint="Heating lowers relative humidity; use cooling to raise it.",
        )
        self.target_relative_humidity = target_relative_humidity

    def solve(self) -> HeatingResult:
        outcome = heating_from_outlet_rh(self.inlet_air_flow, self.target_relative_humidity)
        return HeatingResult(
            process_mode=HeatingMode.FROM_HUMIDITY,
            inlet_air_flow=self.inlet_air_flow,
            outlet_air_flow=outcome.outlet_air_flow,
            heat_of_process=outcome.heat_of_process,
        )
