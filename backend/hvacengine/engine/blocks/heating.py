"""
Heating process block.
"""

from typing import Optional

from hvacengine.engine.blocks.base import ProcessBlock
from hvacengine.engine.blocks.connectors import InputConnector, OutputConnector
from hvacengine.engine.strategies.base import ProcessStrategy
from hvacengine.engine.strategies.heating import (
    HeatingFromPower,
    HeatingFromTemperature,
    HeatingFromHumidity,
)
from hvacengine.models.process import HeatingMode, ProcessType

_TARGET_INPUT_NAMES = {
    HeatingMode.FROM_POWER: "heating_power",
    HeatingMode.FROM_TEMPERATURE: "target_temperature",
    HeatingMode.FROM_HUMIDITY: "target_relative_humidity",
}

_STRATEGIES = {
    HeatingMode.FROM_POWER: HeatingFromPower,
    HeatingMode.FROM_TEMPERATURE: HeatingFromTemperature,
    HeatingMode.FROM_HUMIDITY: HeatingFromHumidity,
}


class HeatingBlock(ProcessBlock):
    """Heater. The target input carries W, °C or % RH depending on the mode."""

    process_type = ProcessType.HEATING

    def __init__(
        self,
        mode: HeatingMode,
        target: Optional[float] = None,
        name: Optional[str] = None,
    ):
        super().__init__(name)
        self.mode = HeatingMode(mode)
        self.target_input: InputConnector[float] = InputConnector(
            _TARGET_INPUT_NAMES[self.mode], target
        )

    def set_target(self, value: float) -> None:
        self.target_input.set_data(value)

    def connect_target_source(self, output: OutputConnector[float]) -> None:
        self.target_input.connect_to_output(output)

    def input_connectors(self) -> list[InputConnector]:
        return [self.air_flow_input, self.target_input]

    def build_strategy(self) -> ProcessStrategy:
        return _STRATEGIES[self.mode](self.air_flow_input.data, self.target_input.data)
