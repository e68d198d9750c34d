"""
Cooling process block (real cooling with condensate, or dry cooling).
"""

from typing import Optional

from hvacengine.engine.blocks.base import ProcessBlock
from hvacengine.engine.blocks.connectors import InputConnector, OutputConnector
from hvacengine.engine.strategies.base import ProcessStrategy
from hvacengine.engine.strategies.cooling import (
    CoolingFromPower,
    CoolingFromTemperature,
    CoolingFromHumidity,
    DryCoolingFromPower,
    DryCoolingFromTemperature,
)
from hvacengine.models.coolant import CoolantData
from hvacengine.models.flow import FlowOfLiquidWater
from hvacengine.models.process import CoolingMode, CoolingResult, ProcessType

_TARGET_INPUT_NAMES = {
    CoolingMode.FROM_POWER: "cooling_power",
    CoolingMode.FROM_TEMPERATURE: "target_temperature",
    CoolingMode.FROM_HUMIDITY: "target_relative_humidity",
    CoolingMode.DRY_FROM_POWER: "cooling_power",
    CoolingMode.DRY_FROM_TEMPERATURE: "target_temperature",
}

_REAL_STRATEGIES = {
    CoolingMode.FROM_POWER: CoolingFromPower,
    CoolingMode.FROM_TEMPERATURE: CoolingFromTemperature,
    CoolingMode.FROM_HUMIDITY: CoolingFromHumidity,
}

_DRY_STRATEGIES = {
    CoolingMode.DRY_FROM_POWER: DryCoolingFromPower,
    CoolingMode.DRY_FROM_TEMPERATURE: DryCoolingFromTemperature,
}


class CoolingBlock(ProcessBlock):
    """
    Cooling coil. Real cooling modes need coolant data on coolant_input; dry
    modes ignore it. Besides air and heat, the block publishes its
    condensate flow.
    """

    process_type = ProcessType.COOLING

    def __init__(
        self,
        mode: CoolingMode,
        target: Optional[float] = None,
        coolant: Optional[CoolantData] = None,
        name: Optional[str] = None,
    ):
        super().__init__(name)
        self.mode = CoolingMode(mode)
        self.target_input: InputConnector[float] = InputConnector(
            _TARGET_INPUT_NAMES[self.mode], target
        )
        self.coolant_input: InputConnector[CoolantData] = InputConnector(
            "coolant", coolant, required=self.is_real_cooling
        )
        self.condensate_output: OutputConnector[FlowOfLiquidWater] = OutputConnector(
            "condensate_output"
        )

    @property
    def is_real_cooling(self) -> bool:
        return self.mode in _REAL_STRATEGIES

    def set_target(self, value: float) -> None:
        self.target_input.set_data(value)

    def set_coolant(self, coolant: CoolantData) -> None:
        self.coolant_input.set_data(coolant)

    def connect_target_source(self, output: OutputConnector[float]) -> None:
        self.target_input.connect_to_output(output)

    def connect_coolant_source(self, output: OutputConnector[CoolantData]) -> None:
        self.coolant_input.connect_to_output(output)

    def input_connectors(self) -> list[InputConnector]:
        return [self.air_flow_input, self.target_input, self.coolant_input]

    def build_strategy(self) -> ProcessStrategy:
        air_flow = self.air_flow_input.data
        target = self.target_input.data
        if self.is_real_cooling:
            return _REAL_STRATEGIES[self.mode](air_flow, self.coolant_input.data, target)
        return _DRY_STRATEGIES[self.mode](air_flow, target)

    def publish(self, result: CoolingResult) -> None:
        super().publish(result)
        self.condensate_output.set_data(result.condensate_flow)
