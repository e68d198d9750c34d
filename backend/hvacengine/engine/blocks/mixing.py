"""
Mixing process blocks.
"""

from typing import Optional, Union

from hvacengine.engine.blocks.base import BlockState, ProcessBlock
from hvacengine.engine.blocks.connectors import InputConnector, OutputConnector
from hvacengine.engine.strategies.base import ProcessStrategy
from hvacengine.engine.strategies.mixing import (
    MixingForTargetTemperature,
    MixingOfMultipleFlows,
    MixingOfTwoFlows,
)
from hvacengine.exceptions import MissingInputError, PreconditionError
from hvacengine.models.flow import FlowOfMoistAir
from hvacengine.models.process import MixingMode, ProcessType

MixingSource = Union[FlowOfMoistAir, OutputConnector, ProcessBlock]


def _bind(connector: InputConnector, source: MixingSource) -> None:
    if isinstance(source, ProcessBlock):
        connector.connect_to_output(source.air_flow_output)
    elif isinstance(source, OutputConnector):
        connector.connect_to_output(source)
    else:
        connector.set_data(source)


class MixingBlock(ProcessBlock):
    """
    Mixes the inlet air with any number of additional flows.

    Without an explicit mode, one added flow is mixed as two flows and more
    as multiple flows. MULTIPLE_FLOWS keeps that mode for a single flow;
    TWO_FLOWS requires exactly one added flow.
    """

    process_type = ProcessType.MIXING

    def __init__(self, mode: Optional[MixingMode] = None, name: Optional[str] = None):
        super().__init__(name)
        if mode == MixingMode.TARGET_TEMPERATURE:
            raise PreconditionError("Use MixingForTargetTemperatureBlock for target temperature mixing")
        self.mode = MixingMode(mode) if mode is not None else None
        self.mixing_flow_inputs: list[InputConnector[FlowOfMoistAir]] = []

    def add_mixing_flow(self, source: MixingSource) -> InputConnector[FlowOfMoistAir]:
        """
        Add a flow to mix with the inlet air. `source` may be a literal flow,
        an output connector, or an upstream block (its air-flow output).
        """
        connector = InputConnector(f"mixing_flow_{len(self.mixing_flow_inputs)}")
        _bind(connector, source)
        self.mixing_flow_inputs.append(connector)
        return connector

    def reset_mixing_flows(self) -> None:
        self.mixing_flow_inputs = []

    def input_connectors(self) -> list[InputConnector]:
        return [self.air_flow_input] + self.mixing_flow_inputs

    def build_strategy(self) -> ProcessStrategy:
        if not self.mixing_flow_inputs:
            raise MissingInputError(f"{self.name}: no mixing flows added")
        flows = [c.data for c in self.mixing_flow_inputs]
        if self.mode == MixingMode.TWO_FLOWS and len(flows) != 1:
            raise PreconditionError(
                f"{self.name}: mixing of two flows takes exactly one mixing flow, got {len(flows)}"
            )
        if self.mode == MixingMode.MULTIPLE_FLOWS or len(flows) > 1:
            return MixingOfMultipleFlows(self.air_flow_input.data, flows)
        return MixingOfTwoFlows(self.air_flow_input.data, flows[0])

    @property
    def state(self) -> BlockState:
        if not self.mixing_flow_inputs:
            return BlockState.UNWIRED
        return super().state


class MixingForTargetTemperatureBlock(ProcessBlock):
    """
    Mixes the inlet air (first stream) with a second stream, choosing the
    split of target_dry_air_flow that reaches target_temperature.
    """

    process_type = ProcessType.MIXING

    def __init__(
        self,
        target_dry_air_flow: Optional[float] = None,
        target_temperature: Optional[float] = None,
        inlet_min_dry_air_flow: float = 0.0,
        mixing_min_dry_air_flow: float = 0.0,
        name: Optional[str] = None,
    ):
        super().__init__(name)
        self.mixing_flow_input: InputConnector[FlowOfMoistAir] = InputConnector("mixing_flow")
        self.target_dry_air_flow_input: InputConnector[float] = InputConnector(
            "target_dry_air_flow", target_dry_air_flow
        )
        self.target_temperature_input: InputConnector[float] = InputConnector(
            "target_temperature", target_temperature
        )
        self.inlet_min_dry_air_flow_input: InputConnector[float] = InputConnector(
            "inlet_min_dry_air_flow", inlet_min_dry_air_flow
        )
        self.mixing_min_dry_air_flow_input: InputConnector[float] = InputConnector(
            "mixing_min_dry_air_flow", mixing_min_dry_air_flow
        )

    def set_mixing_flow(self, source: MixingSource) -> None:
        _bind(self.mixing_flow_input, source)

    def input_connectors(self) -> list[InputConnector]:
        return [
            self.air_flow_input,
            self.mixing_flow_input,
            self.target_dry_air_flow_input,
            self.target_temperature_input,
            self.inlet_min_dry_air_flow_input,
            self.mixing_min_dry_air_flow_input,
        ]

    def build_strategy(self) -> ProcessStrategy:
        return MixingForTargetTemperature(
            self.air_flow_input.data,
            self.mixing_flow_input.data,
            target_dry_air_flow=self.target_dry_air_flow_input.data,
            target_temperature=self.target_temperature_input.data,
            inlet_min_dry_air_flow=self.inlet_min_dry_air_flow_input.data,
            mixing_min_dry_air_flow=self.mixing_min_dry_air_flow_input.data,
        )
