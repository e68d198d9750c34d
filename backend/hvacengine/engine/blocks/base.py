"""
Process block base class.

A block wraps a process strategy behind named connectors. Running a block:

    1. pulls fresh values through every input connector,
    2. fails fast with MissingInputError when a required value is absent,
    3. builds and solves its strategy,
    4. publishes the result to its output connectors and caches it.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from hvacengine.engine.blocks.connectors import InputConnector, OutputConnector
from hvacengine.engine.strategies.base import ProcessStrategy
from hvacengine.exceptions import MissingInputError
from hvacengine.models.flow import FlowOfMoistAir
from hvacengine.models.process import ProcessType

logger = logging.getLogger(__name__)


class BlockState(str, Enum):
    UNWIRED = "unwired"  # a required input has neither a source nor data
    WIRED = "wired"
    COMPUTED = "computed"  # result matches the current input revisions


class ProcessBlock(ABC):
    """Base class for all process blocks."""

    process_type: ProcessType

    def __init__(self, name: Optional[str] = None):
        self.name = name or type(self).__name__
        self.air_flow_input: InputConnector[FlowOfMoistAir] = InputConnector("air_flow_input")
        self.air_flow_output: OutputConnector[FlowOfMoistAir] = OutputConnector("air_flow_output")
        self.heat_output: OutputConnector[float] = OutputConnector("heat_output")
        self._process_result = None
        self._result_revisions: Optional[tuple] = None

    # --- Wiring ---

    def connect_to(self, upstream: "ProcessBlock") -> None:
        """Take this block's inlet air from the outlet of `upstream`."""
        self.air_flow_input.connect_to_output(upstream.air_flow_output)

    def connect_air_flow_source(self, output: OutputConnector[FlowOfMoistAir]) -> None:
        self.air_flow_input.connect_to_output(output)

    def set_inlet_air_flow(self, air_flow: FlowOfMoistAir) -> None:
        self.air_flow_input.set_data(air_flow)

    def input_connectors(self) -> list[InputConnector]:
        return [self.air_flow_input]

    # --- Execution ---

    @abstractmethod
    def build_strategy(self) -> ProcessStrategy:
        """Create the strategy from the current (already pulled) connector values."""
        ...

    def publish(self, result) -> None:
        self.air_flow_output.set_data(result.outlet_air_flow)
        self.heat_output.set_data(result.heat_of_process)

    def run_process_calculations(self):
        inputs = self.input_connectors()
        for connector in inputs:
            connector.update_data()

        missing = [c.name for c in inputs if c.required and c.data is None]
        if missing:
            raise MissingInputError(f"{self.name}: no data on {', '.join(missing)}")

        result = self.build_strategy().solve()
        self.publish(result)
        self._process_result = result
        self._result_revisions = self._input_revisions()
        logger.debug(
            "%s: outlet %.3f °C / %.3f %% RH, heat %.1f W",
            self.name,
            result.outlet_air_flow.temperature,
            result.outlet_air_flow.relative_humidity,
            result.heat_of_process,
        )
        return result

    @property
    def process_result(self):
        return self._process_result

    def _input_revisions(self) -> tuple:
        return tuple(c.revision for c in self.input_connectors())

    @property
    def state(self) -> BlockState:
        if any(c.required and not c.is_bound for c in self.input_connectors()):
            return BlockState.UNWIRED
        if self._process_result is not None and self._result_revisions == self._input_revisions():
            return BlockState.COMPUTED
        return BlockState.WIRED

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, state={self.state.value})"
