"""
Sequential processing engine.

Keeps an ordered list of process blocks. Adding a block wires its air-flow
input to the previous block's air-flow output, unless the block already has
an explicit source. Running executes every block once, front to back, and
collects one result per block.
"""

import logging
from typing import Optional

from hvacengine.engine.blocks.base import ProcessBlock
from hvacengine.engine.blocks.connectors import DataSource, OutputConnector
from hvacengine.exceptions import MissingInputError
from hvacengine.models.flow import FlowOfMoistAir
from hvacengine.models.process import ProcessType

logger = logging.getLogger(__name__)


class SequentialProcessingEngine:

    def __init__(self, inlet_air_flow: Optional[FlowOfMoistAir] = None):
        self._blocks: list[ProcessBlock] = []
        self._results: list = []
        self._inlet_source: Optional[DataSource[FlowOfMoistAir]] = None
        if inlet_air_flow is not None:
            self.set_inlet_air_flow(inlet_air_flow)

    @property
    def blocks(self) -> list[ProcessBlock]:
        return list(self._blocks)

    @property
    def results(self) -> list:
        return list(self._results)

    def add_block(self, block: ProcessBlock) -> int:
        """Append a block and return its index."""
        if block.air_flow_input.is_bound:
            logger.debug("%s keeps its explicit air flow source", block.name)
        elif self._blocks:
            block.connect_to(self._blocks[-1])
        elif self._inlet_source is not None:
            block.connect_air_flow_source(self._inlet_source.output)
        self._blocks.append(block)
        return len(self._blocks) - 1

    def connect_inlet_source(self, output: OutputConnector[FlowOfMoistAir]) -> None:
        """Feed the first block from an external air-flow output."""
        if not self._blocks:
            raise MissingInputError("No blocks registered; add a block before wiring its inlet")
        self._blocks[0].connect_air_flow_source(output)

    def set_inlet_air_flow(self, air_flow: FlowOfMoistAir) -> None:
        """
        Set the air flow entering the first block. The first block (present
        or added later) reads it through a data source owned by the engine.
        """
        if self._inlet_source is None:
            self._inlet_source = DataSource(air_flow, name="inlet_air_flow")
        else:
            self._inlet_source.set_data(air_flow)
        if self._blocks and not self._blocks[0].air_flow_input.is_bound:
            self._blocks[0].connect_air_flow_source(self._inlet_source.output)

    def run_calculations(self) -> list:
        """Run every block once in order and return the per-block results."""
        if not self._blocks:
            raise MissingInputError("No process blocks registered")
        first = self._blocks[0]
        first.air_flow_input.update_data()
        if first.air_flow_input.data is None:
            raise MissingInputError(f"{first.name}: no inlet air flow")

        logger.info("Running %d process blocks", len(self._blocks))
        self._results = []
        self._results = [block.run_process_calculations() for block in self._blocks]
        return self.results

    @property
    def last_result(self):
        return self._results[-1] if self._results else None

    def results_of_type(self, process_type: ProcessType) -> list:
        return [r for r in self._results if r.process_type == process_type]

    def __len__(self) -> int:
        return len(self._blocks)
