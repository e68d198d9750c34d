"""
Builds flows, process blocks and engines from API input models.
"""

from typing import Optional

from hvacengine.engine.blocks.base import ProcessBlock
from hvacengine.engine.blocks.cooling import CoolingBlock
from hvacengine.engine.blocks.heating import HeatingBlock
from hvacengine.engine.blocks.mixing import MixingBlock, MixingForTargetTemperatureBlock
from hvacengine.engine.sequence import SequentialProcessingEngine
from hvacengine.exceptions import PreconditionError
from hvacengine.models.flow import FlowOfMoistAir
from hvacengine.models.process import (
    AirFlowInput,
    CoolingMode,
    HeatingMode,
    MixingMode,
    ProcessStageInput,
    ProcessType,
)
from hvacengine.models.state_point import MoistAirState


def build_air_flow(data: AirFlowInput) -> FlowOfMoistAir:
    state = MoistAirState.of_input_pair(data.input_pair, data.values, data.pressure)
    return FlowOfMoistAir.of(state, data.flow_type, data.flow_rate)


def _required(stage: ProcessStageInput, field: str, purpose: str):
    value = getattr(stage, field)
    if value is None:
        raise PreconditionError(f"{field} is required for {purpose}")
    return value


def _target(stage: ProcessStageInput, mode) -> float:
    """Pick the target field that matches a heating or cooling mode."""
    if mode.value.endswith("from_power"):
        field = "target_power"
    elif mode.value.endswith("from_temperature"):
        field = "target_temperature"
    else:
        field = "target_relative_humidity"
    return _required(stage, field, f"{stage.process_type.value} {mode.value}")


def build_block(stage: ProcessStageInput) -> ProcessBlock:
    name: Optional[str] = stage.label or None

    if stage.process_type == ProcessType.HEATING:
        heating_mode: HeatingMode = _required(stage, "heating_mode", "heating")
        return HeatingBlock(heating_mode, _target(stage, heating_mode), name=name)

    if stage.process_type == ProcessType.COOLING:
        cooling_mode: CoolingMode = _required(stage, "cooling_mode", "cooling")
        block = CoolingBlock(cooling_mode, _target(stage, cooling_mode), name=name)
        if block.is_real_cooling:
            block.set_coolant(_required(stage, "coolant", f"cooling {cooling_mode.value}"))
        return block

    mode: MixingMode = _required(stage, "mixing_mode", "mixing")
    flows = [build_air_flow(f) for f in _required(stage, "mixing_flows", "mixing")]
    if not flows:
        raise PreconditionError("mixing_flows must contain at least one flow")

    if mode == MixingMode.TARGET_TEMPERATURE:
        if len(flows) != 1:
            raise PreconditionError(
                f"Mixing for a target temperature takes exactly one mixing flow, got {len(flows)}"
            )
        block = MixingForTargetTemperatureBlock(
            target_dry_air_flow=_required(stage, "target_dry_air_flow", mode.value),
            target_temperature=_required(stage, "target_temperature", mode.value),
            inlet_min_dry_air_flow=stage.inlet_min_dry_air_flow,
            mixing_min_dry_air_flow=stage.mixing_min_dry_air_flow,
            name=name,
        )
        block.set_mixing_flow(flows[0])
        return block

    if mode == MixingMode.TWO_FLOWS and len(flows) != 1:
        raise PreconditionError(
            f"Mixing of two flows takes exactly one mixing flow, got {len(flows)}"
        )
    block = MixingBlock(mode, name=name)
    for flow in flows:
        block.add_mixing_flow(flow)
    return block


def build_engine(
    inlet_air_flow: AirFlowInput, stages: list[ProcessStageInput]
) -> SequentialProcessingEngine:
    engine = SequentialProcessingEngine(build_air_flow(inlet_air_flow))
    for stage in stages:
        engine.add_block(build_block(stage))
    return engine
