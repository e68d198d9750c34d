"""
Pydantic models for process results and process API input/output.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from hvacengine.config import DEFAULT_PRESSURE_SI, FlowType
from hvacengine.models.coolant import CoolantData
from hvacengine.models.flow import FlowOfMoistAir, FlowOfLiquidWater


class ProcessType(str, Enum):
    HEATING = "heating"
    COOLING = "cooling"
    MIXING = "mixing"


class HeatingMode(str, Enum):
    FROM_POWER = "from_power"
    FROM_TEMPERATURE = "from_temperature"
    FROM_HUMIDITY = "from_humidity"


class CoolingMode(str, Enum):
    FROM_POWER = "from_power"
    FROM_TEMPERATURE = "from_temperature"
    FROM_HUMIDITY = "from_humidity"
    DRY_FROM_POWER = "dry_from_power"
    DRY_FROM_TEMPERATURE = "dry_from_temperature"


class MixingMode(str, Enum):
    TWO_FLOWS = "two_flows"
    MULTIPLE_FLOWS = "multiple_flows"
    TARGET_TEMPERATURE = "target_temperature"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class HeatingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    process_type: Literal[ProcessType.HEATING] = ProcessType.HEATING
    process_mode: HeatingMode
    inlet_air_flow: FlowOfMoistAir
    outlet_air_flow: FlowOfMoistAir
    heat_of_process: float = Field(..., description="W, positive = heat added")


class CoolingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    process_type: Literal[ProcessType.COOLING] = ProcessType.COOLING
    process_mode: CoolingMode
    inlet_air_flow: FlowOfMoistAir
    outlet_air_flow: FlowOfMoistAir
    heat_of_process: float = Field(..., description="W, negative = heat removed")
    condensate_flow: FlowOfLiquidWater
    bypass_factor: Optional[float] = Field(
        default=None, description="Coil bypass factor (0-1); None for dry cooling"
    )
    coolant_data: Optional[CoolantData] = None
    average_wall_temperature: Optional[float] = Field(
        default=None, description="Average coil wall temperature, °C"
    )
    coolant_mass_flow: Optional[float] = Field(
        default=None, description="Coolant mass flow needed to carry heat_of_process, kg/s"
    )


class MixingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    process_type: Literal[ProcessType.MIXING] = ProcessType.MIXING
    process_mode: MixingMode
    inlet_air_flow: FlowOfMoistAir
    mixing_flows: list[FlowOfMoistAir]
    outlet_air_flow: FlowOfMoistAir
    heat_of_process: float = 0.0


ProcessResult = Annotated[
    Union[HeatingResult, CoolingResult, MixingResult],
    Field(discriminator="process_type"),
]


# ---------------------------------------------------------------------------
# API input/output
# ---------------------------------------------------------------------------

class AirFlowInput(BaseModel):
    """A moist air flow described by a state point pair and a flow rate."""

    input_pair: tuple[str, str] = ("Tdb", "RH")
    values: tuple[float, float]
    pressure: float = DEFAULT_PRESSURE_SI
    flow_type: FlowType = FlowType.MASS_FLOW
    flow_rate: float = Field(..., description="kg/s or m³/s depending on flow_type")


class ProcessStageInput(BaseModel):
    """One stage of a process chain."""

    process_type: ProcessType
    label: str = ""

    heating_mode: Optional[HeatingMode] = None
    cooling_mode: Optional[CoolingMode] = None
    mixing_mode: Optional[MixingMode] = None

    # Targets
    target_temperature: Optional[float] = None  # °C
    target_power: Optional[float] = None  # W
    target_relative_humidity: Optional[float] = None  # %

    # Real cooling
    coolant: Optional[CoolantData] = None

    # Mixing: additional streams joined with the stage inlet
    mixing_flows: Optional[list[AirFlowInput]] = None

    # Mixing for target temperature (the stage inlet is the first stream)
    target_dry_air_flow: Optional[float] = None  # kg/s
    inlet_min_dry_air_flow: float = 0.0  # kg/s
    mixing_min_dry_air_flow: float = 0.0  # kg/s


class ProcessInput(ProcessStageInput):
    """Input for a single process calculation."""

    inlet_air_flow: AirFlowInput


class ProcessChainInput(BaseModel):
    """Input for a sequential process chain."""

    inlet_air_flow: AirFlowInput
    stages: list[ProcessStageInput] = Field(..., min_length=1)


class ProcessChainOutput(BaseModel):
    results: list[ProcessResult]
    outlet_air_flow: FlowOfMoistAir
    total_heat_of_process: float
