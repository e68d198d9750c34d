"""
Pydantic models for moist air and liquid water flows.

A FlowOfMoistAir carries all four flow rates (moist-air mass, moist-air
volume, dry-air mass, dry-air volume) but only one of them is authoritative:
the locked flow type. Changing the state keeps the locked rate and re-derives
the other three from the new densities.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hvacengine.config import FlowType, FLOW_MIN, FLOW_MAX, DEFAULT_PRESSURE_SI
from hvacengine.engine import state_resolver
from hvacengine.engine.validators import require_in_range
from hvacengine.models.state_point import MoistAirState, LiquidWaterState


class FlowOfMoistAir(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: MoistAirState
    locked_flow_type: FlowType = Field(..., description="Rate kept fixed on state changes")
    mass_flow: float = Field(..., description="Moist air mass flow, kg/s")
    volumetric_flow: float = Field(..., description="Moist air volumetric flow, m³/s")
    dry_air_mass_flow: float = Field(..., description="Dry air mass flow, kg/s")
    dry_air_volumetric_flow: float = Field(..., description="Dry air volumetric flow, m³/s")

    @classmethod
    def of(cls, state: MoistAirState, flow_type: FlowType, rate: float) -> "FlowOfMoistAir":
        """Build a flow with `rate` as the locked quantity of kind `flow_type`."""
        require_in_range(f"Flow rate ({flow_type.value})", rate, FLOW_MIN, FLOW_MAX)

        W = state.humidity_ratio
        moist_density = state.density
        dry_density = state_resolver.dry_air_density(state.temperature, state.pressure)

        if flow_type == FlowType.MASS_FLOW:
            mass_flow = rate
        elif flow_type == FlowType.VOLUMETRIC_FLOW:
            mass_flow = rate * moist_density
        elif flow_type == FlowType.DRY_AIR_MASS_FLOW:
            mass_flow = rate * (1.0 + W)
        else:
            mass_flow = rate * dry_density * (1.0 + W)
        require_in_range("Mass flow", mass_flow, FLOW_MIN, FLOW_MAX, "kg/s")

        dry_air_mass_flow = mass_flow / (1.0 + W)
        rates = {
            FlowType.MASS_FLOW: mass_flow,
            FlowType.VOLUMETRIC_FLOW: mass_flow / moist_density,
            FlowType.DRY_AIR_MASS_FLOW: dry_air_mass_flow,
            FlowType.DRY_AIR_VOLUMETRIC_FLOW: dry_air_mass_flow / dry_density,
        }
        # The locked rate is stored exactly as given, not as a round trip.
        rates[flow_type] = rate

        return cls(
            state=state,
            locked_flow_type=flow_type,
            mass_flow=rates[FlowType.MASS_FLOW],
            volumetric_flow=rates[FlowType.VOLUMETRIC_FLOW],
            dry_air_mass_flow=rates[FlowType.DRY_AIR_MASS_FLOW],
            dry_air_volumetric_flow=rates[FlowType.DRY_AIR_VOLUMETRIC_FLOW],
        )

    @classmethod
    def of_mass_flow(cls, state: MoistAirState, mass_flow: float) -> "FlowOfMoistAir":
        return cls.of(state, FlowType.MASS_FLOW, mass_flow)

    @classmethod
    def of_volumetric_flow(cls, state: MoistAirState, volumetric_flow: float) -> "FlowOfMoistAir":
        return cls.of(state, FlowType.VOLUMETRIC_FLOW, volumetric_flow)

    @classmethod
    def of_dry_air_mass_flow(cls, state: MoistAirState, dry_air_mass_flow: float) -> "FlowOfMoistAir":
        return cls.of(state, FlowType.DRY_AIR_MASS_FLOW, dry_air_mass_flow)

    @classmethod
    def of_dry_air_volumetric_flow(
        cls, state: MoistAirState, dry_air_volumetric_flow: float
    ) -> "FlowOfMoistAir":
        return cls.of(state, FlowType.DRY_AIR_VOLUMETRIC_FLOW, dry_air_volumetric_flow)

    @property
    def locked_rate(self) -> float:
        return getattr(self, self.locked_flow_type.value)

    @property
    def temperature(self) -> float:
        return self.state.temperature

    @property
    def pressure(self) -> float:
        return self.state.pressure

    @property
    def humidity_ratio(self) -> float:
        return self.state.humidity_ratio

    @property
    def relative_humidity(self) -> float:
        return self.state.relative_humidity

    @property
    def specific_enthalpy(self) -> float:
        return self.state.specific_enthalpy

    def with_state(self, state: MoistAirState) -> "FlowOfMoistAir":
        """Same locked rate, new state."""
        return self.of(state, self.locked_flow_type, self.locked_rate)

    def with_flow_rate(self, rate: float, flow_type: Optional[FlowType] = None) -> "FlowOfMoistAir":
        """Same state, new rate. Keeps the current locked type unless one is given."""
        return self.of(self.state, flow_type or self.locked_flow_type, rate)


class FlowOfLiquidWater(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: LiquidWaterState
    mass_flow: float = Field(..., description="Mass flow, kg/s")
    volumetric_flow: float = Field(..., description="Volumetric flow, m³/s")

    @classmethod
    def of_mass_flow(cls, state: LiquidWaterState, mass_flow: float) -> "FlowOfLiquidWater":
        require_in_range("Water mass flow", mass_flow, FLOW_MIN, FLOW_MAX, "kg/s")
        return cls(state=state, mass_flow=mass_flow, volumetric_flow=mass_flow / state.density)

    @classmethod
    def zero_flow(
        cls, temperature: float, pressure: float = DEFAULT_PRESSURE_SI
    ) -> "FlowOfLiquidWater":
        return cls.of_mass_flow(LiquidWaterState.of_temperature(temperature, pressure), 0.0)

    @property
    def temperature(self) -> float:
        return self.state.temperature
