"""
Real cooling (cooling with condensate) equations.

Coil model: part of the dry air touches the coil wall and leaves at the
average wall temperature, saturated if the wall is below the inlet dew point;
the rest bypasses the coil unchanged. The bypass factor follows from the
inlet, outlet and wall temperatures:

    BF = (t_out - t_wall) / (t_in - t_wall)

    m_direct = (1 - BF) * m_da
    x_wall   = x_in                  if t_wall >= t_dp_in
             = x_sat(t_wall, P)      otherwise
    m_cond   = m_direct * (x_in - x_wall)
    Q        = m_direct * (h_wall - h_in) + m_cond * h_water(t_wall)    [kW]
    x_out    = (x_wall * m_direct + x_in * m_bypass) / m_da
"""

from typing import NamedTuple, Optional

from hvacengine.engine import state_resolver
from hvacengine.engine.validators import require_finite, require_non_negative
from hvacengine.exceptions import PreconditionError
from hvacengine.models.coolant import CoolantData
from hvacengine.models.flow import FlowOfMoistAir, FlowOfLiquidWater
from hvacengine.models.state_point import LiquidWaterState


class CoolingOutcome(NamedTuple):
    outlet_air_flow: FlowOfMoistAir
    heat_of_process: float  # W
    condensate_flow: FlowOfLiquidWater
    bypass_factor: float


def cooling_bypass_factor(
    wall_temperature: float, inlet_temperature: float, outlet_temperature: float
) -> float:
    if outlet_temperature == inlet_temperature:
        return 1.0
    if inlet_temperature == wall_temperature:
        raise PreconditionError(
            "Bypass factor is undefined when the inlet temperature equals "
            f"the coil wall temperature ({wall_temperature} °C)"
        )
    return (outlet_temperature - wall_temperature) / (inlet_temperature - wall_temperature)


def condensate_discharge(
    dry_air_mass_flow: float, inlet_humidity_ratio: float, outlet_humidity_ratio: float
) -> float:
    """Condensate mass flow (kg/s) removed from a dry-air flow between two humidity ratios."""
    require_non_negative("Dry air mass flow", dry_air_mass_flow)
    require_non_negative("Inlet humidity ratio", inlet_humidity_ratio)
    require_non_negative("Outlet humidity ratio", outlet_humidity_ratio)
    if inlet_humidity_ratio == 0.0:
        return 0.0
    return dry_air_mass_flow * (inlet_humidity_ratio - outlet_humidity_ratio)


def coolant_mass_flow_from_power(coolant: CoolantData, power: float) -> Optional[float]:
    """
    Coolant mass flow (kg/s) that carries |power| (W) between supply and return.
    Returns None when supply and return temperatures are equal.
    """
    delta_t = coolant.return_temperature - coolant.supply_temperature
    if delta_t == 0.0:
        return None
    cp_avg = (
        state_resolver.liquid_water_specific_heat(coolant.supply_temperature)
        + state_resolver.liquid_water_specific_heat(coolant.return_temperature)
    ) / 2.0
    return abs(power) / 1000.0 / (cp_avg * delta_t)


def _identity(inlet_air_flow: FlowOfMoistAir, condensate_temperature: float) -> CoolingOutcome:
    condensate = FlowOfLiquidWater.zero_flow(condensate_temperature, inlet_air_flow.pressure)
    return CoolingOutcome(inlet_air_flow, 0.0, condensate, 1.0)


def real_cooling_from_outlet_temperature(
    inlet_air_flow: FlowOfMoistAir, wall_temperature: float, outlet_temperature: float
) -> CoolingOutcome:
    """Forward coil model for a target outlet dry-bulb temperature."""
    require_finite("Outlet temperature", outlet_temperature)
    inlet_state = inlet_air_flow.state
    Tdb_in = inlet_state.temperature

    if outlet_temperature > Tdb_in:
        raise PreconditionError(
            f"Outlet temperature {outlet_temperature} °C is above the inlet temperature "
            f"{Tdb_in:.2f} °C. Use heating instead."
        )
    if outlet_temperature == Tdb_in or inlet_air_flow.dry_air_mass_flow == 0.0:
        return _identity(inlet_air_flow, Tdb_in)
    if outlet_temperature < wall_temperature:
        raise PreconditionError(
            f"Outlet temperature {outlet_temperature} °C is below the average coil wall "
            f"temperature {wall_temperature} °C"
        )

    mda = inlet_air_flow.dry_air_mass_flow
    W_in = inlet_state.humidity_ratio
    pressure = inlet_state.pressure

    bypass_factor = cooling_bypass_factor(wall_temperature, Tdb_in, outlet_temperature)
    m_direct = (1.0 - bypass_factor) * mda
    m_bypass = mda - m_direct

    if wall_temperature >= inlet_state.dew_point:
        W_wall = W_in
        m_cond = 0.0
    else:
        W_wall = state_resolver.saturation_humidity_ratio(wall_temperature, pressure)
        m_cond = condensate_discharge(m_direct, W_in, W_wall)

    h_wall = state_resolver.specific_enthalpy(wall_temperature, W_wall)
    h_cond = state_resolver.liquid_water_enthalpy(wall_temperature)
    q_cool = m_direct * (h_wall - inlet_state.specific_enthalpy) + m_cond * h_cond  # kW

    W_out = (W_wall * m_direct + W_in * m_bypass) / mda
    outlet_state = inlet_state.of_humidity_ratio(outlet_temperature, W_out, pressure)
    outlet_air_flow = FlowOfMoistAir.of_dry_air_mass_flow(outlet_state, mda)

    condensate = FlowOfLiquidWater.of_mass_flow(
        LiquidWaterState.of_temperature(wall_temperature, pressure), m_cond
    )
    return CoolingOutcome(outlet_air_flow, q_cool * 1000.0, condensate, bypass_factor)
