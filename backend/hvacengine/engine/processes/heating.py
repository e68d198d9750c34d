"""
Sensible heating and dry (sensible) cooling equations.

Humidity ratio is constant, so the outlet follows from an energy balance on
the dry-air mass flow:

    Q = m_da * (h_out - h_in)        [W = kg/s * kJ/kg * 1000]

Heating from a target RH has a closed form too: at fixed humidity ratio the
vapour pressure is fixed, so the outlet temperature is the one whose
saturation pressure equals Pv / RH.
"""

from typing import NamedTuple

from hvacengine.config import TEMPERATURE_MIN, TEMPERATURE_MAX
from hvacengine.engine import state_resolver
from hvacengine.engine.validators import require_finite, require_in_range
from hvacengine.exceptions import PreconditionError
from hvacengine.models.flow import FlowOfMoistAir


class SensibleOutcome(NamedTuple):
    outlet_air_flow: FlowOfMoistAir
    heat_of_process: float  # W


def _outlet_flow(inlet_air_flow: FlowOfMoistAir, temperature: float) -> FlowOfMoistAir:
    outlet_state = inlet_air_flow.state.with_temperature(temperature)
    return FlowOfMoistAir.of_dry_air_mass_flow(outlet_state, inlet_air_flow.dry_air_mass_flow)


def heating_or_dry_cooling_from_power(
    inlet_air_flow: FlowOfMoistAir, power: float
) -> SensibleOutcome:
    """Outlet for a given heat input (W, negative for cooling)."""
    require_finite("Power", power)
    mda = inlet_air_flow.dry_air_mass_flow
    if power == 0.0 or mda == 0.0:
        return SensibleOutcome(inlet_air_flow, 0.0)

    W = inlet_air_flow.humidity_ratio
    h_out = inlet_air_flow.specific_enthalpy + power / 1000.0 / mda
    Tdb_out = state_resolver.dry_bulb_from_enthalpy(h_out, W)
    if Tdb_out < TEMPERATURE_MIN or Tdb_out > TEMPERATURE_MAX:
        raise PreconditionError(
            f"Power {power:.1f} W drives the outlet temperature to {Tdb_out:.2f} °C, "
            f"outside [{TEMPERATURE_MIN}, {TEMPERATURE_MAX}] °C"
        )
    return SensibleOutcome(_outlet_flow(inlet_air_flow, Tdb_out), power)


def heating_or_dry_cooling_from_outlet_temperature(
    inlet_air_flow: FlowOfMoistAir, outlet_temperature: float
) -> SensibleOutcome:
    """Heat needed to bring the flow to outlet_temperature at constant humidity ratio."""
    require_in_range(
        "Outlet temperature", outlet_temperature, TEMPERATURE_MIN, TEMPERATURE_MAX, "°C"
    )
    inlet_state = inlet_air_flow.state
    if outlet_temperature < inlet_state.dew_point:
        raise PreconditionError(
            f"Outlet temperature {outlet_temperature} °C is below the inlet dew point "
            f"{inlet_state.dew_point:.2f} °C. Use real cooling with condensate instead."
        )
    if outlet_temperature == inlet_state.temperature:
        return SensibleOutcome(inlet_air_flow, 0.0)

    outlet_air_flow = _outlet_flow(inlet_air_flow, outlet_temperature)
    mda = inlet_air_flow.dry_air_mass_flow
    heat = mda * (outlet_air_flow.specific_enthalpy - inlet_state.specific_enthalpy) * 1000.0
    return SensibleOutcome(outlet_air_flow, heat)


def heating_from_outlet_rh(
    inlet_air_flow: FlowOfMoistAir, outlet_relative_humidity: float
) -> SensibleOutcome:
    """Heating at constant humidity ratio down to the requested RH (%)."""
    require_in_range("Outlet relative humidity", outlet_relative_humidity, 0.0, 100.0, "%")
    if outlet_relative_humidity <= 0.0:
        raise PreconditionError("Outlet relative humidity must be greater than zero")
    inlet_state = inlet_air_flow.state
    if outlet_relative_humidity > inlet_state.relative_humidity:
        raise PreconditionError(
            f"Heating cannot raise relative humidity (RH_in={inlet_state.relative_humidity:.2f}%, "
            f"RH_target={outlet_relative_humidity}%). Use cooling instead."
        )
    if outlet_relative_humidity == inlet_state.relative_humidity:
        return SensibleOutcome(inlet_air_flow, 0.0)

    Tdb_out = state_resolver.dry_bulb_from_humidity_ratio_and_rh(
        inlet_state.humidity_ratio, outlet_relative_humidity, inlet_state.pressure
    )
    # Round-off can land a hair below the inlet; heating never cools.
    Tdb_out = max(Tdb_out, inlet_state.temperature)
    return heating_or_dry_cooling_from_outlet_temperature(inlet_air_flow, Tdb_out)
