"""
Adiabatic mixing of moist air streams.

Conservation on a dry-air mass basis:
    m_da_mix = sum(m_da_i)
    x_mix    = sum(m_da_i * x_i) / m_da_mix
    h_mix    = sum(m_da_i * h_i) / m_da_mix

The outlet pressure is the highest inlet pressure.
"""

import numpy as np

from hvacengine.engine import state_resolver
from hvacengine.exceptions import PreconditionError
from hvacengine.models.flow import FlowOfMoistAir
from hvacengine.models.state_point import MoistAirState


def _mix(flows: list[FlowOfMoistAir]) -> FlowOfMoistAir:
    mdas = np.array([f.dry_air_mass_flow for f in flows])
    Ws = np.array([f.humidity_ratio for f in flows])
    hs = np.array([f.specific_enthalpy for f in flows])

    mda = float(mdas.sum())
    W_mix = float(np.dot(mdas, Ws) / mda)
    h_mix = float(np.dot(mdas, hs) / mda)
    pressure = max(f.pressure for f in flows)

    Tdb_mix = state_resolver.dry_bulb_from_enthalpy(h_mix, W_mix)
    mixed_state = MoistAirState.of_humidity_ratio(Tdb_mix, W_mix, pressure)
    return FlowOfMoistAir.of_dry_air_mass_flow(mixed_state, mda)


def mixing_of_two_flows(
    first_flow: FlowOfMoistAir, second_flow: FlowOfMoistAir
) -> FlowOfMoistAir:
    """Mix two streams. A stream without dry air leaves the other one unchanged."""
    if first_flow.dry_air_mass_flow == 0.0:
        return second_flow
    if second_flow.dry_air_mass_flow == 0.0:
        return first_flow
    return _mix([first_flow, second_flow])


def mixing_of_many_flows(flows: list[FlowOfMoistAir]) -> FlowOfMoistAir:
    if not flows:
        raise PreconditionError("At least one flow is required for mixing")
    if sum(f.dry_air_mass_flow for f in flows) == 0.0:
        return flows[0]
    return _mix(list(flows))
