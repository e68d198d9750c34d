"""
Cooling strategies.

Real cooling (with condensate) needs coolant data: the average of supply and
return temperatures is the coil wall temperature of the bypass-factor coil
model. Targeting an outlet RH or a cooling power has no closed form, so both
are solved for the outlet temperature with the bracketing root finder.

Dry cooling keeps the humidity ratio constant and must stay above the inlet
dew point.
"""

import logging

from hvacengine.config import (
    COOLING_RH_MAX,
    POWER_CONVERGENCE_TOLERANCE,
    RH_CONVERGENCE_TOLERANCE,
)
from hvacengine.engine import state_resolver
from hvacengine.engine.processes.cooling import (
    CoolingOutcome,
    coolant_mass_flow_from_power,
    real_cooling_from_outlet_temperature,
)
from hvacengine.engine.processes.heating import (
    SensibleOutcome,
    heating_or_dry_cooling_from_outlet_temperature,
    heating_or_dry_cooling_from_power,
)
from hvacengine.engine.solver import solve
from hvacengine.engine.strategies.base import ProcessStrategy
from hvacengine.engine.validators import (
    require_finite,
    require_in_range,
    require_not_greater,
    require_not_lower,
)
from hvacengine.exceptions import ConvergenceMismatchError, PreconditionError
from hvacengine.models.coolant import CoolantData
from hvacengine.models.flow import FlowOfMoistAir, FlowOfLiquidWater
from hvacengine.models.process import CoolingMode, CoolingResult

logger = logging.getLogger(__name__)


def cooling_power_limit(inlet_air_flow: FlowOfMoistAir) -> float:
    """Quick estimate of the largest cooling power (W, negative): cooling the flow down to h = 0."""
    return -inlet_air_flow.specific_enthalpy * inlet_air_flow.mass_flow * 1000.0


def _check_cooling_power(inlet_air_flow: FlowOfMoistAir, cooling_power: float) -> None:
    require_finite("Cooling power", cooling_power)
    require_not_greater(
        "Cooling power", cooling_power, 0.0,
        hint="Cooling power is negative (heat removed); use heating to add heat.",
    )
    limit = cooling_power_limit(inlet_air_flow)
    if cooling_power < limit:
        raise PreconditionError(
            f"Cooling power {cooling_power:.1f} W is too large for the provided flow "
            f"(limit {limit:.1f} W)"
        )


def _real_result(
    mode: CoolingMode,
    inlet_air_flow: FlowOfMoistAir,
    outcome: CoolingOutcome,
    coolant: CoolantData,
) -> CoolingResult:
    return CoolingResult(
        process_mode=mode,
        inlet_air_flow=inlet_air_flow,
        outlet_air_flow=outcome.outlet_air_flow,
        heat_of_process=outcome.heat_of_process,
        condensate_flow=outcome.condensate_flow,
        bypass_factor=outcome.bypass_factor,
        coolant_data=coolant,
        average_wall_temperature=coolant.average_temperature,
        coolant_mass_flow=coolant_mass_flow_from_power(coolant, outcome.heat_of_process),
    )


def _dry_result(
    mode: CoolingMode, inlet_air_flow: FlowOfMoistAir, outcome: SensibleOutcome
) -> CoolingResult:
    outlet_air_flow = outcome.outlet_air_flow
    return CoolingResult(
        process_mode=mode,
        inlet_air_flow=inlet_air_flow,
        outlet_air_flow=outlet_air_flow,
        heat_of_process=outcome.heat_of_process,
        condensate_flow=FlowOfLiquidWater.zero_flow(
            outlet_air_flow.temperature, outlet_air_flow.pressure
        ),
    )


# ---------------------------------------------------------------------------
# Real cooling
# ---------------------------------------------------------------------------

class CoolingFromTemperature(ProcessStrategy):

    def __init__(
        self, inlet_air_flow: FlowOfMoistAir, coolant: CoolantData, target_temperature: float
    ):
        super().__init__(inlet_air_flow)
        require_not_greater(
            "Target temperature", target_temperature, inlet_air_flow.temperature,
            hint="Use heating to raise the temperature.",
        )
        if target_temperature < inlet_air_flow.temperature:
            require_not_lower(
                "Target temperature", target_temperature, coolant.average_temperature,
                hint="The outlet cannot be colder than the average coil wall.",
            )
        self.coolant = coolant
        self.target_temperature = target_temperature

    def solve(self) -> CoolingResult:
        outcome = real_cooling_from_outlet_temperature(
            self.inlet_air_flow, self.coolant.average_temperature, self.target_temperature
        )
        return _real_result(CoolingMode.FROM_TEMPERATURE, self.inlet_air_flow, outcome, self.coolant)


class CoolingFromHumidity(ProcessStrategy):
    """
    Cooling to a target outlet RH.

    The outlet temperature is bracketed between the inlet temperature and the
    inlet dew point (never below the coil wall). When the dew point is not
    cold enough, the bracket is widened down to the coil wall, where the
    directly contacted air leaves saturated.
    """

    def __init__(
        self, inlet_air_flow: FlowOfMoistAir, coolant: CoolantData, target_relative_humidity: float
    ):
        super().__init__(inlet_air_flow)
        require_in_range("Target relative humidity", target_relative_humidity, 0.0, 100.0, "%")
        require_not_greater(
            "Target relative humidity", target_relative_humidity, COOLING_RH_MAX,
            hint="A cooling coil cannot bring the outlet air this close to saturation.",
        )
        require_not_lower(
            "Target relative humidity", target_relative_humidity,
            inlet_air_flow.relative_humidity,
            hint="Cooling raises relative humidity; use heating to lower it.",
        )
        self.coolant = coolant
        self.target_relative_humidity = target_relative_humidity

    def solve(self) -> CoolingResult:
        inlet = self.inlet_air_flow
        wall = self.coolant.average_temperature
        Tdb_in = inlet.temperature
        target = self.target_relative_humidity

        if target == inlet.relative_humidity or inlet.dry_air_mass_flow == 0.0:
            outcome = real_cooling_from_outlet_temperature(inlet, wall, Tdb_in)
            return _real_result(CoolingMode.FROM_HUMIDITY, inlet, outcome, self.coolant)

        def residual(Tdb_out: float) -> float:
            outlet = real_cooling_from_outlet_temperature(inlet, wall, Tdb_out).outlet_air_flow
            # Unclamped RH keeps the residual monotone near saturation.
            return state_resolver.relative_humidity(
                Tdb_out, outlet.humidity_ratio, outlet.pressure
            ) - target

        lower = max(inlet.state.dew_point, wall)
        if lower >= Tdb_in:
            raise PreconditionError(
                f"Target RH {target}% is unreachable: average coil wall temperature "
                f"{wall} °C is not below the inlet temperature {Tdb_in:.2f} °C"
            )
        if lower > wall and residual(lower) < 0.0:
            logger.debug("CoolingFromHumidity: widening bracket from %.4f to wall %.4f", lower, wall)
            lower = wall
        if residual(lower) < 0.0:
            raise PreconditionError(
                f"Target RH {target}% is unreachable with an average coil wall "
                f"temperature of {wall} °C"
            )

        Tdb_out = solve(residual, lower, Tdb_in, name="CoolingFromHumidity")
        outcome = real_cooling_from_outlet_temperature(inlet, wall, Tdb_out)

        achieved = outcome.outlet_air_flow.relative_humidity
        if abs(achieved - target) > RH_CONVERGENCE_TOLERANCE:
            raise ConvergenceMismatchError(
                f"Cooling reached RH={achieved:.4f}% instead of the requested {target}%"
            )
        return _real_result(CoolingMode.FROM_HUMIDITY, inlet, outcome, self.coolant)


class CoolingFromPower(ProcessStrategy):
    """
    Cooling with a given (negative) power.

    Dry cooling with the same power gives the coldest possible outlet, since
    no energy goes into condensation; it bounds the search from below.
    """

    def __init__(self, inlet_air_flow: FlowOfMoistAir, coolant: CoolantData, cooling_power: float):
        super().__init__(inlet_air_flow)
        _check_cooling_power(inlet_air_flow, cooling_power)
        self.coolant = coolant
        self.cooling_power = cooling_power

    def solve(self) -> CoolingResult:
        inlet = self.inlet_air_flow
        wall = self.coolant.average_temperature
        Tdb_in = inlet.temperature
        power = self.cooling_power

        if power == 0.0 or inlet.dry_air_mass_flow == 0.0:
            outcome = real_cooling_from_outlet_temperature(inlet, wall, Tdb_in)
            return _real_result(CoolingMode.FROM_POWER, inlet, outcome, self.coolant)

        Tdb_dry = heating_or_dry_cooling_from_power(inlet, power).outlet_air_flow.temperature

        def residual(Tdb_out: float) -> float:
            return real_cooling_from_outlet_temperature(inlet, wall, Tdb_out).heat_of_process - power

        unreachable = PreconditionError(
            f"Cooling power {power:.1f} W cannot be reached with an average coil wall "
            f"temperature of {wall} °C"
        )

        if wall >= inlet.state.dew_point:
            # No condensation: the coil model reduces to dry cooling.
            if Tdb_dry < wall:
                raise unreachable
            outcome = real_cooling_from_outlet_temperature(inlet, wall, Tdb_dry)
        else:
            lower = max(Tdb_dry, wall)
            if residual(lower) > 0.0:
                raise unreachable
            Tdb_out = solve(residual, lower, Tdb_in, name="CoolingFromPower")
            outcome = real_cooling_from_outlet_temperature(inlet, wall, Tdb_out)

        if abs(outcome.heat_of_process - power) > POWER_CONVERGENCE_TOLERANCE:
            raise ConvergenceMismatchError(
                f"Cooling reached {outcome.heat_of_process:.2f} W instead of the requested {power:.2f} W"
            )
        return _real_result(CoolingMode.FROM_POWER, inlet, outcome, self.coolant)


# ---------------------------------------------------------------------------
# Dry cooling
# ---------------------------------------------------------------------------

class DryCoolingFromPower(ProcessStrategy):

    def __init__(self, inlet_air_flow: FlowOfMoistAir, cooling_power: float):
        super().__init__(inlet_air_flow)
        _check_cooling_power(inlet_air_flow, cooling_power)
        self.cooling_power = cooling_power

    def solve(self) -> CoolingResult:
        outcome = heating_or_dry_cooling_from_power(self.inlet_air_flow, self.cooling_power)
        dew_point = self.inlet_air_flow.state.dew_point
        if outcome.outlet_air_flow.temperature < dew_point:
            raise PreconditionError(
                f"Cooling power {self.cooling_power:.1f} W takes the air below its dew point "
                f"({dew_point:.2f} °C). Use real cooling with condensate instead."
            )
        return _dry_result(CoolingMode.DRY_FROM_POWER, self.inlet_air_flow, outcome)


class DryCoolingFromTemperature(ProcessStrategy):

    def __init__(self, inlet_air_flow: FlowOfMoistAir, target_temperature: float):
        super().__init__(inlet_air_flow)
        require_not_greater(
            "Target temperature", target_temperature, inlet_air_flow.temperature,
            hint="Use heating to raise the temperature.",
        )
        require_not_lower(
            "Target temperature", target_temperature, inlet_air_flow.state.dew_point,
            hint="Use real cooling with condensate below the dew point.",
        )
        self.target_temperature = target_temperature

    def solve(self) -> CoolingResult:
        outcome = heating_or_dry_cooling_from_outlet_temperature(
            self.inlet_air_flow, self.target_temperature
        )
        return _dry_result(CoolingMode.DRY_FROM_TEMPERATURE, self.inlet_air_flow, outcome)
