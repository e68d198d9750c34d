"""
Mixing strategies: two flows, many flows, and a two-stream split that hits a
target outlet temperature.
"""

import logging

from hvacengine.config import (
    TEMPERATURE_MIN,
    TEMPERATURE_MAX,
    TEMPERATURE_CONVERGENCE_TOLERANCE,
    FlowType,
)
from hvacengine.engine.processes.mixing import mixing_of_two_flows, mixing_of_many_flows
from hvacengine.engine.solver import solve
from hvacengine.engine.strategies.base import ProcessStrategy
from hvacengine.engine.validators import require_in_range, require_non_negative, require_positive
from hvacengine.exceptions import ConvergenceMismatchError, PreconditionError
from hvacengine.models.flow import FlowOfMoistAir
from hvacengine.models.process import MixingMode, MixingResult

logger = logging.getLogger(__name__)


class MixingOfTwoFlows(ProcessStrategy):

    def __init__(self, inlet_air_flow: FlowOfMoistAir, mixing_flow: FlowOfMoistAir):
        super().__init__(inlet_air_flow)
        self.mixing_flow = mixing_flow

    def solve(self) -> MixingResult:
        outlet = mixing_of_two_flows(self.inlet_air_flow, self.mixing_flow)
        return MixingResult(
            process_mode=MixingMode.TWO_FLOWS,
            inlet_air_flow=self.inlet_air_flow,
            mixing_flows=[self.mixing_flow],
            outlet_air_flow=outlet,
        )


class MixingOfMultipleFlows(ProcessStrategy):

    def __init__(self, inlet_air_flow: FlowOfMoistAir, mixing_flows: list[FlowOfMoistAir]):
        super().__init__(inlet_air_flow)
        if not mixing_flows:
            raise PreconditionError("At least one mixing flow is required")
        self.mixing_flows = list(mixing_flows)

    def solve(self) -> MixingResult:
        outlet = mixing_of_many_flows([self.inlet_air_flow] + self.mixing_flows)
        return MixingResult(
            process_mode=MixingMode.MULTIPLE_FLOWS,
            inlet_air_flow=self.inlet_air_flow,
            mixing_flows=self.mixing_flows,
            outlet_air_flow=outlet,
        )


class MixingForTargetTemperature(ProcessStrategy):
    """
    Split a target dry-air flow between two streams so that the mix reaches
    target_temperature.

    Each stream keeps at least its minimum dry-air flow. When the minimums
    alone exceed the target flow, the minimums are mixed as they are. When
    the target temperature lies outside what the allowed splits can reach,
    the nearest extreme split is returned.
    """

    def __init__(
        self,
        inlet_air_flow: FlowOfMoistAir,
        mixing_flow: FlowOfMoistAir,
        target_dry_air_flow: float,
        target_temperature: float,
        inlet_min_dry_air_flow: float = 0.0,
        mixing_min_dry_air_flow: float = 0.0,
    ):
        super().__init__(inlet_air_flow)
        require_positive("Target dry air flow", target_dry_air_flow)
        require_in_range(
            "Target temperature", target_temperature, TEMPERATURE_MIN, TEMPERATURE_MAX, "°C"
        )
        require_non_negative("Inlet minimum dry air flow", inlet_min_dry_air_flow)
        require_non_negative("Mixing minimum dry air flow", mixing_min_dry_air_flow)
        self.mixing_flow = mixing_flow
        self.target_dry_air_flow = target_dry_air_flow
        self.target_temperature = target_temperature
        self.inlet_min_dry_air_flow = inlet_min_dry_air_flow
        self.mixing_min_dry_air_flow = mixing_min_dry_air_flow

    def _split(self, inlet_dry_air_flow: float, mixing_dry_air_flow: float) -> MixingResult:
        inlet = self.inlet_air_flow.with_flow_rate(inlet_dry_air_flow, FlowType.DRY_AIR_MASS_FLOW)
        mixing = self.mixing_flow.with_flow_rate(mixing_dry_air_flow, FlowType.DRY_AIR_MASS_FLOW)
        return MixingResult(
            process_mode=MixingMode.TARGET_TEMPERATURE,
            inlet_air_flow=inlet,
            mixing_flows=[mixing],
            outlet_air_flow=mixing_of_two_flows(inlet, mixing),
        )

    def solve(self) -> MixingResult:
        total = self.target_dry_air_flow
        inlet_min = self.inlet_min_dry_air_flow
        mixing_min = self.mixing_min_dry_air_flow
        target = self.target_temperature

        if inlet_min + mixing_min >= total:
            logger.warning(
                "Minimum dry air flows (%.4f + %.4f kg/s) reach the target flow %.4f kg/s; "
                "mixing the minimum flows only",
                inlet_min, mixing_min, total,
            )
            return self._split(inlet_min, mixing_min)

        def at(inlet_dry_air_flow: float) -> MixingResult:
            return self._split(inlet_dry_air_flow, total - inlet_dry_air_flow)

        lower = inlet_min
        upper = total - mixing_min
        at_lower = at(lower)
        at_upper = at(upper)
        Tdb_lower = at_lower.outlet_air_flow.temperature
        Tdb_upper = at_upper.outlet_air_flow.temperature

        coldest, warmest = sorted((at_lower, at_upper), key=lambda r: r.outlet_air_flow.temperature)
        if target <= coldest.outlet_air_flow.temperature:
            if target < coldest.outlet_air_flow.temperature:
                logger.warning(
                    "Target temperature %.2f °C is below the reachable range [%.2f, %.2f] °C",
                    target, min(Tdb_lower, Tdb_upper), max(Tdb_lower, Tdb_upper),
                )
            return coldest
        if target >= warmest.outlet_air_flow.temperature:
            if target > warmest.outlet_air_flow.temperature:
                logger.warning(
                    "Target temperature %.2f °C is above the reachable range [%.2f, %.2f] °C",
                    target, min(Tdb_lower, Tdb_upper), max(Tdb_lower, Tdb_upper),
                )
            return warmest

        def residual(inlet_dry_air_flow: float) -> float:
            return at(inlet_dry_air_flow).outlet_air_flow.temperature - target

        inlet_dry_air_flow = solve(residual, lower, upper, name="MixingForTargetTemperature")
        result = at(inlet_dry_air_flow)

        achieved = result.outlet_air_flow.temperature
        if abs(achieved - target) > TEMPERATURE_CONVERGENCE_TOLERANCE:
            raise ConvergenceMismatchError(
                f"Mixing reached {achieved:.4f} °C instead of the requested {target} °C"
            )
        return result
