"""
Tests for mixing of moist air streams.

Covers two-stream and multi-stream mixing, conservation of dry air, moisture
and energy, degenerate zero-flow streams, and mixing for a target outlet
temperature with minimum-flow floors.
"""

import pytest
from hvacengine.config import DEFAULT_PRESSURE_SI
from hvacengine.engine import state_resolver
from hvacengine.engine.processes.mixing import mixing_of_many_flows, mixing_of_two_flows
from hvacengine.engine.strategies.mixing import (
    MixingForTargetTemperature,
    MixingOfMultipleFlows,
    MixingOfTwoFlows,
)
from hvacengine.exceptions import ConvergenceError, ConvergenceMismatchError, PreconditionError
from hvacengine.models.flow import FlowOfMoistAir
from hvacengine.models.process import MixingMode, ProcessType
from hvacengine.models.state_point import MoistAirState


def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.1):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


def _flow(Tdb: float, RH: float, mass_flow_kg_h: float, pressure: float = DEFAULT_PRESSURE_SI):
    state = MoistAirState.of_relative_humidity(Tdb, RH, pressure)
    return FlowOfMoistAir.of_mass_flow(state, mass_flow_kg_h / 3600.0)


# ---------------------------------------------------------------------------
# Outdoor 10°C/40% (20 000 kg/h) + return 30°C/30% (30 000 kg/h)
# ---------------------------------------------------------------------------

class TestTwoFlowMixing:

    def setup_method(self):
        self.first = _flow(10.0, 40.0, 20000.0)
        self.second = _flow(30.0, 30.0, 30000.0)
        self.result = MixingOfTwoFlows(self.first, self.second).solve()
        self.outlet = self.result.outlet_air_flow

    def test_process_type(self):
        assert self.result.process_type == ProcessType.MIXING
        assert self.result.process_mode == MixingMode.TWO_FLOWS
        assert self.result.heat_of_process == 0.0

    def test_mixed_temperature(self):
        assert self.outlet.temperature == approx(22.0, abs_tol=0.1)

    def test_mixed_relative_humidity(self):
        assert self.outlet.relative_humidity == approx(36.3, abs_tol=0.3)

    def test_mixed_humidity_ratio(self):
        assert self.outlet.humidity_ratio == pytest.approx(0.00596, abs=2e-4)

    def test_dry_air_conserved(self):
        total = self.first.dry_air_mass_flow + self.second.dry_air_mass_flow
        assert self.outlet.dry_air_mass_flow == pytest.approx(total, rel=1e-12)

    def test_moisture_conserved(self):
        water_in = (
            self.first.dry_air_mass_flow * self.first.humidity_ratio
            + self.second.dry_air_mass_flow * self.second.humidity_ratio
        )
        water_out = self.outlet.dry_air_mass_flow * self.outlet.humidity_ratio
        assert water_out == pytest.approx(water_in, rel=1e-9)

    def test_energy_conserved(self):
        energy_in = (
            self.first.dry_air_mass_flow * self.first.specific_enthalpy
            + self.second.dry_air_mass_flow * self.second.specific_enthalpy
        )
        energy_out = self.outlet.dry_air_mass_flow * self.outlet.specific_enthalpy
        assert energy_out == pytest.approx(energy_in, rel=1e-6)

    def test_mixed_state_between_streams(self):
        assert self.first.humidity_ratio <= self.outlet.humidity_ratio <= self.second.humidity_ratio
        assert (
            self.first.specific_enthalpy
            <= self.outlet.specific_enthalpy
            <= self.second.specific_enthalpy
        )

    def test_order_does_not_matter(self):
        swapped = mixing_of_two_flows(self.second, self.first)
        assert swapped.temperature == pytest.approx(self.outlet.temperature, abs=1e-9)


class TestMixingEdges:

    def test_zero_second_flow_returns_first(self):
        first = _flow(10.0, 40.0, 20000.0)
        empty = _flow(30.0, 30.0, 0.0)
        assert mixing_of_two_flows(first, empty) is first

    def test_zero_first_flow_returns_second(self):
        empty = _flow(10.0, 40.0, 0.0)
        second = _flow(30.0, 30.0, 30000.0)
        assert mixing_of_two_flows(empty, second) is second

    def test_outlet_pressure_is_highest(self):
        low = _flow(20.0, 50.0, 1000.0, pressure=100000.0)
        high = _flow(20.0, 50.0, 1000.0, pressure=101325.0)
        assert mixing_of_two_flows(low, high).pressure == 101325.0

    def test_identical_streams(self):
        flow = _flow(20.0, 50.0, 1000.0)
        mixed = mixing_of_two_flows(flow, flow)
        assert mixed.temperature == pytest.approx(20.0, abs=1e-9)
        assert mixed.dry_air_mass_flow == pytest.approx(2 * flow.dry_air_mass_flow)

    def test_empty_list_rejected(self):
        with pytest.raises(PreconditionError):
            mixing_of_many_flows([])

    def test_all_zero_returns_first(self):
        flows = [_flow(10.0, 40.0, 0.0), _flow(30.0, 30.0, 0.0)]
        assert mixing_of_many_flows(flows) is flows[0]


class TestMultipleFlowMixing:

    def setup_method(self):
        self.flows = [_flow(10.0, 40.0, 20000.0), _flow(30.0, 30.0, 30000.0), _flow(20.0, 60.0, 10000.0)]
        self.result = MixingOfMultipleFlows(self.flows[0], self.flows[1:]).solve()

    def test_mode(self):
        assert self.result.process_mode == MixingMode.MULTIPLE_FLOWS
        assert len(self.result.mixing_flows) == 2

    def test_dry_air_conserved(self):
        total = sum(f.dry_air_mass_flow for f in self.flows)
        assert self.result.outlet_air_flow.dry_air_mass_flow == pytest.approx(total, rel=1e-12)

    def test_matches_pairwise_mixing(self):
        pairwise = mixing_of_two_flows(mixing_of_two_flows(self.flows[0], self.flows[1]), self.flows[2])
        assert self.result.outlet_air_flow.humidity_ratio == pytest.approx(pairwise.humidity_ratio, rel=1e-9)
        assert self.result.outlet_air_flow.temperature == pytest.approx(pairwise.temperature, abs=1e-6)

    def test_no_mixing_flows_rejected(self):
        with pytest.raises(PreconditionError):
            MixingOfMultipleFlows(self.flows[0], [])


# ---------------------------------------------------------------------------
# Mixing for a target temperature
# Outdoor -10°C/80% + recirculated 22°C/40%, 2.0 kg/s dry air in total
# ---------------------------------------------------------------------------

def _outdoor():
    return FlowOfMoistAir.of_dry_air_mass_flow(MoistAirState.of_relative_humidity(-10.0, 80.0), 1.0)


def _recirculated():
    return FlowOfMoistAir.of_dry_air_mass_flow(MoistAirState.of_relative_humidity(22.0, 40.0), 1.0)


class TestMixingForTargetTemperature:

    def setup_method(self):
        self.result = MixingForTargetTemperature(
            _outdoor(), _recirculated(),
            target_dry_air_flow=2.0,
            target_temperature=15.0,
            inlet_min_dry_air_flow=0.3,
        ).solve()

    def test_reaches_target(self):
        assert self.result.outlet_air_flow.temperature == pytest.approx(15.0, abs=0.01)

    def test_total_flow(self):
        assert self.result.outlet_air_flow.dry_air_mass_flow == pytest.approx(2.0, rel=1e-9)

    def test_split_respects_floor(self):
        outdoor = self.result.inlet_air_flow.dry_air_mass_flow
        recirculated = self.result.mixing_flows[0].dry_air_mass_flow
        assert outdoor >= 0.3
        assert outdoor + recirculated == pytest.approx(2.0)

    def test_mode(self):
        assert self.result.process_mode == MixingMode.TARGET_TEMPERATURE


class TestMixingForTargetTemperatureLimits:

    def test_target_above_range_snaps_to_warmest_split(self):
        result = MixingForTargetTemperature(
            _outdoor(), _recirculated(), 2.0, 30.0, inlet_min_dry_air_flow=0.3,
        ).solve()
        assert result.inlet_air_flow.dry_air_mass_flow == pytest.approx(0.3)
        assert result.outlet_air_flow.temperature < 22.0

    def test_target_below_range_snaps_to_coldest_split(self):
        result = MixingForTargetTemperature(
            _outdoor(), _recirculated(), 2.0, -20.0, mixing_min_dry_air_flow=0.5,
        ).solve()
        assert result.mixing_flows[0].dry_air_mass_flow == pytest.approx(0.5)
        assert result.outlet_air_flow.temperature > -10.0

    def test_floors_exceeding_target_mix_floors_only(self):
        result = MixingForTargetTemperature(
            _outdoor(), _recirculated(), 2.0, 15.0,
            inlet_min_dry_air_flow=1.5, mixing_min_dry_air_flow=1.0,
        ).solve()
        assert result.inlet_air_flow.dry_air_mass_flow == pytest.approx(1.5)
        assert result.mixing_flows[0].dry_air_mass_flow == pytest.approx(1.0)
        assert result.outlet_air_flow.dry_air_mass_flow == pytest.approx(2.5)

    def test_zero_target_flow_rejected(self):
        with pytest.raises(PreconditionError):
            MixingForTargetTemperature(_outdoor(), _recirculated(), 0.0, 15.0)

    def test_negative_floor_rejected(self):
        with pytest.raises(PreconditionError):
            MixingForTargetTemperature(
                _outdoor(), _recirculated(), 2.0, 15.0, inlet_min_dry_air_flow=-0.1
            )


# ---------------------------------------------------------------------------
# Mixing two saturated streams: 0°C/100% + 30°C/100% lands in the fog region
# ---------------------------------------------------------------------------

class TestSupersaturatedMix:

    def setup_method(self):
        self.cold = _flow(0.0, 100.0, 3600.0)
        self.warm = _flow(30.0, 100.0, 3600.0)
        self.outlet = mixing_of_two_flows(self.cold, self.warm)

    def test_mix_above_saturation(self):
        assert state_resolver.relative_humidity(
            self.outlet.temperature, self.outlet.humidity_ratio, self.outlet.pressure
        ) > 100.0

    def test_reported_rh_capped_at_100(self):
        assert self.outlet.relative_humidity == 100.0

    def test_moisture_still_conserved(self):
        water_in = sum(f.dry_air_mass_flow * f.humidity_ratio for f in (self.cold, self.warm))
        water_out = self.outlet.dry_air_mass_flow * self.outlet.humidity_ratio
        assert water_out == pytest.approx(water_in, rel=1e-9)


# ---------------------------------------------------------------------------
# Solver returning a split that misses the target
# ---------------------------------------------------------------------------

class TestMixingSolverFailures:

    def test_temperature_mismatch_detected(self, monkeypatch):
        monkeypatch.setattr(
            "hvacengine.engine.strategies.mixing.solve",
            lambda residual, lower, upper, **kwargs: 0.5 * (lower + upper),
        )
        strategy = MixingForTargetTemperature(
            _outdoor(), _recirculated(), 2.0, 15.0, inlet_min_dry_air_flow=0.3,
        )
        with pytest.raises(ConvergenceMismatchError, match="instead of the requested 15.0"):
            strategy.solve()

    def test_convergence_error_propagates(self, monkeypatch):
        def no_convergence(residual, lower, upper, **kwargs):
            raise ConvergenceError("no convergence after 100 iterations")

        monkeypatch.setattr("hvacengine.engine.strategies.mixing.solve", no_convergence)
        with pytest.raises(ConvergenceError):
            MixingForTargetTemperature(_outdoor(), _recirculated(), 2.0, 15.0).solve()
