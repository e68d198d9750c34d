"""
Tests for fluid property resolution and the state / flow value objects.

Reference values are cross-checked against ASHRAE Fundamentals psychrometric
tables. All tests use SI units at standard pressure unless noted.
"""

import pytest
from hvacengine.config import DEFAULT_PRESSURE_SI, FlowType
from hvacengine.engine import state_resolver
from hvacengine.exceptions import PreconditionError
from hvacengine.models.coolant import CoolantData
from hvacengine.models.flow import FlowOfMoistAir, FlowOfLiquidWater
from hvacengine.models.state_point import MoistAirState


def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.1):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


# ---------------------------------------------------------------------------
# Moist air properties: 24°C, 50% RH at sea level
# ---------------------------------------------------------------------------

class TestMoistAirState:

    def setup_method(self):
        self.state = MoistAirState.of_relative_humidity(24.0, 50.0, DEFAULT_PRESSURE_SI)

    def test_relative_humidity_round_trip(self):
        assert self.state.relative_humidity == pytest.approx(50.0, abs=1e-6)

    def test_humidity_ratio(self):
        assert self.state.humidity_ratio == pytest.approx(0.0093, abs=1e-4)

    def test_enthalpy(self):
        assert self.state.specific_enthalpy == approx(47.8, abs_tol=0.3)

    def test_dew_point(self):
        assert 12.5 <= self.state.dew_point <= 13.3

    def test_wet_bulb(self):
        assert 16.8 <= self.state.wet_bulb <= 17.4

    def test_density(self):
        assert self.state.density == approx(1.18, abs_tol=0.01)

    def test_frozen(self):
        with pytest.raises(Exception):
            self.state.temperature = 30.0

    def test_with_temperature_keeps_humidity_ratio(self):
        warmer = self.state.with_temperature(30.0)
        assert warmer.temperature == 30.0
        assert warmer.humidity_ratio == self.state.humidity_ratio
        assert warmer.relative_humidity < self.state.relative_humidity

    def test_with_relative_humidity(self):
        wetter = self.state.with_relative_humidity(70.0)
        assert wetter.temperature == 24.0
        assert wetter.humidity_ratio > self.state.humidity_ratio

    def test_with_pressure(self):
        low = self.state.with_pressure(90000.0)
        assert low.humidity_ratio == self.state.humidity_ratio
        assert low.relative_humidity < self.state.relative_humidity

    def test_of_humidity_ratio_matches(self):
        again = MoistAirState.of_humidity_ratio(24.0, self.state.humidity_ratio)
        assert again == self.state

    def test_supersaturated_state_reported_saturated(self):
        fog = MoistAirState.of_humidity_ratio(20.0, 0.02, DEFAULT_PRESSURE_SI)
        assert fog.humidity_ratio == 0.02
        assert fog.relative_humidity == 100.0
        assert state_resolver.relative_humidity(20.0, 0.02, DEFAULT_PRESSURE_SI) > 100.0


class TestStateValidation:

    def test_rh_above_100_rejected(self):
        with pytest.raises(PreconditionError):
            MoistAirState.of_relative_humidity(20.0, 101.0)

    def test_temperature_below_limit_rejected(self):
        with pytest.raises(PreconditionError):
            MoistAirState.of_humidity_ratio(-120.0, 0.001)

    def test_pressure_below_limit_rejected(self):
        with pytest.raises(PreconditionError):
            MoistAirState.of_humidity_ratio(20.0, 0.001, 40000.0)

    def test_negative_humidity_ratio_rejected(self):
        with pytest.raises(PreconditionError):
            MoistAirState.of_humidity_ratio(20.0, -0.001)

    def test_dew_point_above_dry_bulb_rejected(self):
        with pytest.raises(PreconditionError):
            MoistAirState.of_input_pair(("Tdb", "Tdp"), (20.0, 25.0))

    def test_unsupported_pair_rejected(self):
        with pytest.raises(PreconditionError):
            MoistAirState.of_input_pair(("h", "RH"), (50.0, 50.0))


class TestInputPairs:

    def test_dew_point_pair(self):
        state = MoistAirState.of_input_pair(("Tdb", "Tdp"), (24.0, 12.0))
        assert state.dew_point == approx(12.0, abs_tol=0.01)

    def test_wet_bulb_pair(self):
        state = MoistAirState.of_input_pair(("Tdb", "Twb"), (24.0, 17.0))
        assert state.wet_bulb == approx(17.0, abs_tol=0.01)

    def test_humidity_ratio_pair(self):
        state = MoistAirState.of_input_pair(("Tdb", "W"), (24.0, 0.008))
        assert state.humidity_ratio == 0.008


# ---------------------------------------------------------------------------
# Inverse: temperature at which a humidity ratio reaches a given RH
# ---------------------------------------------------------------------------

class TestDryBulbFromHumidityRatioAndRH:

    def test_inverts_relative_humidity(self):
        W = state_resolver.humidity_ratio_from_rh(20.0, 60.0, DEFAULT_PRESSURE_SI)
        Tdb = state_resolver.dry_bulb_from_humidity_ratio_and_rh(W, 60.0, DEFAULT_PRESSURE_SI)
        assert Tdb == pytest.approx(20.0, abs=0.01)

    def test_saturation_gives_dew_point(self):
        W = state_resolver.humidity_ratio_from_rh(20.0, 60.0, DEFAULT_PRESSURE_SI)
        Tdb = state_resolver.dry_bulb_from_humidity_ratio_and_rh(W, 100.0, DEFAULT_PRESSURE_SI)
        assert Tdb == pytest.approx(state_resolver.dew_point(20.0, W, DEFAULT_PRESSURE_SI), abs=0.01)

    def test_zero_rh_rejected(self):
        with pytest.raises(PreconditionError):
            state_resolver.dry_bulb_from_humidity_ratio_and_rh(0.005, 0.0, DEFAULT_PRESSURE_SI)


# ---------------------------------------------------------------------------
# Liquid water
# ---------------------------------------------------------------------------

class TestLiquidWater:

    def test_specific_heat_at_20c(self):
        assert state_resolver.liquid_water_specific_heat(20.0) == pytest.approx(4.184, abs=0.002)

    def test_enthalpy_at_20c(self):
        assert state_resolver.liquid_water_enthalpy(20.0) == pytest.approx(83.7, abs=0.1)

    def test_enthalpy_zero_below_freezing(self):
        assert state_resolver.liquid_water_enthalpy(-5.0) == 0.0

    def test_density_at_20c(self):
        assert state_resolver.liquid_water_density(20.0) == pytest.approx(998.0, abs=1.0)

    def test_zero_condensate_flow(self):
        flow = FlowOfLiquidWater.zero_flow(11.5)
        assert flow.mass_flow == 0.0
        assert flow.volumetric_flow == 0.0
        assert flow.temperature == 11.5


# ---------------------------------------------------------------------------
# Flows
# ---------------------------------------------------------------------------

class TestFlowOfMoistAir:

    def setup_method(self):
        self.state = MoistAirState.of_relative_humidity(34.0, 40.0, 98700.0)
        self.flow = FlowOfMoistAir.of_mass_flow(self.state, 10000.0 / 3600.0)

    def test_locked_type(self):
        assert self.flow.locked_flow_type == FlowType.MASS_FLOW
        assert self.flow.mass_flow == 10000.0 / 3600.0

    def test_dry_air_mass_flow(self):
        assert self.flow.dry_air_mass_flow == pytest.approx(
            self.flow.mass_flow / (1.0 + self.state.humidity_ratio)
        )
        assert self.flow.dry_air_mass_flow == pytest.approx(2.7402, abs=1e-3)

    def test_volumetric_flow(self):
        assert self.flow.volumetric_flow == pytest.approx(self.flow.mass_flow / self.state.density)

    def test_with_state_keeps_locked_rate(self):
        cooler = self.flow.with_state(self.state.with_temperature(20.0))
        assert cooler.mass_flow == self.flow.mass_flow
        assert cooler.volumetric_flow < self.flow.volumetric_flow

    def test_volumetric_lock_survives_state_change(self):
        flow = FlowOfMoistAir.of_volumetric_flow(self.state, 1.0)
        cooler = flow.with_state(self.state.with_temperature(20.0))
        assert cooler.volumetric_flow == 1.0
        assert cooler.mass_flow > flow.mass_flow

    def test_dry_air_volumetric_flow_round_trip(self):
        flow = FlowOfMoistAir.of_dry_air_volumetric_flow(self.state, 2.0)
        again = FlowOfMoistAir.of_dry_air_mass_flow(self.state, flow.dry_air_mass_flow)
        assert again.dry_air_volumetric_flow == pytest.approx(2.0)

    def test_with_flow_rate_changes_lock(self):
        flow = self.flow.with_flow_rate(1.5, FlowType.DRY_AIR_MASS_FLOW)
        assert flow.locked_flow_type == FlowType.DRY_AIR_MASS_FLOW
        assert flow.dry_air_mass_flow == 1.5

    def test_negative_flow_rejected(self):
        with pytest.raises(PreconditionError):
            FlowOfMoistAir.of_mass_flow(self.state, -1.0)

    def test_excessive_flow_rejected(self):
        with pytest.raises(PreconditionError):
            FlowOfMoistAir.of_mass_flow(self.state, 6.0e9)


# ---------------------------------------------------------------------------
# Coolant
# ---------------------------------------------------------------------------

class TestCoolantData:

    def test_average_temperature(self):
        coolant = CoolantData.of_temperatures(9.0, 14.0)
        assert coolant.average_temperature == 11.5

    def test_supply_above_return_rejected(self):
        with pytest.raises(PreconditionError):
            CoolantData.of_temperatures(14.0, 9.0)

    def test_out_of_range_rejected(self):
        with pytest.raises(PreconditionError):
            CoolantData.of_temperatures(5.0, 95.0)

    def test_direct_construction_validates(self):
        with pytest.raises(ValueError):
            CoolantData(supply_temperature=14.0, return_temperature=9.0)

    def test_with_supply_temperature(self):
        coolant = CoolantData.of_temperatures(9.0, 14.0).with_supply_temperature(7.0)
        assert coolant.average_temperature == 10.5
