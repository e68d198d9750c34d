"""
Fluid property resolver.

Thin wrapper around psychrolib (ASHRAE correlations, SI unit system) that
speaks the engine's units: enthalpy in kJ/kg dry air and relative humidity in
percent. Liquid water properties, which psychrolib does not cover, are
provided here as well.

Every psychrometric state ultimately goes through calc_all_from_tdb_w():
dry-bulb temperature and humidity ratio fully determine the rest.
"""

import psychrolib

from hvacengine.config import PRESSURE_MIN, PRESSURE_MAX, TEMPERATURE_MAX
from hvacengine.engine.validators import require_in_range, require_positive
from hvacengine.exceptions import PreconditionError

psychrolib.SetUnitSystem(psychrolib.SI)


# ---------------------------------------------------------------------------
# Moist air
# ---------------------------------------------------------------------------

def saturation_pressure(Tdb: float) -> float:
    """Saturation vapour pressure over water (or ice below 0.01 °C), Pa."""
    return psychrolib.GetSatVapPres(Tdb)


def saturation_humidity_ratio(Tdb: float, pressure: float) -> float:
    return psychrolib.GetSatHumRatio(Tdb, pressure)


def humidity_ratio_from_rh(Tdb: float, RH: float, pressure: float) -> float:
    """Humidity ratio (kg_w/kg_da) from dry-bulb temperature and RH in %."""
    return psychrolib.GetHumRatioFromRelHum(Tdb, RH / 100.0, pressure)


def relative_humidity(Tdb: float, W: float, pressure: float) -> float:
    """
    Relative humidity in %. Not clamped: supersaturated air (W above W_sat)
    reads above 100. Stored states use the capped value.
    """
    return psychrolib.GetRelHumFromHumRatio(Tdb, W, pressure) * 100.0


def specific_enthalpy(Tdb: float, W: float) -> float:
    """Moist air specific enthalpy, kJ/kg_da."""
    return psychrolib.GetMoistAirEnthalpy(Tdb, W) / 1000.0


def dry_bulb_from_enthalpy(h: float, W: float) -> float:
    """Dry-bulb temperature from enthalpy (kJ/kg_da) at fixed humidity ratio."""
    return psychrolib.GetTDryBulbFromEnthalpyAndHumRatio(h * 1000.0, W)


def dew_point(Tdb: float, W: float, pressure: float) -> float:
    return psychrolib.GetTDewPointFromHumRatio(Tdb, W, pressure)


def wet_bulb(Tdb: float, W: float, pressure: float) -> float:
    return psychrolib.GetTWetBulbFromHumRatio(Tdb, W, pressure)


def moist_air_density(Tdb: float, W: float, pressure: float) -> float:
    """Density of the moist air mixture, kg/m³."""
    return psychrolib.GetMoistAirDensity(Tdb, W, pressure)


def dry_air_density(Tdb: float, pressure: float) -> float:
    return psychrolib.GetDryAirDensity(Tdb, pressure)


def dry_bulb_from_humidity_ratio_and_rh(W: float, RH: float, pressure: float) -> float:
    """
    Dry-bulb temperature at which air with humidity ratio W reaches RH (%).

    With W fixed the vapour pressure is fixed, so the required saturation
    pressure is Pv / RH. The temperature is found by inverting the saturation
    pressure curve (psychrolib's dew point solver does exactly that).
    """
    require_in_range("Relative humidity", RH, 0.0, 100.0, "%")
    require_positive("Relative humidity", RH)
    vap_pres = psychrolib.GetVapPresFromHumRatio(W, pressure)
    try:
        return psychrolib.GetTDewPointFromVapPres(TEMPERATURE_MAX, vap_pres / (RH / 100.0))
    except ValueError as e:
        raise PreconditionError(
            f"No temperature within property limits gives RH={RH}% "
            f"at W={W}: {e}"
        ) from e


def calc_all_from_tdb_w(Tdb: float, W: float, pressure: float) -> dict:
    """
    Given Tdb and W (humidity ratio), calculate all other properties.
    Values are not rounded; they feed further process calculations.
    """
    return {
        "temperature": Tdb,
        "pressure": pressure,
        "humidity_ratio": W,
        # Supersaturated states (fog) are reported as saturated.
        "relative_humidity": min(relative_humidity(Tdb, W, pressure), 100.0),
        "specific_enthalpy": specific_enthalpy(Tdb, W),
        "dew_point": dew_point(Tdb, W, pressure),
        "wet_bulb": wet_bulb(Tdb, W, pressure),
        "density": moist_air_density(Tdb, W, pressure),
    }


def humidity_ratio_from_input_pair(
    input_pair: tuple[str, str], values: tuple[float, float], pressure: float
) -> tuple[float, float]:
    """
    Resolve (Tdb, W) from a supported input pair.

    Supported pairs: Tdb+RH, Tdb+W, Tdb+Tdp, Tdb+Twb.
    """
    pair = tuple(input_pair)
    if len(pair) != 2 or pair[0] != "Tdb":
        raise PreconditionError(
            f"Unsupported input pair {input_pair}. The first property must be 'Tdb'."
        )
    Tdb, other = values
    kind = pair[1]
    if kind == "RH":
        require_in_range("Relative humidity", other, 0.0, 100.0, "%")
        return Tdb, humidity_ratio_from_rh(Tdb, other, pressure)
    if kind == "W":
        return Tdb, other
    if kind == "Tdp":
        if other > Tdb:
            raise PreconditionError(
                f"Dew point ({other}) cannot exceed dry-bulb temperature ({Tdb})"
            )
        return Tdb, psychrolib.GetHumRatioFromTDewPoint(other, pressure)
    if kind == "Twb":
        if other > Tdb:
            raise PreconditionError(
                f"Wet-bulb temperature ({other}) cannot exceed dry-bulb temperature ({Tdb})"
            )
        return Tdb, psychrolib.GetHumRatioFromTWetBulb(Tdb, other, pressure)
    raise PreconditionError(
        f"Unsupported input pair {input_pair}. Supported: Tdb+RH, Tdb+W, Tdb+Tdp, Tdb+Twb."
    )


# ---------------------------------------------------------------------------
# Liquid water
# ---------------------------------------------------------------------------

def liquid_water_specific_heat(t: float) -> float:
    """
    Isobaric specific heat of liquid water, kJ/(kg·K).

    Polynomial fits: one for 0-100 °C (also used for sub-zero inputs, where
    the high-temperature fit diverges), one above 100 °C.
    """
    if t <= 100.0:
        return (
            3.93240161e-13 * t ** 6
            - 1.525847751e-10 * t ** 5
            + 2.479227180e-8 * t ** 4
            - 2.166932275e-6 * t ** 3
            + 1.156152199e-4 * t ** 2
            - 3.400567477e-3 * t
            + 4.219924305
        )
    return (
        2.588246403e-15 * t ** 7
        - 3.604612987e-12 * t ** 6
        + 2.112059173e-9 * t ** 5
        - 6.727469888e-7 * t ** 4
        + 1.255841880e-4 * t ** 3
        - 1.370455849e-2 * t ** 2
        + 8.093157187e-1 * t
        - 15.75651097
    )


def liquid_water_enthalpy(t: float) -> float:
    """Liquid water specific enthalpy, kJ/kg, referenced to 0 °C. Zero below 0 °C."""
    if t < 0.0:
        return 0.0
    return t * liquid_water_specific_heat(t)


def liquid_water_density(t: float) -> float:
    """Liquid water density at atmospheric pressure (Jones & Harris fit), kg/m³."""
    return (
        999.83952
        + 16.945176 * t
        - 7.9870401e-3 * t ** 2
        - 46.170461e-6 * t ** 3
        + 105.56302e-9 * t ** 4
        - 280.54253e-12 * t ** 5
    ) / (1 + 16.89785e-3 * t)


# ---------------------------------------------------------------------------
# Atmosphere
# ---------------------------------------------------------------------------

def pressure_from_altitude(altitude: float) -> float:
    """
    Standard atmosphere pressure (Pa) at an altitude in metres, using
    psychrolib's standard atmosphere model.
    """
    pressure = psychrolib.GetStandardAtmPressure(altitude)
    require_in_range("Pressure at altitude", pressure, PRESSURE_MIN, PRESSURE_MAX, "Pa")
    return pressure
