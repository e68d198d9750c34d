"""
HVAC process engine configuration and constants.

All values are SI: °C, Pa, kg/s, m³/s, W, kJ/kg, RH in %.
"""

import os
from enum import Enum


class UnitSystem(str, Enum):
    SI = "SI"  # Metric (°C, kJ, kg/kg, m³, Pa)


class FlowType(str, Enum):
    """Flow quantity that stays fixed when a flow is re-derived for a new state."""

    MASS_FLOW = "mass_flow"
    VOLUMETRIC_FLOW = "volumetric_flow"
    DRY_AIR_MASS_FLOW = "dry_air_mass_flow"
    DRY_AIR_VOLUMETRIC_FLOW = "dry_air_volumetric_flow"


# Default atmospheric pressure at sea level
DEFAULT_PRESSURE_SI = 101325.0  # Pa

# Moist air property limits
PRESSURE_MIN = 50_000.0  # Pa
PRESSURE_MAX = 5_000_000.0  # Pa
TEMPERATURE_MIN = -100.0  # °C
TEMPERATURE_MAX = 200.0  # °C
HUMIDITY_RATIO_MAX = 3.0  # kg_w/kg_da

# Flow limits
FLOW_MIN = 0.0  # kg/s
FLOW_MAX = 5.0e9  # kg/s

# Coolant (chilled water) limits
COOLANT_TEMPERATURE_MIN = 0.0  # °C
COOLANT_TEMPERATURE_MAX = 90.0  # °C

# Highest outlet RH a cooling coil is allowed to target
COOLING_RH_MAX = 99.0  # %

# Root-finding defaults (scipy brentq)
SOLVER_XTOL = 1e-8
SOLVER_RTOL = 1e-10
SOLVER_MAX_ITER = 100

# Residual magnitude treated as an exact hit at a bracket end
RESIDUAL_TOLERANCE = 1e-9

# Post-solve acceptance checks
RH_CONVERGENCE_TOLERANCE = 0.01  # %
TEMPERATURE_CONVERGENCE_TOLERANCE = 0.01  # K
POWER_CONVERGENCE_TOLERANCE = 1.0  # W

# Browser origins allowed to call the API, comma-separated
# (e.g. "http://localhost:5173" for a frontend dev server). Empty: no CORS.
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("HVACENGINE_CORS_ORIGINS", "").split(",")
    if origin.strip()
]
