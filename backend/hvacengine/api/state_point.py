"""
API routes for moist air state resolution.
"""

from fastapi import APIRouter, HTTPException

from hvacengine.config import UnitSystem
from hvacengine.engine import state_resolver
from hvacengine.models.state_point import MoistAirState, StatePointInput

router = APIRouter(prefix="/api/v1", tags=["state-point"])


@router.post("/state-point", response_model=MoistAirState)
async def create_state_point(data: StatePointInput) -> MoistAirState:
    """
    Resolve a full moist air state from two independent properties
    (Tdb+RH, Tdb+W, Tdb+Tdp or Tdb+Twb) and pressure.
    """
    try:
        return MoistAirState.of_input_pair(data.input_pair, data.values, data.pressure)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/pressure-from-altitude")
async def pressure_from_altitude(altitude: float) -> dict:
    """
    Convert altitude (m) to standard atmospheric pressure (Pa).
    """
    try:
        pressure = state_resolver.pressure_from_altitude(altitude)
        return {"altitude": altitude, "pressure": round(pressure, 3), "unit_system": UnitSystem.SI}
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
