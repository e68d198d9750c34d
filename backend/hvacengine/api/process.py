"""
API routes for process calculations: a single stage or a sequential chain.
"""

from fastapi import APIRouter, HTTPException

from hvacengine.engine.builder import build_engine
from hvacengine.exceptions import MissingInputError
from hvacengine.models.process import (
    ProcessChainInput,
    ProcessChainOutput,
    ProcessInput,
    ProcessResult,
)

router = APIRouter(prefix="/api/v1", tags=["process"])


@router.post("/process", response_model=ProcessResult)
async def calculate_process(data: ProcessInput):
    """
    Calculate one heating, cooling or mixing process.

    Returns inlet and outlet flows, heat of process and, for cooling,
    condensate flow and bypass factor.
    """
    try:
        engine = build_engine(data.inlet_air_flow, [data])
        return engine.run_calculations()[0]
    except (ValueError, MissingInputError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.post("/process-chain", response_model=ProcessChainOutput)
async def calculate_process_chain(data: ProcessChainInput) -> ProcessChainOutput:
    """
    Run a chain of processes. Each stage takes its inlet air from the
    previous stage's outlet; the first stage takes inlet_air_flow.
    """
    try:
        engine = build_engine(data.inlet_air_flow, data.stages)
        results = engine.run_calculations()
    except (ValueError, MissingInputError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    return ProcessChainOutput(
        results=results,
        outlet_air_flow=engine.last_result.outlet_air_flow,
        total_heat_of_process=sum(r.heat_of_process for r in results),
    )
