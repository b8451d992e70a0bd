from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from minpaku.api.deps import get_gateway, get_reference_data
from minpaku.models.record import (
    SaveSimulationResponse,
    SimulationRecord,
    SimulationSubmission,
    StatsResponse,
)
from minpaku.models.simulation import SimulationInput, SimulationResult
from minpaku.services.persistence import SimulationGateway
from minpaku.services.simulation_service import record_submission, resolve_input
from minpaku.simulation.reference_data import ReferenceData

router = APIRouter(tags=["simulations"])


@router.post("/simulation", response_model=SaveSimulationResponse)
def save_simulation(
    submission: SimulationSubmission,
    gateway: SimulationGateway = Depends(get_gateway),
    reference: ReferenceData = Depends(get_reference_data),
):
    """Store a finished wizard run. Responds 500 if the store is unavailable."""
    simulation_id = record_submission(submission, gateway, reference)
    return SaveSimulationResponse(simulation_id=simulation_id)


@router.post("/simulation/calculate", response_model=SimulationResult)
def calculate_simulation(
    sim_input: SimulationInput,
    reference: ReferenceData = Depends(get_reference_data),
):
    """Compute a result without storing anything."""
    return resolve_input(sim_input, reference)


@router.get("/simulation/{simulation_id}", response_model=SimulationRecord)
def get_simulation(simulation_id: int, gateway: SimulationGateway = Depends(get_gateway)):
    record = gateway.get(simulation_id)
    if record is None:
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": f"Simulation {simulation_id} not found"},
        )
    return record


@router.get("/stats", response_model=StatsResponse)
def get_stats(gateway: SimulationGateway = Depends(get_gateway)):
    """Per-region counts and averages over all stored simulations."""
    return StatsResponse(stats=gateway.query_stats())
