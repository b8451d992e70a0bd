from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from minpaku.models.simulation import PaybackPeriod, SimulationInput, SimulationResult


class SimulationRecord(BaseModel):
    """A persisted simulation: the input, the derived furniture cost and the result."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    region: str
    property_type: str
    monthly_rent: int
    initial_cost: int
    furniture_cost: int
    renovation_cost: int
    management_fee_rate: int
    annual_revenue: int
    annual_cost: int
    annual_profit: int
    annual_yield: float
    payback_period: PaybackPeriod
    created_at: Optional[datetime] = None


class RegionStats(BaseModel):
    """Aggregate of all stored simulations for one region."""
    region: str
    total_simulations: int
    avg_yield: Optional[float] = None
    avg_payback_period: Optional[float] = None
    region_count: int


class SimulationSubmission(SimulationInput):
    """Request body for saving a finished simulation.

    ``results`` is what the client computed. It is only stored when
    TRUST_CLIENT_RESULTS is enabled; otherwise the server recomputes.
    """
    results: Optional[SimulationResult] = None

    def to_input(self) -> SimulationInput:
        return SimulationInput(**self.model_dump(exclude={"results"}))


class SaveSimulationResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    simulation_id: int
    message: str = "Simulation saved"


class StatsResponse(BaseModel):
    success: bool = True
    stats: list[RegionStats]
