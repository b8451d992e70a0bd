from decimal import Decimal
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Payback period when profit can never recover the initial outlay.
INFINITE_PAYBACK = "∞"

PaybackPeriod = Union[Decimal, Literal["∞"]]

# Ceiling for rent and cost inputs (JPY). Keeps every figure inside a BIGINT
# column and inside the default 28-digit decimal context.
MAX_AMOUNT = 10_000_000_000


class SimulationInput(BaseModel):
    """Everything the host tells us about the planned listing."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    region: str = Field(min_length=1)
    property_type: str = Field(min_length=1)
    monthly_rent: int = Field(gt=0, le=MAX_AMOUNT)
    initial_cost: int = Field(ge=0, le=MAX_AMOUNT)
    include_furniture: bool = False
    renovation_cost: int = Field(0, ge=0, le=MAX_AMOUNT)
    management_fee_rate: int = Field(10, ge=0, le=100)


class SimulationResult(BaseModel):
    """Projected first-year economics for one SimulationInput."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    annual_revenue: int
    annual_cost: int
    annual_profit: int
    annual_yield: Decimal  # percent, one decimal place
    payback_period: PaybackPeriod  # years, one decimal place

    @property
    def is_payback_infinite(self) -> bool:
        return self.payback_period == INFINITE_PAYBACK
