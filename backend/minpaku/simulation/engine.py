"""Annual revenue / cost / yield model for a short-term rental.

Works in exact decimal arithmetic over integer inputs, so rounding happens
only once per reported figure:
  - revenue, cost and profit round half up to whole currency units
  - yield and payback round half away from zero to one decimal place
"""
from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal

from minpaku.models.simulation import INFINITE_PAYBACK, SimulationInput, SimulationResult
from minpaku.simulation.reference_data import DEFAULT_REFERENCE_DATA, ReferenceData, RegionProfile

DAYS_PER_YEAR = 365
MONTHS_PER_YEAR = 12
CLEANING_MONTHLY = 15_000
UTILITIES_INSURANCE_MONTHLY = 16_000
MONTHLY_OVERHEAD = CLEANING_MONTHLY + UTILITIES_INSURANCE_MONTHLY
FURNITURE_COST = 500_000

_HALF = Decimal("0.5")
_ONE_PLACE = Decimal("0.1")
_HUNDRED = Decimal(100)


def _round_currency(value: Decimal) -> int:
    """Round to the nearest unit, ties toward +infinity."""
    return int((value + _HALF).to_integral_value(rounding=ROUND_FLOOR))


def _round_one_place(value: Decimal) -> Decimal:
    return value.quantize(_ONE_PLACE, rounding=ROUND_HALF_UP)


def furniture_cost(sim_input: SimulationInput) -> int:
    return FURNITURE_COST if sim_input.include_furniture else 0


def total_initial_cost(sim_input: SimulationInput) -> int:
    """Up-front outlay: key money/deposits plus furniture and renovation."""
    return sim_input.initial_cost + furniture_cost(sim_input) + sim_input.renovation_cost


def compute(sim_input: SimulationInput, region: RegionProfile) -> SimulationResult:
    """Project one year of operation for ``sim_input`` in ``region``.

    The property type is carried on the input for record keeping only and
    does not affect any figure.
    """
    annual_revenue = (
        Decimal(region.average_daily_rate) * DAYS_PER_YEAR * region.occupancy_rate / _HUNDRED
    )
    management_fee = annual_revenue * sim_input.management_fee_rate / _HUNDRED
    annual_cost = (sim_input.monthly_rent + MONTHLY_OVERHEAD) * MONTHS_PER_YEAR + management_fee
    annual_profit = annual_revenue - annual_cost

    total_initial = total_initial_cost(sim_input)
    if total_initial > 0:
        annual_yield = _round_one_place(annual_profit / total_initial * _HUNDRED)
    else:
        annual_yield = Decimal(0)

    if annual_profit > 0:
        payback_period = _round_one_place(Decimal(total_initial) / annual_profit)
    else:
        payback_period = INFINITE_PAYBACK

    return SimulationResult(
        annual_revenue=_round_currency(annual_revenue),
        annual_cost=_round_currency(annual_cost),
        annual_profit=_round_currency(annual_profit),
        annual_yield=annual_yield,
        payback_period=payback_period,
    )


def simulate(
    sim_input: SimulationInput,
    reference: ReferenceData = DEFAULT_REFERENCE_DATA,
) -> SimulationResult:
    """Resolve the input's region and compute. Unknown regions raise UnknownReferenceError."""
    return compute(sim_input, reference.region(sim_input.region))
