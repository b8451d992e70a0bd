"""Step-by-step collection of a SimulationInput.

The wizard walks a fixed linear sequence of steps:

    REGION -> PROPERTY_TYPE -> COSTS -> OPTIONS -> RESULTS

Leaving REGION or PROPERTY_TYPE requires the matching field to be set.
Field setters only touch the in-flight draft; nothing is re-validated when
going back. ``next()`` from RESULTS hands the finished input and result to
the persistence gateway.
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional

from minpaku.errors import MalformedInputError, StepValidationError
from minpaku.models.simulation import MAX_AMOUNT, SimulationInput, SimulationResult
from minpaku.simulation.engine import compute
from minpaku.simulation.reference_data import DEFAULT_REFERENCE_DATA, ReferenceData

logger = logging.getLogger(__name__)

DEFAULT_MONTHLY_RENT = 100_000
DEFAULT_INITIAL_COST = 1_000_000
DEFAULT_RENOVATION_COST = 0
DEFAULT_MANAGEMENT_FEE_RATE = 10
RENT_DAYS_PER_MONTH = 30  # region default rent ~ one month of nightly rate


class WizardStep(IntEnum):
    REGION = 1
    PROPERTY_TYPE = 2
    COSTS = 3
    OPTIONS = 4
    RESULTS = 5

    @property
    def title(self) -> str:
        return _STEP_TITLES[self]


_STEP_TITLES = {
    WizardStep.REGION: "Select a region",
    WizardStep.PROPERTY_TYPE: "Select a property type",
    WizardStep.COSTS: "Rent and initial costs",
    WizardStep.OPTIONS: "Additional options",
    WizardStep.RESULTS: "Simulation results",
}


class SimulationWizard:
    """Finite state machine owning one draft SimulationInput.

    ``gateway`` is anything with ``save(input, result) -> int``; it is only
    needed for the terminal ``next()``.
    """

    def __init__(self, reference: ReferenceData = DEFAULT_REFERENCE_DATA, gateway=None):
        self.reference = reference
        self.gateway = gateway
        self.step = WizardStep.REGION

        self.region: Optional[str] = None
        self.property_type: Optional[str] = None
        self.monthly_rent: int = DEFAULT_MONTHLY_RENT
        self.initial_cost: int = DEFAULT_INITIAL_COST
        self.include_furniture: bool = False
        self.renovation_cost: int = DEFAULT_RENOVATION_COST
        self.management_fee_rate: int = DEFAULT_MANAGEMENT_FEE_RATE

        self.record_id: Optional[int] = None
        self._result: Optional[SimulationResult] = None
        self._result_input: Optional[SimulationInput] = None
        self._saved_input: Optional[SimulationInput] = None

    # ------------------------------------------------------------------
    # Field updates
    # ------------------------------------------------------------------

    def select_region(self, name: str) -> None:
        """Pick a region and reset the rent to that region's default."""
        region = self.reference.region(name)
        self.region = region.name
        self.monthly_rent = region.average_daily_rate * RENT_DAYS_PER_MONTH

    def select_property_type(self, name: str) -> None:
        self.property_type = self.reference.property_type(name).name

    def set_monthly_rent(self, value: int) -> None:
        self.monthly_rent = _checked_int("monthly rent", value, minimum=1, maximum=MAX_AMOUNT)

    def set_initial_cost(self, value: int) -> None:
        self.initial_cost = _checked_int("initial cost", value, minimum=0, maximum=MAX_AMOUNT)

    def set_renovation_cost(self, value: int) -> None:
        self.renovation_cost = _checked_int("renovation cost", value, minimum=0, maximum=MAX_AMOUNT)

    def set_management_fee_rate(self, value: int) -> None:
        self.management_fee_rate = _checked_int("management fee rate", value, minimum=0, maximum=100)

    def set_include_furniture(self, include: bool) -> None:
        self.include_furniture = bool(include)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def can_advance(self) -> bool:
        return self._missing_prompt() is None

    def next(self) -> WizardStep:
        """Advance one step, or run the terminal save from RESULTS.

        Raises StepValidationError (state unchanged) when the current step's
        required field is missing. StorageError from the gateway propagates.
        """
        prompt = self._missing_prompt()
        if prompt is not None:
            raise StepValidationError(self.step, prompt)

        if self.step == WizardStep.RESULTS:
            self._finish()
            return self.step

        self.step = WizardStep(self.step + 1)
        if self.step == WizardStep.RESULTS:
            self._ensure_result()
        return self.step

    def back(self) -> WizardStep:
        if self.step > WizardStep.REGION:
            self.step = WizardStep(self.step - 1)
        return self.step

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def current_input(self) -> SimulationInput:
        """Snapshot of the draft. Requires region and property type."""
        if self.region is None:
            raise StepValidationError(WizardStep.REGION, _PROMPTS[WizardStep.REGION])
        if self.property_type is None:
            raise StepValidationError(WizardStep.PROPERTY_TYPE, _PROMPTS[WizardStep.PROPERTY_TYPE])
        return SimulationInput(
            region=self.region,
            property_type=self.property_type,
            monthly_rent=self.monthly_rent,
            initial_cost=self.initial_cost,
            include_furniture=self.include_furniture,
            renovation_cost=self.renovation_cost,
            management_fee_rate=self.management_fee_rate,
        )

    @property
    def result(self) -> SimulationResult:
        return self._ensure_result()[1]

    def _ensure_result(self) -> tuple[SimulationInput, SimulationResult]:
        sim_input = self.current_input()
        if self._result is None or self._result_input != sim_input:
            self._result = compute(sim_input, self.reference.region(sim_input.region))
            self._result_input = sim_input
        return sim_input, self._result

    def _finish(self) -> None:
        sim_input, result = self._ensure_result()
        if self.record_id is not None and self._saved_input == sim_input:
            return
        if self.gateway is None:
            raise RuntimeError("No persistence gateway configured for this wizard")
        self.record_id = self.gateway.save(sim_input, result)
        self._saved_input = sim_input
        logger.info("Wizard run saved as simulation %s", self.record_id)

    def _missing_prompt(self) -> Optional[str]:
        if self.step == WizardStep.REGION and self.region is None:
            return _PROMPTS[WizardStep.REGION]
        if self.step == WizardStep.PROPERTY_TYPE and self.property_type is None:
            return _PROMPTS[WizardStep.PROPERTY_TYPE]
        return None


_PROMPTS = {
    WizardStep.REGION: "Please select a region",
    WizardStep.PROPERTY_TYPE: "Please select a property type",
}


def _checked_int(label: str, value, minimum: int, maximum: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(f"{label} must be an integer, got {value!r}")
    if value < minimum:
        raise MalformedInputError(f"{label} must be at least {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise MalformedInputError(f"{label} must be at most {maximum}, got {value}")
    return value
