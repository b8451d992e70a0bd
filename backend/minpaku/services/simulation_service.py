"""Handling of finished simulations submitted by the presentation layer.

The client runs the wizard and posts its inputs together with the numbers
it computed. Unless TRUST_CLIENT_RESULTS is set, the submitted numbers are
discarded and the result is recomputed here from the raw inputs.
"""
from __future__ import annotations

import logging
from typing import Optional

from minpaku.config import settings
from minpaku.models.record import SimulationSubmission
from minpaku.models.simulation import SimulationInput, SimulationResult
from minpaku.services.persistence import SimulationGateway
from minpaku.simulation.engine import simulate
from minpaku.simulation.reference_data import ReferenceData

logger = logging.getLogger(__name__)


def resolve_input(sim_input: SimulationInput, reference: ReferenceData) -> SimulationResult:
    """Validate reference names and compute the result for ``sim_input``."""
    reference.property_type(sim_input.property_type)
    return simulate(sim_input, reference)


def record_submission(
    submission: SimulationSubmission,
    gateway: SimulationGateway,
    reference: ReferenceData,
    trust_client_results: Optional[bool] = None,
) -> int:
    """Store a submitted simulation and return the new record id.

    Raises UnknownReferenceError for names outside the reference tables and
    StorageError when the store fails.
    """
    if trust_client_results is None:
        trust_client_results = settings.TRUST_CLIENT_RESULTS

    sim_input = submission.to_input()
    computed = resolve_input(sim_input, reference)

    if trust_client_results and submission.results is not None:
        result = submission.results
    else:
        result = computed
        if submission.results is not None and submission.results != computed:
            logger.info(
                "Discarding client-supplied results for region %s (client yield %s, server yield %s)",
                sim_input.region, submission.results.annual_yield, computed.annual_yield,
            )

    return gateway.save(sim_input, result)
