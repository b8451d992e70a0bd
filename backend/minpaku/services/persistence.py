"""Persistence gateway for finished simulations.

Each call opens its own connection from ``connect`` and closes it when
done. Records are append-only: there is no update or delete path. Driver
errors are logged once and re-raised as StorageError; nothing is retried.
The StorageError message names only the failed action, so it is safe to
show to API clients; the driver detail stays in the log and __cause__.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Optional

from minpaku.db.queries.simulations import fetch_region_stats, fetch_simulation, insert_simulation
from minpaku.errors import StorageError
from minpaku.models.record import RegionStats, SimulationRecord
from minpaku.models.simulation import SimulationInput, SimulationResult
from minpaku.simulation.engine import furniture_cost

logger = logging.getLogger(__name__)


def record_values(sim_input: SimulationInput, result: SimulationResult) -> dict[str, Any]:
    """Flatten an (input, result) pair into simulations table columns."""
    return {
        "region": sim_input.region,
        "property_type": sim_input.property_type,
        "monthly_rent": sim_input.monthly_rent,
        "initial_cost": sim_input.initial_cost,
        "furniture_cost": furniture_cost(sim_input),
        "renovation_cost": sim_input.renovation_cost,
        "management_fee_rate": sim_input.management_fee_rate,
        "annual_revenue": result.annual_revenue,
        "annual_cost": result.annual_cost,
        "annual_profit": result.annual_profit,
        "annual_yield": float(result.annual_yield),
        "payback_period": None if result.is_payback_infinite else float(result.payback_period),
    }


class SimulationGateway:
    """Stores simulation records and answers per-region aggregate queries."""

    def __init__(self, connect: Callable[[], Any]):
        self._connect = connect

    @contextmanager
    def _connection(self, action: str) -> Iterator[Any]:
        try:
            conn = self._connect()
        except Exception as e:
            logger.error("Cannot %s: connection failed: %s", action, e)
            raise StorageError(f"Failed to {action}") from e

        try:
            yield conn
        except StorageError:
            raise
        except Exception as e:
            logger.error("Failed to %s: %s", action, e)
            raise StorageError(f"Failed to {action}") from e
        finally:
            conn.close()

    def save(self, sim_input: SimulationInput, result: SimulationResult) -> int:
        """Persist one record and return its generated id."""
        with self._connection("save simulation") as conn:
            simulation_id = insert_simulation(conn, record_values(sim_input, result))
            conn.commit()
        logger.info("Saved simulation %d for region %s", simulation_id, sim_input.region)
        return simulation_id

    def query_stats(self) -> list[RegionStats]:
        with self._connection("fetch statistics") as conn:
            return fetch_region_stats(conn)

    def get(self, simulation_id: int) -> Optional[SimulationRecord]:
        with self._connection("fetch simulation") as conn:
            return fetch_simulation(conn, simulation_id)
