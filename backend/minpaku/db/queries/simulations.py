from __future__ import annotations

from typing import Any, Optional

from minpaku.models.record import RegionStats, SimulationRecord
from minpaku.models.simulation import INFINITE_PAYBACK

# Column order for INSERT; values are supplied as a dict keyed by these names.
INSERT_COLUMNS = [
    "region",
    "property_type",
    "monthly_rent",
    "initial_cost",
    "furniture_cost",
    "renovation_cost",
    "management_fee_rate",
    "annual_revenue",
    "annual_cost",
    "annual_profit",
    "annual_yield",
    "payback_period",
]

_RECORD_COLUMNS = ["id", *INSERT_COLUMNS, "created_at"]


def _rows_as_dicts(cursor, rows) -> list[dict[str, Any]]:
    columns = [desc[0].lower() for desc in cursor.description]
    return [dict(zip(columns, row)) for row in rows]


def insert_simulation(conn, values: dict[str, Any]) -> int:
    """Insert one simulation row and return its generated id. Does not commit."""
    placeholders = ", ".join("?" for _ in INSERT_COLUMNS)
    query = f"""
        INSERT INTO simulations ({", ".join(INSERT_COLUMNS)})
        VALUES ({placeholders})
        RETURNING id
    """
    cursor = conn.cursor()
    cursor.execute(query, [values[col] for col in INSERT_COLUMNS])
    row = cursor.fetchone()
    return int(row[0])


def fetch_region_stats(conn) -> list[RegionStats]:
    """Aggregate all simulations per region, most simulated region first."""
    query = """
        SELECT
            region,
            COUNT(*) AS total_simulations,
            AVG(annual_yield) AS avg_yield,
            AVG(payback_period) AS avg_payback_period,
            COUNT(*) AS region_count
        FROM simulations
        GROUP BY region
        ORDER BY region_count DESC, region
    """
    cursor = conn.cursor()
    cursor.execute(query)
    return [RegionStats(**data) for data in _rows_as_dicts(cursor, cursor.fetchall())]


def fetch_simulation(conn, simulation_id: int) -> Optional[SimulationRecord]:
    query = f"""
        SELECT {", ".join(_RECORD_COLUMNS)}
        FROM simulations
        WHERE id = ?
    """
    cursor = conn.cursor()
    cursor.execute(query, [simulation_id])
    rows = _rows_as_dicts(cursor, cursor.fetchall())
    if not rows:
        return None

    data = rows[0]
    if data["payback_period"] is None:
        data["payback_period"] = INFINITE_PAYBACK
    return SimulationRecord(**data)
