"""DDL for the simulations table.

PostgreSQL is the production store (reached through the psqlODBC driver);
the sqlite variant backs local runs and the test suite. Both accept the
same INSERT ... RETURNING and aggregate queries in db/queries.
"""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_COLUMNS = """
        region VARCHAR(100) NOT NULL,
        property_type VARCHAR(50) NOT NULL,
        monthly_rent BIGINT NOT NULL,
        initial_cost BIGINT NOT NULL,
        furniture_cost BIGINT NOT NULL,
        renovation_cost BIGINT NOT NULL,
        management_fee_rate INTEGER NOT NULL,
        annual_revenue BIGINT NOT NULL,
        annual_cost BIGINT NOT NULL,
        annual_profit BIGINT NOT NULL,
        annual_yield DECIMAL(20,1) NOT NULL,
        payback_period DECIMAL(20,1),
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
"""

DDL: dict[str, str] = {
    "postgresql": f"""
        CREATE TABLE IF NOT EXISTS simulations (
        id SERIAL PRIMARY KEY,{_COLUMNS})
    """,
    "sqlite": f"""
        CREATE TABLE IF NOT EXISTS simulations (
        id INTEGER PRIMARY KEY AUTOINCREMENT,{_COLUMNS})
    """,
}


def ensure_schema(conn, dialect: str = "postgresql") -> None:
    """Create the simulations table if it does not exist yet."""
    try:
        ddl = DDL[dialect]
    except KeyError:
        raise ValueError(f"Unsupported database dialect: {dialect!r}") from None
    cursor = conn.cursor()
    cursor.execute(ddl)
    conn.commit()
    logger.info("Simulations table ready (%s)", dialect)
