import sqlite3

import pytest
from fastapi.testclient import TestClient

from minpaku.api.deps import get_gateway
from minpaku.db.schema import ensure_schema
from minpaku.main import app
from minpaku.services.persistence import SimulationGateway


@pytest.fixture
def db_path(tmp_path):
    """A fresh sqlite file with the simulations table created."""
    path = tmp_path / "simulations.db"
    conn = sqlite3.connect(path)
    try:
        ensure_schema(conn, "sqlite")
    finally:
        conn.close()
    return path


@pytest.fixture
def gateway(db_path):
    return SimulationGateway(lambda: sqlite3.connect(db_path))


@pytest.fixture
def client(gateway):
    """TestClient whose persistence goes to the sqlite gateway."""
    app.dependency_overrides[get_gateway] = lambda: gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_gateway, None)
