from minpaku.db.connection import db_pool
from minpaku.services.persistence import SimulationGateway
from minpaku.simulation.reference_data import DEFAULT_REFERENCE_DATA, ReferenceData


def get_gateway() -> SimulationGateway:
    """FastAPI dependency returning a gateway that opens pooled connections on demand."""
    return SimulationGateway(db_pool.get_connection)


def get_reference_data() -> ReferenceData:
    return DEFAULT_REFERENCE_DATA
