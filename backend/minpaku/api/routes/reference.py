from fastapi import APIRouter, Depends

from minpaku.api.deps import get_reference_data
from minpaku.simulation.reference_data import ReferenceData

router = APIRouter(tags=["reference"])


@router.get("/reference")
def get_reference(reference: ReferenceData = Depends(get_reference_data)):
    """Region and property type tables for building the wizard screens."""
    return {
        "regions": [
            {
                "name": r.name,
                "occupancy_rate": r.occupancy_rate,
                "average_daily_rate": r.average_daily_rate,
                "description": r.description,
            }
            for r in reference.regions.values()
        ],
        "property_types": [
            {"name": p.name, "max_guests": p.max_guests}
            for p in reference.property_types.values()
        ],
    }
