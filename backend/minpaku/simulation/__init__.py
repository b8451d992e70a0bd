"""Simulation core — revenue model and input wizard."""
from minpaku.simulation.reference_data import (
    DEFAULT_REFERENCE_DATA,
    PropertyTypeProfile,
    ReferenceData,
    RegionProfile,
)
from minpaku.simulation.engine import compute, simulate, furniture_cost, total_initial_cost
from minpaku.simulation.wizard import SimulationWizard, WizardStep

__all__ = [
    "DEFAULT_REFERENCE_DATA",
    "PropertyTypeProfile",
    "ReferenceData",
    "RegionProfile",
    "compute",
    "simulate",
    "furniture_cost",
    "total_initial_cost",
    "SimulationWizard",
    "WizardStep",
]
