"""Reference tables — regional market figures and property capacities.

Maps region names to occupancy and nightly price assumptions, and property
types to guest capacity. A ``ReferenceData`` instance is immutable and is
passed explicitly to the engine, the wizard, and the API layer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from minpaku.errors import UnknownReferenceError


@dataclass(frozen=True)
class RegionProfile:
    """Market assumptions for a single region."""
    name: str
    occupancy_rate: int  # percent of nights booked per year
    average_daily_rate: int
    description: str = ""


@dataclass(frozen=True)
class PropertyTypeProfile:
    """Layout category and how many guests it sleeps."""
    name: str
    max_guests: int


@dataclass(frozen=True)
class ReferenceData:
    """Read-only lookup tables for regions and property types."""
    regions: Mapping[str, RegionProfile] = field(default_factory=dict)
    property_types: Mapping[str, PropertyTypeProfile] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "regions", MappingProxyType(dict(self.regions)))
        object.__setattr__(self, "property_types", MappingProxyType(dict(self.property_types)))

    @classmethod
    def from_profiles(
        cls,
        regions: list[RegionProfile],
        property_types: list[PropertyTypeProfile],
    ) -> "ReferenceData":
        return cls(
            regions={r.name: r for r in regions},
            property_types={p.name: p for p in property_types},
        )

    def region(self, name: str) -> RegionProfile:
        """Exact-match region lookup. Raises UnknownReferenceError if missing."""
        try:
            return self.regions[name]
        except KeyError:
            raise UnknownReferenceError("region", name) from None

    def property_type(self, name: str) -> PropertyTypeProfile:
        """Exact-match property type lookup. Raises UnknownReferenceError if missing."""
        try:
            return self.property_types[name]
        except KeyError:
            raise UnknownReferenceError("property type", name) from None

    def region_names(self) -> list[str]:
        return list(self.regions.keys())

    def property_type_names(self) -> list[str]:
        return list(self.property_types.keys())


_REGIONS = [
    RegionProfile("Tokyo", occupancy_rate=70, average_daily_rate=25000, description="Lively capital"),
    RegionProfile("Osaka", occupancy_rate=68, average_daily_rate=20000, description="Heart of Kansai"),
    RegionProfile("Kyoto", occupancy_rate=65, average_daily_rate=22000, description="Historic sightseeing city"),
    RegionProfile("Fukuoka", occupancy_rate=60, average_daily_rate=18000, description="Gateway to Kyushu"),
    RegionProfile("Okinawa", occupancy_rate=62, average_daily_rate=20000, description="Resort destination"),
    RegionProfile("Hokkaido", occupancy_rate=55, average_daily_rate=15000, description="Nature-rich tourist region"),
    RegionProfile("Other regions", occupancy_rate=40, average_daily_rate=10000, description="Regional cities"),
]

_PROPERTY_TYPES = [
    PropertyTypeProfile("1K", max_guests=2),
    PropertyTypeProfile("1DK", max_guests=2),
    PropertyTypeProfile("1LDK", max_guests=3),
    PropertyTypeProfile("2LDK", max_guests=4),
    PropertyTypeProfile("3LDK", max_guests=6),
    PropertyTypeProfile("Detached house", max_guests=8),
]

DEFAULT_REFERENCE_DATA = ReferenceData.from_profiles(_REGIONS, _PROPERTY_TYPES)
