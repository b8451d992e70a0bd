import pytest

from minpaku.errors import MalformedInputError, UnknownReferenceError
from minpaku.simulation.reference_data import (
    DEFAULT_REFERENCE_DATA,
    PropertyTypeProfile,
    ReferenceData,
    RegionProfile,
)


def test_default_regions():
    assert DEFAULT_REFERENCE_DATA.region_names() == [
        "Tokyo", "Osaka", "Kyoto", "Fukuoka", "Okinawa", "Hokkaido", "Other regions",
    ]
    tokyo = DEFAULT_REFERENCE_DATA.region("Tokyo")
    assert tokyo.occupancy_rate == 70
    assert tokyo.average_daily_rate == 25000


def test_default_property_types():
    assert DEFAULT_REFERENCE_DATA.property_type("1K").max_guests == 2
    assert DEFAULT_REFERENCE_DATA.property_type("Detached house").max_guests == 8
    assert len(DEFAULT_REFERENCE_DATA.property_type_names()) == 6


def test_lookup_is_exact_match():
    with pytest.raises(UnknownReferenceError):
        DEFAULT_REFERENCE_DATA.region("tokyo")


def test_unknown_property_type_is_malformed_input():
    with pytest.raises(MalformedInputError) as exc_info:
        DEFAULT_REFERENCE_DATA.property_type("Castle")
    assert exc_info.value.kind == "property type"


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_REFERENCE_DATA.regions["Nagoya"] = RegionProfile("Nagoya", 50, 12000)


def test_custom_reference_data_is_independent_of_source_lists():
    regions = [RegionProfile("Test", occupancy_rate=50, average_daily_rate=1000)]
    reference = ReferenceData.from_profiles(regions, [PropertyTypeProfile("Room", max_guests=1)])
    regions.append(RegionProfile("Late", occupancy_rate=10, average_daily_rate=1))
    assert reference.region_names() == ["Test"]
    assert reference.property_type("Room").max_guests == 1
