"""Facilities (hospitals) served by the portal."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Facility:
    id: str
    name: str


SANIAT_RMEL = Facility(id="saniat-rmel", name="Saniat Rmel Hospital")
MOHAMMED_6 = Facility(id="mohammed-6", name="Mohammed 6 Hospital")

KNOWN_FACILITIES: dict[str, Facility] = {
    facility.id: facility for facility in (SANIAT_RMEL, MOHAMMED_6)
}

# Help requests raised without any facility context land here
DEFAULT_FACILITY = SANIAT_RMEL


def facility_name(facility_id: str) -> str:
    facility = KNOWN_FACILITIES.get(facility_id)
    return facility.name if facility else facility_id
