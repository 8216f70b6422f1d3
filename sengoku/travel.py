"""
sengoku/travel.py
~~~~~~~~~~~~~~~~~
Region map and travel rules.

Locations are content loaded from ``config/map_locations.json``. A character
may travel anywhere inside their current region, plus the open region
(Musashi), which every road leads to.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from sengoku.models import Character

logger = logging.getLogger(__name__)

OPEN_REGION = "musashi"

REGION_COLORS: dict[str, str] = {
    "owari": "#8B0000",
    "kai": "#2F4F2F",
    "shinano": "#4B0082",
    "mino": "#DAA520",
    "musashi": "#DC143C",
    "echigo": "#4682B4",
}
DEFAULT_REGION_COLOR = "#666666"


class TravelError(Exception):
    """The character cannot travel to the requested location."""


class MapLocation(BaseModel):
    """A point of interest on the region map."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    region: str = Field(..., min_length=1)
    x: int = Field(0, ge=0)
    y: int = Field(0, ge=0)
    description: str = ""
    is_accessible: bool = True


def region_color(region: str) -> str:
    return REGION_COLORS.get(region, DEFAULT_REGION_COLOR)


def can_travel(character: Character, location: MapLocation) -> bool:
    return location.is_accessible and location.region in (character.region, OPEN_REGION)


def travel(character: Character, location: MapLocation) -> Character:
    """Return a copy of ``character`` standing at ``location``."""
    if not location.is_accessible:
        raise TravelError(f"{location.name} is not accessible right now.")
    if location.region not in (character.region, OPEN_REGION):
        raise TravelError(
            f"{location.name} lies in {location.region}; unlock that region first."
        )
    logger.info("Character %s travels to %s (%s).", character.id, location.name, location.region)
    return character.model_copy(
        update={"current_location": location.name, "region": location.region}
    )


def locations_by_region(locations: list[MapLocation]) -> dict[str, list[MapLocation]]:
    """Group locations by region, regions in alphabetical order."""
    grouped: dict[str, list[MapLocation]] = {}
    for location in sorted(locations, key=lambda loc: (loc.region, loc.name)):
        grouped.setdefault(location.region, []).append(location)
    return grouped
