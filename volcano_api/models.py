"""
Pydantic models for the volcano dataset and API responses.

`Volcano` and `Eruption` mirror the two stored tables and are used when
building the dataset. The remaining models are the records the query
endpoints return.
"""

import re

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

_YEAR_PREFIX = re.compile(r"[ \t\n\r\f\v]*[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Stored entities
# ---------------------------------------------------------------------------

class Volcano(BaseModel):
    """A row of the `volcanoes` table. Read-only reference data."""
    id: int
    name: str = ""
    country: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    elevation: Optional[int] = None
    type: str = ""


class Eruption(BaseModel):
    """
    A row of the `eruptions` table.

    `date` is free text; by convention its first four characters are the
    year, and every range query relies on that.
    """
    volcano_id: int
    date: str
    deaths: Optional[int] = None
    missing: Optional[int] = None
    injuries: Optional[int] = None

    @property
    def year(self) -> Optional[int]:
        """
        Year read the way the queries read it: the leading integer of the
        first four characters, sign included. None when there is none.
        """
        match = _YEAR_PREFIX.match(self.date[:4])
        return int(match.group()) if match else None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class Location(BaseModel):
    """Where a volcano is."""
    latitude: float = 0.0
    longitude: float = 0.0
    elevation: int = 0
    country: str = ""


class EruptionRecord(BaseModel):
    """An eruption joined with its volcano, as returned by /year."""
    date: str = ""
    name: str = ""
    location: Location
    deaths: int = 0
    missing: int = 0
    injuries: int = 0


class NearbyVolcano(BaseModel):
    """A volcano ranked by distance from a query point, as returned by /location."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = ""
    last_erupted: str = Field("", alias="lastErupted")
    type: str = ""
    location: Location
