"""
Data access layer for the volcano database.
Provides read-only access to the SQLite dataset with a clean query interface.
"""

import logging
import math
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import List, Optional

from .config import settings
from .models import EruptionRecord, Location, NearbyVolcano

logger = logging.getLogger(__name__)


class DataAccessError(RuntimeError):
    """Raised when the dataset cannot be opened or a query fails."""


def _int_or_zero(value) -> int:
    return int(value) if value is not None else 0


def _float_or_zero(value) -> float:
    return float(value) if value is not None else 0.0


def _text_or_empty(value) -> str:
    return str(value) if value is not None else ""


def _null_safe(fn):
    """
    Wrap a math function for SQL use. NULL, NaN or infinite input gives
    NULL, the same as SQLite's built-in math functions.
    """
    def wrapped(value):
        if value is None or not math.isfinite(value):
            return None
        return fn(value)
    return wrapped


def _location(row: sqlite3.Row) -> Location:
    return Location(
        latitude=_float_or_zero(row["Latitude"]),
        longitude=_float_or_zero(row["Longitude"]),
        elevation=_int_or_zero(row["Elevation"]),
        country=_text_or_empty(row["Country"]),
    )


class VolcanoDataProvider:
    """
    Provides volcano and eruption data from the SQLite dataset.

    One instance owns one read-only connection. The router opens a provider
    per request and closes it before responding:

        with VolcanoDataProvider() as data:
            data.count_volcanoes()
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Open a read-only connection to the volcano database.

        Args:
            db_path: Path to volcanoes.db (defaults to config setting)

        Raises:
            DataAccessError: if the file is missing or cannot be opened
        """
        self.db_path = db_path or settings.DB_PATH

        if not Path(self.db_path).exists():
            logger.error(f"Database not found: {self.db_path}")
            raise DataAccessError(f"Database not found: {self.db_path}")

        try:
            self.conn = sqlite3.connect(
                f"file:{self.db_path}?mode=ro",
                uri=True,
                check_same_thread=False,
                timeout=settings.DB_TIMEOUT
            )
        except sqlite3.Error as e:
            logger.error(f"Problem accessing database {self.db_path}: {e}")
            raise DataAccessError(str(e)) from e
        self.conn.row_factory = sqlite3.Row
        # Not every SQLite build ships the math functions
        self.conn.create_function("COS", 1, _null_safe(math.cos), deterministic=True)
        self.conn.create_function("RADIANS", 1, _null_safe(math.radians), deterministic=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Close database connection."""
        self.conn.close()

    def _fetch(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        """Run one statement; the cursor is closed whatever happens."""
        try:
            with closing(self.conn.execute(sql, params)) as cur:
                return cur.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Problem accessing database: {e.__class__.__name__}: {e}")
            raise DataAccessError(str(e)) from e

    def _count(self, sql: str, params: tuple = ()) -> int:
        rows = self._fetch(sql, params)
        return rows[0]["count"] if rows else 0

    # ----------------------------------------------------------------
    # Counts
    # ----------------------------------------------------------------

    def count_volcanoes(self) -> int:
        """Total number of volcanoes in the dataset."""
        return self._count("SELECT COUNT(*) AS count FROM volcanoes")

    def count_eruptions(self) -> int:
        """Total number of eruptions in the dataset."""
        return self._count("SELECT COUNT(*) AS count FROM eruptions")

    def count_volcanoes_in_country(self, country: str) -> int:
        """
        Number of volcanoes in a country.

        Args:
            country: Country name, matched exactly as stored (case-sensitive)

        Returns:
            Count of matching volcanoes, 0 if none
        """
        return self._count(
            "SELECT COUNT(*) AS count FROM volcanoes WHERE Country = ?",
            (country,)
        )

    # ----------------------------------------------------------------
    # Eruptions
    # ----------------------------------------------------------------

    def eruptions_in_year_range(self, from_year: int, to_year: int) -> List[EruptionRecord]:
        """
        Eruptions whose year lies within a range, oldest first.

        The year is the integer cast of the first four characters of the
        stored date. Both bounds are inclusive.

        Args:
            from_year: First year of the range
            to_year: Last year of the range

        Returns:
            Eruption records ordered by raw date string, empty if none match
        """
        sql = """
            SELECT e.Date, v.Name, v.Latitude, v.Longitude, v.Elevation, v.Country,
                   e.Deaths, e.Missing, e.Injuries
            FROM eruptions e
            INNER JOIN volcanoes v ON e.Volcano_ID = v.ID
            WHERE CAST(substr(e.Date, 1, 4) AS INTEGER) >= ?
              AND CAST(substr(e.Date, 1, 4) AS INTEGER) <= ?
            ORDER BY e.Date ASC
        """
        rows = self._fetch(sql, (from_year, to_year))
        return [
            EruptionRecord(
                date=_text_or_empty(row["Date"]),
                name=_text_or_empty(row["Name"]),
                location=_location(row),
                deaths=_int_or_zero(row["Deaths"]),
                missing=_int_or_zero(row["Missing"]),
                injuries=_int_or_zero(row["Injuries"]),
            )
            for row in rows
        ]

    # ----------------------------------------------------------------
    # Location
    # ----------------------------------------------------------------

    def volcanoes_near_location(
        self,
        latitude: float,
        longitude: float,
        erupted_since: int
    ) -> List[NearbyVolcano]:
        """
        Volcanoes closest to a point that have erupted since a given year.

        Distance is the planar approximation
        (lat - Latitude)^2 + cos(radians(lat)) * (lon - Longitude)^2
        where the cosine uses the query latitude. It is only used for
        ordering and is not a great-circle distance.

        Args:
            latitude: Query latitude in degrees
            longitude: Query longitude in degrees
            erupted_since: Only volcanoes with an eruption in this year or later

        Returns:
            Up to NEAREST_LIMIT volcanoes, nearest first, each with the date
            of its most recent eruption
        """
        sql = """
            SELECT MAX(e.Date) AS Last_Erupted,
                   v.ID AS Volcano_ID, v.Name, v.Country, v.Latitude, v.Longitude,
                   v.Elevation, v.Type
            FROM eruptions e
            INNER JOIN volcanoes v ON e.Volcano_ID = v.ID
            WHERE CAST(substr(e.Date, 1, 4) AS INTEGER) >= ?
            GROUP BY v.ID
            ORDER BY ((? - v.Latitude) * (? - v.Latitude))
                   + (COS(RADIANS(?)) * ((? - v.Longitude) * (? - v.Longitude))) ASC
            LIMIT ?
        """
        params = (
            erupted_since,
            latitude, latitude,
            latitude,
            longitude, longitude,
            settings.NEAREST_LIMIT,
        )
        rows = self._fetch(sql, params)
        return [
            NearbyVolcano(
                id=row["Volcano_ID"],
                name=_text_or_empty(row["Name"]),
                last_erupted=_text_or_empty(row["Last_Erupted"]),
                type=_text_or_empty(row["Type"]),
                location=_location(row),
            )
            for row in rows
        ]
