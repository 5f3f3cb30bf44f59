"""
SQLite dataset builder for the Volcano Web Service.

The service only ever reads the dataset. This module creates it: the
schema, a small writer, and CSV import.

Usage:
    # Standalone: build data/volcanoes.db from CSV exports
    python -m volcano_api.database --volcanoes volcanoes.csv --eruptions eruptions.csv

    # Programmatic
    from volcano_api.database import VolcanoDatabase
    db = VolcanoDatabase("data/volcanoes.db")
    db.upsert_volcanoes([volcano1, volcano2])
"""

import argparse
import csv
import os
import sqlite3
import sys
from typing import Optional

from . import log
from .config import settings
from .models import Eruption, Volcano


# ---------------------------------------------------------------------------
# Schema DDL
# ---------------------------------------------------------------------------

SCHEMA_SQL = """
-- Reference data
CREATE TABLE IF NOT EXISTS volcanoes (
    ID          INTEGER PRIMARY KEY,
    Name        TEXT DEFAULT '',
    Country     TEXT DEFAULT '',
    Latitude    REAL,
    Longitude   REAL,
    Elevation   INTEGER,
    Type        TEXT DEFAULT ''
);

-- Events; Date is free text whose first four characters are the year
CREATE TABLE IF NOT EXISTS eruptions (
    ID          INTEGER PRIMARY KEY AUTOINCREMENT,
    Volcano_ID  INTEGER NOT NULL REFERENCES volcanoes(ID),
    Date        TEXT,
    Deaths      INTEGER,
    Missing     INTEGER,
    Injuries    INTEGER
);

-- Indexes
CREATE INDEX IF NOT EXISTS idx_eruptions_volcano ON eruptions(Volcano_ID);
CREATE INDEX IF NOT EXISTS idx_eruptions_date ON eruptions(Date);
CREATE INDEX IF NOT EXISTS idx_volcanoes_country ON volcanoes(Country);
"""


class VolcanoDatabase:
    """Read-write SQLite manager used to load the volcano dataset."""

    def __init__(self, db_path: str = settings.DB_PATH):
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path)
        self.conn.execute("PRAGMA foreign_keys=ON")
        self.conn.row_factory = sqlite3.Row
        self._create_schema()

    def _create_schema(self):
        self.conn.executescript(SCHEMA_SQL)
        self.conn.commit()

    def close(self):
        self.conn.close()

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    def upsert_volcanoes(self, volcanoes: list[Volcano]) -> int:
        """Insert or replace Volcano records. Returns count written."""
        sql = """
            INSERT OR REPLACE INTO volcanoes
                (ID, Name, Country, Latitude, Longitude, Elevation, Type)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """
        rows = [
            (v.id, v.name, v.country, v.latitude, v.longitude, v.elevation, v.type)
            for v in volcanoes
        ]
        self.conn.executemany(sql, rows)
        self.conn.commit()
        return len(rows)

    def insert_eruptions(self, eruptions: list[Eruption]) -> int:
        """
        Insert Eruption records. Returns count written.

        Raises sqlite3.IntegrityError if an eruption references a volcano
        that is not loaded; nothing from the batch is kept in that case.
        """
        sql = """
            INSERT INTO eruptions (Volcano_ID, Date, Deaths, Missing, Injuries)
            VALUES (?, ?, ?, ?, ?)
        """
        rows = [
            (e.volcano_id, e.date, e.deaths, e.missing, e.injuries)
            for e in eruptions
        ]
        try:
            self.conn.executemany(sql, rows)
        except sqlite3.IntegrityError:
            self.conn.rollback()
            raise
        self.conn.commit()
        return len(rows)

    def query(self, sql: str, params: tuple = ()) -> list[dict]:
        cur = self.conn.execute(sql, params)
        return [dict(row) for row in cur.fetchall()]


# ---------------------------------------------------------------------------
# CSV import
# ---------------------------------------------------------------------------

def _cell(row: dict, column: str) -> Optional[str]:
    value = row.get(column)
    if value is None or not value.strip():
        return None
    return value.strip()


def read_volcanoes_csv(path: str) -> list[Volcano]:
    """
    Read volcanoes from a CSV with columns
    ID, Name, Country, Latitude, Longitude, Elevation, Type.
    Blank cells load as NULL.
    """
    with open(path, newline="", encoding="utf-8") as f:
        return [
            Volcano(
                id=_cell(row, "ID"),
                name=_cell(row, "Name") or "",
                country=_cell(row, "Country") or "",
                latitude=_cell(row, "Latitude"),
                longitude=_cell(row, "Longitude"),
                elevation=_cell(row, "Elevation"),
                type=_cell(row, "Type") or "",
            )
            for row in csv.DictReader(f)
        ]


def read_eruptions_csv(path: str) -> list[Eruption]:
    """
    Read eruptions from a CSV with columns
    Volcano_ID, Date, Deaths, Missing, Injuries.
    """
    with open(path, newline="", encoding="utf-8") as f:
        return [
            Eruption(
                volcano_id=_cell(row, "Volcano_ID"),
                date=_cell(row, "Date") or "",
                deaths=_cell(row, "Deaths"),
                missing=_cell(row, "Missing"),
                injuries=_cell(row, "Injuries"),
            )
            for row in csv.DictReader(f)
        ]


def build_database(volcanoes_csv: str, eruptions_csv: str, db_path: str = settings.DB_PATH) -> dict:
    """Load both CSV files into db_path. Returns row counts per table."""
    log.header("DATASET BUILD: Volcanoes and Eruptions")

    log.step(f"Reading {volcanoes_csv}")
    volcanoes = read_volcanoes_csv(volcanoes_csv)
    log.step(f"Reading {eruptions_csv}")
    eruptions = read_eruptions_csv(eruptions_csv)
    log.info(f"{len(volcanoes)} volcanoes, {len(eruptions)} eruptions")

    undated = sum(1 for e in eruptions if e.year is None)
    if undated:
        log.warn(f"{undated} eruptions have no numeric year prefix; year queries read them as year 0")

    db = VolcanoDatabase(db_path)
    try:
        counts = {
            "volcanoes": db.upsert_volcanoes(volcanoes),
            "eruptions": db.insert_eruptions(eruptions),
        }
    finally:
        db.close()

    log.summary_table("Rows written", [(k, str(v)) for k, v in counts.items()])
    log.ok(f"Database: {db_path}")
    return counts


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Build the volcano SQLite dataset from CSV files")
    parser.add_argument("--volcanoes", required=True, help="CSV of volcanoes")
    parser.add_argument("--eruptions", required=True, help="CSV of eruptions")
    parser.add_argument("--db", default=settings.DB_PATH, help=f"Output database (default: {settings.DB_PATH})")
    args = parser.parse_args(argv)

    try:
        build_database(args.volcanoes, args.eruptions, args.db)
    except (OSError, ValueError, sqlite3.Error) as e:
        log.err(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
