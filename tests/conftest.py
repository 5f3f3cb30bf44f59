"""Shared fixtures for the test suite."""

import pytest
from fastapi.testclient import TestClient

from volcano_api.config import settings
from volcano_api.data_access import VolcanoDataProvider
from volcano_api.database import VolcanoDatabase
from volcano_api.models import Eruption, Volcano


SAMPLE_VOLCANOES = [
    Volcano(id=1, name="Etna", country="Italy", latitude=37.75, longitude=15.0,
            elevation=3357, type="Stratovolcano"),
    Volcano(id=2, name="Vesuvius", country="Italy", latitude=40.821, longitude=14.426,
            elevation=1281, type="Stratovolcano"),
    Volcano(id=3, name="Stromboli", country="Italy", latitude=38.789, longitude=15.213,
            elevation=924, type="Stratovolcano"),
    Volcano(id=4, name="Fuji", country="Japan", latitude=35.3606, longitude=138.7274,
            elevation=3776, type="Stratovolcano"),
    Volcano(id=5, name="Kilauea", country="United States", latitude=19.421, longitude=-155.287,
            elevation=1222, type="Shield"),
    # elevation left NULL
    Volcano(id=6, name="Ash & <Smoke>", country="Iceland", latitude=63.63, longitude=-19.62,
            type="Subglacial"),
    # sits on the query point used in tests but only has an undated eruption
    Volcano(id=7, name="Dormant", country="Italy", latitude=37.0, longitude=15.0,
            elevation=100, type="Cinder cone"),
    # never erupted
    Volcano(id=8, name="Quiet Peak", country="Japan", latitude=36.0, longitude=139.0,
            elevation=2000, type="Lava dome"),
]

SAMPLE_ERUPTIONS = [
    Eruption(volcano_id=1, date="2021-02-16"),
    Eruption(volcano_id=1, date="1999-07-22", deaths=0, missing=0, injuries=2),
    Eruption(volcano_id=2, date="1944-03-18", deaths=26),
    Eruption(volcano_id=3, date="2019-07-03", deaths=1, injuries=1),
    Eruption(volcano_id=4, date="1707-12-16"),
    Eruption(volcano_id=5, date="2018-05-03", injuries=24),
    Eruption(volcano_id=5, date="2023-01-05"),
    Eruption(volcano_id=6, date="2010-04-14", missing=3),
    Eruption(volcano_id=7, date="unknown"),
]


@pytest.fixture
def make_db(tmp_path):
    """Factory: build a dataset file in tmp_path, return its path."""
    def _make(name, volcanoes, eruptions):
        path = str(tmp_path / name)
        db = VolcanoDatabase(db_path=path)
        db.upsert_volcanoes(volcanoes)
        db.insert_eruptions(eruptions)
        db.close()
        return path
    return _make


@pytest.fixture
def db_path(make_db):
    """Path to the sample volcano dataset."""
    return make_db("volcanoes.db", SAMPLE_VOLCANOES, SAMPLE_ERUPTIONS)


@pytest.fixture
def provider(db_path):
    """Read-only data provider over the sample dataset."""
    data = VolcanoDataProvider(db_path=db_path)
    yield data
    data.close()


@pytest.fixture
def client(db_path, monkeypatch):
    """TestClient whose requests read the sample dataset."""
    monkeypatch.setattr(settings, "DB_PATH", db_path)
    from volcano_api.main import app
    return TestClient(app)


@pytest.fixture
def make_volcano_grid(make_db):
    """Factory: dataset of `n` volcanoes one degree apart along a meridian, all erupted in 2020."""
    def _make(n):
        volcanoes = [
            Volcano(id=i, name=f"V{i}", country="Gridland", latitude=float(i),
                    longitude=0.0, elevation=i * 100, type="Stratovolcano")
            for i in range(1, n + 1)
        ]
        eruptions = [Eruption(volcano_id=v.id, date="2020-01-01") for v in volcanoes]
        return make_db(f"grid_{n}.db", volcanoes, eruptions)
    return _make
