"""Tests for Pydantic models (Volcano, Eruption, response records)."""

import pytest
from pydantic import ValidationError

from volcano_api.models import Eruption, EruptionRecord, Location, NearbyVolcano, Volcano


# ---------------------------------------------------------------------------
# Stored entities
# ---------------------------------------------------------------------------

class TestVolcano:
    def test_required_id(self):
        with pytest.raises(ValidationError):
            Volcano(name="Etna")

    def test_defaults(self):
        v = Volcano(id=1)
        assert v.name == ""
        assert v.country == ""
        assert v.latitude is None
        assert v.longitude is None
        assert v.elevation is None
        assert v.type == ""

    def test_coerces_csv_strings(self):
        v = Volcano(id="1", latitude="37.75", longitude="15.0", elevation="3357")
        assert v.id == 1
        assert v.latitude == 37.75
        assert v.elevation == 3357


class TestEruption:
    def test_required_fields(self):
        with pytest.raises(ValidationError):
            Eruption(date="2021-02-16")
        with pytest.raises(ValidationError):
            Eruption(volcano_id=1)

    def test_casualties_default_none(self):
        e = Eruption(volcano_id=1, date="2021-02-16")
        assert e.deaths is None
        assert e.missing is None
        assert e.injuries is None

    def test_year_from_prefix(self):
        assert Eruption(volcano_id=1, date="2021-02-16").year == 2021
        assert Eruption(volcano_id=1, date="0079").year == 79

    @pytest.mark.parametrize("date,year", [
        ("-500-01-01", -500),
        ("+079", 79),
        ("-12", -12),
        (" 99-", 99),
        ("12ab", 12),
    ])
    def test_year_keeps_sign(self, date, year):
        assert Eruption(volcano_id=1, date=date).year == year

    def test_year_none_for_malformed_date(self):
        assert Eruption(volcano_id=1, date="unknown").year is None
        assert Eruption(volcano_id=1, date="").year is None
        assert Eruption(volcano_id=1, date="-").year is None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class TestResponses:
    def test_location_defaults(self):
        loc = Location()
        assert loc.model_dump() == {"latitude": 0.0, "longitude": 0.0, "elevation": 0, "country": ""}

    def test_eruption_record_field_order(self):
        r = EruptionRecord(date="2021-02-16", name="Etna", location=Location())
        assert list(r.model_dump()) == ["date", "name", "location", "deaths", "missing", "injuries"]

    def test_nearby_volcano_alias(self):
        v = NearbyVolcano(id=1, last_erupted="2021-02-16", location=Location())
        assert v.model_dump(by_alias=True)["lastErupted"] == "2021-02-16"
        assert NearbyVolcano(id=1, lastErupted="2021-02-16", location=Location()).last_erupted == "2021-02-16"
