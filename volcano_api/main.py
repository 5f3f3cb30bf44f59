"""
FastAPI application for the Volcano Web Service.

Routes:
    /test      dataset sanity check (volcano and eruption counts)
    /country   number of volcanoes in a country
    /year      eruptions within a year range (JSON)
    /location  nearest volcanoes erupted since a year (XML)

Interactive documentation is served at /docs.
"""

import logging
import re
from typing import List, Optional
from urllib.parse import unquote_plus

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from . import log
from .config import settings
from .data_access import DataAccessError, VolcanoDataProvider
from .formatting import volcanoes_to_xml
from .models import EruptionRecord

# Configure logging
log.setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

INVALID_COUNTRY = "Invalid Country"
INVALID_YEAR_RANGE = "Invalid year range"
INVALID_PARAMETERS = "Invalid parameters"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -2**31, 2**31 - 1


def parse_int(value: str) -> int:
    """
    Parse a signed 32-bit decimal integer.

    Stricter than int(): no surrounding whitespace, no underscores and
    nothing outside the 32-bit range.

    Raises:
        ValueError: if the value is not such an integer
    """
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"not an integer: {value!r}")
    number = int(value)
    if not _INT_MIN <= number <= _INT_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return number


_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)"
)
# Control characters and space, trimmed from both ends
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))


def parse_float(value: str) -> float:
    """
    Parse a decimal floating point number.

    Accepts ASCII digits with an optional exponent and an optional
    f/d type suffix, or NaN/Infinity spelled exactly that way. Leading
    and trailing spaces and control characters are ignored. Rejects what
    float() would otherwise let through: underscores, non-ASCII digits,
    "inf" and "nan".

    Raises:
        ValueError: if the value is not such a number
    """
    text = value.strip(_TRIM_CHARS)
    if not _FLOAT_PATTERN.fullmatch(text):
        raise ValueError(f"not a number: {value!r}")
    return float(text.rstrip("fFdD"))


def bad_request(reason: str) -> PlainTextResponse:
    return PlainTextResponse(reason, status_code=400)


@app.exception_handler(DataAccessError)
async def data_access_error_handler(request: Request, exc: DataAccessError):
    """Database faults become a 500 for this request; the service keeps running."""
    logger.error(f"{request.url.path}: {exc}")
    return PlainTextResponse("Problem accessing database", status_code=500)


@app.on_event("startup")
def startup_event():
    log.service_banner(settings.HOST, settings.PORT, settings.DB_PATH)
    logger.info(f"Serving volcano data from {settings.DB_PATH}")


# ----------------------------------------------------------------
# Health
# ----------------------------------------------------------------

@app.get("/test", response_class=HTMLResponse, tags=["Health"])
def test():
    """Number of volcanoes and eruptions in the dataset."""
    with VolcanoDataProvider() as data:
        return (
            f"Number of volcanoes: {data.count_volcanoes()}"
            f"<br>"
            f"Number of eruptions: {data.count_eruptions()}"
        )


# ----------------------------------------------------------------
# Queries
# ----------------------------------------------------------------

@app.get("/country", response_class=PlainTextResponse, tags=["Volcanoes"])
def country(
    search: Optional[str] = Query(None, description="Country name, matched exactly")
):
    """
    Number of volcanoes in a country.

    A missing or blank `search` answers "Invalid Country" with status 200.
    """
    if search is None or not search.strip():
        return INVALID_COUNTRY

    with VolcanoDataProvider() as data:
        return str(data.count_volcanoes_in_country(unquote_plus(search)))


@app.get("/year", response_model=List[EruptionRecord], tags=["Eruptions"])
def year(
    from_year: Optional[str] = Query(None, alias="from", description="First year, inclusive"),
    to_year: Optional[str] = Query(None, alias="to", description="Last year, inclusive"),
):
    """
    Eruptions between two years inclusive, ordered by date.

    - **from**: first year
    - **to**: last year, not before `from`
    """
    if from_year is None or to_year is None:
        return bad_request(INVALID_YEAR_RANGE)
    try:
        start = parse_int(from_year)
        end = parse_int(to_year)
    except ValueError:
        return bad_request(INVALID_YEAR_RANGE)
    if start > end:
        return bad_request(INVALID_YEAR_RANGE)

    with VolcanoDataProvider() as data:
        return data.eruptions_in_year_range(start, end)


@app.get("/location", response_class=Response, tags=["Volcanoes"])
def location(
    latitude: Optional[str] = Query(None, description="Latitude in degrees"),
    longitude: Optional[str] = Query(None, description="Longitude in degrees"),
    erupted_since: Optional[str] = Query(None, description="Earliest eruption year"),
):
    """
    The 10 volcanoes nearest to a point that erupted in or after a year.

    Returns an XML `<Volcanoes>` document.
    """
    if latitude is None or longitude is None or erupted_since is None:
        return bad_request(INVALID_PARAMETERS)
    try:
        lat = parse_float(latitude)
        lon = parse_float(longitude)
        since = parse_int(erupted_since)
    except ValueError:
        return bad_request(INVALID_PARAMETERS)

    with VolcanoDataProvider() as data:
        volcanoes = data.volcanoes_near_location(lat, lon, since)

    return Response(content=volcanoes_to_xml(volcanoes), media_type="application/xml")


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level="info"
    )


if __name__ == "__main__":
    run()
