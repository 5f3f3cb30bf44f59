"""
XML rendering for the /location endpoint.
"""

import xml.etree.ElementTree as ET
from typing import Iterable

from .models import NearbyVolcano


def _child(parent: ET.Element, tag: str, value) -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = str(value)
    return el


def volcano_element(volcano: NearbyVolcano) -> ET.Element:
    """Build a <Volcano id="..."> element with its <Location> block."""
    el = ET.Element("Volcano", id=str(volcano.id))
    _child(el, "Name", volcano.name)
    _child(el, "LastErupted", volcano.last_erupted)
    _child(el, "Type", volcano.type)

    location = ET.SubElement(el, "Location")
    _child(location, "Latitude", volcano.location.latitude)
    _child(location, "Longitude", volcano.location.longitude)
    _child(location, "Elevation", volcano.location.elevation)
    _child(location, "Country", volcano.location.country)
    return el


def volcanoes_to_xml(volcanoes: Iterable[NearbyVolcano]) -> str:
    """
    Serialize volcanoes as a <Volcanoes> document.

    No XML declaration and no whitespace between elements. Empty elements
    are written as open/close pairs, so no results gives
    `<Volcanoes></Volcanoes>`.
    """
    root = ET.Element("Volcanoes")
    for volcano in volcanoes:
        root.append(volcano_element(volcano))
    return ET.tostring(root, encoding="unicode", short_empty_elements=False)
