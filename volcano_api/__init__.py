"""
REST API for volcano and eruption data.

Exposes a read-only SQLite dataset of volcanoes and their eruptions
through a handful of HTTP query endpoints (text, JSON and XML).
"""

__version__ = "1.0.0"
