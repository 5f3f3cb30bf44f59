"""
Configuration management for the Volcano Web Service.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

BASE_DIR = Path(__file__).parent.parent
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings:
    """API server configuration."""
    
    # Paths
    BASE_DIR: Path = BASE_DIR
    DB_PATH: str = os.getenv("VOLCANO_DB_PATH", str(BASE_DIR / "data" / "volcanoes.db"))
    
    # Server
    API_TITLE: str = "Volcano Web Service"
    API_DESCRIPTION: str = "Query volcanoes and their eruptions by country, year range and location"
    API_VERSION: str = "1.0.0"
    HOST: str = os.getenv("VOLCANO_API_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("VOLCANO_API_PORT", "8088"))
    
    # CORS
    CORS_ORIGINS: List[str] = ["*"]  # Allow all origins (restrict in production)
    
    # Database
    DB_TIMEOUT: int = 30  # SQLite connection timeout in seconds
    
    # Queries
    NEAREST_LIMIT: int = 10  # Max volcanoes returned by /location


settings = Settings()
