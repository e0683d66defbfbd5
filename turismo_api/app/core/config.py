"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with the bundled sample data when nothing is configured.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Tourism Flow Records API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional log file.  Empty means console only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Primary record store: a JSON array of records.  Relative paths are
    # resolved against the ``turismo_api`` package directory by the
    # ``store`` module.
    data_file: str = os.getenv("TURISMO_DATA_FILE", "data/TurismoComunidades.json")

    # Records pre-grouped by community, maintained outside this service.
    grouped_file: str = os.getenv("TURISMO_GROUPED_FILE", "data/Comunidades_Agrupadas.json")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must therefore be set before importing this module.
settings = Settings()
