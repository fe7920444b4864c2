"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration at all; in a deployment you
override them via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Food Storage API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # Prefix under which the ``/foods`` routes are mounted.  Empty by
    # default so the public paths are exactly ``/foods`` and
    # ``/foods/{id}``.
    api_prefix: str = os.getenv("API_PREFIX", "")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the SQLite file backing the stable maps.  A relative path
    # is resolved against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "foods.db")

    # Keyspace inside the database file that holds the food records.
    foods_memory_id: int = int(os.getenv("FOODS_MEMORY_ID", "0"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# therefore be set before importing this module.
settings = Settings()
