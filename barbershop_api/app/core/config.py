"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service runs out of the box against a ``data`` directory next to the
package.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Barbershop Scheduling API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Directory holding one JSON file per collection (customers.json,
    # services.json, appointments.json).  Relative paths are resolved
    # against the project root by the ``store`` module.
    data_dir: str = os.getenv("DATA_DIR", "data")

    # Static front-end assets.  Mounted at ``/`` only when the directory
    # exists.
    public_dir: str = os.getenv("PUBLIC_DIR", "public")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
