"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with a local SQLite file and a seeded primary
administrator.  Override them via environment variables in any real
deployment, in particular ``SECRET_KEY`` and the seeded credentials.
"""

import os
from dataclasses import dataclass


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Reservation Store API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Path of the SQLite file that holds the ``accounts`` and ``bookings``
    # blobs.  Relative paths are resolved against the project root by
    # ``core.store``.
    store_path: str = os.getenv("STORE_PATH", "reservations.db")

    # When enabled, an empty store is seeded with the primary
    # administrator (id 1) and a default operator on startup.
    seed_defaults: bool = _flag("SEED_DEFAULTS", "true")
    primary_admin_name: str = os.getenv("PRIMARY_ADMIN_NAME", "Admin Principal")
    primary_admin_email: str = os.getenv("PRIMARY_ADMIN_EMAIL", "admin@reservas.com")
    primary_admin_credential: str = os.getenv("PRIMARY_ADMIN_CREDENTIAL", "admin123")
    default_operator_email: str = os.getenv("DEFAULT_OPERATOR_EMAIL", "operador@reservas.com")
    default_operator_credential: str = os.getenv("DEFAULT_OPERATOR_CREDENTIAL", "operador123")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# therefore be set before this module is first imported.
settings = Settings()
