"""Configuration module for the report tracker backend.

This module provides centralized configuration management, including directory
paths, API server settings, storage, authentication and collaborator services.
All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# Static front-end bundle, served at "/" when present
STATIC_DIR = Path(os.getenv("STATIC_DIR", str(ROOT_DIR / "public")))

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8080"))

# All routers are mounted below this prefix
API_PREFIX: str = "/api/v1"

# CORS allowed origins (comma-separated list)
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "https://dgsin-2425-21-front.ew.r.appspot.com,http://localhost:4200",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Storage Configuration ---

DATABASE_URL: str = os.getenv(
    "DATABASE_URL", f"sqlite:///{DATA_DIR}/report_tracker.db"
)

# --- Authentication Configuration ---

JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_SECONDS: int = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", "3600")
)

# Bcrypt cost factor for password hashing
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

# --- Roles and Report Statuses ---

ROLES: List[str] = ["user", "moderator", "admin"]
DEFAULT_ROLE: str = "user"
PRIVILEGED_ROLES: List[str] = ["admin", "moderator"]

REPORT_STATUSES: List[str] = [
    "pending",
    "investigating",
    "resolved",
    "wontfix",
    "duplicate",
    "invalid",
    "needsReview",
]
INITIAL_REPORT_STATUS: str = "pending"

# Moderation action that resolves a report and suspends the reported user
SUSPEND_ACTION: str = "suspendUser"

# --- Collaborator Services ---

TRELLO_BOARD_URL: str = os.getenv(
    "TRELLO_BOARD_URL",
    "https://trello.com/b/9f4FWdJp/aistraix-chess-association.json",
)
# Hour of day (UTC) at which the board snapshot is refreshed
TRELLO_REFRESH_HOUR: int = int(os.getenv("TRELLO_REFRESH_HOUR", "2"))
TRELLO_REFRESH_ENABLED: bool = (
    os.getenv("TRELLO_REFRESH_ENABLED", "true").lower() == "true"
)

GEOIP_URL_TEMPLATE: str = os.getenv(
    "GEOIP_URL_TEMPLATE", "https://ipapi.co/{ip}/json/"
)
UNKNOWN_COUNTRY: str = "Unknown"

HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))


def require_jwt_secret() -> str:
    """Return the token signing secret.

    Raises:
        ConfigurationError: If JWT_SECRET_KEY is unset or empty.
    """
    secret = os.getenv("JWT_SECRET_KEY", "")
    if not secret.strip():
        raise ConfigurationError(
            "JWT_SECRET_KEY must be set; refusing to sign tokens without it"
        )
    return secret


def require_refresh_hour(hour: int = TRELLO_REFRESH_HOUR) -> int:
    """Return the scheduled refresh hour.

    Raises:
        ConfigurationError: If the hour is outside 0-23.
    """
    if not 0 <= hour <= 23:
        raise ConfigurationError(
            f"TRELLO_REFRESH_HOUR must be between 0 and 23, got {hour}"
        )
    return hour
