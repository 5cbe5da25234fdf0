"""Configuration module for the discussion forum backend.

This module provides centralized configuration management, including the
database location, API server settings, credential and token settings.
All configuration values can be overridden via environment variables and are
read once at import time.
"""

import os
import re
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Database Configuration ---

DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/forum.db")

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "4000"))

# Every route is mounted under this prefix
API_PREFIX: str = "/api/v1"

# CORS allowed origins (comma-separated list)
# Default includes local development addresses. For production, set via
# CORS_ALLOWED_ORIGINS environment variable.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Authentication Configuration ---

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 60 * 60, "d": 60 * 60 * 24}


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as ``"1d"``, ``"12h"``, ``"30m"`` or ``"3600"``.

    Args:
        value: Duration string; a bare number is read as seconds.

    Returns:
        The parsed duration.

    Raises:
        ValueError: If the string is not a recognised duration.
    """
    match = _DURATION_PATTERN.match(value.lower())
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _DURATION_UNITS[unit])


# Placeholder secret for local development only
DEFAULT_JWT_SECRET_KEY = "dev-secret-key-change-in-production"

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY") or DEFAULT_JWT_SECRET_KEY
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

# Session token lifetime, same notation as the JWT "expiresIn" option
JWT_EXPIRES_IN: timedelta = parse_duration(os.getenv("JWT_EXPIRES_IN", "1d"))

# Registrations with this email (compared case-insensitively) become ADMIN
ADMIN_BOOTSTRAP_EMAIL: Optional[str] = os.getenv("ADMIN_BOOTSTRAP_EMAIL") or None

# Bcrypt work factor (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

# Re-read the account role from the database on ADMIN-only routes instead of
# trusting the role snapshot embedded in the token
REVALIDATE_ROLE_ON_PRIVILEGED: bool = (
    os.getenv("REVALIDATE_ROLE_ON_PRIVILEGED", "false").lower() == "true"
)
