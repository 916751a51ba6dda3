"""Configuration management for the IAST demo application.

This module provides centralized configuration using environment variables
and sensible defaults. Configuration can be customized via a `.env` file.

Environment Variables:
    Server:
        APP_HOST: Bind address (default: 0.0.0.0)
        APP_PORT: Bind port (default: 8080)
        APP_DEBUG: Enable Flask debug mode (default: false)
        APP_SECRET_KEY: Session signing key (default: a hardcoded demo key)

    Storage:
        DATA_DIR: Parent of the default storage paths (default: data)
        DATABASE_PATH: SQLite database file (default: data/iast_demo.db)
        FILES_DIR: Base directory served by the secure download endpoint
                   (default: data/files)
        UPLOAD_DIR: Target directory for the integrity upload endpoint
                    (default: the system temp directory)

    Outbound requests:
        OUTBOUND_TIMEOUT: Timeout in seconds for SSRF demo requests (default: 5)

    General:
        LOG_LEVEL: Logging level (default: INFO)

Example .env file:
    APP_PORT=9090
    DATABASE_PATH=/tmp/iast_demo.db
    LOG_LEVEL=DEBUG
"""

import os
import logging
import tempfile
from typing import Any, Dict, Optional

from dotenv import load_dotenv


# Load environment variables from .env file if present
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer variable, falling back to ``default`` when malformed."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.warning(f"Invalid {name} '{raw}', defaulting to {default}")
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# =============================================================================
# SERVER CONFIGURATION
# =============================================================================

APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")

APP_PORT: int = _env_int("APP_PORT", 8080)

APP_DEBUG: bool = _env_bool("APP_DEBUG")

# Weak, well-known default: session forgery is one of the lessons
APP_SECRET_KEY: str = os.getenv("APP_SECRET_KEY", "iast-demo-secret-key")


# =============================================================================
# STORAGE CONFIGURATION
# =============================================================================

DATA_DIR: str = os.getenv("DATA_DIR", "data")

DATABASE_PATH: str = os.getenv("DATABASE_PATH", os.path.join(DATA_DIR, "iast_demo.db"))

FILES_DIR: str = os.getenv("FILES_DIR", os.path.join(DATA_DIR, "files"))

UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", tempfile.gettempdir())


# =============================================================================
# OUTBOUND REQUEST CONFIGURATION
# =============================================================================

# Timeout for requests made by the SSRF endpoints (seconds)
OUTBOUND_TIMEOUT: int = _env_int("OUTBOUND_TIMEOUT", 5)

# Characters of fetched content echoed back to the caller
FETCH_PREVIEW_CHARS: int = 500


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

# Logging level from environment or default to INFO
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Validate log level
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
if LOG_LEVEL not in _VALID_LOG_LEVELS:
    LOG_LEVEL = "INFO"


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """Configure logging for the demo application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to LOG_LEVEL from environment.
        format_string: Custom format string for log messages.
                      Defaults to a standard format with timestamp.

    Example:
        >>> from iast_demo.config import configure_logging
        >>> configure_logging(level="DEBUG")
    """
    if level is None:
        level = LOG_LEVEL

    if format_string is None:
        format_string = (
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )


# =============================================================================
# FLASK CONFIGURATION
# =============================================================================

def get_flask_config() -> Dict[str, Any]:
    """Return the settings loaded into ``app.config`` by ``create_app``."""
    return {
        "SECRET_KEY": APP_SECRET_KEY,
        "DEBUG": APP_DEBUG,
        "DATABASE_PATH": DATABASE_PATH,
        "FILES_DIR": FILES_DIR,
        "UPLOAD_DIR": UPLOAD_DIR,
        "OUTBOUND_TIMEOUT": OUTBOUND_TIMEOUT,
        "FETCH_PREVIEW_CHARS": FETCH_PREVIEW_CHARS,
    }


# =============================================================================
# CONFIGURATION SUMMARY
# =============================================================================

def get_config_summary() -> dict:
    """Return a dictionary summarizing current configuration.

    Returns:
        Dictionary containing all configuration values, secret masked.

    Example:
        >>> from iast_demo.config import get_config_summary
        >>> config = get_config_summary()
        >>> print(config["app_port"])
        8080
    """
    return {
        # Server settings
        "app_host": APP_HOST,
        "app_port": APP_PORT,
        "app_debug": APP_DEBUG,
        "app_secret_key": "***" if APP_SECRET_KEY else None,

        # Storage settings
        "database_path": DATABASE_PATH,
        "files_dir": FILES_DIR,
        "upload_dir": UPLOAD_DIR,

        # Outbound settings
        "outbound_timeout": OUTBOUND_TIMEOUT,

        # General settings
        "log_level": LOG_LEVEL,
    }
