# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/api")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))
_API_TOKEN = os.getenv("API_TOKEN", None)

# Auto-save Settings
_AUTO_SAVE_DEBOUNCE_MS = int(os.getenv("AUTO_SAVE_DEBOUNCE_MS", "3000"))
_AUTO_SAVE_ENABLED = os.getenv("AUTO_SAVE_ENABLED", "true").lower() in ("true", "1", "yes")

_PROJECT_ROOT = Path(__file__).parent.parent
_LOGS_DIR = Path(os.getenv("LOGS_DIR", str(_PROJECT_ROOT / "logs")))

# Logging Settings
_LOG_CONSOLE_LEVEL = os.getenv("LOG_CONSOLE_LEVEL", "INFO")
_LOG_LEVELS = os.getenv("LOG_LEVELS", "")


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Development Wizard"
    APP_TITLE: str = "Property Development Listing Wizard"
    VERSION: str = "1.0.0"
    ORGANIZATION: str = "DevWizard"

    # HTTP API Backend Settings
    # Reads from .env file (API_BASE_URL, API_TIMEOUT, API_TOKEN)
    API_BASE_URL: str = _API_BASE_URL
    API_VERSION: str = "v1"
    API_TIMEOUT: int = _API_TIMEOUT
    API_TOKEN: str = _API_TOKEN

    # Draft auto-save
    AUTO_SAVE_DEBOUNCE_MS: int = _AUTO_SAVE_DEBOUNCE_MS
    AUTO_SAVE_ENABLED: bool = _AUTO_SAVE_ENABLED

    # Paths
    PROJECT_ROOT: Path = _PROJECT_ROOT
    LOGS_DIR: Path = _LOGS_DIR

    # Logging
    LOG_FILE: str = "app.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
    # Reads from .env file (LOG_CONSOLE_LEVEL, LOG_LEVELS="module=LEVEL,...")
    LOG_CONSOLE_LEVEL: str = _LOG_CONSOLE_LEVEL
    LOG_LEVELS: str = _LOG_LEVELS

    # Wizard window
    WINDOW_MIN_WIDTH: int = 960
    WINDOW_MIN_HEIGHT: int = 680


class Phases:
    """Wizard phase numbers (1-based)."""
    IDENTITY = 1
    CLASSIFICATION = 2
    OVERVIEW = 3
    UNIT_TYPES = 4
    FINALISATION = 5

    COUNT = 5


class Vocabularies:
    """Fixed option lists used by the wizard forms and models."""

    NATURES = [
        ("new", "New Development"),
        ("phase", "New Phase"),
        ("extension", "Extension"),
    ]

    DEVELOPMENT_TYPES = [
        ("residential", "Residential"),
        ("commercial", "Commercial"),
        ("mixed", "Mixed-Use"),
        ("land", "Land"),
    ]

    OWNERSHIP_TYPES = [
        ("", "Not specified"),
        ("full-title", "Full Title"),
        ("sectional-title", "Sectional Title"),
        ("leasehold", "Leasehold"),
    ]

    DEVELOPMENT_STATUSES = [
        ("planning", "Planning"),
        ("construction", "Under Construction"),
        ("near-completion", "Near Completion"),
        ("completed", "Completed"),
    ]

    PARKING_OPTIONS = [
        ("none", "None"),
        ("1", "1 Bay"),
        ("2", "2 Bays"),
        ("carport", "Carport"),
        ("garage", "Garage"),
    ]

    MEDIA_TYPES = ("image", "video")

    @classmethod
    def codes(cls, vocabulary: list) -> list:
        """Return the codes of a (code, label) vocabulary."""
        return [code for code, _ in vocabulary]

    @classmethod
    def label(cls, vocabulary: list, code: str) -> str:
        """Return the display label for a code, or the code itself."""
        for value, label in vocabulary:
            if value == code:
                return label
        return code
