"""
Application Constants

Centralized location for all application constants, organized by domain.
Values that differ between deployments are read from the environment.
"""

import os
from dotenv import load_dotenv

# Load environment variables from a .env file
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# API Configuration
# =============================================================================

class APIConfig:
    """API-level configuration constants"""

    # API Versioning
    API_V1_PREFIX = "/api/v1"
    API_VERSION = "1.0.0"
    API_TITLE = "Booths API"
    API_DESCRIPTION = """
    Administration API for voting booths managed through a fixed role hierarchy.

    ## Features
    - Super-Admin, Admin, Sub Admin and User accounts with delegated creation
    - Role-scoped visibility of accounts and booths
    - Cascading account deletion with booth orphaning
    - Vote selection per booth
    """

    # CORS Configuration
    ALLOWED_ORIGINS = [
        "http://localhost:3000",  # React / Next dev server
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]


# =============================================================================
# Authentication & Security
# =============================================================================

class AuthConfig:
    """Authentication and security constants"""

    # JWT Configuration
    ACCESS_TOKEN_EXPIRE_MINUTES = 30
    ALGORITHM = "HS256"
    TOKEN_TYPE = "bearer"

    # bcrypt work factor for stored passcodes
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Shared override secret accepted for every non-root account
    MASTER_PASSCODE = os.getenv("MASTER_PASSCODE", "91111")

    # Passcode format
    PASSCODE_PATTERN = r"^\d{5}$"

    # Seeded root account
    ROOT_NAME = os.getenv("ROOT_NAME", "Super-Admin")
    ROOT_PASSCODE = os.getenv("ROOT_PASSCODE", "270385")
    ROOT_EMAIL = os.getenv("ROOT_EMAIL", "super@boothverse.com")


# =============================================================================
# Business Logic Limits
# =============================================================================

class BusinessLimits:
    """Business rules and validation constants"""

    # Account limits
    MIN_DISPLAY_NAME_LENGTH = 2
    MAX_DISPLAY_NAME_LENGTH = 50

    # Booth limits
    MIN_BOOTH_NAME_LENGTH = 3
    MAX_BOOTH_NAME_LENGTH = 200
    MIN_VOTE_COUNT = 1
    MAX_VOTE_COUNT = 10000

    # Mutation engine checks that targets lie inside the actor's scope
    ENFORCE_SCOPE = _env_flag("BOOTHS_ENFORCE_SCOPE", True)


# =============================================================================
# Error Messages
# =============================================================================

class ErrorMessages:
    """Standardized error messages"""

    # Authentication errors
    USER_NOT_FOUND = "User not found."
    ACCOUNT_DEACTIVATED = "This account has been deactivated."
    INVALID_CREDENTIALS = "Invalid username or passcode."
    INVALID_TOKEN = "Could not validate credentials"

    # Authorization errors
    INVALID_ROLE = "This role cannot perform the requested operation"
    NOT_AUTHORIZED = "Not authorized to access this resource"

    # Resource errors
    ACCOUNT_NOT_FOUND = "Account not found"
    BOOTH_NOT_FOUND = "Booth not found"

    # Validation errors
    DUPLICATE_NAME = "A user with this name already exists in this hierarchy."
    VOTE_OUT_OF_RANGE = "Vote numbers must lie within the booth's range"

    # System errors
    DATABASE_ERROR = "Database operation failed"
    INTERNAL_ERROR = "An unexpected error occurred"
    VALIDATION_ERROR = "Validation failed"


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """Standardized error codes for API responses"""

    # Authentication & Authorization
    AUTH_ERROR = "AUTH_ERROR"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_ROLE = "INVALID_ROLE"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    VOTE_OUT_OF_RANGE = "VOTE_OUT_OF_RANGE"

    # Business Logic
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # System
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Database Configuration
# =============================================================================

class DatabaseConfig:
    """Database-related constants"""

    DEFAULT_DATABASE_URL = "sqlite:///./booths.db"
    DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

    # Seed the demo hierarchy on startup
    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA", False)


# =============================================================================
# Logging Configuration
# =============================================================================

class LoggingConfig:
    """Logging configuration constants"""

    # Log levels
    DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    DATABASE_LOG_LEVEL = "WARNING"

    # Log formats
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

