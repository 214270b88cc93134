# core/config_validator.py

from typing import List
from core.config import settings, is_development
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing required variables.
    """
    missing = []

    if not settings.SHEETS_API_URL:
        missing.append("SHEETS_API_URL")
    if not settings.JWT_SECRET_KEY:
        missing.append("JWT_SECRET_KEY")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of warnings (never fatal).
    """
    warnings = []

    if settings.DEMO_AUTH_ENABLED and not is_development():
        warnings.append("DEMO_AUTH_ENABLED is ignored outside development")
    if settings.PROXY_ENABLED and not is_development():
        warnings.append("PROXY_ENABLED exposes the raw spreadsheet API")
    if settings.SHEETS_CACHE_TTL_SECONDS <= 0:
        warnings.append("SHEETS_CACHE_TTL_SECONDS disabled (every list hits the spreadsheet)")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError if critical config is missing.
    Logs warnings for optional config.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    for warning in missing_optional:
        logger.warning(f"Configuration warning: {warning}")

    logger.info("Configuration validation passed")
