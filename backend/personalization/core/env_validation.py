"""
Environment variable validation.

Checks that the configuration loaded into `settings` is usable before the
application starts serving requests.
"""

import sys
from typing import List, Tuple

from personalization.core.config import Settings, settings
from personalization.core.logging import get_logger

logger = get_logger(__name__)

ASYNC_DRIVERS = ("postgresql+asyncpg://",)
# aiosqlite is accepted only where the test suite runs
TEST_DRIVERS = ("sqlite+aiosqlite://",)


def validate_database_url(config: Settings = settings) -> List[str]:
    """
    Validate database URL configuration.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    url = config.DATABASE_URL

    if not url:
        errors.append("DATABASE_URL is not set")
        return errors

    allowed = ASYNC_DRIVERS + TEST_DRIVERS if config.is_testing else ASYNC_DRIVERS
    if not url.startswith(allowed):
        errors.append(
            "DATABASE_URL must use asyncpg driver (format: postgresql+asyncpg://...)"
        )

    if config.is_production and "aggregator_password" in url:
        errors.append(
            "DATABASE_URL contains default password - update with a secure password in production"
        )

    return errors


def validate_adaptive_thresholds(config: Settings = settings) -> List[str]:
    """
    Each adaptive signal needs its "low" bound below its "high" bound,
    otherwise a single value could vote both ways.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    pairs = [
        ("ADAPTIVE_SLOW_READER_WPM", "ADAPTIVE_FAST_READER_WPM"),
        ("ADAPTIVE_LOW_ENGAGEMENT", "ADAPTIVE_HIGH_ENGAGEMENT"),
        ("ADAPTIVE_SHORT_TIME_MINUTES", "ADAPTIVE_LONG_TIME_MINUTES"),
    ]

    for low_name, high_name in pairs:
        low = getattr(config, low_name)
        high = getattr(config, high_name)
        if low >= high:
            errors.append(
                f"{low_name} ({low}) must be lower than {high_name} ({high})"
            )

    return errors


def validate_production_settings(config: Settings = settings) -> List[str]:
    """
    Validate production-specific settings.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not config.is_production:
        return errors

    if config.DEBUG:
        errors.append("DEBUG must be false in production")

    if "localhost" in ",".join(config.ALLOWED_ORIGINS):
        logger.warning(
            "localhost_in_allowed_origins",
            message="ALLOWED_ORIGINS includes localhost in production - may be insecure"
        )

    if config.LOG_FORMAT != "json":
        logger.warning(
            "log_format_not_json",
            message="LOG_FORMAT should be 'json' in production for better log aggregation"
        )

    if config.LOG_LEVEL == "DEBUG":
        logger.warning(
            "log_level_is_debug",
            message="LOG_LEVEL is DEBUG in production - adaptive length traces are verbose"
        )

    return errors


def validate_environment(config: Settings = settings) -> Tuple[bool, List[str]]:
    """
    Validate all environment variables.

    Returns:
        (is_valid, list_of_errors)
    """
    all_errors = []

    logger.info(
        "validating_environment",
        app_env=config.APP_ENV,
        app_name=config.APP_NAME
    )

    all_errors.extend(validate_database_url(config))
    all_errors.extend(validate_adaptive_thresholds(config))
    all_errors.extend(validate_production_settings(config))

    if all_errors:
        logger.error(
            "environment_validation_failed",
            errors=all_errors,
            error_count=len(all_errors)
        )
        return False, all_errors

    logger.info("environment_validation_successful", app_env=config.APP_ENV)
    return True, []


def validate_or_exit(config: Settings = settings) -> None:
    """
    Validate environment and exit if validation fails.

    Called from the application lifespan before the database is touched.
    """
    is_valid, errors = validate_environment(config)

    if not is_valid:
        logger.critical(
            "startup_aborted_invalid_environment",
            errors=errors
        )
        print("\nENVIRONMENT VALIDATION FAILED\n")
        print("The following configuration errors were found:\n")
        for i, error in enumerate(errors, 1):
            print(f"  {i}. {error}")
        print("\nPlease fix these errors and restart the application.\n")
        sys.exit(1)

    logger.info("environment_validation_passed")
