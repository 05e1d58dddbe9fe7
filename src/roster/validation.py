"""
Configuration validation for Roster application.

This module provides validation functions to ensure the application
is properly configured before startup.
"""

from __future__ import annotations

from typing import Any

from .config import DEFAULT_JWT_SECRET, Settings, settings
from .database.connection import check_database_connection
from .logging import get_logger

logger = get_logger(__name__)


class ValidationError(Exception):
    """Raised when application validation fails."""

    pass


def is_production(config: Settings) -> bool:
    return config.environment.lower() in ("production", "prod")


async def validate_database_connection() -> dict[str, Any]:
    """
    Validate that the database is accessible and responsive.

    Returns a dictionary with validation results and connection details.
    """
    results = {
        "valid": True,
        "warnings": [],
        "errors": [],
        "connection_info": None,
    }

    success, error_message = await check_database_connection()

    if success:
        results["connection_info"] = {
            "status": "connected",
            "message": "Database connection successful",
        }
        logger.info("Database connection validation successful")
    else:
        results["valid"] = False
        results["errors"].append(error_message)
        logger.error("Database connection validation failed", error=error_message)

    return results


def validate_auth_configuration(config: Settings | None = None) -> dict[str, Any]:
    """
    Validate token signing and password hashing configuration.

    The built-in development secret is an error in production and a warning
    elsewhere.
    """
    config = config or settings
    results = {
        "valid": True,
        "warnings": [],
        "errors": [],
        "auth_info": {
            "algorithm": config.jwt_algorithm,
            "token_expiry_days": config.token_expiry_days,
            "bcrypt_rounds": config.bcrypt_rounds,
        },
    }

    if config.jwt_secret == DEFAULT_JWT_SECRET:
        if is_production(config):
            error = "ROSTER_JWT_SECRET is not set; the development secret cannot be used in production"
            results["errors"].append(error)
            results["valid"] = False
            logger.error(error)
        else:
            warning = "Using the development JWT secret; set ROSTER_JWT_SECRET outside development"
            results["warnings"].append(warning)
            logger.warning(warning)

    if not 4 <= config.bcrypt_rounds <= 31:
        error = f"bcrypt rounds must be between 4 and 31, got {config.bcrypt_rounds}"
        results["errors"].append(error)
        results["valid"] = False
        logger.error(error)

    return results


async def validate_startup_configuration(config: Settings | None = None) -> dict[str, Any]:
    """
    Comprehensive startup validation.

    Called from the application lifespan before requests are served.
    """
    config = config or settings
    logger.info("Starting application configuration validation")

    db_results = await validate_database_connection()
    auth_results = validate_auth_configuration(config)

    combined_results = {
        "overall_valid": db_results["valid"] and auth_results["valid"],
        "database": db_results,
        "auth": auth_results,
        "environment": {
            "environment": config.environment,
            "debug": config.debug,
        },
    }

    if combined_results["overall_valid"]:
        logger.info("Application configuration validation completed successfully")
    else:
        logger.error(
            "Application configuration validation failed",
            errors=db_results["errors"] + auth_results["errors"],
        )

    all_warnings = db_results["warnings"] + auth_results["warnings"]
    if all_warnings:
        logger.warning("Configuration warnings detected", warnings=all_warnings)

    return combined_results


def get_startup_recommendations(validation_results: dict[str, Any]) -> list[str]:
    """
    Generate startup recommendations based on validation results.
    """
    recommendations = []

    if not validation_results.get("database", {}).get("valid", False):
        recommendations.append(
            "Database connection failed - check that MongoDB is running and accessible"
        )

    if validation_results.get("auth", {}).get("warnings"):
        recommendations.append("Configure ROSTER_JWT_SECRET before deploying")

    if not validation_results.get("overall_valid", False):
        recommendations.append("Fix configuration errors before deploying to production")

    return recommendations
