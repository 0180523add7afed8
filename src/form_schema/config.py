"""
Configuration module for form-schema.

Handles environment variables and default settings.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

LOGGER_NAME = "form-schema"


@dataclass
class FormSchemaConfig:
    """Configuration settings for form-schema."""

    # Fallback messages used when a descriptor does not set its own
    validation_failed_message: str = "Validation failed"
    number_message: str = "Please enter a valid number"
    date_message: str = "Please enter a valid date"
    url_message: str = "Invalid URL"

    # Key under which the general form error is reported
    form_error_key: str = "_form"

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "FormSchemaConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            validation_failed_message=os.getenv(
                "FORM_SCHEMA_VALIDATION_FAILED_MESSAGE", _defaults.validation_failed_message
            ),
            number_message=os.getenv("FORM_SCHEMA_NUMBER_MESSAGE", _defaults.number_message),
            date_message=os.getenv("FORM_SCHEMA_DATE_MESSAGE", _defaults.date_message),
            url_message=os.getenv("FORM_SCHEMA_URL_MESSAGE", _defaults.url_message),
            form_error_key=os.getenv("FORM_SCHEMA_FORM_ERROR_KEY", _defaults.form_error_key),
            log_level=os.getenv("FORM_SCHEMA_LOG_LEVEL", _defaults.log_level).upper(),
        )


config = FormSchemaConfig.from_env()


def get_config() -> FormSchemaConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormSchemaConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Configure console logging for scripts and examples.

    Args:
        level: Logging level name or number. If None, uses config.log_level.

    Returns:
        The package logger.
    """
    level = level or get_config().log_level
    logging.basicConfig(level=level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    return logger
