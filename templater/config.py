"""
TEMPLATER Configuration

Central configuration for the TEMPLATER engine and CLI.

Overrides come from TEMPLATER_* environment variables only; .env files are not read.
"""

import os
import re
import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Templates shipped with the package
BUILTIN_TEMPLATES_DIR = Path(__file__).parent / "templates"

ENV_PREFIX = "TEMPLATER_"

_INTEGER = re.compile(r"^-?\d+$")
_FLOAT = re.compile(r"^-?\d+\.\d+$")

VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


class Config:
    """
    Engine and CLI configuration settings.

    Organized into:
    - Internal: template store layout and reserved names (DO NOT MODIFY)
    - User Settings: configurable through subclasses or TEMPLATER_* variables

    Usage:
        class ProjectConfig(Config):
            TEMPLATES_DIR = "./my-templates"
            ENTITY_DIR = "./app/entities"
    """

    class Internal:
        """
        TEMPLATER Internal Configuration

        WARNING: THESE SETTINGS ARE PROTECTED AND CANNOT BE MODIFIED.
        The template store layout depends on them.
        """
        # Template store layout
        TEMPLATE_SUFFIX = ".tpl"
        TYPES_TEMPLATE_SUFFIX = ".types.tpl"
        FALLBACK_TYPES_TEMPLATE_SUFFIX = ".types.fallback.tpl"
        CONFIG_SUFFIX = ".config.json"
        VALIDATORS_DIR_NAME = "validators"

        # Reserved validator names
        NO_VALIDATOR = "none"
        DEFAULT_VALIDATOR = "default"

    # User-Configurable Settings
    # ============================

    # Where templates are looked up
    TEMPLATES_DIR = str(BUILTIN_TEMPLATES_DIR)

    # Logging
    VERBOSE_LOGGING = False
    LOG_LEVEL = "WARNING"  # Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Output defaults used by `templater insert` prompts
    ENTITY_DIR = "./src"
    TYPES_DIR = "./src/types"
    TYPES_FILE_SUFFIX = ".types"

    def __init_subclass__(cls, **kwargs):
        """
        Validate that child classes don't override FINAL attributes.

        This hook is called automatically when a class inherits from Config.
        """
        super().__init_subclass__(**kwargs)

        if 'Internal' in cls.__dict__:
            raise TypeError(
                f"Cannot override Config.Internal in {cls.__name__}. "
                "Config.Internal contains the template store layout."
            )

    @classmethod
    def load_from_env(cls, environ: Optional[dict] = None):
        """
        Load configuration from TEMPLATER_* environment variables.

        Handles type conversion (bool, int, float, lists, null values).

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Example:
            TEMPLATER_TEMPLATES_DIR=./templates
            TEMPLATER_LOG_LEVEL=DEBUG
            TEMPLATER_VERBOSE_LOGGING=true
        """
        environ = os.environ if environ is None else environ

        for env_key, env_value in environ.items():
            # Only process TEMPLATER_* prefixed variables
            if not env_key.startswith(ENV_PREFIX):
                continue

            attr_name = env_key[len(ENV_PREFIX):]

            if attr_name == 'INTERNAL' or attr_name.startswith('INTERNAL_'):
                logger.warning(f"Cannot override internal setting: {env_key}")
                continue

            parsed_value = _auto_detect(env_value)

            if attr_name == 'LOG_LEVEL':
                if not isinstance(parsed_value, str) or parsed_value.upper() not in VALID_LOG_LEVELS:
                    logger.warning(
                        f"Invalid LOG_LEVEL: {env_value}. "
                        f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}. "
                        f"Using default value."
                    )
                    continue
                parsed_value = parsed_value.upper()

            elif attr_name.endswith('_DIR') and parsed_value is not None:
                # Paths are kept verbatim, commas included
                parsed_value = env_value

            setattr(cls, attr_name, parsed_value)

            if cls.VERBOSE_LOGGING:
                logger.info(f"Auto-set {attr_name} = {parsed_value} (from {env_key})")

        return cls


def _auto_detect(env_value: str) -> Any:
    """Auto-detect the type of an environment value."""
    # Explicit empty values
    if env_value.lower() in ('null', 'none', '~', ''):
        return None

    if env_value.lower() in ('true', 'false', 'yes', 'no', 'on', 'off'):
        return env_value.lower() in ('true', 'yes', 'on')

    # Integer detection (negative numbers too)
    if _INTEGER.match(env_value):
        return int(env_value)

    # List detection (comma-separated values)
    if ',' in env_value:
        return [item.strip() for item in env_value.split(',') if item.strip()]

    if _FLOAT.match(env_value):
        return float(env_value)

    return env_value


__all__ = ['Config', 'BUILTIN_TEMPLATES_DIR', 'ENV_PREFIX', 'VALID_LOG_LEVELS']
