"""Logging setup for neo-auth-providers.

The host service controls output through environment variables:

- ``LOG_LEVEL``: explicit level name, wins over ``LOG_VERBOSITY``
- ``LOG_VERBOSITY``: QUIET, NORMAL (default), VERBOSE or DEBUG
- ``LOG_FORMAT``: simple (default), detailed or json
- ``ENABLE_IDP_LOGGING``: keep Keycloak/IdP adapters at the root level
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict


class LogVerbosity(str, Enum):
    """Verbosity presets and the level each one maps to."""
    QUIET = "QUIET"
    NORMAL = "NORMAL"
    VERBOSE = "VERBOSE"
    DEBUG = "DEBUG"

    @property
    def level(self) -> str:
        return _VERBOSITY_LEVELS[self]


_VERBOSITY_LEVELS = {
    LogVerbosity.QUIET: "ERROR",
    LogVerbosity.NORMAL: "WARNING",
    LogVerbosity.VERBOSE: "INFO",
    LogVerbosity.DEBUG: "DEBUG",
}

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LogFormat(str, Enum):
    """Output layouts."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS: Dict[LogFormat, str] = {
    LogFormat.SIMPLE: "%(asctime)s %(levelname)-8s %(message)s",
    LogFormat.DETAILED: "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Level for a verbosity preset; unknown presets mean NORMAL."""
    try:
        return LogVerbosity(verbosity.upper()).level
    except ValueError:
        return LogVerbosity.NORMAL.level


class LoggingConfig:
    """Builds and applies the ``dictConfig`` for the package."""

    # IdP adapters log every remote call at INFO
    IDP_ADAPTER_LOGGERS = (
        "neo_auth_providers.features.providers.adapters",
        "neo_auth_providers.features.sessions.adapters",
    )

    # Third-party libraries only report errors
    THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "urllib3", "asyncio", "asyncpg")

    @staticmethod
    def resolve_level() -> str:
        level = os.getenv("LOG_LEVEL", "").upper()
        if level in LEVEL_NAMES:
            return level
        if level:
            return LogVerbosity.NORMAL.level
        return get_log_level_from_verbosity(os.getenv("LOG_VERBOSITY", LogVerbosity.NORMAL.value))

    @staticmethod
    def resolve_format() -> str:
        try:
            log_format = LogFormat(os.getenv("LOG_FORMAT", LogFormat.SIMPLE.value).lower())
        except ValueError:
            log_format = LogFormat.SIMPLE
        return FORMAT_STRINGS[log_format]

    @classmethod
    def build_config(cls) -> Dict[str, Any]:
        """Build a ``dictConfig`` mapping from environment variables."""
        level = cls.resolve_level()
        idp_logging = os.getenv("ENABLE_IDP_LOGGING", "false").lower() == "true"

        logger_levels: Dict[str, str] = {name: "ERROR" for name in cls.THIRD_PARTY_LOGGERS}
        if not idp_logging:
            adapter_level = "DEBUG" if level == "DEBUG" else "WARNING"
            logger_levels.update({name: adapter_level for name in cls.IDP_ADAPTER_LOGGERS})

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": cls.resolve_format(), "datefmt": "%Y-%m-%dT%H:%M:%S"},
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "level": level,
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": level, "handlers": ["stdout"]},
            "loggers": {
                name: {"level": logger_level, "handlers": ["stdout"], "propagate": False}
                for name, logger_level in logger_levels.items()
            },
        }

    @classmethod
    def configure(cls) -> None:
        config = cls.build_config()
        logging.config.dictConfig(config)
        logging.getLogger(__name__).debug(f"Logging configured at {config['root']['level']}")


def setup_logging() -> None:
    """Apply logging configuration; runs when the package is imported."""
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
