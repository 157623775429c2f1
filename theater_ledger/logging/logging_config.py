"""Logging setup for Theater Ledger.

Loggers come from Prefect's logger factory, so records emitted inside a
Prefect flow land in the flow run logs and behave like plain loggers
elsewhere.

The default configuration prints to stdout and gives each ledger component
(blob store, key index, lifecycle) its own logger under ``theater_ledger``
so that, for example, transport chatter can be raised to DEBUG without
flooding the lifecycle output.

Environment variables:
    THEATER_LEDGER_LOGGING_CONFIG: Path to a YAML dictConfig file
    THEATER_LEDGER_LOG_LEVEL: Level for the ``theater_ledger`` logger (default INFO)
"""

import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from prefect.logging import get_logger

ROOT_LOGGER = "theater_ledger"

COMPONENT_LOGGERS = (
    "theater_ledger.blob_store",
    "theater_ledger.key_index",
    "theater_ledger.lifecycle",
)

CONFIG_ENV = "THEATER_LEDGER_LOGGING_CONFIG"
LEVEL_ENV = "THEATER_LEDGER_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s"


def default_logging_config(level: str) -> Dict[str, Any]:
    """dictConfig with one console handler on the package logger.

    Component loggers carry no handler of their own and propagate to the
    package logger; the package logger does not propagate to root.
    """
    loggers: Dict[str, Any] = {
        ROOT_LOGGER: {"level": level, "handlers": ["console"], "propagate": False},
    }
    for name in COMPONENT_LOGGERS:
        loggers[name] = {"level": "NOTSET", "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": {"format": LOG_FORMAT, "datefmt": "%H:%M:%S"}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": loggers,
        "root": {"level": "WARNING", "handlers": ["console"]},
    }


class LoggingConfig:
    """Resolves and applies the logging configuration.

    A YAML file wins over the defaults. The file comes from ``config_path``
    or, failing that, ``THEATER_LEDGER_LOGGING_CONFIG``. A path that does
    not exist falls back to the defaults; a file that exists but does not
    hold a mapping is an error.
    """

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None and (env_path := os.environ.get(CONFIG_ENV)):
            config_path = Path(env_path)
        self.config_path = config_path
        self._config: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        """Return the dictConfig mapping, reading it once and caching it."""
        if self._config is None:
            self._config = self._read_file() if self._has_file() else self._defaults()
        return self._config

    def apply(self):
        logging.config.dictConfig(self.load_config())

    def _has_file(self) -> bool:
        return self.config_path is not None and self.config_path.exists()

    def _read_file(self) -> Dict[str, Any]:
        assert self.config_path is not None
        with open(self.config_path, "r") as f:
            loaded = yaml.safe_load(f)
        if not isinstance(loaded, dict):
            raise ValueError(f"Logging config {self.config_path} must be a mapping, got {type(loaded).__name__}")
        return loaded

    @staticmethod
    def _defaults() -> Dict[str, Any]:
        return default_logging_config(os.environ.get(LEVEL_ENV, "INFO"))


_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None):
    """Configure logging for the ledger client.

    Args:
        config_path: Optional YAML dictConfig file.
        level: Optional level forced onto the package and component loggers
            after the configuration is applied.
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        for name in (ROOT_LOGGER, *COMPONENT_LOGGERS):
            get_logger(name).setLevel(level)


def get_ledger_logger(name: str):
    """Logger for a ledger module; configures logging on first use."""
    if _logging_config is None:
        setup_logging()

    return get_logger(name)
