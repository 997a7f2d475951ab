"""Application configuration management.

Settings come from ``POMATO_*`` environment variables only; timer lengths are
fixed at their defaults.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import ValidationError

from pomato.models import AppConfig

log = logging.getLogger(__name__)

_ENV_FIELDS: dict[str, str] = {
    "POMATO_POLL_INTERVAL": "poll_interval",
    "POMATO_ALT_SCREEN": "alt_screen",
    "POMATO_LOG_FILE": "log_file",
    "POMATO_LOG_LEVEL": "log_level",
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build the config from the environment, returning defaults if invalid."""
    environ = os.environ if environ is None else environ
    data = {field: environ[var] for var, field in _ENV_FIELDS.items() if environ.get(var)}
    try:
        return AppConfig(**data)
    except ValidationError as exc:
        log.warning("Ignoring invalid POMATO_* settings: %s", exc)
        return AppConfig()


def configure_logging(config: AppConfig) -> None:
    """Send log records to ``config.log_file``, or nowhere.

    The UI owns the whole screen, so records are never written to stderr.
    """
    root = logging.getLogger("pomato")
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if config.log_file:
        # Raises OSError for an unwritable path; existing handlers stay in place.
        handler: logging.Handler = logging.FileHandler(config.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()

    root.setLevel(level)
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.propagate = False
