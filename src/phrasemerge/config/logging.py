"""Logging setup for the phrasemerge CLI."""

from __future__ import annotations

import logging
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError

LOG_LEVEL_ENV_VAR: Final[str] = "PHRASEMERGE_LOG_LEVEL"
_LEVELS: Final[dict[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def log_level_from_env(default: int = logging.INFO) -> int:
    raw = optional_env_var(LOG_LEVEL_ENV_VAR)
    if raw is None:
        return default
    try:
        return _LEVELS[raw.lower()]
    except KeyError as exc:
        choices = ", ".join(_LEVELS)
        raise ConfigurationError(
            f"{LOG_LEVEL_ENV_VAR} must be one of {choices}, got {raw!r}"
        ) from exc


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger for CLI output.

    ``level`` defaults to ``PHRASEMERGE_LOG_LEVEL`` (INFO when unset). Per-record merge
    decisions are logged at DEBUG, so ``--verbose`` calls this again with ``force=True``.
    SQLAlchemy's engine logger stays at WARNING unless DEBUG is requested.
    """

    resolved = log_level_from_env() if level is None else level
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if resolved <= logging.DEBUG else logging.WARNING
    )
