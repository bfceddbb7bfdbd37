"""Shared logging helpers."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError


def get_log_level(default: int = logging.INFO) -> int:
    """Return the level named by ``FLATINGEST_LOG_LEVEL`` (or ``default``)."""

    name = optional_env_var("FLATINGEST_LOG_LEVEL")
    if name is None:
        return default
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level: {name}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``FLATINGEST_LOG_LEVEL`` (INFO when unset) and records go to stderr
    so stdout stays reserved for the import report. Pass ``force=True`` to
    reconfigure during tests or specialised entry points.
    """

    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
