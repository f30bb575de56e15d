#!/usr/bin/env python3
"""
Logging Setup
=============
Routes the package loggers through a rich console handler.

The level is taken from the explicit argument, then from the environment
variable named by ``logging.env_var`` (default BIGRAMKIT_LOG), then from
``logging.level`` in app.yaml.

Usage:
    from bigramkit.logs import init_logging
    init_logging()                 # level from env / app.yaml
    init_logging("DEBUG")          # explicit
"""

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from bigramkit.settings import get_setting

PACKAGE_LOGGER = "bigramkit"
DEFAULT_ENV_VAR = "BIGRAMKIT_LOG"


def resolve_level(level: Union[str, int, None] = None) -> int:
    """Turn a level name/number (or None for the configured default) into an int."""
    if level is None:
        env_var = get_setting("logging.env_var", DEFAULT_ENV_VAR)
        level = os.environ.get(env_var) or get_setting("logging.level", "WARNING")

    if isinstance(level, int):
        return level

    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def init_logging(level: Union[str, int, None] = None,
                 console: Optional[Console] = None) -> logging.Logger:
    """
    Configure the ``bigramkit`` logger.

    Calling it again replaces the previous handler instead of stacking a
    second one.

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_level(level))

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


__all__ = ['init_logging', 'resolve_level']
