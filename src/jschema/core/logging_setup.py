#!/usr/bin/env python3
"""
Logging setup for jschema.

Library modules only create loggers (`logging.getLogger(__name__)`); handlers
are installed here, once, by the CLI.
"""

import logging
from typing import Any, Dict, Final

LOG_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s"


def resolve_level(value: Any) -> int:
    """
    Convert a level name ("debug", "INFO") or number to a logging level.

    Raises:
        ValueError: if the name is not a known logging level.
    """
    if isinstance(value, int):
        return value
    name = str(value).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {value!r}")
    return level


def configure_logging(config: Dict[str, Any]) -> None:
    """Configure the `jschema` logger from `config['logging']['level']`."""
    level = resolve_level((config.get("logging") or {}).get("level", "INFO"))
    logger = logging.getLogger("jschema")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
