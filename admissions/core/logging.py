"""Logging setup for the service process."""

from __future__ import annotations

import logging

from admissions.core.config import Settings


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("admissions").setLevel(level)
    logging.getLogger(__name__).debug("Logging configured at %s", level)


__all__ = ["configure_logging"]
