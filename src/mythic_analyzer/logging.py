"""Logging setup for applications embedding the analyzer."""

from __future__ import annotations

import logging

from mythic_analyzer.settings import Settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from ``settings.log_level``."""
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())
