"""
Logging Configuration

Sets up the package logger for analytic_meg.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "analytic_meg"


def setup_logging(level: int | str = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Configure the logger for the 'analytic_meg' namespace.

    Parameters
    ----------
    level : int or str
        Logging level (e.g. logging.DEBUG or "DEBUG").
    log_file : str, optional
        Path to additionally write logs to.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate records when called more than once
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger


def setup_logging_from_config(config: dict) -> logging.Logger:
    """Configure logging from the ``logging`` section of a loaded config."""
    section = config.get("logging") or {}
    return setup_logging(section.get("level", logging.INFO), section.get("log_file"))
