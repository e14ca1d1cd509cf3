"""Logging configuration for the converter."""

from __future__ import annotations

import logging
import sys

import colorlog


def setup_logger(name: str = "qwen_export", verbose: bool = False) -> logging.Logger:
    """
    Set up a colored console logger.

    Args:
        name: Logger name (the package logger by default, so every stage
              module logging through logging.getLogger(__name__) is covered)
        verbose: Emit DEBUG records (skipped nodes, degenerate trees)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = colorlog.StreamHandler(sys.stderr)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s %(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            reset=True,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    )

    logger.addHandler(handler)
    logger.propagate = False

    return logger
