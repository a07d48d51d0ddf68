#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
import sys
from typing import IO

# Just for reference, the predefined logging levels:
#
# Python         added here
# -------------------------
# CRITICAL 50
# ERROR    40
# WARNING  30                 <= default level in Python
# INFO     20
#                VERBOSE  15
# DEBUG    10

# We need an additional log level between INFO and DEBUG to reflect the
# --verbose option given once or twice.
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("redischeck")


def get_formatter(
    format_str: str = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
) -> logging.Formatter:
    return logging.Formatter(format_str)


def clear_console_logging() -> None:
    logger.handlers[:] = []
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.INFO)


# Set default logging handler to avoid "No handler found" warnings.
clear_console_logging()


def setup_logging_handler(stream: IO[str], formatter: logging.Formatter) -> None:
    """Replace the handlers of the package logger by one writing to stream"""
    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(formatter)

    del logger.handlers[:]
    logger.addHandler(handler)


def setup_stderr_logging(verbosity: int) -> None:
    """Log to stderr. stdout is reserved for the single check result line."""
    if not verbosity:
        return
    setup_logging_handler(sys.stderr, get_formatter())
    logger.setLevel(verbosity_to_log_level(verbosity))


def verbosity_to_log_level(verbosity: int) -> int:
    """Values for "verbosity":

      0: enables INFO and above
      1: enables VERBOSE and above
      2: enables DEBUG and above (ALL messages)

    >>> verbosity_to_log_level(1)
    15
    >>> verbosity_to_log_level(5)
    10
    """
    if verbosity == 0:
        return logging.INFO
    if verbosity == 1:
        return VERBOSE
    return logging.DEBUG
