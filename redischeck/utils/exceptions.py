#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""User-defined exceptions of the Redis check."""

__all__ = [
    "ExtractionError",
    "PolicyError",
    "RedisCheckException",
    "TransportError",
]


# never used directly in the code. Just some wrapper to make all of our
# exceptions handleable with one call
class RedisCheckException(Exception):
    pass


class PolicyError(RedisCheckException):
    """The configuration of the check is invalid.

    Detected before talking to the server, reported as UNKNOWN.
    """


class TransportError(RedisCheckException):
    """Connecting, authenticating or exchanging commands with the server failed."""


class ExtractionError(RedisCheckException):
    """A reply of the server does not have the expected structure."""
