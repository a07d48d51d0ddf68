#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any

from redis import Redis
from redis.exceptions import RedisError

from redischeck.utils.exceptions import TransportError

logger = logging.getLogger("redischeck.redis")


def get_redis_client(
    host: str,
    port: int,
    password: str | None,
    timeout: float,
) -> Redis[str]:
    """Builds a ready-to-use Redis client instance

    Note: Use the returing object as context manager to ensure proper cleanup.
    The same timeout applies to connecting, reading and writing.
    """
    return Redis(
        host=host,
        port=port,
        password=password,
        db=0,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
        encoding="utf-8",
        decode_responses=True,
    )


def _raw_response(response: Any, **options: Any) -> Any:
    return response


class RedisStatusSource:
    """Issues the commands the check needs and hands out the raw replies"""

    def __init__(self, client: Redis[str]) -> None:
        self._client = client
        # We want the INFO text as sent by the server, not the dict redis-py makes of it.
        self._client.set_response_callback("INFO", _raw_response)

    def ping(self) -> float:
        """Send PING and return the round trip time in seconds"""
        start = time.perf_counter()
        try:
            self._client.ping()
        except RedisError as e:
            raise TransportError(str(e)) from e
        return time.perf_counter() - start

    def info(self) -> str:
        try:
            return str(self._client.execute_command("INFO"))
        except RedisError as e:
            raise TransportError(str(e)) from e

    def config_get(self, parameter: str) -> Sequence[object]:
        # "CONFIG", "GET" instead of "CONFIG GET" keeps the flat key/value reply.
        logger.debug("CONFIG GET %s", parameter)
        try:
            return list(self._client.execute_command("CONFIG", "GET", parameter))
        except RedisError as e:
            raise TransportError(str(e)) from e
