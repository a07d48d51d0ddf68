#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from unittest.mock import ANY, Mock

import pytest
from fakeredis import FakeRedis, FakeServer
from redis.exceptions import ResponseError

from redischeck.utils.exceptions import TransportError
from redischeck.utils.redis import get_redis_client, RedisStatusSource


def test_get_redis_client_applies_timeout_to_all_phases() -> None:
    client = get_redis_client("redis.example.com", 6380, "s3cret", 2.5)
    kwargs = client.connection_pool.connection_kwargs
    assert kwargs["host"] == "redis.example.com"
    assert kwargs["port"] == 6380
    assert kwargs["password"] == "s3cret"
    assert kwargs["socket_timeout"] == 2.5
    assert kwargs["socket_connect_timeout"] == 2.5


@pytest.mark.usefixtures("use_fakeredis_client")
def test_ping_measures_round_trip() -> None:
    with get_redis_client("127.0.0.1", 6379, None, 1.0) as client:
        assert RedisStatusSource(client).ping() >= 0.0


def test_ping_unreachable_server() -> None:
    server = FakeServer()
    server.connected = False
    with pytest.raises(TransportError):
        RedisStatusSource(FakeRedis(server=server, decode_responses=True)).ping()


def test_info_returns_raw_text() -> None:
    client = Mock()
    client.execute_command.return_value = "# Replication\r\nrole:master\r\n"
    source = RedisStatusSource(client)
    assert source.info() == "# Replication\r\nrole:master\r\n"
    client.set_response_callback.assert_called_once_with("INFO", ANY)
    client.execute_command.assert_called_once_with("INFO")


def test_info_response_callback_keeps_text() -> None:
    client = Mock()
    RedisStatusSource(client)
    (_command, callback), _kwargs = client.set_response_callback.call_args
    assert callback("role:master\r\n") == "role:master\r\n"


def test_config_get_returns_flat_reply() -> None:
    client = Mock()
    client.execute_command.return_value = ["maxmemory", "104857600"]
    assert RedisStatusSource(client).config_get("maxmemory") == ["maxmemory", "104857600"]
    client.execute_command.assert_called_once_with("CONFIG", "GET", "maxmemory")


def test_config_get_error_is_transport_error() -> None:
    client = Mock()
    client.execute_command.side_effect = ResponseError("ERR unknown command 'CONFIG'")
    with pytest.raises(TransportError, match="unknown command 'CONFIG'"):
        RedisStatusSource(client).config_get("maxmemory")
