#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Iterator
from unittest.mock import patch

import pytest
from fakeredis import FakeRedis

from redischeck.utils import log, redis


@pytest.fixture
def use_fakeredis_client() -> Iterator[None]:
    """Use fakeredis client instead of redis.Redis"""
    with patch.object(redis, "Redis", FakeRedis) as _:
        yield


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """--verbose attaches a stderr handler to the package logger, drop it again"""
    yield
    log.clear_console_logging()
