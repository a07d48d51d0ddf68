#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

# Example output of INFO (shortened):
# # Server
# redis_version:7.2.4
# tcp_port:6379
#
# # Memory
# used_memory:1102840
# used_memory_human:1.05M
# total_system_memory:16668643328
# maxmemory:0
#
# # Replication
# role:slave
# master_host:10.0.0.1
# master_link_status:up
#
# Example reply of CONFIG GET maxmemory:
# 1) "maxmemory"
# 2) "104857600"

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from redischeck.utils.exceptions import ExtractionError


@dataclass(frozen=True)
class StatusReport:
    role: str = ""
    used_memory: int = 0
    total_system_memory: int = 0
    master_link_status: str = ""

    @classmethod
    def from_fields(cls, fields: Mapping[str, str]) -> StatusReport:
        return cls(
            role=fields.get("role", ""),
            used_memory=_to_int(fields.get("used_memory", "")),
            total_system_memory=_to_int(fields.get("total_system_memory", "")),
            master_link_status=fields.get("master_link_status", ""),
        )

    def effective_memory_limit(self, maxmemory: int) -> int:
        """The configured limit, or the physical memory if there is none

        >>> StatusReport(total_system_memory=1024).effective_memory_limit(0)
        1024
        >>> StatusReport(total_system_memory=1024).effective_memory_limit(512)
        512
        """
        return maxmemory or self.total_system_memory


_DECIMAL = re.compile(r"[+-]?[0-9]+")


def _parse_decimal(raw: str) -> int | None:
    """Strict base 10 integer: no blanks, no digit separators

    >>> _parse_decimal("-42"), _parse_decimal("1_000"), _parse_decimal(" 2000")
    (-42, None, None)
    """
    return int(raw) if _DECIMAL.fullmatch(raw) else None


def _to_int(raw: str) -> int:
    return _parse_decimal(raw) or 0


def parse_info_fields(info: str) -> dict[str, str]:
    """Split the INFO text into its key/value pairs

    >>> parse_info_fields("# Replication\\r\\nrole:master\\r\\nmaster_host:[::1]:6380\\r\\n")
    {'role': 'master', 'master_host': '[::1]:6380'}
    """
    fields = {}
    for line in info.split("\r\n"):
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        fields[key] = value
    return fields


def parse_info(info: str) -> StatusReport:
    return StatusReport.from_fields(parse_info_fields(info))


def _decode(item: object) -> str:
    if isinstance(item, bytes):
        return item.decode("utf-8", errors="replace")
    if isinstance(item, str):
        return item
    raise ExtractionError(f"Unexpected item in config reply: {item!r}")


def extract_config_values(values: Sequence[object]) -> dict[str, str]:
    """Pair up the flat key/value reply of CONFIG GET

    >>> extract_config_values(["maxmemory", "0", "maxmemory-policy", "noeviction"])
    {'maxmemory': '0', 'maxmemory-policy': 'noeviction'}
    """
    if len(values) % 2:
        raise ExtractionError("Expected even number of items in config reply")
    return {
        _decode(key): _decode(value)
        for key, value in zip(values[::2], values[1::2])
    }


def extract_maxmemory(values: Sequence[object]) -> int:
    if (raw := extract_config_values(values).get("maxmemory")) is None:
        return 0
    if (maxmemory := _parse_decimal(raw)) is None:
        raise ExtractionError(f"Invalid maxmemory value: {raw!r}")
    return maxmemory
