#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Evaluation of the Redis status against thresholds and the expected role"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from redischeck.utils.exceptions import PolicyError
from redischeck.utils.statename import State

_MiB = 1024 * 1024


class Role(enum.Enum):
    MASTER = "master"
    SLAVE = "slave"


@dataclass(frozen=True)
class Verdict:
    state: State
    message: str | None = None


@dataclass(frozen=True)
class MemoryVerdict(Verdict):
    percent_used: float = 0.0


@dataclass(frozen=True)
class CheckOutcome:
    state: State
    message: str
    response_time: float | None = None
    percent_used: float = 0.0


def parse_role_policy(role: str) -> Role | None:
    """The expected role, or None if the role should not be checked

    >>> parse_role_policy("slave")
    <Role.SLAVE: 'slave'>
    >>> parse_role_policy("") is None
    True
    """
    if not role:
        return None
    try:
        return Role(role)
    except ValueError:
        raise PolicyError(f"Unknown role: {role}") from None


def evaluate_memory(
    used_memory: int,
    memory_limit: int,
    *,
    warn: float,
    crit: float,
) -> MemoryVerdict:
    if memory_limit <= 0:
        return MemoryVerdict(State.OK, None, 0.0)

    percent_used = used_memory * 100 / memory_limit
    # critical first: with warn > crit the warning level is never reached
    if percent_used >= crit:
        return MemoryVerdict(
            State.CRITICAL, f"Critical threshold ({crit:.2f}%) exceeded", percent_used
        )
    if percent_used >= warn:
        return MemoryVerdict(
            State.WARNING, f"Warning threshold ({warn:.2f}%) exceeded", percent_used
        )
    return MemoryVerdict(State.OK, None, percent_used)


def validate_role(expected: Role | None, role: str, master_link_status: str) -> Verdict:
    if expected is None:
        return Verdict(State.OK)

    if role != expected.value:
        return Verdict(
            State.CRITICAL, f"Unexpected role. Expected={expected.value}, Actual={role}"
        )

    if expected is Role.SLAVE and master_link_status != "up":
        return Verdict(
            State.CRITICAL, f"master_link_status is not up (actual: {master_link_status})"
        )

    return Verdict(State.OK)


def merge(verdicts: Sequence[Verdict]) -> tuple[State, list[str]]:
    return (
        State.worst(*(v.state for v in verdicts)),
        [v.message for v in verdicts if v.message],
    )


def format_memory_summary(used_memory: int, memory_limit: int, percent_used: float) -> str:
    """
    >>> format_memory_summary(524288 * 3, 1048576 * 4, 37.5)
    'Memory used 1/4 MiB (37.50%)'
    """
    return "Memory used %d/%d MiB (%.2f%%)" % (
        used_memory // _MiB,
        memory_limit // _MiB,
        percent_used,
    )


def format_perfdata(response_time: float, timeout: float) -> str:
    """
    >>> format_perfdata(0.000231, 1.0)
    'time=0.000231s;;;0.000000;1.000000'
    """
    return "time=%.6fs;;;%.6f;%.6f" % (response_time, 0.0, timeout)


def format_result(
    memory: MemoryVerdict,
    role: Verdict,
    *,
    used_memory: int,
    memory_limit: int,
    response_time: float,
    timeout: float,
) -> CheckOutcome:
    state, messages = merge([memory, role])
    summary = format_memory_summary(used_memory, memory_limit, memory.percent_used)
    return CheckOutcome(
        state=state,
        message="%s %s|%s"
        % (summary, ", ".join(messages), format_perfdata(response_time, timeout)),
        response_time=response_time,
        percent_used=memory.percent_used,
    )
