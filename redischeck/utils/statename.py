#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import enum


class State(enum.IntEnum):
    """Service states as understood by the monitoring core.

    The values are the plug-in exit codes.
    """

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @classmethod
    def worst(cls, *states: State) -> State:
        """Most significant state, CRITICAL beats UNKNOWN beats WARNING

        >>> State.worst(State.OK, State.WARNING)
        <State.WARNING: 1>
        >>> State.worst(State.UNKNOWN, State.CRITICAL)
        <State.CRITICAL: 2>
        >>> State.worst()
        <State.OK: 0>
        """
        if cls.CRITICAL in states:
            return cls.CRITICAL
        return max(states, default=cls.OK)

    @property
    def label(self) -> str:
        return service_state_name(self)


def core_state_names() -> dict[int, str]:
    return {
        0: "OK",
        1: "WARNING",
        2: "CRITICAL",
        3: "UNKNOWN",
    }


def service_state_name(state_num: int, deflt: str = "") -> str:
    return core_state_names().get(state_num, deflt)
