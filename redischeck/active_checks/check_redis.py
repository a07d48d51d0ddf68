#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_redis - Monitor memory usage and replication role of a Redis server"""

# The check does the following, stopping at the first failure:
#
#  1. validate the expected role (UNKNOWN, nothing is sent to the server)
#  2. connect and send PING, the round trip time goes to the perfdata
#  3. read INFO and CONFIG GET maxmemory
#  4. compare memory usage against --warn/--crit and the role against --role
#
# Output (a single line):
# REDIS WARNING - Memory used 91/100 MiB (91.00%) Warning threshold (90.00%) exceeded|time=0.000231s;;;0.000000;1.000000

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterator, Sequence
from contextlib import AbstractContextManager, contextmanager
from typing import NoReturn, Protocol

from pydantic import BaseModel

from redischeck import __version__
from redischeck.utils import password_store
from redischeck.utils.exceptions import ExtractionError, PolicyError, TransportError
from redischeck.utils.log import setup_stderr_logging, VERBOSE
from redischeck.utils.redis import get_redis_client, RedisStatusSource
from redischeck.utils.statename import State

from ._redis_evaluation import (
    CheckOutcome,
    evaluate_memory,
    format_result,
    parse_role_policy,
    validate_role,
)
from ._redis_status import extract_maxmemory, parse_info

logger = logging.getLogger("redischeck.check_redis")


class StatusSourceProto(Protocol):
    def ping(self) -> float: ...

    def info(self) -> str: ...

    def config_get(self, parameter: str) -> Sequence[object]: ...


class StatusSourceFactory(Protocol):
    def __call__(
        self,
        host: str,
        port: int,
        password: str | None,
        timeout: float,
    ) -> AbstractContextManager[StatusSourceProto]: ...


class Args(BaseModel):
    host: str
    port: int
    timeout: float
    password: None | str
    password_reference: None | str
    role: str
    warn: float
    crit: float
    version: bool
    verbose: int
    debug: bool

    def resolve_password(self) -> None | str:
        if self.password is not None:
            return self.password
        if self.password_reference is not None:
            return password_store.lookup_reference(self.password_reference)
        return None


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        # invalid command lines are UNKNOWN, not argparse's 2
        self.print_usage(sys.stderr)
        self.exit(int(State.UNKNOWN), f"{self.prog}: error: {message}\n")


def parse_arguments(argv: Sequence[str]) -> Args:
    parser = _ArgumentParser(prog="check_redis", description=__doc__)
    parser.add_argument(
        "-H", "--host", default="127.0.0.1", help="Server hostname or IP address"
    )
    parser.add_argument("-p", "--port", type=int, default=6379, help="TCP Port")
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=1.0,
        help="Timeout in second, used for connecting, reading and writing",
    )

    group = parser.add_mutually_exclusive_group()
    group.add_argument("-a", "--password", default=None, help="Password")
    group.add_argument(
        "--password-reference",
        metavar="ID:FILE",
        default=None,
        help="Password store reference to the password",
    )

    parser.add_argument(
        "-r",
        "--role",
        default="master",
        help="Expected role, master or slave. Use an empty string to skip the check.",
    )
    parser.add_argument(
        "-w", "--warn", type=float, default=90.0, help="Warning threshold memory used %%"
    )
    parser.add_argument(
        "-c", "--crit", type=float, default=95.0, help="Critical threshold memory used %%"
    )
    parser.add_argument("-v", "--version", action="store_true", help="Show version and exit")
    parser.add_argument(
        "--verbose",
        action="count",
        default=0,
        help="Log to stderr, give twice for debug output",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug mode: let Python exceptions come through.",
    )
    return Args.model_validate(vars(parser.parse_args(argv)))


@contextmanager
def _open_status_source(
    host: str,
    port: int,
    password: str | None,
    timeout: float,
) -> Iterator[StatusSourceProto]:
    with get_redis_client(host, port, password, timeout) as client:
        yield RedisStatusSource(client)


def check_redis(args: Args, open_status_source: StatusSourceFactory) -> CheckOutcome:
    try:
        expected_role = parse_role_policy(args.role)
        password = args.resolve_password()
    except PolicyError as e:
        return CheckOutcome(State.UNKNOWN, str(e))

    logger.log(VERBOSE, "Connecting to %s:%d", args.host, args.port)
    try:
        with open_status_source(args.host, args.port, password, args.timeout) as source:
            response_time = source.ping()
            logger.debug("PING took %.6fs", response_time)
            status = parse_info(source.info())
            maxmemory = extract_maxmemory(source.config_get("maxmemory"))
    except (TransportError, ExtractionError) as e:
        return CheckOutcome(State.CRITICAL, str(e))

    memory_limit = status.effective_memory_limit(maxmemory)
    logger.log(
        VERBOSE,
        "role=%s used_memory=%d maxmemory=%d total_system_memory=%d master_link_status=%s",
        status.role,
        status.used_memory,
        maxmemory,
        status.total_system_memory,
        status.master_link_status,
    )

    memory = evaluate_memory(
        status.used_memory, memory_limit, warn=args.warn, crit=args.crit
    )
    role = validate_role(expected_role, status.role, status.master_link_status)
    logger.debug("Memory: %s, role: %s", memory, role)

    return format_result(
        memory,
        role,
        used_memory=status.used_memory,
        memory_limit=memory_limit,
        response_time=response_time,
        timeout=args.timeout,
    )


def _output_check_result(outcome: CheckOutcome) -> None:
    sys.stdout.write(f"REDIS {outcome.state.label} - {outcome.message}\n")


def report(outcome: CheckOutcome) -> int:
    _output_check_result(outcome)
    return int(outcome.state)


def main(
    argv: Sequence[str] | None = None,
    open_status_source: StatusSourceFactory | None = None,
) -> int:
    args = parse_arguments(sys.argv[1:] if argv is None else argv)

    if args.version:
        sys.stdout.write(f"check_redis version {__version__}\n")
        return 0

    setup_stderr_logging(args.verbose)

    try:
        outcome = check_redis(args, open_status_source or _open_status_source)
    except Exception as e:
        if args.debug:
            raise
        outcome = CheckOutcome(State.CRITICAL, f"Unhandled exception: {e}")

    return report(outcome)


def run() -> NoReturn:
    sys.exit(main())


if __name__ == "__main__":
    run()
