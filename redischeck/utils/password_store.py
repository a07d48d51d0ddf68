#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Lookup of credentials in a password store file

The file holds one entry per line:

  <ident>:<password>

The password itself may contain colons.
"""

from pathlib import Path

from redischeck.utils.exceptions import PolicyError


def load(pw_file: Path) -> dict[str, str]:
    passwords = {}
    for line in pw_file.read_text(encoding="utf-8").splitlines():
        if ":" not in line:
            continue
        ident, password = line.split(":", 1)
        passwords[ident] = password
    return passwords


def lookup(pw_file: Path, pw_id: str) -> str:
    """Look up the password with the given id in the given file"""
    try:
        passwords = load(pw_file)
    except OSError as e:
        raise PolicyError(f"Cannot read password store {pw_file}: {e}") from e

    try:
        return passwords[pw_id]
    except KeyError:
        raise PolicyError(f"Password '{pw_id}' does not exist") from None


def lookup_reference(reference: str) -> str:
    """Resolve a reference of the form '<ident>:<file>'

    >>> lookup_reference("no-colon")
    Traceback (most recent call last):
    ...
    redischeck.utils.exceptions.PolicyError: Invalid password reference: no-colon
    """
    if ":" not in reference:
        raise PolicyError(f"Invalid password reference: {reference}")
    pw_id, file = reference.split(":", 1)
    return lookup(Path(file), pw_id)
