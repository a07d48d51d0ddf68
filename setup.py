#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from setuptools import find_packages, setup

setup(
    name="redischeck",
    version="0.1.0",
    description="Nagios compatible active check for Redis memory usage and replication role",
    packages=find_packages(include=["redischeck", "redischeck.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=["redis>=4.5", "pydantic>=2"],
    extras_require={"test": ["pytest", "fakeredis>=2.10"]},
    entry_points={
        "console_scripts": ["check_redis=redischeck.active_checks.check_redis:run"],
    },
)
