#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Runs a PJLink projector emulator until interrupted.

    python -m pjctl.emulator [--bind-addr ADDR] [--port PORT] [--password PASSWORD]
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from ..internal_types import *
from ..constants import DEFAULT_PORT
from ..pkg_logging import logger
from .emulator_impl import PjlinkEmulator

async def amain() -> None:
    parser = argparse.ArgumentParser(description="Emulate a PJLink class 1 projector.")

    parser.add_argument("--bind-addr", default="0.0.0.0",
        help="Address to listen on. Default: 0.0.0.0")
    parser.add_argument("--port", default=DEFAULT_PORT, type=int,
        help=f"TCP port to listen on. Default: {DEFAULT_PORT}")
    parser.add_argument("-p", "--password", default=None,
        help="Require PJLink authentication with this password. Default: no authentication.")
    parser.add_argument("-l", "--loglevel", default="INFO",
        help="Logging level. Default: INFO.",
        choices=["ERROR", "WARNING", "INFO", "DEBUG"])

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.getLevelName(args.loglevel),
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d] %(message)s",
        datefmt="%F %H:%M:%S")

    emulator = PjlinkEmulator(
        password=args.password,
        bind_addr=args.bind_addr,
        port=args.port)
    logger.info(f"Starting {emulator}")
    await emulator.run()

if __name__ == "__main__":
    asyncio.run(amain())
