# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Command-line interface for pjctl.

    pjctl [options] <hostname> power <on|off>
    pjctl [options] <hostname> source <rgb|video|digital|storage|net>[1-9]
    pjctl [options] <hostname> mute <video|audio|av> <on|off>
    pjctl [options] <hostname> status
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from typing import NoReturn

from .internal_types import *
from .version import __version__
from .exceptions import PjlinkError, UsageError
from .pkg_logging import logger
from .protocol import (
    PjlinkCommand,
    PjlinkResult,
    power_command,
    source_command,
    mute_command,
    status_commands,
  )
from .client import PjlinkClientConfig, pjlink_connect

class PjctlArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors"""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")

def build_parser() -> argparse.ArgumentParser:
    parser = PjctlArgumentParser(
        prog="pjctl",
        description="Control a network projector using the PJLink protocol.")

    parser.add_argument("--port", default=None, type=int,
        help="PJLink TCP port number to connect to. Default: use env var PJLINK_PORT, or 4352.")
    parser.add_argument("-t", "--timeout", default=None, type=float,
        help="Timeout for network reads and writes (seconds). Default: use env var PJLINK_TIMEOUT, or wait forever.")
    parser.add_argument("-l", "--loglevel", default="ERROR",
        help="Logging level. Default: ERROR.",
        choices=["ERROR", "WARNING", "INFO", "DEBUG"])
    parser.add_argument("-p", "--password", default=None,
        help="PJLink password, if the projector requires authentication. Default: use env var PJLINK_PASSWORD, or no password.")
    parser.add_argument("-j", "--json", action="store_true", default=False,
        help="Print results as JSON instead of text.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("host",
        help="Projector hostname or IP address, optionally suffixed with ':<port>'. "
             "'sddp://' discovers the projector with SDDP.")

    subparsers = parser.add_subparsers(dest="command", metavar="command", required=True)

    power_parser = subparsers.add_parser("power", help="Turn the projector on or off.")
    power_parser.add_argument("state", choices=["on", "off"])

    source_parser = subparsers.add_parser("source", help="Select an input source.")
    source_parser.add_argument("source", metavar="<rgb|video|digital|storage|net>[1-9]")

    mute_parser = subparsers.add_parser("mute", help="Mute or unmute video and/or audio.")
    mute_parser.add_argument("target", choices=["video", "audio", "av"])
    mute_parser.add_argument("state", choices=["on", "off"])

    subparsers.add_parser("status", help="Query projector status.")

    return parser

def build_commands(args: argparse.Namespace) -> List[PjlinkCommand]:
    """Builds the command queue for parsed command-line arguments.

    raises UsageError if a command parameter is invalid.
    """
    if args.command == "power":
        return [ power_command(args.state == "on") ]
    if args.command == "source":
        return [ source_command(args.source) ]
    if args.command == "mute":
        return [ mute_command(args.target, args.state == "on") ]
    if args.command == "status":
        return status_commands()
    raise UsageError(f"Invalid command: {args.command}")

def print_result(result: PjlinkResult) -> None:
    if result.is_error:
        prefix = '' if result.display_prefix is None else result.display_prefix
        print(f"{prefix}error: {result.text}", file=sys.stderr)
        return
    line = result.display_str()
    if line is not None:
        print(line)

async def run_commands(
        args: argparse.Namespace,
        commands: List[PjlinkCommand],
      ) -> List[PjlinkResult]:
    config = PjlinkClientConfig(
        default_host=args.host,
        password=args.password,
        default_port=args.port,
        timeout_secs=args.timeout
      )
    on_result = None if args.json else print_result
    async with await pjlink_connect(config=config) as client:
        return await client.run_commands(commands, on_result=on_result)

async def async_main(argv: Optional[Sequence[str]]=None) -> int:
    """Runs pjctl and returns the process exit code.

    Usage errors detected while parsing arguments raise SystemExit(1).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.getLevelName(args.loglevel),
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d] %(message)s",
        datefmt="%F %H:%M:%S")

    try:
        commands = build_commands(args)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 1

    try:
        results = await run_commands(args, commands)
    except PjlinkError as e:
        logger.debug("pjctl failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([ r.to_jsonable() for r in results ], indent=2))

    return 0

def main(argv: Optional[Sequence[str]]=None) -> int:
    return asyncio.run(async_main(argv))

def run() -> NoReturn:
    sys.exit(main())
