"""
Main module for pve-manage.

This module contains the main function that parses the command line, loads
the configuration and runs one lifecycle action.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .config import load_config
from .dispatcher import dispatch
from .errors import ConfigError, PveManageError, UsageError
from .models import Action
from .pve_client import PveClient

logger = logging.getLogger("pve-manage")

PROG = "pve-manage"
USAGE = (
    f"Usage: {PROG} <VMID> <{'|'.join(action.value for action in Action)}>\n"
    "VMID: The ID of the LXC container or the QEMU virtual machine.\n"
    f"Action: The action to perform ({Action.names()})."
)


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str) -> None:
        raise UsageError(message)


def positive_int(value: str) -> int:
    try:
        vmid = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"VMID must be a positive integer, got '{value}'") from None
    if vmid <= 0:
        raise argparse.ArgumentTypeError(f"VMID must be a positive integer, got '{value}'")
    return vmid


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog=PROG,
        description="Start, stop, shut down, reboot or reset a Proxmox VE container or VM.",
    )
    parser.add_argument("vmid", type=positive_int, help="ID of the LXC container or QEMU virtual machine")
    parser.add_argument("action", help=f"action to perform ({Action.names()})")
    parser.add_argument("--host", help="Proxmox VE API base URL (default: $PVE_HOST)")
    parser.add_argument("--node", help="node name (default: $PVE_NODE)")
    parser.add_argument("--secret-file", help="file defining TOKEN (default: .secret.sh next to the program)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log API requests and responses")
    return parser


def setup_logging(verbose: bool = False) -> None:
    """
    Progress goes to stdout; PVE_LOG_FILE additionally keeps a timestamped log.

    Raises:
        ConfigError: if the log file cannot be opened.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = os.environ.get("PVE_LOG_FILE")
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            raise ConfigError(f"Cannot open PVE_LOG_FILE {log_file}: {e}") from e
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )
    # urllib3 debug output would echo request headers
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    load_dotenv(find_dotenv(usecwd=True))

    try:
        args = build_parser().parse_args(argv)
    except UsageError as e:
        print(USAGE)
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code

    try:
        setup_logging(args.verbose)
        config = load_config(host=args.host, node=args.node, secret_file=args.secret_file)
        logger.debug(f"Using {config}")
        with PveClient(config) as client:
            return dispatch(client, args.vmid, args.action)
    except UsageError as e:
        print(USAGE)
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except PveManageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
