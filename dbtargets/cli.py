"""Command-line entry point: resolve and print the configured targets."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .config import Config
from .errors import DbTargetsError

LOG = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbtargets",
        description="Resolve database targets from directory config and command-line overrides.",
    )
    parser.add_argument("--dir", default=".", help="Directory to load target config from.")
    parser.add_argument("--host", default="", help="Database hostname or IP address, optionally host:port.")
    parser.add_argument("--port", type=int, default=0, help="Port to use for the database host.")
    parser.add_argument("--user", default="", help="Username to connect to the database host.")
    parser.add_argument("--password", default="", help="Password for the database user.")
    parser.add_argument("--schema", default="", help="Database schema name.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )
    return parser


def configure_logging(verbosity: int) -> None:
    """Map the ``-v`` count onto WARNING, INFO or DEBUG."""

    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = Config.from_namespace(args)
        targets = config.load_targets()
        registry = targets.set_instances()
    except KeyboardInterrupt:
        return 130
    except DbTargetsError as exc:
        print(f"dbtargets: error: {exc}", file=sys.stderr)
        return 1

    LOG.info("Resolved %d target(s) on %d instance(s)", len(targets), len(registry))
    for target in targets:
        print(f"{target.host_and_optional_port()} {target.schema}".rstrip())
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
