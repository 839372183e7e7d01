"""Command-line interface for the netclass collector."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import CollectorConfig, parse_errno

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _errno_arg(value: str) -> int:
    try:
        return parse_errno(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def parse_args(argv: list[str] | None = None) -> CollectorConfig:
    """Parse command-line arguments and return a CollectorConfig."""
    defaults = CollectorConfig()
    parser = argparse.ArgumentParser(
        prog="netclass-collector",
        description="Export Linux bonding state from sysfs as Prometheus metrics",
    )
    parser.add_argument(
        "--sysfs-root",
        type=Path,
        default=defaults.sysfs_root,
        help="sysfs mount point (default: /sys)",
    )
    parser.add_argument(
        "--listen-address",
        type=str,
        default=defaults.listen_address,
        help="Address for the metrics HTTP server (default: all interfaces)",
    )
    parser.add_argument(
        "-p",
        "--listen-port",
        type=int,
        default=defaults.listen_port,
        help="Port for the metrics HTTP server (default: 9100)",
    )
    parser.add_argument(
        "--namespace",
        type=str,
        default=defaults.namespace,
        help="Metric name prefix (default: node)",
    )
    parser.add_argument(
        "--soft-errno",
        type=_errno_arg,
        action="append",
        default=[],
        metavar="ERRNO",
        help=(
            "Extra errno (name or number) on which an interface attribute is "
            "skipped instead of failing the read; repeatable "
            "(default set: ENOENT EACCES EPERM EOPNOTSUPP EINVAL)"
        ),
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=defaults.log_level,
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print one metrics exposition to stdout and exit",
    )
    parser.add_argument(
        "--dump-netclass",
        action="store_true",
        help="Print every interface's sysfs attributes as JSON and exit",
    )

    args = parser.parse_args(argv)

    return CollectorConfig(
        sysfs_root=args.sysfs_root,
        listen_address=args.listen_address,
        listen_port=args.listen_port,
        namespace=args.namespace,
        soft_errnos=defaults.soft_errnos | frozenset(args.soft_errno),
        log_level=args.log_level,
        once=args.once,
        dump_netclass=args.dump_netclass,
    )


def main(argv: list[str] | None = None) -> None:
    """Entry point for the netclass collector CLI."""
    config = parse_args(argv)
    logging.basicConfig(level=config.log_level, format=_LOG_FORMAT, stream=sys.stderr)

    # Import here so --help works without prometheus_client on the path
    from .collector import run_exporter
    from .sysfs.attribute import SysfsError

    try:
        run_exporter(config)
    except SysfsError as e:
        logging.getLogger(__name__).error("%s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(0)


if __name__ == "__main__":
    main()
