"""Configuration for the netclass collector."""

from __future__ import annotations

import errno
from dataclasses import dataclass, field
from pathlib import Path

from .sysfs.attribute import DEFAULT_SOFT_ERRNOS


def parse_errno(value: str) -> int:
    """Resolve an errno given by name (``EIO``) or number (``5``).

    Raises:
        ValueError: ``value`` names no known errno.
    """
    text = value.strip()
    if text.isdigit():
        return int(text)
    code = getattr(errno, text.upper(), None)
    if not isinstance(code, int) or code not in errno.errorcode:
        raise ValueError(f"unknown errno {value!r}")
    return code


@dataclass
class CollectorConfig:
    """Runtime configuration for the netclass collector."""

    # sysfs mount point
    sysfs_root: Path = Path("/sys")

    # Address and port for the metrics HTTP server ("" = all interfaces)
    listen_address: str = ""
    listen_port: int = 9100

    # Prefix of every exported metric name
    namespace: str = "node"

    # errnos on which a single interface attribute is skipped
    soft_errnos: frozenset[int] = field(default_factory=lambda: DEFAULT_SOFT_ERRNOS)

    # Logging level name for the process
    log_level: str = "INFO"

    # Print one exposition to stdout and exit instead of serving
    once: bool = False

    # Print all interface records as JSON and exit
    dump_netclass: bool = False

    def __post_init__(self) -> None:
        self.sysfs_root = Path(self.sysfs_root)
        self.soft_errnos = frozenset(self.soft_errnos)
        self.log_level = self.log_level.upper()
