"""Exporter main loop with signal handling.

Builds the sysfs handle and collector registry, then either prints a
single result or serves metrics over HTTP until SIGTERM/SIGINT.
"""

from __future__ import annotations

import json
import logging
import signal
import sys
import time
from dataclasses import asdict
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, generate_latest, start_http_server

from .collectors.base import NodeCollector
from .collectors.bonding import BondingCollector
from .sysfs.fs import SysFS
from .sysfs.net_class import net_class

if TYPE_CHECKING:
    from .config import CollectorConfig

log = logging.getLogger(__name__)

# How often the idle loop checks for a shutdown request
_POLL_INTERVAL_S = 0.5

_shutdown_requested = False


def _signal_handler(signum: int, frame: object) -> None:
    """Handle SIGTERM/SIGINT for graceful shutdown."""
    global _shutdown_requested
    _shutdown_requested = True


def build_registry(fs: SysFS, namespace: str = "node") -> CollectorRegistry:
    """Return a registry holding every collector for ``fs``."""
    registry = CollectorRegistry()
    registry.register(NodeCollector([BondingCollector(fs, namespace)], namespace))
    return registry


def dump_netclass(fs: SysFS) -> str:
    """Render all interface records as a JSON object keyed by name."""
    records = {name: asdict(iface) for name, iface in net_class(fs).items()}
    return json.dumps(records, indent=2, sort_keys=True)


def run_exporter(config: CollectorConfig) -> None:
    """Run the exporter described by ``config``.

    Raises:
        SysfsError: The sysfs mount point is unusable, or (for
            ``dump_netclass``) the interface scan failed.
    """
    global _shutdown_requested
    _shutdown_requested = False

    fs = SysFS(config.sysfs_root, soft_errnos=config.soft_errnos)

    if config.dump_netclass:
        print(dump_netclass(fs))
        return

    registry = build_registry(fs, config.namespace)

    if config.once:
        sys.stdout.write(generate_latest(registry).decode("utf-8"))
        return

    signal.signal(signal.SIGTERM, _signal_handler)
    signal.signal(signal.SIGINT, _signal_handler)

    server, thread = start_http_server(
        config.listen_port, addr=config.listen_address or "0.0.0.0", registry=registry
    )
    log.info(
        "Listening on %s:%d (sysfs %s)",
        config.listen_address or "0.0.0.0",
        config.listen_port,
        fs.mount_point,
    )

    try:
        while not _shutdown_requested:
            time.sleep(_POLL_INTERVAL_S)
    finally:
        log.info("Shutting down")
        server.shutdown()
        thread.join()
