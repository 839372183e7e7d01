"""Bonding slave counts per master.

Exposes the number of configured and active slaves of each Linux bonding
interface.  Only works on Linux.
"""

from __future__ import annotations

import logging

from ..sysfs.bonding import net_class_bonding
from ..sysfs.fs import SysFS
from .base import Collector, GaugeDesc, NoDataError, Sink

log = logging.getLogger(__name__)


class BondingCollector(Collector):
    """Report ``{ns}_bonding_slaves`` and ``{ns}_bonding_active`` per master."""

    name = "bonding"

    def __init__(self, fs: SysFS, namespace: str = "node") -> None:
        self._fs = fs
        self._slaves = GaugeDesc(
            f"{namespace}_bonding_slaves",
            "Number of configured slaves per bonding interface.",
            ("master",),
        )
        self._active = GaugeDesc(
            f"{namespace}_bonding_active",
            "Number of active slaves per bonding interface.",
            ("master",),
        )
        self.descs = (self._slaves, self._active)

    def update(self, sink: Sink) -> None:
        bonding = net_class_bonding(self._fs)
        if not bonding:
            log.debug("Not collecting bonding, no bonds found")
            raise NoDataError("no bonds found")
        for master, info in sorted(bonding.items()):
            sink(self._slaves.sample(len(info.slaves), master))
            sink(self._active.sample(info.active_count, master))
