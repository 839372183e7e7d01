"""Linux bonding state from sysfs.

Masters are listed in /sys/class/net/bonding_masters.  Each master lists
its slaves in {master}/bonding/slaves, and each slave reports its MII
link state in {master}/bonding/lower_{slave}/bonding_slave/mii_status
(``slave_{slave}`` on older kernels).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .attribute import SysfsReadError, read_file
from .fs import SysFS

log = logging.getLogger(__name__)

BONDING_MASTERS = "bonding_masters"


@dataclass(frozen=True)
class NetClassIfaceBondingSlave:
    """One slave of a bonding master."""

    name: str
    mii_status: int  # 1 if the slave reports "up", 0 otherwise


@dataclass(frozen=True)
class NetClassIfaceBonding:
    """A bonding master and its slaves, keyed by slave name."""

    name: str
    slaves: dict[str, NetClassIfaceBondingSlave] = field(default_factory=dict)

    @property
    def active_count(self) -> int:
        """Number of slaves whose MII status is up."""
        return sum(1 for s in self.slaves.values() if s.mii_status == 1)


def _read(path: Path) -> str:
    try:
        return read_file(path)
    except OSError as exc:
        raise SysfsReadError(path, exc) from exc


def net_class_bonding_masters(fs: SysFS) -> list[str] | None:
    """Read the names of all bonding masters.

    Returns:
        The master names, ``[]`` if the file is empty, or ``None`` if
        ``bonding_masters`` does not exist (the bonding driver is not
        loaded, so there are no bonds).

    Raises:
        SysfsReadError: The file exists but could not be read.
    """
    path = fs.net_class_path / BONDING_MASTERS
    try:
        content = read_file(path)
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise SysfsReadError(path, exc) from exc
    return content.split()


def _mii_status_path(bonding_dir: Path, prefix: str, slave: str) -> Path:
    return bonding_dir / f"{prefix}_{slave}" / "bonding_slave" / "mii_status"


def _read_mii_status(bonding_dir: Path, slave: str) -> str:
    """Read a slave's mii_status, falling back to the older directory name."""
    path = _mii_status_path(bonding_dir, "lower", slave)
    try:
        return read_file(path)
    except FileNotFoundError:
        # older kernels name the directory slave_{slave}
        log.debug("%s not found, trying slave_%s", path, slave)
    except OSError as exc:
        raise SysfsReadError(path, exc) from exc
    return _read(_mii_status_path(bonding_dir, "slave", slave))


def parse_bond(bonding_dir: str | Path) -> NetClassIfaceBonding:
    """Parse /sys/class/net/{master}/bonding.

    Raises:
        SysfsReadError: The slave list or a slave's mii_status could not
            be read under either naming convention.
    """
    path = Path(bonding_dir)
    slaves: dict[str, NetClassIfaceBondingSlave] = {}
    for name in _read(path / "slaves").split():
        state = _read_mii_status(path, name)
        slaves[name] = NetClassIfaceBondingSlave(
            name=name, mii_status=1 if state == "up" else 0
        )
    return NetClassIfaceBonding(name=path.parent.name, slaves=slaves)


def net_class_bonding(fs: SysFS) -> dict[str, NetClassIfaceBonding]:
    """Parse every bonding master.

    Returns:
        Dict mapping master name to its NetClassIfaceBonding.  Empty when
        no bonds are configured.

    Raises:
        SysfsReadError: On the first hard failure; no partial result.
    """
    masters = net_class_bonding_masters(fs)
    if masters is None:
        return {}
    return {
        master: parse_bond(fs.net_class_path / master / "bonding")
        for master in masters
    }
