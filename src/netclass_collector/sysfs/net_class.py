"""Network interface attributes from sysfs.

Reads the per-interface attribute files under /sys/class/net/{iface}/
into one :class:`NetClassIface` record per interface.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .attribute import (
    DEFAULT_SOFT_ERRNOS,
    MalformedValueError,
    SysfsReadError,
    parse_int64,
    read_optional_attribute,
)
from .fs import SysFS


@dataclass(frozen=True)
class NetClassIface:
    """Attributes of one interface in /sys/class/net/{iface}.

    Integer attributes are ``None`` when the file was absent or unreadable,
    which is not the same as a value of zero.
    """

    name: str
    addr_assign_type: int | None = None
    addr_len: int | None = None
    address: str = ""
    broadcast: str = ""
    carrier: int | None = None
    carrier_changes: int | None = None
    carrier_up_count: int | None = None
    carrier_down_count: int | None = None
    dev_id: int | None = None
    dormant: int | None = None
    duplex: str = ""
    flags: int | None = None
    ifalias: str = ""
    ifindex: int | None = None
    iflink: int | None = None
    link_mode: int | None = None
    mtu: int | None = None
    name_assign_type: int | None = None
    netdev_group: int | None = None
    operstate: str = ""
    phys_port_id: str = ""
    phys_port_name: str = ""
    phys_switch_id: str = ""
    speed: int | None = None
    tx_queue_len: int | None = None
    type: int | None = None


def _text(value: str) -> str:
    return value


# Attribute filename -> converter.  Each filename is also the field name
# on NetClassIface.  Files not listed here are ignored.
_ATTRIBUTES: dict[str, Callable[[str], int | str]] = {
    "addr_assign_type": parse_int64,
    "addr_len": parse_int64,
    "address": _text,
    "broadcast": _text,
    "carrier": parse_int64,
    "carrier_changes": parse_int64,
    "carrier_up_count": parse_int64,
    "carrier_down_count": parse_int64,
    "dev_id": parse_int64,
    "dormant": parse_int64,
    "duplex": _text,
    "flags": parse_int64,
    "ifalias": _text,
    "ifindex": parse_int64,
    "iflink": parse_int64,
    "link_mode": parse_int64,
    "mtu": parse_int64,
    "name_assign_type": parse_int64,
    "netdev_group": parse_int64,
    "operstate": _text,
    "phys_port_id": _text,
    "phys_port_name": _text,
    "phys_switch_id": _text,
    "speed": parse_int64,
    "tx_queue_len": parse_int64,
    "type": parse_int64,
}


def _list_dir(path: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(path) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise SysfsReadError(path, exc) from exc


def net_class_devices(fs: SysFS) -> list[str]:
    """List interface names under /sys/class/net.

    Every entry that is not a regular file is an interface; interfaces
    are normally symlinks into /sys/devices.  Regular files such as
    ``bonding_masters`` are skipped.

    Raises:
        SysfsReadError: The directory could not be listed.
    """
    return [
        entry.name
        for entry in _list_dir(fs.net_class_path)
        if not entry.is_file(follow_symlinks=False)
    ]


def parse_net_class_iface(
    device_path: str | Path,
    soft_errnos: frozenset[int] = DEFAULT_SOFT_ERRNOS,
) -> NetClassIface:
    """Parse the attribute files of a single interface directory.

    Args:
        device_path: Path to /sys/class/net/{iface}.
        soft_errnos: errnos on which a single attribute is skipped.

    Returns:
        A NetClassIface named after the directory.

    Raises:
        SysfsReadError: The directory could not be listed, an attribute
            failed with a hard error, or an integer attribute was
            malformed.
    """
    path = Path(device_path)
    fields: dict[str, int | str] = {}

    for entry in _list_dir(path):
        if not entry.is_file(follow_symlinks=False):
            continue
        convert = _ATTRIBUTES.get(entry.name)
        if convert is None:
            continue
        value = read_optional_attribute(entry.path, soft_errnos)
        if value is None:
            continue
        try:
            fields[entry.name] = convert(value)
        except MalformedValueError as exc:
            raise SysfsReadError(entry.path, exc) from exc

    return NetClassIface(name=path.name, **fields)


def net_class_iface(fs: SysFS, name: str) -> NetClassIface:
    """Parse one named interface."""
    return parse_net_class_iface(fs.net_class_path / name, fs.soft_errnos)


def net_class(fs: SysFS) -> dict[str, NetClassIface]:
    """Parse every interface under /sys/class/net.

    Returns:
        Dict mapping interface name to its NetClassIface.

    Raises:
        SysfsReadError: On the first hard failure; no partial result.
    """
    return {name: net_class_iface(fs, name) for name in net_class_devices(fs)}
