"""Handle on a mounted sysfs tree."""

from __future__ import annotations

from pathlib import Path

from .attribute import DEFAULT_SOFT_ERRNOS, SysfsError

DEFAULT_MOUNT_POINT = "/sys"

_NET_CLASS_PATH = "class/net"


class SysFS:
    """A sysfs mount point plus the soft-error policy used to read it.

    Tests point ``mount_point`` at a fake tree under ``tmp_path``.
    """

    def __init__(
        self,
        mount_point: str | Path = DEFAULT_MOUNT_POINT,
        soft_errnos: frozenset[int] = DEFAULT_SOFT_ERRNOS,
    ) -> None:
        root = Path(mount_point)
        if not root.is_dir():
            raise SysfsError(f"could not read {str(root)!r}: not a directory")
        self.mount_point = root
        self.soft_errnos = frozenset(soft_errnos)

    def __repr__(self) -> str:
        return f"SysFS({str(self.mount_point)!r})"

    def path(self, *parts: str) -> Path:
        """Return ``parts`` joined below the mount point."""
        return self.mount_point.joinpath(*parts)

    @property
    def net_class_path(self) -> Path:
        """Directory holding one entry per network interface."""
        return self.path(_NET_CLASS_PATH)
