"""Single-attribute reads from sysfs.

Each sysfs attribute is a small text file holding one value.  Reads are
classified into two tiers: *soft* conditions (the attribute is missing,
unreadable, or the driver refuses the operation) which callers skip, and
*hard* failures which abort the enclosing parse.
"""

from __future__ import annotations

import errno
import logging
from pathlib import Path

log = logging.getLogger(__name__)

# errnos that mean "this attribute is not available right now".  Drivers
# return EOPNOTSUPP or EINVAL for attributes such as ``speed`` or
# ``duplex`` while the link is down.
DEFAULT_SOFT_ERRNOS: frozenset[int] = frozenset(
    {
        errno.ENOENT,
        errno.EACCES,
        errno.EPERM,
        errno.EOPNOTSUPP,
        errno.EINVAL,
    }
)

# sysfs attributes never exceed one page
_MAX_ATTRIBUTE_SIZE = 4096

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class SysfsError(Exception):
    """Base class for errors raised while reading sysfs."""


class SysfsReadError(SysfsError):
    """A hard failure reading ``path``; the enclosing parse is aborted."""

    def __init__(self, path: str | Path, cause: object) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"failed to read {self.path!r}: {cause}")


class AttributeSkipped(SysfsError):
    """A soft condition on a single attribute; callers skip the field."""

    def __init__(self, path: str | Path, err: int) -> None:
        self.path = str(path)
        self.errno = err
        super().__init__(f"skipped {self.path!r}: {errno.errorcode.get(err, err)}")


class MalformedValueError(SysfsError, ValueError):
    """An attribute held text that is not a signed 64-bit integer."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid int64 value {value!r}")


def read_file(path: str | Path) -> str:
    """Read a sysfs file and return its whitespace-trimmed contents.

    Raises the underlying ``OSError`` unchanged.
    """
    with open(path, "rb") as f:
        data = f.read(_MAX_ATTRIBUTE_SIZE)
    return data.decode("utf-8", errors="replace").strip()


def read_attribute(
    path: str | Path,
    soft_errnos: frozenset[int] = DEFAULT_SOFT_ERRNOS,
) -> str:
    """Read one attribute, classifying failures by errno.

    Args:
        path: Full path to the attribute file.
        soft_errnos: errnos treated as "skip this attribute".

    Returns:
        The trimmed attribute text.

    Raises:
        AttributeSkipped: The read failed with an errno in ``soft_errnos``.
        SysfsReadError: Any other I/O failure.
    """
    try:
        return read_file(path)
    except OSError as exc:
        if exc.errno in soft_errnos:
            raise AttributeSkipped(path, exc.errno) from exc
        raise SysfsReadError(path, exc) from exc


def read_optional_attribute(
    path: str | Path,
    soft_errnos: frozenset[int] = DEFAULT_SOFT_ERRNOS,
) -> str | None:
    """Like :func:`read_attribute`, but return ``None`` on a soft condition."""
    try:
        return read_attribute(path, soft_errnos)
    except AttributeSkipped as exc:
        log.debug("%s", exc)
        return None


def parse_int64(value: str) -> int:
    """Convert sysfs text to a signed 64-bit integer.

    The base is taken from the prefix: ``0x`` hexadecimal, ``0o`` or a
    bare leading ``0`` octal, ``0b`` binary, decimal otherwise.

    Raises:
        MalformedValueError: ``value`` is not an integer or does not fit
            in 64 bits.
    """
    text = value.strip()
    digits = text.lstrip("+-")
    try:
        if len(digits) > 1 and digits[0] == "0" and digits[1].isdigit():
            number = int(text, 8)
        else:
            number = int(text, 0)
    except ValueError:
        raise MalformedValueError(value) from None
    if not INT64_MIN <= number <= INT64_MAX:
        raise MalformedValueError(value)
    return number


def parse_optional_int64(value: str | None) -> int | None:
    """Convert optional sysfs text; ``None`` (absent) stays ``None``."""
    if value is None:
        return None
    return parse_int64(value)
