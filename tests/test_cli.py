"""Tests for CLI argument parsing and configuration."""

from __future__ import annotations

import errno
from pathlib import Path

import pytest

from netclass_collector.cli import main, parse_args
from netclass_collector.config import CollectorConfig, parse_errno
from netclass_collector.sysfs.attribute import DEFAULT_SOFT_ERRNOS


class TestParseErrno:
    """Tests for parse_errno()."""

    def test_name(self) -> None:
        assert parse_errno("EIO") == errno.EIO

    def test_lowercase_name(self) -> None:
        assert parse_errno("enodev") == errno.ENODEV

    def test_number(self) -> None:
        assert parse_errno("5") == 5

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            parse_errno("ENOTANERRNO")

    def test_non_errno_attribute(self) -> None:
        with pytest.raises(ValueError):
            parse_errno("errorcode")


class TestParseArgs:
    """Tests for parse_args()."""

    def test_defaults(self) -> None:
        config = parse_args([])
        assert config == CollectorConfig()
        assert config.sysfs_root == Path("/sys")
        assert config.listen_port == 9100
        assert config.soft_errnos == DEFAULT_SOFT_ERRNOS

    def test_options(self, tmp_path: Path) -> None:
        config = parse_args(
            [
                "--sysfs-root",
                str(tmp_path),
                "--listen-address",
                "127.0.0.1",
                "-p",
                "9200",
                "--namespace",
                "host",
                "--log-level",
                "debug",
                "--once",
            ]
        )
        assert config.sysfs_root == tmp_path
        assert config.listen_address == "127.0.0.1"
        assert config.listen_port == 9200
        assert config.namespace == "host"
        assert config.log_level == "DEBUG"
        assert config.once is True
        assert config.dump_netclass is False

    def test_soft_errno_extends_defaults(self) -> None:
        config = parse_args(["--soft-errno", "EIO", "--soft-errno", "ENODEV"])
        assert config.soft_errnos == DEFAULT_SOFT_ERRNOS | {errno.EIO, errno.ENODEV}

    def test_invalid_soft_errno(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--soft-errno", "ENOTANERRNO"])


class TestMain:
    """Tests for main()."""

    def test_once(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "class" / "net" / "lo").mkdir(parents=True)
        main(["--sysfs-root", str(tmp_path), "--once"])
        assert "node_scrape_collector_success" in capsys.readouterr().out

    def test_bad_mount_point_exits_1(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--sysfs-root", str(tmp_path / "nonexistent"), "--once"])
        assert excinfo.value.code == 1
