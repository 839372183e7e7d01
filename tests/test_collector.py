"""Tests for the exporter entry points that do not start a server."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from netclass_collector.collector import build_registry, dump_netclass, run_exporter
from netclass_collector.config import CollectorConfig
from netclass_collector.sysfs.attribute import SysfsError
from netclass_collector.sysfs.fs import SysFS


@pytest.fixture()
def fake_sys(tmp_path: Path) -> Path:
    """Create a fake /sys tree with one bond of two slaves."""
    net = tmp_path / "class" / "net"
    for iface, mtu in [("bond0", "1500"), ("eth0", "1500"), ("eth1", "9000")]:
        (net / iface).mkdir(parents=True)
        (net / iface / "mtu").write_text(f"{mtu}\n")
        (net / iface / "operstate").write_text("up\n")
    (net / "bonding_masters").write_text("bond0\n")
    bonding = net / "bond0" / "bonding"
    bonding.mkdir()
    (bonding / "slaves").write_text("eth0 eth1\n")
    for slave, status in [("eth0", "up"), ("eth1", "down")]:
        status_dir = bonding / f"lower_{slave}" / "bonding_slave"
        status_dir.mkdir(parents=True)
        (status_dir / "mii_status").write_text(f"{status}\n")
    return tmp_path


class TestBuildRegistry:
    """Tests for build_registry()."""

    def test_namespace(self, fake_sys: Path) -> None:
        registry = build_registry(SysFS(fake_sys), namespace="host")
        assert registry.get_sample_value("host_bonding_slaves", {"master": "bond0"}) == 2.0
        assert registry.get_sample_value("host_bonding_active", {"master": "bond0"}) == 1.0


class TestDumpNetclass:
    """Tests for dump_netclass()."""

    def test_json(self, fake_sys: Path) -> None:
        data = json.loads(dump_netclass(SysFS(fake_sys)))
        assert set(data) == {"bond0", "eth0", "eth1"}
        assert data["eth1"]["mtu"] == 9000
        assert data["eth1"]["speed"] is None
        assert data["eth1"]["name"] == "eth1"


class TestRunExporter:
    """Tests for run_exporter() in its one-shot modes."""

    def test_once(self, fake_sys: Path, capsys: pytest.CaptureFixture[str]) -> None:
        run_exporter(CollectorConfig(sysfs_root=fake_sys, once=True))
        out = capsys.readouterr().out
        assert 'node_bonding_slaves{master="bond0"} 2.0' in out
        assert 'node_bonding_active{master="bond0"} 1.0' in out
        assert 'node_scrape_collector_success{collector="bonding"} 1.0' in out

    def test_once_without_bonds(
        self, fake_sys: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (fake_sys / "class" / "net" / "bonding_masters").unlink()
        run_exporter(CollectorConfig(sysfs_root=fake_sys, once=True))
        out = capsys.readouterr().out
        assert "node_bonding_slaves{" not in out
        assert 'node_scrape_collector_success{collector="bonding"} 1.0' in out

    def test_dump_netclass(
        self, fake_sys: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run_exporter(CollectorConfig(sysfs_root=fake_sys, dump_netclass=True))
        data = json.loads(capsys.readouterr().out)
        assert data["bond0"]["operstate"] == "up"

    def test_bad_mount_point(self, tmp_path: Path) -> None:
        with pytest.raises(SysfsError):
            run_exporter(CollectorConfig(sysfs_root=tmp_path / "nonexistent", once=True))
