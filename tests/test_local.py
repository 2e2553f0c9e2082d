"""
Local (disk/ISO) discovery: probe candidates under a mount root.
"""

from pathlib import Path

import pytest

from syslinuxcfg.errors import ConfigNotFound, TransportError
from syslinuxcfg.parser import parse_from_local_directory
from syslinuxcfg.urls import file_url

FIXTURES = Path(__file__).parent / "fixtures"
ISO = FIXTURES / "iso"


def test_fixture_iso():
    images = parse_from_local_directory(ISO)
    assert [img.identifier for img in images] == ["check", "linux", "rescue"]

    wd = file_url(ISO / "boot" / "isolinux")
    check = images[0]
    assert check.display_name == "Test this ^media & install Fixture Linux 9"
    assert check.command_line == "initrd=initrd.img inst.stage2=hd:LABEL=FIXTURE-9 rd.live.check quiet"
    assert str(check.kernel_handle) == f"{wd}/vmlinuz"
    assert str(check.initrd_handle) == f"{wd}/initrd.img"

    rescue = images[2]
    assert rescue.command_line == "inst.stage2=hd:LABEL=FIXTURE-9 inst.rescue quiet"
    assert str(rescue.initrd_handle) == f"{wd}/initrd.img"


def test_fixture_iso_handles_read_content():
    images = parse_from_local_directory(ISO)
    linux = images[1]
    assert linux.kernel_handle.read_at(0, 4) == b"FAKE"
    assert linux.kernel_handle.read_at(5, 6) == b"KERNEL"
    assert linux.initrd_handle.read_at(0, 100) == b"FAKE-INITRD\n"
    # Reads are repeatable
    assert linux.kernel_handle.read_at(0, 4) == b"FAKE"


def test_later_candidate_found(tmp_path):
    (tmp_path / "syslinux").mkdir()
    (tmp_path / "syslinux" / "syslinux.cfg").write_text("label only\nappend ro\n")
    images = parse_from_local_directory(tmp_path)
    assert [img.identifier for img in images] == ["only"]
    assert images[0].command_line == "ro"


def test_root_level_config(tmp_path):
    (tmp_path / "vmlinuz").write_bytes(b"k")
    (tmp_path / "syslinux.cfg").write_text("label root\nkernel vmlinuz\n")
    images = parse_from_local_directory(tmp_path)
    assert str(images[0].kernel_handle) == f"{file_url(tmp_path)}/vmlinuz"


def test_isolinux_preferred_over_syslinux(tmp_path):
    d = tmp_path / "boot" / "isolinux"
    d.mkdir(parents=True)
    (d / "isolinux.cfg").write_text("label iso\n")
    (d / "syslinux.cfg").write_text("label sys\n")
    images = parse_from_local_directory(tmp_path)
    assert [img.identifier for img in images] == ["iso"]


def test_candidate_with_missing_kernel_is_skipped(tmp_path):
    d = tmp_path / "isolinux"
    d.mkdir()
    (d / "isolinux.cfg").write_text("label broken\nkernel no-such-vmlinuz\n")
    (tmp_path / "syslinux.cfg").write_text("label fallback\n")
    images = parse_from_local_directory(tmp_path)
    assert [img.identifier for img in images] == ["fallback"]


def test_empty_config_is_a_result(tmp_path):
    (tmp_path / "isolinux.cfg").write_text("timeout 10\n")
    assert parse_from_local_directory(tmp_path) == []


def test_no_config(tmp_path):
    with pytest.raises(ConfigNotFound) as exc:
        parse_from_local_directory(tmp_path)
    assert "no valid syslinux config found" in str(exc.value)


def test_transport_error_stops_probing(tmp_path, make_fetcher):
    root = file_url(tmp_path)
    fetcher = make_fetcher(
        {f"{root}/syslinux.cfg": "label never\n"},
        broken={f"{root}/isolinux/isolinux.cfg"},
    )
    with pytest.raises(TransportError):
        parse_from_local_directory(tmp_path, fetcher)
    assert f"{root}/syslinux.cfg" not in fetcher.fetched
