"""Tests for reading the control entry out of a .deb archive."""

import pytest

from control import ControlArchiveError, read_control_text

CONTROL = "Package: hello\nVersion: 2.10-3\nArchitecture: amd64\n"


def test_reads_control_entry(make_deb):
    path = make_deb(CONTROL)
    assert read_control_text(path) == CONTROL


def test_missing_archive(tmp_path):
    with pytest.raises(ControlArchiveError, match="not found"):
        read_control_text(str(tmp_path / "absent.deb"))


def test_not_an_archive(tmp_path):
    junk = tmp_path / "junk.deb"
    junk.write_bytes(b"this is not an ar archive\n")
    with pytest.raises(ControlArchiveError):
        read_control_text(str(junk))


def test_archive_without_control_entry(make_deb):
    path = make_deb(control_entries={"./md5sums": b"d41d8cd98f00b204e9800998ecf8427e  usr/bin/hello\n"})
    with pytest.raises(ControlArchiveError, match="No control entry"):
        read_control_text(path)


def test_control_not_utf8(make_deb):
    path = make_deb(control_entries={"./control": b"Package: caf\xe9\n"})
    with pytest.raises(ControlArchiveError, match="not valid utf-8"):
        read_control_text(path)
