"""Shared fixtures: .deb archive builder and isolation of global settings."""

import io
import logging
import tarfile

import pytest

from constants import Constants
from common.logging_utils import _FILE_HANDLER_FLAG, _HANDLER_FLAG

_TUNABLES = (
    "MAX_INPUT_LENGTH",
    "DEPENDENCY_FIELDS",
    "REQUEST_TIMEOUT",
    "DEFAULT_CONFIG_PATHS",
)


def _ar_member(name, data):
    header = (
        name.encode("ascii").ljust(16)
        + b"0".ljust(12)
        + b"0".ljust(6)
        + b"0".ljust(6)
        + b"100644".ljust(8)
        + str(len(data)).encode("ascii").ljust(10)
        + b"`\n"
    )
    padding = b"\n" if len(data) % 2 else b""
    return header + data + padding


def _tar_gz(entries):
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, content in entries.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mtime = 0
            tar.addfile(info, io.BytesIO(content))
    return buf.getvalue()


@pytest.fixture
def make_deb(tmp_path):
    """Return a factory writing a minimal binary package archive.

    The archive has the standard ar layout: debian-binary, control.tar.gz
    (holding ./control unless ``control_entries`` overrides it) and an empty
    data.tar.gz.
    """
    def _make(control_text=None, name="pkg.deb", control_entries=None):
        if control_entries is None:
            control_entries = {"./control": control_text.encode("utf-8")}
        blob = (
            b"!<arch>\n"
            + _ar_member("debian-binary", b"2.0\n")
            + _ar_member("control.tar.gz", _tar_gz(control_entries))
            + _ar_member("data.tar.gz", _tar_gz({}))
        )
        path = tmp_path / name
        path.write_bytes(blob)
        return str(path)

    return _make


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch, tmp_path):
    """Keep Constants, config discovery and root handlers from leaking between tests."""
    for attr in _TUNABLES:
        value = getattr(Constants, attr)
        monkeypatch.setattr(Constants, attr, list(value) if isinstance(value, list) else value)
    monkeypatch.setattr(Constants, "DEFAULT_CONFIG_PATHS", [str(tmp_path / "debdep.yml")])
    monkeypatch.delenv(Constants.CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(Constants.LOG_LEVEL_ENV_VAR, raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_FLAG, False) or getattr(handler, _FILE_HANDLER_FLAG, False):
            root.removeHandler(handler)
            handler.close()
