"""Reading binary package metadata out of ``.deb`` archives."""

from .archive import ControlArchiveError, read_control_text
from .paragraph import ControlDecodeError, PackageControl, decode_control, load_deb

__all__ = [
    "ControlArchiveError",
    "ControlDecodeError",
    "PackageControl",
    "decode_control",
    "load_deb",
    "read_control_text",
]
