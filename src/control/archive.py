"""Extraction of the ``control`` paragraph from a binary package archive.

A ``.deb`` is an ar envelope holding ``debian-binary``, ``control.tar.*``
and ``data.tar.*``. The control member is itself a tarball whose
``./control`` entry holds the package's metadata paragraph.
"""

from __future__ import annotations

import logging
import tarfile

from debian.arfile import ArError
from debian.debfile import DebError, DebFile

logger = logging.getLogger(__name__)

CONTROL_ENTRY = "control"


class ControlArchiveError(RuntimeError):
    """Raised when the control paragraph cannot be read from an archive."""


def read_control_text(path: str, encoding: str = "utf-8") -> str:
    """Return the text of the ``control`` entry inside a ``.deb``.

    Args:
        path: Path to the archive.
        encoding: Encoding of the control file.

    Raises:
        ControlArchiveError: If the file is missing, is not a valid archive,
            or has no control entry.
    """
    try:
        deb = DebFile(filename=path)
    except FileNotFoundError as e:
        raise ControlArchiveError(f"Archive not found: {path}") from e
    except (DebError, ArError, OSError) as e:
        raise ControlArchiveError(f"Not a readable package archive: {path}: {e}") from e

    try:
        try:
            raw = deb.control.get_content(CONTROL_ENTRY)
        except KeyError as e:
            raise ControlArchiveError(f"No {CONTROL_ENTRY} entry in {path}") from e
        except (DebError, tarfile.TarError, OSError) as e:
            raise ControlArchiveError(f"Corrupt control member in {path}: {e}") from e
    finally:
        deb.close()

    if raw is None:
        raise ControlArchiveError(f"No {CONTROL_ENTRY} entry in {path}")
    logger.debug("Read %d bytes of control data from %s", len(raw), path)
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise ControlArchiveError(f"Control entry in {path} is not valid {encoding}: {e}") from e
