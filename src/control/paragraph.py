"""Decoding of a control paragraph into a typed record.

Record attributes are mapped to paragraph fields by tag. The tag is taken
from the dataclass field metadata (``metadata={"control": "Installed-Size"}``)
or derived from the attribute name (``pre_depends`` -> ``Pre-Depends``).
The ``kind`` metadata selects the value decoder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Iterable, Optional

from debian.deb822 import Deb822
from debian.debian_support import Version

from relations import Arch, Dependency, RelationParseError, parse, parse_arch

from .archive import read_control_text

logger = logging.getLogger(__name__)


class ControlDecodeError(ValueError):
    """Raised when a control field cannot be decoded into its typed slot."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(f"{field_name}: {message}")


def _relationship(**extra: Any) -> Any:
    return field(default_factory=Dependency, metadata={"kind": "dependency", **extra})


@dataclass
class PackageControl:
    """Metadata of one binary package as found in its control file."""

    package: str = ""
    version: Optional[Version] = field(default=None, metadata={"kind": "version"})
    architecture: Optional[Arch] = field(default=None, metadata={"kind": "arch"})
    maintainer: str = ""
    installed_size: Optional[int] = field(
        default=None, metadata={"control": "Installed-Size", "kind": "int"}
    )
    depends: Dependency = _relationship()
    pre_depends: Dependency = _relationship()
    recommends: Dependency = _relationship()
    suggests: Dependency = _relationship()
    enhances: Dependency = _relationship()
    breaks: Dependency = _relationship()
    conflicts: Dependency = _relationship()
    replaces: Dependency = _relationship()
    provides: Dependency = _relationship()
    built_using: Dependency = _relationship(control="Built-Using")
    section: str = ""
    priority: str = ""
    homepage: str = ""
    description: str = ""
    # Every field of the paragraph, typed slot or not.
    paragraph: Deb822 = field(default_factory=Deb822, metadata={"kind": "raw"})

    def relationship_fields(
        self, names: Iterable[str], max_field_length: Optional[int] = None
    ) -> Dict[str, Dependency]:
        """Parse the named relationship fields present in the paragraph.

        Names are matched case-insensitively and may include fields without
        a typed slot, such as ``Build-Depends``.

        Raises:
            ControlDecodeError: If a present field fails to parse or is longer
                than ``max_field_length``.
        """
        result: Dict[str, Dependency] = {}
        for name in names:
            if name not in self.paragraph:
                continue
            value = self.paragraph[name]
            _check_field_length(name, value, max_field_length)
            result[name] = _decode_dependency(name, value)
        return result


def control_tag(attr_name: str, metadata: Any = None) -> str:
    """Return the paragraph field name an attribute maps to."""
    if metadata and "control" in metadata:
        return metadata["control"]
    return "-".join(part.capitalize() for part in attr_name.split("_"))


def _check_field_length(name: str, value: str, limit: Optional[int]) -> None:
    if limit is not None and len(value) > limit:
        raise ControlDecodeError(name, f"field is {len(value)} characters long; limit is {limit}")


def _decode_dependency(name: str, value: str) -> Dependency:
    try:
        return parse(value)
    except RelationParseError as e:
        raise ControlDecodeError(name, str(e)) from e


def _decode_version(name: str, value: str) -> Version:
    try:
        return Version(value.strip())
    except ValueError as e:
        raise ControlDecodeError(name, f"invalid version {value!r}") from e


def _decode_arch(name: str, value: str) -> Arch:
    try:
        return parse_arch(value.strip())
    except RelationParseError as e:
        raise ControlDecodeError(name, str(e)) from e


def _decode_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as e:
        raise ControlDecodeError(name, f"expected an integer, got {value!r}") from e


def _decode_str(_name: str, value: str) -> str:
    return value


_DECODERS: Dict[str, Callable[[str, str], Any]] = {
    "str": _decode_str,
    "int": _decode_int,
    "version": _decode_version,
    "arch": _decode_arch,
    "dependency": _decode_dependency,
}


def decode_control(text: str, max_field_length: Optional[int] = None) -> PackageControl:
    """Decode the first paragraph of ``text`` into a PackageControl.

    Fields absent from the paragraph keep their defaults. With
    ``max_field_length`` set, relationship fields longer than that are
    rejected before they are parsed.

    Raises:
        ControlDecodeError: If the paragraph is empty or a field is malformed.
    """
    para = Deb822(text)
    if not para:
        raise ControlDecodeError("Package", "empty control paragraph")

    values: Dict[str, Any] = {"paragraph": para}
    for f in fields(PackageControl):
        kind = f.metadata.get("kind", "str")
        if kind == "raw":
            continue
        tag = control_tag(f.name, f.metadata)
        if tag not in para:
            continue
        if kind == "dependency":
            _check_field_length(tag, para[tag], max_field_length)
        values[f.name] = _DECODERS[kind](tag, para[tag])

    control = PackageControl(**values)
    logger.debug("Decoded control paragraph for %s", control.package or "<unnamed>")
    return control


def load_deb(path: str) -> PackageControl:
    """Read and decode the control paragraph of the ``.deb`` at ``path``."""
    return decode_control(read_control_text(path))
