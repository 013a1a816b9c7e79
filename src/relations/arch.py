"""Debian architecture tokens.

Architectures are ``abi-os-cpu`` tuples. Short forms imply the missing
parts: ``amd64`` is ``gnu-linux-amd64`` and ``kfreebsd-i386`` is
``gnu-kfreebsd-i386``. ``any`` and ``all`` fill every component with
themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidArchitectureError

ANY = "any"
ALL = "all"

_COMPONENT = re.compile(r"^[a-z0-9_]+$")


@dataclass(frozen=True)
class Arch:
    """A validated architecture tuple."""

    abi: str
    os: str
    cpu: str

    def is_(self, other: "Arch") -> bool:
        """Return True when the two tuples match, treating ``any`` as a wildcard.

        ``all`` is not a wildcard: it only matches ``all`` itself or a
        fully wildcarded ``any``.
        """
        if self.is_all() or other.is_all():
            return (self.is_all() or self.is_any()) and (other.is_all() or other.is_any())
        return (
            _component_matches(self.abi, other.abi)
            and _component_matches(self.os, other.os)
            and _component_matches(self.cpu, other.cpu)
        )

    def is_any(self) -> bool:
        return self.abi == ANY and self.os == ANY and self.cpu == ANY

    def is_all(self) -> bool:
        return self.abi == ALL and self.os == ALL and self.cpu == ALL

    def __str__(self) -> str:
        if self.is_any():
            return ANY
        if self.is_all():
            return ALL
        if self.abi == "gnu":
            if self.os == "linux" and self.cpu not in (ANY, ALL):
                return self.cpu
            return f"{self.os}-{self.cpu}"
        return f"{self.abi}-{self.os}-{self.cpu}"


def _component_matches(left: str, right: str) -> bool:
    return left == ANY or right == ANY or left == right


def parse_arch(token: str) -> Arch:
    """Validate an architecture token and return its canonical tuple.

    Args:
        token: Raw token such as ``amd64``, ``linux-any`` or ``musl-linux-arm64``.

    Returns:
        Arch: The expanded tuple.

    Raises:
        InvalidArchitectureError: If the token is empty, has more than three
            components, or a component is not a lower-case identifier.
    """
    parts = token.split("-")
    if len(parts) > 3 or not all(_COMPONENT.match(p) for p in parts):
        raise InvalidArchitectureError(token)

    if len(parts) == 1:
        if token in (ANY, ALL):
            return Arch(abi=token, os=token, cpu=token)
        return Arch(abi="gnu", os="linux", cpu=token)
    if len(parts) == 2:
        return Arch(abi="gnu", os=parts[0], cpu=parts[1])
    return Arch(abi=parts[0], os=parts[1], cpu=parts[2])
