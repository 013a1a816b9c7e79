"""Data models for parsed relationship fields.

A field such as ``Depends`` is an AND-list of relations; each relation is an
OR-list of possibilities. Instances are immutable and built once per parse.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

from .arch import Arch
from .version import VersionLike, version_satisfies


@dataclass(frozen=True)
class VersionConstraint:
    """A ``(OP NUMBER)`` qualifier. The number is kept as opaque text."""

    operator: str
    number: str

    def satisfied_by(self, version: VersionLike) -> bool:
        """Return True if ``version`` satisfies this constraint under dpkg ordering."""
        return version_satisfies(version, self.operator, self.number)

    def to_dict(self) -> Dict[str, Any]:
        return {"operator": self.operator, "number": self.number}


@dataclass(frozen=True)
class ArchitectureSet:
    """A ``[!? ARCH ...]`` qualifier; ``negated`` applies to the whole list."""

    negated: bool = False
    architectures: Tuple[Arch, ...] = ()

    def matches(self, arch: Arch) -> bool:
        """Return True if a term carrying this qualifier applies on ``arch``.

        An empty list applies everywhere.
        """
        if not self.architectures:
            return True
        hit = any(entry.is_(arch) for entry in self.architectures)
        return not hit if self.negated else hit

    def to_dict(self) -> Dict[str, Any]:
        return {
            "negated": self.negated,
            "architectures": [str(a) for a in self.architectures],
        }


@dataclass(frozen=True)
class Possibility:
    """One candidate term of a relation."""

    name: str
    version: Optional[VersionConstraint] = None
    architectures: Optional[ArchitectureSet] = None
    # Reserved for build-profile qualifiers; the grammar never fills it.
    stages: Tuple[str, ...] = field(default=())

    def applies_to(self, arch: Arch) -> bool:
        if self.architectures is None:
            return True
        return self.architectures.matches(arch)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version.to_dict() if self.version else None,
            "architectures": self.architectures.to_dict() if self.architectures else None,
            "stages": list(self.stages),
        }


@dataclass(frozen=True)
class Relation:
    """OR-list of possibilities, in preference order."""

    possibilities: Tuple[Possibility, ...]

    def __iter__(self) -> Iterator[Possibility]:
        return iter(self.possibilities)

    def __len__(self) -> int:
        return len(self.possibilities)

    def to_dict(self) -> Dict[str, Any]:
        return {"possibilities": [p.to_dict() for p in self.possibilities]}


@dataclass(frozen=True)
class Dependency:
    """AND-list of relations for one metadata field. May be empty."""

    relations: Tuple[Relation, ...] = ()

    def __iter__(self) -> Iterator[Relation]:
        return iter(self.relations)

    def __len__(self) -> int:
        return len(self.relations)

    def to_dict(self) -> Dict[str, Any]:
        return {"relations": [r.to_dict() for r in self.relations]}
