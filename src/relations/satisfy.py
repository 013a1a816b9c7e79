"""Evaluation of parsed relationships against a set of available packages.

``available`` maps a package name to the versions on offer. A name mapped to
``None`` is present at an unknown version and satisfies any constraint.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from .arch import Arch
from .models import Dependency, Possibility, Relation
from .version import VersionLike

Available = Mapping[str, Optional[Iterable[VersionLike]]]


def possibility_satisfied(possibility: Possibility, available: Available) -> bool:
    """Return True if some available version of ``possibility.name`` meets its constraint."""
    if possibility.name not in available:
        return False
    versions = available[possibility.name]
    if possibility.version is None or versions is None:
        return True
    return any(possibility.version.satisfied_by(v) for v in versions)


def relation_satisfied(
    relation: Relation,
    available: Available,
    arch: Optional[Arch] = None,
) -> bool:
    """Return True if any alternative applicable on ``arch`` is satisfied.

    Alternatives whose architecture qualifier excludes ``arch`` are dropped
    first; a relation left with no alternatives does not apply and counts as
    satisfied. With ``arch`` unset, qualifiers are ignored.
    """
    candidates = [
        p for p in relation
        if arch is None or p.applies_to(arch)
    ]
    if not candidates:
        return True
    return any(possibility_satisfied(p, available) for p in candidates)


def unsatisfied_relations(
    dependency: Dependency,
    available: Available,
    arch: Optional[Arch] = None,
) -> List[Relation]:
    """Return the relations of ``dependency`` that ``available`` does not satisfy, in order."""
    return [r for r in dependency if not relation_satisfied(r, available, arch)]
