"""Parsing of Debian relationship fields (Depends, Recommends, ...).

Typical use::

    from relations import parse

    dep = parse("libc6 (>= 2.34), default-mta | mail-transport-agent")
"""

from .arch import Arch, parse_arch
from .cursor import Cursor
from .errors import (
    DuplicateArchitectureQualifierError,
    DuplicateVersionConstraintError,
    InvalidArchitectureError,
    InvalidArchitectureNegationError,
    MissingNameError,
    RelationParseError,
    UnexpectedCharacterError,
    UnexpectedEndOfInputError,
    UnknownVersionOperatorError,
)
from .models import ArchitectureSet, Dependency, Possibility, Relation, VersionConstraint
from .parser import parse
from .satisfy import possibility_satisfied, relation_satisfied, unsatisfied_relations
from .version import compare_versions, version_satisfies

__all__ = [
    "Arch",
    "ArchitectureSet",
    "Cursor",
    "Dependency",
    "DuplicateArchitectureQualifierError",
    "DuplicateVersionConstraintError",
    "InvalidArchitectureError",
    "InvalidArchitectureNegationError",
    "MissingNameError",
    "Possibility",
    "Relation",
    "RelationParseError",
    "UnexpectedCharacterError",
    "UnexpectedEndOfInputError",
    "UnknownVersionOperatorError",
    "VersionConstraint",
    "compare_versions",
    "parse",
    "parse_arch",
    "possibility_satisfied",
    "relation_satisfied",
    "unsatisfied_relations",
    "version_satisfies",
]
