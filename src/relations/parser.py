"""Recursive-descent parser for Debian relationship fields.

Grammar, outermost first::

    dependency  := relation ("," relation)*
    relation    := possibility ("|" possibility)*
    possibility := NAME (" "+ controller)*
    controller  := "(" OP NUMBER ")" | "[" "!"? ARCH* "]"

Only a space after the name opens the qualifier section, so ``foo(>= 1)``
is a single name. Each possibility takes at most one version and one
architecture qualifier, in either order.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from common.logging_utils import Timer, extra_context, is_debug_enabled

from .arch import Arch, parse_arch
from .cursor import EOF_MARK, Cursor, skip_whitespace
from .errors import (
    DuplicateArchitectureQualifierError,
    DuplicateVersionConstraintError,
    InvalidArchitectureError,
    InvalidArchitectureNegationError,
    MissingNameError,
    UnexpectedCharacterError,
    UnexpectedEndOfInputError,
    UnknownVersionOperatorError,
)
from .models import ArchitectureSet, Dependency, Possibility, Relation, VersionConstraint
from .version import OPERATORS

logger = logging.getLogger(__name__)

ArchParser = Callable[[str], Arch]

_TERMINATORS = frozenset({",", "|", EOF_MARK})
_NAME_STOP = _TERMINATORS | {" "}
_ARCH_STOP = frozenset({"]", " "})


class _Term:
    """Possibility under construction."""

    __slots__ = ("version", "architectures")

    def __init__(self):
        self.version: Optional[VersionConstraint] = None
        self.architectures: Optional[ArchitectureSet] = None


def parse(text: str, arch_parser: ArchParser = parse_arch) -> Dependency:
    """Parse a relationship field body such as ``"foo, bar (>= 1.0) | baz"``.

    Args:
        text: The field body. Empty or all-whitespace input is valid.
        arch_parser: Validator turning an architecture token into an Arch.

    Returns:
        Dependency: The parsed AND-of-ORs expression.

    Raises:
        RelationParseError: On the first grammar violation; no partial
            result is returned.
    """
    cursor = Cursor(text)
    with Timer() as t:
        relations = _parse_dependency(cursor, arch_parser)
    dependency = Dependency(relations=tuple(relations))
    if is_debug_enabled(logger):
        logger.debug(
            "Parsed relationship field",
            extra=extra_context(
                event="parse",
                component="relations",
                action="parse",
                outcome="success",
                length=len(text),
                count=len(dependency),
                duration_ms=t.duration_ms(),
            ),
        )
    return dependency


def _parse_dependency(cursor: Cursor, arch_parser: ArchParser) -> List[Relation]:
    skip_whitespace(cursor)
    relations: List[Relation] = []
    while True:
        char = cursor.peek()
        if char is EOF_MARK:
            return relations
        if char == ",":
            cursor.advance()
            skip_whitespace(cursor)
            continue
        relations.append(_parse_relation(cursor, arch_parser))


def _parse_relation(cursor: Cursor, arch_parser: ArchParser) -> Relation:
    skip_whitespace(cursor)
    possibilities: List[Possibility] = []
    while True:
        char = cursor.peek()
        if char is EOF_MARK or char == ",":
            # The comma belongs to the dependency level.
            if not possibilities:
                raise MissingNameError("relation has no alternatives", offset=cursor.index)
            return Relation(possibilities=tuple(possibilities))
        if char == "|":
            cursor.advance()
            skip_whitespace(cursor)
            continue
        possibilities.append(_parse_possibility(cursor, arch_parser))


def _parse_possibility(cursor: Cursor, arch_parser: ArchParser) -> Possibility:
    skip_whitespace(cursor)
    start = cursor.index
    while cursor.peek() not in _NAME_STOP:
        cursor.advance()
    name = cursor.slice(start)
    if not name:
        raise MissingNameError(offset=start)

    term = _Term()
    if cursor.peek() == " ":
        _parse_controllers(cursor, term, arch_parser)

    return Possibility(
        name=name,
        version=term.version,
        architectures=term.architectures,
    )


def _parse_controllers(cursor: Cursor, term: _Term, arch_parser: ArchParser) -> None:
    while True:
        skip_whitespace(cursor)
        char = cursor.peek()
        if char in _TERMINATORS:
            return
        if char == "(":
            if term.version is not None:
                raise DuplicateVersionConstraintError(offset=cursor.index)
            term.version = _parse_version(cursor)
            continue
        if char == "[":
            if term.architectures is not None:
                raise DuplicateArchitectureQualifierError(offset=cursor.index)
            term.architectures = _parse_architectures(cursor, arch_parser)
            continue
        raise UnexpectedCharacterError(char, offset=cursor.index)


def _parse_version(cursor: Cursor) -> VersionConstraint:
    cursor.advance()  # (
    operator = _parse_operator(cursor)
    number = _parse_number(cursor)
    # _parse_number only returns when the next character is ")".
    cursor.advance()
    return VersionConstraint(operator=operator, number=number)


def _parse_operator(cursor: Cursor) -> str:
    skip_whitespace(cursor)
    start = cursor.index
    leader = cursor.advance()
    if leader == "=":
        return "="

    trailer = cursor.advance()
    if leader is EOF_MARK or trailer is EOF_MARK:
        raise UnexpectedEndOfInputError("version operator", offset=cursor.index)

    operator = leader + trailer
    if operator not in OPERATORS:
        raise UnknownVersionOperatorError(operator, offset=start)
    return operator


def _parse_number(cursor: Cursor) -> str:
    skip_whitespace(cursor)
    start = cursor.index
    while True:
        char = cursor.peek()
        if char is EOF_MARK:
            raise UnexpectedEndOfInputError("version number", offset=cursor.index)
        if char == ")":
            return cursor.slice(start)
        cursor.advance()


def _parse_architectures(cursor: Cursor, arch_parser: ArchParser) -> ArchitectureSet:
    cursor.advance()  # [
    negated = False
    if cursor.peek() == "!":
        cursor.advance()
        negated = True

    arches: List[Arch] = []
    while True:
        char = cursor.peek()
        if char is EOF_MARK:
            raise UnexpectedEndOfInputError("architecture list", offset=cursor.index)
        if char == "]":
            cursor.advance()
            return ArchitectureSet(negated=negated, architectures=tuple(arches))
        arch = _parse_arch_token(cursor, arch_parser)
        if arch is not None:
            arches.append(arch)


def _parse_arch_token(cursor: Cursor, arch_parser: ArchParser) -> Optional[Arch]:
    skip_whitespace(cursor)
    start = cursor.index
    while True:
        char = cursor.peek()
        if char is EOF_MARK:
            raise UnexpectedEndOfInputError("architecture list", offset=cursor.index)
        if char == "!":
            raise InvalidArchitectureNegationError(offset=cursor.index)
        if char in _ARCH_STOP:
            break
        cursor.advance()

    token = cursor.slice(start)
    if not token:
        # Whitespace directly before "]".
        return None
    try:
        return arch_parser(token)
    except InvalidArchitectureError as exc:
        raise InvalidArchitectureError(exc.token, offset=start) from exc
