"""Exceptions raised while parsing relationship fields.

Every failure is terminal for the parse call that raised it. Each error
carries the character offset at which it was detected so callers can point
at the offending spot in the field body.
"""

from __future__ import annotations

from typing import Optional


class RelationParseError(ValueError):
    """Base class for relationship field parse failures."""

    reason = "invalid relationship field"

    def __init__(self, detail: Optional[str] = None, offset: Optional[int] = None):
        self.detail = detail
        self.offset = offset
        super().__init__(self._format())

    def _format(self) -> str:
        msg = self.reason
        if self.detail:
            msg = f"{msg}: {self.detail}"
        if self.offset is not None:
            msg = f"{msg} (at offset {self.offset})"
        return msg


class MissingNameError(RelationParseError):
    """A term had no characters before a terminator."""

    reason = "missing package name"


class DuplicateVersionConstraintError(RelationParseError):
    """A second version constraint was attached to the same term."""

    reason = "duplicate version constraint"


class DuplicateArchitectureQualifierError(RelationParseError):
    """A second architecture list was attached to the same term."""

    reason = "duplicate architecture qualifier"


class UnknownVersionOperatorError(RelationParseError):
    """Operator text is not one of =, >=, <=, << or >>."""

    reason = "unknown version operator"

    def __init__(self, token: str, offset: Optional[int] = None):
        self.token = token
        super().__init__(repr(token), offset)


class UnexpectedEndOfInputError(RelationParseError):
    """Input ended while a construct still expected characters."""

    reason = "unexpected end of input"

    def __init__(self, context: str, offset: Optional[int] = None):
        self.context = context
        super().__init__(f"in {context}", offset)


class UnexpectedCharacterError(RelationParseError):
    """A character appeared where only a qualifier opener or terminator is valid."""

    reason = "unexpected character in term qualifiers"

    def __init__(self, character: str, offset: Optional[int] = None):
        self.character = character
        super().__init__(repr(character), offset)


class InvalidArchitectureNegationError(RelationParseError):
    """``!`` found inside an architecture token instead of opening the list."""

    reason = "negation must apply to the whole architecture list, not one entry"


class InvalidArchitectureError(RelationParseError):
    """The architecture validator rejected a token."""

    reason = "unknown architecture"

    def __init__(self, token: str, offset: Optional[int] = None):
        self.token = token
        super().__init__(repr(token), offset)
