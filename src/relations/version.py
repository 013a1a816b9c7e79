"""Debian version ordering used by relationship consumers.

The parser stores version numbers as opaque text; comparison is delegated
to python-debian's implementation of the dpkg ordering rules.
"""

from __future__ import annotations

from typing import Union

from debian.debian_support import Version

VersionLike = Union[str, Version]

OPERATORS = ("=", ">=", "<=", "<<", ">>")


def _as_version(value: VersionLike) -> Version:
    if isinstance(value, Version):
        return value
    return Version(value.strip())


def compare_versions(left: VersionLike, right: VersionLike) -> int:
    """Return -1, 0 or 1 as ``left`` sorts before, equal to or after ``right``.

    Strings are stripped first, so a parsed number such as ``"1.0 "`` compares
    as ``1.0``.
    """
    a = _as_version(left)
    b = _as_version(right)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def version_satisfies(candidate: VersionLike, operator: str, number: VersionLike) -> bool:
    """Check ``candidate OP number`` with dpkg semantics.

    ``<<`` and ``>>`` are strict, ``<=`` and ``>=`` inclusive.

    Raises:
        ValueError: If ``operator`` is not a relationship operator.
    """
    cmp = compare_versions(candidate, number)
    if operator == "=":
        return cmp == 0
    if operator == ">=":
        return cmp >= 0
    if operator == "<=":
        return cmp <= 0
    if operator == ">>":
        return cmp > 0
    if operator == "<<":
        return cmp < 0
    raise ValueError(f"Unknown version operator {operator!r}")
