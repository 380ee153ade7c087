"""Failure predicates for in-band sentinel return values.

Every check is strict: an empty string, ``0`` or an empty mapping are valid
results and never match ``False``.
"""

from __future__ import annotations

from typing import Any

from safecall.domain.ports import FailurePredicate


def is_false(result: Any) -> bool:
    return result is False


def is_none(result: Any) -> bool:
    return result is None


def equals(sentinel: Any) -> FailurePredicate:
    """Match results of exactly the sentinel's type that compare equal to it.

    ``equals(-1)`` matches ``-1`` but not ``-1.0`` or ``True``-like values.
    """

    def _predicate(result: Any) -> bool:
        return type(result) is type(sentinel) and result == sentinel

    _predicate.__name__ = f"equals({sentinel!r})"
    return _predicate


def any_of(*predicates: FailurePredicate) -> FailurePredicate:
    """Combine predicates for primitives with more than one sentinel."""

    def _predicate(result: Any) -> bool:
        return any(check(result) for check in predicates)

    return _predicate


__all__ = ["any_of", "equals", "is_false", "is_none"]
