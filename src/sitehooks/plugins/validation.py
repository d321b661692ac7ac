"""Kind checks for plugin contributions.

:func:`assert_types` is the single gate every hook and option
contribution passes through before it is tapped. It never raises for a
mismatch and never touches registry state; it just says whether the
value fits and, if not, why.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple


class Kind(str, enum.Enum):
    """Shapes a contribution may take."""

    CALLABLE = "callable"
    SEQUENCE = "sequence"
    RECORD = "record"
    TEXT = "text"
    CALLABLE_SEQUENCE = "sequence of callables"
    TEXT_SEQUENCE = "sequence of text"


class TypeCheck(NamedTuple):
    """Outcome of :func:`assert_types`. ``message`` is empty when valid."""

    valid: bool
    message: str = ""


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def matches(value: Any, kind: Kind) -> bool:
    """Return ``True`` if *value* has the shape described by *kind*."""
    if kind is Kind.CALLABLE:
        return callable(value)
    if kind is Kind.SEQUENCE:
        return _is_sequence(value)
    if kind is Kind.RECORD:
        return isinstance(value, Mapping)
    if kind is Kind.TEXT:
        return isinstance(value, str)
    if kind is Kind.CALLABLE_SEQUENCE:
        return _is_sequence(value) and all(callable(item) for item in value)
    if kind is Kind.TEXT_SEQUENCE:
        return _is_sequence(value) and all(isinstance(item, str) for item in value)
    raise ValueError(f"Unknown kind: {kind!r}")


def describe_kind(value: Any) -> str:
    """Return the observed kind of *value* for diagnostics.

    Falls back to the Python type name when the value fits none of the
    known kinds (e.g. ``int``). Non-empty sequences also name the kinds of
    their items, e.g. ``"sequence of callable, int"``.
    """
    if value is None:
        return "nothing"
    if isinstance(value, str):
        return Kind.TEXT.value
    if isinstance(value, Mapping):
        return Kind.RECORD.value
    if _is_sequence(value):
        if not value:
            return Kind.SEQUENCE.value
        item_kinds = sorted({describe_kind(item) for item in value})
        return f"sequence of {', '.join(item_kinds)}"
    if callable(value):
        return Kind.CALLABLE.value
    return type(value).__name__


def assert_types(value: Any, kinds: Iterable[Kind]) -> TypeCheck:
    """Check *value* against a set of accepted kinds.

    ``None`` (nothing contributed) is always acceptable. Otherwise the
    value must match at least one of *kinds*.

    Args:
        value: The contributed value.
        kinds: Non-empty collection of accepted :class:`Kind` members.

    Returns:
        A :class:`TypeCheck`. On mismatch ``message`` reads like
        ``"expected callable or sequence of callables, got int"``.

    Raises:
        ValueError: If *kinds* is empty.
    """
    kinds = tuple(kinds)
    if not kinds:
        raise ValueError("At least one accepted kind is required")
    if value is None:
        return TypeCheck(True)
    if any(matches(value, kind) for kind in kinds):
        return TypeCheck(True)
    expected = " or ".join(kind.value for kind in kinds)
    return TypeCheck(False, f"expected {expected}, got {describe_kind(value)}")
