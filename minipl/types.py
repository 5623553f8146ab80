"""Type definitions and helpers for Mini-PL.

Runtime values are plain Python objects: `int` for integers, `str` for
strings, `bool` for booleans, and the `NONE` marker for "no value".
Because `bool` is a subclass of `int`, the predicates below must be used
instead of bare `isinstance` checks whenever integers and booleans need to
be told apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TypeSpec:
    """A declared Mini-PL type: one of 'int', 'string' or 'bool'."""
    kind: str

    def __repr__(self) -> str:
        return self.kind

    @staticmethod
    def integer() -> 'TypeSpec':
        return TypeSpec('int')

    @staticmethod
    def string() -> 'TypeSpec':
        return TypeSpec('string')

    @staticmethod
    def boolean() -> 'TypeSpec':
        return TypeSpec('bool')


class NoneVal:
    """Marker object for the Mini-PL `none` value."""
    def __repr__(self) -> str:
        return 'None'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NoneVal)

    def __hash__(self) -> int:
        return hash(NoneVal)


NONE = NoneVal()


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def type_name(value: Any) -> str:
    """Return the Mini-PL type name of a runtime value."""
    if is_boolean(value):
        return 'bool'
    if is_integer(value):
        return 'int'
    if is_string(value):
        return 'string'
    if isinstance(value, NoneVal):
        return 'none'
    return type(value).__name__


def same_variant(left: Any, right: Any) -> bool:
    """True when both values carry the same Mini-PL type tag."""
    return type_name(left) == type_name(right)


def to_string(value: Any) -> str:
    """Convert a value to the text `print` writes for it."""
    if is_boolean(value):
        return 'true' if value else 'false'
    if is_integer(value):
        return str(value)
    if is_string(value):
        return value
    if isinstance(value, NoneVal):
        return ''
    return str(value)


def default_value(type_spec: TypeSpec) -> Any:
    """Value a declaration without initializer binds.

    Booleans start out `true`, not `false`.
    """
    kind = type_spec.kind
    if kind == 'int':
        return 0
    if kind == 'string':
        return ''
    if kind == 'bool':
        return True
    raise ValueError(f"unknown type spec: {type_spec}")


def truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero; the caller rejects right == 0."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient
