"""Runtime values and diagnostics for Lox.

Lox values map onto Python objects directly: ``bool`` for booleans,
``float`` for numbers, ``str`` for strings, ``LoxFunction`` for functions
and the ``NIL`` singleton for nil. The helpers here implement the
language's rules for truthiness, equality and printing so the interpreter
never relies on Python's own (different) semantics for these.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .function import LoxFunction


class NilVal:
    """Marker object for the Lox ``nil`` value."""
    _instance: Optional['NilVal'] = None

    def __new__(cls) -> 'NilVal':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'

    def __bool__(self) -> bool:
        return False


NIL = NilVal()


@dataclass(frozen=True)
class Diagnostic:
    """An error produced while scanning, parsing or running Lox code.

    ``kind`` is one of ``scan``, ``parse``, ``runtime`` or ``fatal``.
    ``where`` holds the lexeme of the offending token, ``end`` when the
    error sits at the end of input, or ``None`` when no token applies.
    """
    kind: str
    line: int
    message: str
    where: Optional[str] = None

    def __str__(self) -> str:
        location = ''
        if self.where == 'end':
            location = ' at end'
        elif self.where is not None:
            location = f" at '{self.where}'"
        return f"[line {self.line}] Error{location}: {self.message}"


def is_number(value: Any) -> bool:
    # True and False are ints, never floats
    return isinstance(value, float) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """Map a Lox value to a condition result.

    Numbers are truthy only when strictly greater than zero, so both ``0``
    and negative numbers are falsy.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return value > 0
    if isinstance(value, str):
        return len(value) > 0
    if value is NIL:
        return False
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality per variant; functions compare by identity."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, float) and isinstance(b, float):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if a is NIL or b is NIL:
        return a is b
    if isinstance(a, LoxFunction) or isinstance(b, LoxFunction):
        return a is b
    return False


def type_name(value: Any) -> str:
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, LoxFunction):
        return 'function'
    if value is NIL:
        return 'nil'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Render a value the way ``print`` shows it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        # Shortest round-trip form, with integral values shown without ".0"
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    if isinstance(value, str):
        return value
    if value is NIL:
        return 'nil'
    if isinstance(value, LoxFunction):
        return repr(value)
    return str(value)
