"""Runtime values of the Lox interpreter.

A Lox value is one of a closed set of Python representations:

=========  ==========================================
Lox        Python
=========  ==========================================
number     ``float``
string     ``str``
boolean    ``bool``
nil        ``None``
callable   any `LoxCallable`
=========  ==========================================

There is no implicit conversion between these. The helpers below define
truthiness, equality, and the printed form of each kind of value.
"""

from __future__ import annotations

from typing import Any

from .callables import LoxCallable


def is_number(value: Any) -> bool:
    # bool is not a float subclass, so True/False never pass
    return isinstance(value, float)


def is_callable(value: Any) -> bool:
    return isinstance(value, LoxCallable)


def is_truthy(value: Any) -> bool:
    """nil and false are falsy; everything else, 0 and "" included, is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Type-aware equality: values of different Lox types are never equal."""
    if a is None or b is None:
        return a is None and b is None
    if type(a) is not type(b):
        return False
    if isinstance(a, float):
        # a value always equals itself, NaN included
        if a != a and b != b:
            return True
        return a == b
    if isinstance(a, (str, bool)):
        return a == b
    # callables compare by identity
    return a is b


def to_string(value: Any) -> str:
    """Convert a Lox value to the text `print` writes for it."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    if isinstance(value, str):
        return value
    return repr(value)
