"""
classifier.py - decide whether a raw value belongs to a logical kind.

:func:`classify` is the only place that knows which runtime representations
count as which kind.  On success it returns the value in one canonical form
so constraint checks downstream never re-branch on shape:

=============  ==========================================  =================
kind           accepted representations                    normalised to
=============  ==========================================  =================
string         ``str``                                     ``str``
number         int or float (incl. numpy scalars)          ``int``/``float``
double         float only - ``1`` is not a double          ``float``
boolean/bool   ``bool``                                    ``bool``
array          ``list``/``tuple``                          unchanged
object         any ``Mapping``                             unchanged
null           ``None``/``NaT``                            ``None``
date           temporal value or accepted date string      ``date``/``datetime``
timestamp      store timestamp, int, float, integer string unchanged/``int``
=============  ==========================================  =================
"""

from __future__ import annotations

from typing import Any, Callable

from . import utils
from .errors import TypeMismatch
from .values import (
    ARRAY, BOOLEAN, FLOAT, INTEGER, NULL, OBJECT, STRING, TEMPORAL,
    is_store_timestamp, value_kind,
)

__all__ = ["classify"]


def _string(field: str, value: Any, tag: str) -> Any:
    if tag != STRING:
        raise TypeMismatch(field, "string", "must be a string")
    return value


def _number(field: str, value: Any, tag: str) -> Any:
    if tag == INTEGER:
        return int(value)
    if tag == FLOAT:
        return float(value)
    raise TypeMismatch(field, "number", "must be a number")


def _double(field: str, value: Any, tag: str) -> Any:
    if tag != FLOAT:
        raise TypeMismatch(field, "double", "must be a double (floating-point)")
    return float(value)


def _boolean(field: str, value: Any, tag: str) -> Any:
    if tag != BOOLEAN:
        raise TypeMismatch(field, "boolean", "must be a boolean")
    return bool(value)


def _array(field: str, value: Any, tag: str) -> Any:
    if tag != ARRAY:
        raise TypeMismatch(field, "array", "must be an array")
    return value


def _object(field: str, value: Any, tag: str) -> Any:
    if tag != OBJECT:
        raise TypeMismatch(field, "object", "must be an object")
    return value


def _date(field: str, value: Any, tag: str) -> Any:
    if tag == TEMPORAL:
        return value
    if tag == STRING:
        parsed = utils._parse_date_string(value)
        if parsed is None:
            raise TypeMismatch(field, "date", "must be a valid ISO date string (e.g., RFC3339)")
        return parsed
    raise TypeMismatch(field, "date", "must be a date (datetime, date, or ISO string)")


def _timestamp(field: str, value: Any, tag: str) -> Any:
    if is_store_timestamp(value):
        return value
    if tag == INTEGER:
        return int(value)
    if tag == FLOAT:
        return float(value)
    if tag == STRING:
        parsed = utils._parse_int_string(value)
        if parsed is None:
            raise TypeMismatch(field, "timestamp", "must be a numeric string representing a timestamp")
        return parsed
    raise TypeMismatch(
        field, "timestamp", "must be a timestamp (integer, numeric string, or store timestamp)"
    )


_CLASSIFIERS: dict[str, Callable[[str, Any, str], Any]] = {
    "string":    _string,
    "number":    _number,
    "double":    _double,
    "boolean":   _boolean,
    "bool":      _boolean,
    "array":     _array,
    "object":    _object,
    "date":      _date,
    "timestamp": _timestamp,
}


def classify(field: str, value: Any, kind: str) -> Any:
    """Check *value* against *kind* and return its normalised form.

    Raises
    ------
    TypeMismatch
        When *value* is not a member of *kind*.  The message is qualified
        with *field*, e.g. ``field 'age' must be a number``.
    ValueError
        For a *kind* outside the recognised set; the schema-definition
        check rejects those before data is ever validated.
    """
    tag = value_kind(value)
    if tag == NULL:
        if kind == "null":
            return None
        raise TypeMismatch(field, kind, "must not be null")
    if kind == "null":
        raise TypeMismatch(field, kind, "must be null")

    try:
        check = _CLASSIFIERS[kind]
    except KeyError:
        raise ValueError(f"unknown kind {kind!r}") from None
    return check(field, value, tag)
