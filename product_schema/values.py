"""
values.py - logical view over decoded data trees.

Lead data arrives as plain JSON-decoded Python objects, but it may also come
out of a pandas frame (numpy scalars, ``pd.Timestamp``, ``pd.NaT``).  This
module folds all of those representations onto a small set of value tags so
the classifier never has to branch on concrete Python types.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Mapping

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

__all__ = [
    "NULL",
    "BOOLEAN",
    "INTEGER",
    "FLOAT",
    "STRING",
    "ARRAY",
    "OBJECT",
    "TEMPORAL",
    "UNKNOWN",
    "value_kind",
    "is_store_timestamp",
]

NULL = "null"
BOOLEAN = "boolean"
INTEGER = "integer"
FLOAT = "float"
STRING = "string"
ARRAY = "array"
OBJECT = "object"
TEMPORAL = "temporal"
UNKNOWN = "unknown"


def value_kind(value: Any) -> str:
    """Return the value tag for *value*.

    Order matters: ``bool`` is an ``int`` subclass and ``pd.NaT`` is a
    ``datetime`` subclass, so both are tested before the broader checks.
    """
    if value is None or value is pd.NaT:
        return NULL
    if isinstance(value, np.datetime64) and np.isnat(value):
        return NULL
    if ptypes.is_bool(value):
        return BOOLEAN
    if ptypes.is_integer(value):
        return INTEGER
    if ptypes.is_float(value):
        return FLOAT
    if isinstance(value, str):
        return STRING
    if isinstance(value, (_dt.date, np.datetime64)):
        return TEMPORAL
    if isinstance(value, Mapping):
        return OBJECT
    if isinstance(value, (list, tuple)):
        return ARRAY
    return UNKNOWN


def is_store_timestamp(value: Any) -> bool:
    """True for the tabular store's native timestamp types."""
    if value_kind(value) != TEMPORAL:
        return False
    return isinstance(value, (pd.Timestamp, np.datetime64))
