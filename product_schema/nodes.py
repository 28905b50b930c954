"""
nodes.py - normalised, read-only view over raw schema definitions
=================================================================

A product schema is stored as a plain JSON mapping of field name to field
definition::

    {
        "name":      {"type": "string", "required": true, "minLength": 1},
        "age":       {"type": "number", "minimum": 0},
        "interests": {"type": "array", "items": "string"},
        "user_info": {"type": "object",
                      "properties": {"first_name": {"type": "string",
                                                    "required": true}}}
    }

:func:`parse_schema` walks such a tree once and returns ``{name: SchemaNode}``
in declaration order.  The same walk serves two readers:

* ``strict=True`` - the schema-definition check run when a product is
  created or updated.  Any rule violation raises :class:`MalformedSchema`.
* ``strict=False`` - the reading used at lead-validation time.  Malformed
  fragments are ignored (logged at DEBUG) so validation never faults on a
  schema that slipped past the definition check.  A field whose definition
  is unreadable stays declared, with no type and no constraints.

Item specs for ``array`` fields accept three shapes:

* a bare type name - ``"items": "string"``
* a node descriptor - ``"items": {"type": "number", "minimum": 0}``
* a field map - ``"items": {"email": {"type": "string"}}``; every element
  must then be an object validated against that map.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .errors import MalformedSchema
from .values import FLOAT, INTEGER, STRING, value_kind

__all__ = ["KINDS", "SchemaNode", "parse_schema"]

log = logging.getLogger(__name__)

KINDS = frozenset({
    "string", "number", "double", "boolean", "array",
    "object", "null", "date", "timestamp",
})
_ALIASES = {"bool": "boolean"}

_COMMON_KEYS = frozenset({"type", "required", "description"})
_KIND_KEYS: dict[str, frozenset[str]] = {
    "string":    frozenset({"pattern", "minLength", "maxLength", "enum"}),
    "number":    frozenset({"minimum", "maximum", "enum"}),
    "double":    frozenset({"minimum", "maximum", "enum"}),
    "object":    frozenset({"properties", "schema", "additionalProperties"}),
    "array":     frozenset({"items", "minItems", "maxItems"}),
    "boolean":   frozenset(),
    "null":      frozenset(),
    "date":      frozenset(),
    "timestamp": frozenset(),
}
_CONSTRAINT_KEYS = frozenset().union(*_KIND_KEYS.values())


@dataclass(frozen=True)
class SchemaNode:
    """Per-field type and constraint descriptor.

    ``kind`` is ``None`` when a leniently-read definition is not an object or
    names no recognised type; such a field is checked for presence only.
    """

    name: str
    kind: Optional[str]
    required: bool = False
    nested: Optional[dict[str, "SchemaNode"]] = None
    items: Optional["SchemaNode"] = None
    pattern: Optional[re.Pattern] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    enum: Optional[tuple] = None
    additional_properties: bool = True
    min_items: Optional[int] = None
    max_items: Optional[int] = None


# --------------------------------------------------------------------------- #
# Value predicates for constraint keys                                        #
# --------------------------------------------------------------------------- #

def _is_count(v: Any) -> bool:
    return value_kind(v) == INTEGER and v >= 0


def _is_bound(v: Any) -> bool:
    return value_kind(v) in (INTEGER, FLOAT) and not math.isnan(v)


def _is_enum(v: Any) -> bool:
    return isinstance(v, (list, tuple)) and len(v) > 0


# enum members a field of each kind can ever equal; booleans are not numbers
_ENUM_MEMBERS: dict[str, tuple[tuple[str, ...], str]] = {
    "string": ((STRING,), "strings"),
    "number": ((INTEGER, FLOAT), "numbers"),
    "double": ((INTEGER, FLOAT), "numbers"),
}


# --------------------------------------------------------------------------- #
# The walk                                                                    #
# --------------------------------------------------------------------------- #

class _SchemaReader:
    """Single recursive walk shared by strict and lenient schema reading."""

    def __init__(self, strict: bool):
        self.strict = strict

    def _reject(self, path: str, reason: str) -> None:
        if self.strict:
            raise MalformedSchema(path or None, reason)
        log.debug("ignoring malformed schema fragment at %s: %s", path or "<root>", reason)

    # -- containers ---------------------------------------------------------
    def schema(self, raw: Any, path: str) -> dict[str, SchemaNode]:
        if not isinstance(raw, Mapping):
            self._reject(path, "must be an object mapping field names to definitions")
            return {}

        out: dict[str, SchemaNode] = {}
        for name, entry in raw.items():
            field_path = f"{path}.{name}" if path else str(name)
            if not self._name_ok(name, field_path):
                continue
            out[name] = self.node(name, entry, field_path)
        return out

    def _name_ok(self, name: Any, path: str) -> bool:
        if not isinstance(name, str) or not name:
            self._reject(path, "field names must be non-empty strings")
            return False
        if name.startswith("$"):
            self._reject(path, "field names must not start with '$'")
        elif "." in name:
            self._reject(path, "field names must not contain '.'")
        return True

    # -- a single definition -----------------------------------------------
    def node(self, name: str, entry: Any, path: str) -> SchemaNode:
        if not isinstance(entry, Mapping):
            self._reject(path, "definition must be an object")
            return SchemaNode(name=name, kind=None)

        kind = self._kind(entry, path)
        required = self._read(entry, "required", path, lambda v: isinstance(v, bool), "a boolean")
        self._read(entry, "description", path, lambda v: isinstance(v, str), "a string")
        if kind is None:
            return SchemaNode(name=name, kind=None, required=bool(required))

        if self.strict:
            self._check_keys(entry, kind, path)

        attrs: dict[str, Any] = {"name": name, "kind": kind, "required": bool(required)}
        if kind == "string":
            attrs["pattern"] = self._pattern(entry, path)
            attrs["min_length"] = self._read(entry, "minLength", path, _is_count, "a non-negative integer")
            attrs["max_length"] = self._read(entry, "maxLength", path, _is_count, "a non-negative integer")
            attrs["enum"] = self._enum(entry, kind, path)
            self._ordered(attrs["min_length"], attrs["max_length"], "minLength", "maxLength", path)
        elif kind in ("number", "double"):
            attrs["minimum"] = self._read(entry, "minimum", path, _is_bound, "a number")
            attrs["maximum"] = self._read(entry, "maximum", path, _is_bound, "a number")
            attrs["enum"] = self._enum(entry, kind, path)
            self._ordered(attrs["minimum"], attrs["maximum"], "minimum", "maximum", path)
        elif kind == "object":
            attrs["nested"] = self._nested(entry, path)
            additional = self._read(entry, "additionalProperties", path,
                                    lambda v: isinstance(v, bool), "a boolean")
            attrs["additional_properties"] = additional is not False
        elif kind == "array":
            if "items" in entry:
                attrs["items"] = self._items(name, entry["items"], f"{path}[]")
            else:
                self._reject(path, "array type requires 'items'")
            attrs["min_items"] = self._read(entry, "minItems", path, _is_count, "a non-negative integer")
            attrs["max_items"] = self._read(entry, "maxItems", path, _is_count, "a non-negative integer")
            self._ordered(attrs["min_items"], attrs["max_items"], "minItems", "maxItems", path)
        return SchemaNode(**attrs)

    def _kind(self, entry: Mapping, path: str) -> Optional[str]:
        if "type" not in entry:
            self._reject(path, "missing 'type'")
            return None
        raw = entry["type"]
        if not isinstance(raw, str):
            self._reject(path, "'type' must be a string")
            return None
        kind = _ALIASES.get(raw, raw)
        if kind not in KINDS:
            self._reject(path, f"unsupported type '{raw}'")
            return None
        return kind

    def _check_keys(self, entry: Mapping, kind: str, path: str) -> None:
        allowed = _COMMON_KEYS | _KIND_KEYS[kind]
        for key in entry:
            if key in allowed:
                continue
            if key in _CONSTRAINT_KEYS:
                reason = f"constraint '{key}' is not allowed for type '{kind}'"
            else:
                reason = f"unknown key {key!r}"
            self._reject(path, reason)

    # -- constraint readers -------------------------------------------------
    def _read(self, entry: Mapping, key: str, path: str,
              accept: Callable[[Any], bool], expected: str) -> Any:
        if key not in entry:
            return None
        value = entry[key]
        if accept(value):
            return value
        self._reject(path, f"'{key}' must be {expected}")
        return None

    def _ordered(self, low: Any, high: Any, low_key: str, high_key: str, path: str) -> None:
        if low is not None and high is not None and low > high:
            self._reject(path, f"'{low_key}' must not exceed '{high_key}'")

    def _pattern(self, entry: Mapping, path: str) -> Optional[re.Pattern]:
        raw = self._read(entry, "pattern", path, lambda v: isinstance(v, str), "a string")
        if raw is None:
            return None
        try:
            return re.compile(raw)
        except re.error as exc:
            self._reject(path, f"'pattern' is not a valid regular expression: {exc}")
            return None

    def _enum(self, entry: Mapping, kind: str, path: str) -> Optional[tuple]:
        raw = self._read(entry, "enum", path, _is_enum, "a non-empty list")
        if raw is None:
            return None
        kinds, plural = _ENUM_MEMBERS[kind]
        if not all(value_kind(member) in kinds for member in raw):
            self._reject(path, f"'enum' members must be {plural}")
        return tuple(raw)

    # -- composite kinds ----------------------------------------------------
    def _nested(self, entry: Mapping, path: str) -> Optional[dict[str, SchemaNode]]:
        # "properties" takes precedence over "schema" when both are present
        for key in ("properties", "schema"):
            if key not in entry:
                continue
            if isinstance(entry[key], Mapping):
                return self.schema(entry[key], path)
            self._reject(path, f"'{key}' must be an object")
        return None

    def _items(self, name: str, raw: Any, path: str) -> Optional[SchemaNode]:
        if isinstance(raw, str):
            return self.node(name, {"type": raw}, path)
        if isinstance(raw, Mapping):
            if isinstance(raw.get("type"), str):
                return self.node(name, raw, path)
            return SchemaNode(name=name, kind="object", nested=self.schema(raw, path))
        self._reject(path, "'items' must be a type name or an object")
        return None


def parse_schema(raw: Any, *, strict: bool = False) -> dict[str, SchemaNode]:
    """Normalise a raw schema mapping into ``{field_name: SchemaNode}``.

    Parameters
    ----------
    raw
        The schema as stored on the product (any JSON-like value).
    strict
        Raise :class:`MalformedSchema` on the first rule violation instead of
        skipping the offending fragment.
    """
    return _SchemaReader(strict).schema(raw, "")
