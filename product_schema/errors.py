"""
errors.py - exception taxonomy for schema and lead validation
=============================================================

Every contract violation is a :class:`SchemaError` (itself a ``ValueError``).
Violations found while checking *data* derive from
:class:`DataValidationError`; a broken schema *definition* raises
:class:`MalformedSchema`.  ``str(exc)`` is the single human-readable message
that callers surface verbatim.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "SchemaError",
    "DataValidationError",
    "MissingRequiredField",
    "TypeMismatch",
    "ConstraintViolation",
    "NestedValidationFailure",
    "ArrayElementFailure",
    "UnknownField",
    "MalformedSchema",
]


class SchemaError(ValueError):
    """Raised when a document or a schema violates the contract."""


class DataValidationError(SchemaError):
    """Base class for violations found while validating lead data."""

    field: str | None = None

    @property
    def detail(self) -> str:
        """Message text without the leading ``field '<name>'`` qualifier."""
        return str(self)


class MissingRequiredField(DataValidationError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"required field '{field}' is missing")


class TypeMismatch(DataValidationError):
    def __init__(self, field: str, kind: str, reason: str):
        self.field = field
        self.kind = kind
        self.reason = reason
        super().__init__(f"field '{field}' {reason}")

    @property
    def detail(self) -> str:
        return self.reason


class ConstraintViolation(DataValidationError):
    def __init__(self, field: str, constraint: str, bound: Any, reason: str):
        self.field = field
        self.constraint = constraint
        self.bound = bound
        self.reason = reason
        super().__init__(f"field '{field}' {reason}")

    @property
    def detail(self) -> str:
        return self.reason


class NestedValidationFailure(DataValidationError):
    def __init__(self, field: str, inner: DataValidationError):
        self.field = field
        self.inner = inner
        super().__init__(f"object field '{field}' validation failed: {inner}")

    @property
    def detail(self) -> str:
        return f"validation failed: {self.inner}"


class ArrayElementFailure(DataValidationError):
    def __init__(self, field: str, index: int, inner: DataValidationError):
        self.field = field
        self.index = index
        self.inner = inner
        super().__init__(f"field '{field}'{self.tail}")

    @property
    def tail(self) -> str:
        """``[i]`` followed by the inner detail; nested arrays chain indices."""
        if isinstance(self.inner, ArrayElementFailure):
            return f"[{self.index}]{self.inner.tail}"
        return f"[{self.index}] {self.inner.detail}"

    @property
    def detail(self) -> str:
        return self.tail


class UnknownField(DataValidationError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"unknown field '{field}'")


class MalformedSchema(SchemaError):
    """Raised by the schema-definition check; never by data validation."""

    def __init__(self, field: str | None, reason: str):
        self.field = field
        self.reason = reason
        if field is None:
            super().__init__(f"schema {reason}")
        else:
            super().__init__(f"field '{field}': {reason}")
