"""
product_schema – Schema-gated storage of leads against product contracts.
"""
from .errors import (
    SchemaError,
    DataValidationError,
    MissingRequiredField,
    TypeMismatch,
    ConstraintViolation,
    NestedValidationFailure,
    ArrayElementFailure,
    UnknownField,
    MalformedSchema,
)
from .nodes import SchemaNode, parse_schema
from .classifier import classify
from .validator import validate, check, validate_schema_definition
from .product import Product
from .lead import Lead
from .parser import parse_input
from .service import ProductService, error_response

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
    "SchemaNode",
    "parse_schema",
    "classify",
    "validate",
    "check",
    "validate_schema_definition",
    "Product",
    "Lead",
    "parse_input",
    "ProductService",
    "error_response",
]
