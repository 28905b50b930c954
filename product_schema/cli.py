"""
cli.py - command-line checks for product schemas and lead files.

    product-schema check-schema contact_lead.json
    product-schema validate --schema contact_lead.json --data lead.json

Exit status is 0 when the input conforms, 1 on a contract violation and 2 on
a usage or I/O error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Mapping, Sequence

from . import loader
from . import parser as input_parser
from . import validator
from .errors import SchemaError

log = logging.getLogger("product_schema.cli")

EXIT_OK, EXIT_INVALID, EXIT_ERROR = 0, 1, 2


def _split_definition(doc: Any) -> tuple[Any, bool]:
    """Accept either a product file (``{"name", "schema", ...}``) or a bare schema."""
    if isinstance(doc, Mapping) and "name" in doc and isinstance(doc.get("schema"), Mapping):
        return doc["schema"], doc.get("additional_properties", True)
    return doc, True


def _check_schema(args: argparse.Namespace) -> int:
    schema, _ = _split_definition(loader.load_schema(args.file))
    nodes = validator.validate_schema_definition(schema)
    print(f"OK: {len(nodes)} field(s) defined")
    return EXIT_OK


def _validate(args: argparse.Namespace) -> int:
    schema, additional = _split_definition(loader.load_schema(args.schema))
    validator.validate_schema_definition(schema)
    data = input_parser.parse_input(args.data, schema=schema)
    if args.strict:
        additional = False
    validator.validate(data, schema, additional_properties=additional)
    print("OK")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="product-schema", description="Check product schemas and lead data.")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    sub = p.add_subparsers(dest="command", required=True)

    cs = sub.add_parser("check-schema", help="Check that a schema definition is well-formed.")
    cs.add_argument("file", help="Product or schema JSON file (path or bundled name).")
    cs.set_defaults(func=_check_schema)

    va = sub.add_parser("validate", help="Validate lead data against a schema.")
    va.add_argument("--schema", required=True, help="Product or schema JSON file.")
    va.add_argument("--data", required=True, help="Lead data: JSON file path or JSON literal.")
    va.add_argument("--strict", action="store_true", help="Reject fields the schema does not declare.")
    va.set_defaults(func=_validate)
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    try:
        return args.func(args)
    except SchemaError as exc:
        print(f"invalid: {exc}", file=sys.stderr)
        return EXIT_INVALID
    except (OSError, ValueError, TypeError) as exc:
        log.error("%s", exc)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
