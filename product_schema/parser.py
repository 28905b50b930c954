"""
parser.py - command-line / JSON / mapping input loader for lead data
=====================================================================

Public API
----------
`build_arg_parser(schema: Mapping) -> argparse.ArgumentParser`
    Construct an `argparse` instance with one flag per top-level field of a
    product *schema*.

`parse_input(source=None, *, schema) -> dict`
    Convert user-supplied *source* (CLI string / Path / JSON literal / Mapping)
    into a plain `dict` keyed by the *schema* field names.

Neither function validates; pass the result to
:func:`product_schema.validator.validate`.
"""

from __future__ import annotations

import argparse
import json
import shlex
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from .nodes import parse_schema

# --------------------------------------------------------------------------- #
# Flag value converters                                                       #
# --------------------------------------------------------------------------- #

def _number(text: str) -> int | float:
    """Keep integers integral so ``double`` fields can tell them apart."""
    try:
        return int(text)
    except ValueError:
        return float(text)


def _json_value(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid JSON value: {exc}") from exc


_FLAG_TYPES = {
    "number":    _number,
    "double":    float,
    "timestamp": _number,
    "array":     _json_value,
    "object":    _json_value,
}

# --------------------------------------------------------------------------- #
# Parser builder                                                              #
# --------------------------------------------------------------------------- #

def build_arg_parser(schema: Mapping[str, Any], *, description: str = "") -> argparse.ArgumentParser:
    """Return an :pyclass:`argparse.ArgumentParser` for *schema*.

    Parameters
    ----------
    schema : Mapping[str, Any]
        A product schema (``{field_name: definition}``).  Every top-level
        field is exposed as ``--<field-name>``; ``boolean`` fields become
        switches and ``array``/``object`` fields take a JSON literal.
    """

    p = argparse.ArgumentParser(
        description=description,
        fromfile_prefix_chars="@",
        add_help=False,
    )

    # standard meta flags ----------------------------------------------------
    p.add_argument("-h", "--help", action="help", help="Show this help message and exit.")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="JSON file containing the full lead data; overrides all other flags.",
    )

    for name, node in parse_schema(schema).items():
        flag = f"--{name.replace('_', '-')}"
        if flag in ("--help", "--config"):
            continue  # reserved; such fields can still come from --config
        kwargs: dict[str, Any] = {
            "dest": name,
            "default": argparse.SUPPRESS,
        }

        if node.kind == "boolean":
            kwargs["action"] = "store_true"
        elif node.kind == "null":
            kwargs["action"] = "store_const"
            kwargs["const"] = None
        else:
            kwargs["type"] = _FLAG_TYPES.get(node.kind, str)

        if node.enum is not None:
            kwargs["choices"] = list(node.enum)

        p.add_argument(flag, **kwargs)

    return p

# --------------------------------------------------------------------------- #
# Input parsing utility                                                       #
# --------------------------------------------------------------------------- #

def parse_input(
    source: None | str | Path | Sequence[str] | Mapping[str, Any] = None,
    *,
    schema: Mapping[str, Any],
) -> dict[str, Any]:
    """Convert *source* to a *raw* ``dict`` (no validation).

    Parameters
    ----------
    source
        Supported variants:
        * ``Mapping`` - copied directly.
        * ``Path`` - JSON file on disk.
        * ``str``  - interpreted as: existing file path → load; else JSON literal → load; else CLI string.
        * ``Sequence[str]`` - treated as CLI tokens.
        * ``None`` - default to ``sys.argv[1:]``.
    schema
        The product schema that drives CLI flag generation.

    Returns
    -------
    dict
        Raw key-value mapping with only the fields provided by the user.  If
        ``--config`` is used the returned dict is exactly that file's content.
    """

    # Mapping - already dict-like ------------------------------------------
    if isinstance(source, Mapping):
        return dict(source)

    # Path - read JSON file -------------------------------------------------
    if isinstance(source, Path):
        return json.loads(source.read_text(encoding="utf-8"))

    # Decide how to treat *source* -----------------------------------------
    argv: list[str]
    if isinstance(source, str):
        p = Path(source)
        if p.is_file():
            return json.loads(p.read_text(encoding="utf-8"))
        try:
            return json.loads(source)
        except json.JSONDecodeError:
            argv = shlex.split(source)
    elif source is None:
        argv = sys.argv[1:]
    elif isinstance(source, Sequence) and not isinstance(source, (str, bytes)):
        argv = list(source)
    else:
        raise TypeError(f"Unsupported type for parse_input: {type(source)}")

    # CLI style - use argparse ---------------------------------------------
    parser = build_arg_parser(schema)
    namespace, unknown = parser.parse_known_args(argv)
    if unknown:
        raise ValueError(f"Unknown argument(s): {unknown}. Use --help.")
    ns_dict = vars(namespace)

    # --config overrides everything else -----------------------------------
    if config_file := ns_dict.pop("config", None):
        cfg_path = Path(config_file)
        if not cfg_path.is_file():
            raise FileNotFoundError(cfg_path)
        return json.loads(cfg_path.read_text(encoding="utf-8"))

    return ns_dict
