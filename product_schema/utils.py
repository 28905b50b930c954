"""
utils.py – shared, low-level utilities for the product-schema package.

This module consolidates common helpers for:
- Timestamps (ISO-8601 format) and identifiers for stored documents
- Parsing the accepted textual date layouts
- Parsing base-10 integer strings
"""

from __future__ import annotations

import datetime as _dt
import re
import uuid
from typing import Optional, Union

# --------------------------------------------------------------------------- #
# Timestamp & Identifier Utilities                                            #
# --------------------------------------------------------------------------- #

def _now_iso() -> str:
    """Current UTC timestamp in ISO-8601 (second precision)."""
    return _dt.datetime.now(_dt.timezone.utc).isoformat(timespec="seconds")


def _new_id() -> str:
    """Return a fresh 32-character hexadecimal document id."""
    return uuid.uuid4().hex


# --------------------------------------------------------------------------- #
# Date & Integer Parsing Helpers                                              #
# --------------------------------------------------------------------------- #

# Ordered; the first layout that matches *and* names a real calendar instant
# wins.  Groups are (stamp, fraction, offset); unused groups are empty or None.
# Formats stop at whole seconds; a matched fraction is spliced in as "%f".
_DATE_LAYOUTS: tuple[tuple[re.Pattern, str], ...] = (
    # RFC3339, "Z" or explicit numeric offset
    (re.compile(r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})()(Z|[+\-]\d{2}:\d{2})", re.ASCII),
     "%Y-%m-%dT%H:%M:%S%z"),
    # RFC3339 with sub-second precision (up to nanoseconds)
    (re.compile(r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})\.(\d{1,9})(Z|[+\-]\d{2}:\d{2})", re.ASCII),
     "%Y-%m-%dT%H:%M:%S%z"),
    (re.compile(r"(\d{4}-\d{2}-\d{2})()()", re.ASCII), "%Y-%m-%d"),
    # local date-times; seconds may carry a fraction too
    (re.compile(r"(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?()", re.ASCII),
     "%Y-%m-%d %H:%M:%S"),
    (re.compile(r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?()", re.ASCII),
     "%Y-%m-%dT%H:%M:%S"),
)

_INT_RE = re.compile(r"[+\-]?\d+", re.ASCII)
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def _parse_date_string(text: str) -> Optional[Union[_dt.date, _dt.datetime]]:
    """Parse *text* with the first matching layout, or return ``None``."""
    for pattern, fmt in _DATE_LAYOUTS:
        match = pattern.fullmatch(text)
        if match is None:
            continue
        stamp, fraction, offset = match.groups()
        if fraction:
            stamp = f"{stamp}.{fraction[:6]}"  # datetime resolution is µs
            fmt = fmt.replace("%S", "%S.%f")
        if offset:
            stamp += "+00:00" if offset == "Z" else offset
        try:
            parsed = _dt.datetime.strptime(stamp, fmt)
        except ValueError:
            continue
        return parsed.date() if fmt == "%Y-%m-%d" else parsed
    return None


def _parse_int_string(text: str) -> Optional[int]:
    """Return the signed 64-bit integer spelled by *text*, else ``None``."""
    if not _INT_RE.fullmatch(text):
        return None
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        return None
    return number
