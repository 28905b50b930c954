"""
lead.py - a data document stored against a product's schema.
"""
from __future__ import annotations

import copy
from typing import Any, Mapping

from . import utils


class Lead(dict):
    """A lead record: ``id``, ``product_id``, ``data`` and bookkeeping stamps.

    The record is a plain ``dict`` so it serialises with :mod:`json` as-is.
    ``data`` is deep-copied on construction; later edits by the caller do not
    leak into the record.
    """

    def __init__(self, *, product_id: str, data: Mapping[str, Any], id: str | None = None,
                 created_at: str | None = None, updated_at: str | None = None):
        now = utils._now_iso()
        super().__init__(
            id=id or utils._new_id(),
            product_id=product_id,
            data=copy.deepcopy(dict(data)),
            created_at=created_at or now,
            updated_at=updated_at or created_at or now,
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Lead":
        """Rebuild a :class:`Lead` from a stored record."""
        return cls(
            product_id=record["product_id"],
            data=record.get("data", {}),
            id=record.get("id"),
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
        )

    def touch(self) -> None:
        """Refresh ``updated_at``."""
        self["updated_at"] = utils._now_iso()
