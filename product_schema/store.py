"""
store.py - in-memory document store for products and leads.

The store is the persistence collaborator behind :mod:`product_schema.service`.
Documents are plain dicts keyed by their ``id``; every read and write goes
through :func:`copy.deepcopy` so callers never share state with the store.
Collections keep insertion order, which makes ``skip``/``limit`` pagination
stable.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Mapping, Optional

__all__ = ["NotFound", "DocumentStore"]

log = logging.getLogger(__name__)


class NotFound(LookupError):
    """Raised when no document matches the requested id."""


def _matches(doc: Mapping[str, Any], flt: Optional[Mapping[str, Any]]) -> bool:
    return not flt or all(doc.get(k) == v for k, v in flt.items())


class DocumentStore:
    """Thread-safe, in-memory collections of JSON-like documents."""

    def __init__(self, collections: tuple[str, ...] = ("products", "leads")):
        self._lock = threading.RLock()
        self._data: dict[str, dict[str, dict[str, Any]]] = {name: {} for name in collections}

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        try:
            return self._data[name]
        except KeyError:
            raise KeyError(f"unknown collection '{name}'") from None

    # -- writes ---------------------------------------------------------------
    def insert(self, collection: str, doc: Mapping[str, Any]) -> str:
        doc_id = doc["id"]
        with self._lock:
            docs = self._collection(collection)
            if doc_id in docs:
                raise ValueError(f"duplicate id '{doc_id}' in {collection}")
            docs[doc_id] = copy.deepcopy(dict(doc))
        log.debug("inserted %s/%s", collection, doc_id)
        return doc_id

    def update(self, collection: str, doc_id: str, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Merge *changes* into the stored document and return the result."""
        with self._lock:
            docs = self._collection(collection)
            if doc_id not in docs:
                raise NotFound(f"{collection}/{doc_id}")
            docs[doc_id].update(copy.deepcopy(dict(changes)))
            return copy.deepcopy(docs[doc_id])

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            docs = self._collection(collection)
            if docs.pop(doc_id, None) is None:
                raise NotFound(f"{collection}/{doc_id}")
        log.debug("deleted %s/%s", collection, doc_id)

    # -- reads ----------------------------------------------------------------
    def find_one(self, collection: str, doc_id: str) -> dict[str, Any]:
        with self._lock:
            docs = self._collection(collection)
            if doc_id not in docs:
                raise NotFound(f"{collection}/{doc_id}")
            return copy.deepcopy(docs[doc_id])

    def find(self, collection: str, flt: Optional[Mapping[str, Any]] = None, *,
             skip: int = 0, limit: Optional[int] = None) -> list[dict[str, Any]]:
        with self._lock:
            hits = [d for d in self._collection(collection).values() if _matches(d, flt)]
            end = None if limit is None else skip + limit
            return copy.deepcopy(hits[skip:end])

    def count(self, collection: str, flt: Optional[Mapping[str, Any]] = None) -> int:
        with self._lock:
            return sum(1 for d in self._collection(collection).values() if _matches(d, flt))
