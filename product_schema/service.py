"""
service.py - product and lead operations gated by schema validation
===================================================================

:class:`ProductService` is the write path: a product's schema definition is
checked before it is stored, and a lead's data is validated against its
product's stored schema before the lead is stored.  Failures are raised as
:class:`ServiceError` subclasses; :func:`error_response` turns any exception
into a transport-neutral ``(status, body)`` pair with the message in a JSON
error envelope.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from . import utils
from . import validator
from .config import ServiceConfig
from .errors import DataValidationError, MalformedSchema
from .lead import Lead
from .product import Product
from .store import DocumentStore, NotFound

__all__ = [
    "ServiceError",
    "NotFoundError",
    "InvalidArgumentError",
    "ProductService",
    "error_response",
]

log = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Exceptions                                                                  #
# --------------------------------------------------------------------------- #

class ServiceError(Exception):
    """Base class for service failures; ``status`` is the HTTP-style code."""

    status = 500


class NotFoundError(ServiceError):
    status = 404


class InvalidArgumentError(ServiceError):
    status = 400


def error_response(exc: BaseException) -> tuple[int, dict[str, str]]:
    """Map *exc* to ``(status, {"error": message})``.

    Unexpected exceptions become a generic ``500`` so internals never reach
    the client; they are logged with their traceback instead.
    """
    if isinstance(exc, ServiceError):
        return exc.status, {"error": str(exc)}
    log.error("unhandled service error", exc_info=exc)
    return 500, {"error": "internal error"}


# --------------------------------------------------------------------------- #
# Service                                                                     #
# --------------------------------------------------------------------------- #

class ProductService:
    """CRUD over products and leads backed by a :class:`DocumentStore`."""

    def __init__(self, store: Optional[DocumentStore] = None,
                 config: Optional[ServiceConfig] = None):
        self.config = config or ServiceConfig()
        self.products = self.config.products_collection
        self.leads = self.config.leads_collection
        self.store = store or DocumentStore((self.products, self.leads))

    def _page(self, limit: Optional[int], offset: Optional[int]) -> tuple[int, int]:
        if not limit or limit < 0:
            limit = self.config.default_limit
        return max(offset or 0, 0), limit

    # -- products -------------------------------------------------------------
    def create_product(self, name: str, description: str, schema: Mapping[str, Any], *,
                       additional_properties: bool = True) -> dict[str, Any]:
        try:
            product = Product(name, description, schema, additional_properties=additional_properties)
        except MalformedSchema as exc:
            raise InvalidArgumentError(f"invalid schema: {exc}") from exc

        record = product.to_record()
        self.store.insert(self.products, record)
        log.info("created product %s (%s)", product.id, name)
        return record

    def get_product(self, product_id: str) -> dict[str, Any]:
        try:
            return self.store.find_one(self.products, product_id)
        except NotFound:
            raise NotFoundError("product not found") from None

    def update_product(self, product_id: str, name: str, description: str,
                       schema: Mapping[str, Any], *,
                       additional_properties: Optional[bool] = None) -> dict[str, Any]:
        try:
            validator.validate_schema_definition(schema)
        except MalformedSchema as exc:
            raise InvalidArgumentError(f"invalid schema: {exc}") from exc

        changes: dict[str, Any] = {
            "name": name,
            "description": description,
            "schema": dict(schema),
            "updated_at": utils._now_iso(),
        }
        if additional_properties is not None:
            changes["additional_properties"] = additional_properties
        try:
            record = self.store.update(self.products, product_id, changes)
        except NotFound:
            raise NotFoundError("product not found") from None
        log.info("updated product %s", product_id)
        return record

    def delete_product(self, product_id: str) -> None:
        try:
            self.store.delete(self.products, product_id)
        except NotFound:
            raise NotFoundError("product not found") from None
        log.info("deleted product %s", product_id)

    def list_products(self, limit: Optional[int] = None, offset: Optional[int] = 0) -> dict[str, Any]:
        skip, limit = self._page(limit, offset)
        return {
            "products": self.store.find(self.products, skip=skip, limit=limit),
            "total": self.store.count(self.products),
        }

    # -- leads ----------------------------------------------------------------
    def _check_lead(self, product: Mapping[str, Any], data: Any) -> None:
        try:
            validator.validate(
                data,
                product.get("schema", {}),
                additional_properties=product.get("additional_properties", True),
            )
        except DataValidationError as exc:
            raise InvalidArgumentError(f"data validation failed: {exc}") from exc

    def create_lead(self, product_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        product = self.get_product(product_id)
        self._check_lead(product, data)

        lead = Lead(product_id=product_id, data=data)
        self.store.insert(self.leads, lead)
        log.info("created lead %s for product %s", lead["id"], product_id)
        return dict(lead)

    def get_lead(self, lead_id: str) -> dict[str, Any]:
        try:
            return self.store.find_one(self.leads, lead_id)
        except NotFound:
            raise NotFoundError("lead not found") from None

    def update_lead(self, lead_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        lead = Lead.from_record(self.get_lead(lead_id))
        try:
            product = self.store.find_one(self.products, lead["product_id"])
        except NotFound:
            raise ServiceError("failed to get product for validation") from None
        self._check_lead(product, data)

        lead["data"] = dict(data)
        lead.touch()
        try:
            record = self.store.update(self.leads, lead_id,
                                       {"data": lead["data"], "updated_at": lead["updated_at"]})
        except NotFound:
            raise NotFoundError("lead not found") from None
        log.info("updated lead %s", lead_id)
        return record

    def delete_lead(self, lead_id: str) -> None:
        try:
            self.store.delete(self.leads, lead_id)
        except NotFound:
            raise NotFoundError("lead not found") from None
        log.info("deleted lead %s", lead_id)

    def list_leads(self, product_id: Optional[str] = None, limit: Optional[int] = None,
                   offset: Optional[int] = 0) -> dict[str, Any]:
        skip, limit = self._page(limit, offset)
        flt = {"product_id": product_id} if product_id else None
        return {
            "leads": self.store.find(self.leads, flt, skip=skip, limit=limit),
            "total": self.store.count(self.leads, flt),
        }
