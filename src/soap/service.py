"""SOAP operations for products, mapped onto the catalog store.

Each operation takes the arguments decoded from the request body (strings,
only the elements that were present) and returns the response payload, or
raises SoapFault with the message shown to the client.
"""

import logging
from typing import Any

from pydantic import ValidationError

from src.schemas import ProductCreate, ProductUpdate
from src.services.catalog_store import catalog_store
from src.services.errors import EmptyResult, NoFieldsToUpdate, NotFound, StoreError

logger = logging.getLogger(__name__)

PATCH_ID_REQUIRED = "L'ID du produit est requis pour la mise à jour."
DELETE_ID_REQUIRED = "L'ID est requis pour la suppression."
PRODUCT_NOT_FOUND = "Produit non trouvé."
NO_UPDATE_DATA = "Aucune donnée fournie pour la mise à jour."
PRODUCT_DELETED = "Produit supprimé avec succès."
DATABASE_ERROR = "Database Error"
VALIDATION_ERROR = "Validation Error"


class SoapFault(Exception):
    def __init__(self, fault_string: str, detail: str | None = None, code: str = "Client"):
        self.fault_string = fault_string
        self.detail = detail
        self.code = code
        super().__init__(fault_string)


class ProductsService:
    def __init__(self, store=None):
        self.store = store or catalog_store
        self.operations = {
            "CreateProduct": self.create_product,
            "GetProducts": self.get_products,
            "PatchProduct": self.patch_product,
            "DeleteProduct": self.delete_product,
        }

    def dispatch(self, operation: str, args: dict[str, Any]) -> dict[str, Any]:
        handler = self.operations.get(operation)
        if handler is None:
            raise SoapFault(f"Unknown operation: {operation}")

        try:
            return handler(args)
        except StoreError as e:
            logger.error(f"{operation} failed: {e.detail}")
            raise SoapFault(DATABASE_ERROR, detail=e.detail, code="Server") from e

    @staticmethod
    def _product_id(args: dict[str, Any], missing_message: str) -> int:
        raw = args.get("id")
        if raw is None or str(raw).strip() == "":
            raise SoapFault(missing_message)
        try:
            return int(str(raw).strip())
        except ValueError:
            # No product can have a non-numeric id
            raise SoapFault(PRODUCT_NOT_FOUND)

    def create_product(self, args: dict[str, Any]) -> dict[str, Any]:
        try:
            fields = ProductCreate(**{key: args.get(key) for key in ("name", "about", "price")})
        except ValidationError as e:
            raise SoapFault(VALIDATION_ERROR, detail=str(e))
        return self.store.create_product(fields)

    def get_products(self, args: dict[str, Any]) -> dict[str, Any]:
        try:
            products = self.store.list_products()
        except EmptyResult:
            products = []
        return {"products": products}

    def patch_product(self, args: dict[str, Any]) -> dict[str, Any]:
        product_id = self._product_id(args, PATCH_ID_REQUIRED)
        logger.info(f"PatchProduct for product {product_id}")

        try:
            fields = ProductUpdate(**{key: args[key] for key in ("name", "about", "price") if key in args})
        except ValidationError as e:
            raise SoapFault(VALIDATION_ERROR, detail=str(e))

        try:
            return self.store.patch_product(product_id, fields)
        except NotFound:
            raise SoapFault(PRODUCT_NOT_FOUND)
        except NoFieldsToUpdate:
            raise SoapFault(NO_UPDATE_DATA)

    def delete_product(self, args: dict[str, Any]) -> dict[str, Any]:
        product_id = self._product_id(args, DELETE_ID_REQUIRED)
        logger.info(f"DeleteProduct for product {product_id}")

        try:
            self.store.delete_product(product_id)
        except NotFound:
            raise SoapFault(PRODUCT_NOT_FOUND)
        return {"message": PRODUCT_DELETED}


# Singleton instance
products_service = ProductsService()
