"""Outcomes of catalog store operations other than plain success."""


class CatalogError(Exception):
    """Base class for everything the catalog store raises."""

    message = "Catalog error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class NotFound(CatalogError):
    message = "Product not found"

    def __init__(self, entity_id=None, message: str | None = None):
        self.entity_id = entity_id
        super().__init__(message or (f"Product {entity_id} not found" if entity_id is not None else None))


class NoFieldsToUpdate(CatalogError):
    message = "No fields provided for update"


class EmptyResult(CatalogError):
    """A listing matched nothing. Expected outcome, not a failure."""

    message = "No products found"


class StoreError(CatalogError):
    """Anything that went wrong inside PostgreSQL or on the way to it."""

    message = "Database error"

    def __init__(self, message: str | None = None, detail: str | None = None):
        self.detail = detail
        super().__init__(message)
