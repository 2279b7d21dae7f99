"""Catalog store: the only place that runs statements against PostgreSQL."""

import logging
from contextlib import contextmanager
from typing import Any

import psycopg2

from src.db.postgres_client import db
from src.db.query_builder import build_partial_update, build_product_filters
from src.schemas import ProductCreate, ProductFilters, ProductUpdate, ReviewCreate, UserCreate
from src.services.errors import EmptyResult, NotFound, StoreError
from src.utils.passwords import hash_password

logger = logging.getLogger(__name__)


class CatalogStore:
    def __init__(self):
        self.db = db

    @contextmanager
    def _cursor(self, action: str):
        """Open a cursor and turn driver failures into StoreError."""
        try:
            with self.db.get_cursor() as cursor:
                yield cursor
        except psycopg2.Error as e:
            logger.error(f"Error {action}: {e}")
            raise StoreError(f"Error {action}", detail=str(e)) from e

    @staticmethod
    def _fetch_product(cursor, product_id: int) -> dict[str, Any] | None:
        cursor.execute("SELECT * FROM products WHERE id = %s", (product_id,))
        row = cursor.fetchone()
        return dict(row) if row else None

    def list_products(self, filters: ProductFilters | None = None) -> list[dict[str, Any]]:
        """
        List products matching every present filter.

        Args:
            filters: Optional name/about substring filters and price ceiling

        Returns:
            Matching rows in insertion order

        Raises:
            EmptyResult: When nothing matches
            StoreError: On any database failure
        """
        predicate = build_product_filters(filters)
        query = "SELECT * FROM products"
        if predicate:
            query += f" {predicate.where()}"
        query += " ORDER BY id"

        with self._cursor("listing products") as cursor:
            cursor.execute(query, predicate.params)
            products = [dict(row) for row in cursor.fetchall()]

        if not products:
            raise EmptyResult()
        return products

    def get_product(self, product_id: int) -> dict[str, Any]:
        """Fetch one product by id or raise NotFound."""
        with self._cursor("fetching product") as cursor:
            product = self._fetch_product(cursor, product_id)

        if product is None:
            raise NotFound(product_id)
        return product

    def create_product(self, fields: ProductCreate) -> dict[str, Any]:
        """Insert a product and return the stored row with its generated id."""
        with self._cursor("creating product") as cursor:
            cursor.execute(
                """
                INSERT INTO products (name, about, price)
                VALUES (%(name)s, %(about)s, %(price)s)
                RETURNING *
                """,
                fields.model_dump(),
            )
            product = dict(cursor.fetchone())

        logger.info(f"Created product {product['id']}")
        return product

    def patch_product(self, product_id: int, fields: ProductUpdate) -> dict[str, Any]:
        """
        Apply a partial update to a product.

        The field check happens before any statement is sent. The existence
        check and the update are two round-trips; a concurrent delete in
        between surfaces as NotFound through the empty RETURNING.

        Args:
            product_id: Product to update
            fields: Partial update, only fields that were sent are applied

        Returns:
            The updated row

        Raises:
            NoFieldsToUpdate: When no field was sent
            NotFound: When the product does not exist
            StoreError: On any database failure
        """
        statement, params = build_partial_update("products", "id", product_id, fields.present_fields())

        with self._cursor("updating product") as cursor:
            logger.debug(f"Checking product {product_id} before update")
            if self._fetch_product(cursor, product_id) is None:
                raise NotFound(product_id)

            cursor.execute(statement, params)
            row = cursor.fetchone()

        if row is None:
            raise NotFound(product_id)

        logger.info(f"Updated product {product_id}: {sorted(fields.present_fields())}")
        return dict(row)

    def delete_product(self, product_id: int) -> dict[str, Any]:
        """Delete a product after checking it exists; returns the deleted row."""
        with self._cursor("deleting product") as cursor:
            logger.debug(f"Checking product {product_id} before delete")
            if self._fetch_product(cursor, product_id) is None:
                raise NotFound(product_id)

            cursor.execute("DELETE FROM products WHERE id = %s RETURNING *", (product_id,))
            row = cursor.fetchone()

        if row is None:
            raise NotFound(product_id)

        logger.info(f"Deleted product {product_id}")
        return dict(row)

    def create_user(self, fields: UserCreate) -> dict[str, Any]:
        """Insert a user with a hashed password; the hash is not returned."""
        with self._cursor("creating user") as cursor:
            cursor.execute(
                """
                INSERT INTO users (username, email, password)
                VALUES (%s, %s, %s)
                RETURNING id, username, email
                """,
                (fields.username, fields.email, hash_password(fields.password)),
            )
            user = dict(cursor.fetchone())

        logger.info(f"Created user {user['id']}")
        return user

    def create_review(self, fields: ReviewCreate) -> dict[str, Any]:
        """Insert a review and return the stored row."""
        with self._cursor("creating review") as cursor:
            cursor.execute(
                """
                INSERT INTO reviews (product_id, user_id, score, content)
                VALUES (%(product_id)s, %(user_id)s, %(score)s, %(content)s)
                RETURNING *
                """,
                fields.model_dump(),
            )
            review = dict(cursor.fetchone())

        logger.info(f"Created review {review['id']} for product {review['product_id']}")
        return review


# Singleton instance
catalog_store = CatalogStore()
