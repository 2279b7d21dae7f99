"""Tests for the JSON routes of the FastAPI app."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from src.main import app
from src.schemas import ProductFilters, ProductUpdate
from src.services.errors import EmptyResult, NoFieldsToUpdate, NotFound, StoreError


class TestProductRoutes:
    @pytest.fixture
    def client(self):
        return TestClient(app)

    @pytest.fixture
    def mock_store(self):
        with patch("src.main.catalog_store") as mock_store:
            yield mock_store

    @pytest.fixture
    def sample_product(self):
        return {"id": 1, "name": "Widget", "about": "A widget", "price": 9.99}

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_list_products_passes_query_filters(self, client, mock_store, sample_product):
        """Test that query parameters become typed filters."""
        mock_store.list_products.return_value = [sample_product]

        response = client.get("/products", params={"name": "Wid", "about": "widget", "price": "abc"})

        assert response.status_code == 200
        assert response.json() == [sample_product]
        mock_store.list_products.assert_called_once_with(
            ProductFilters(name_contains="Wid", about_contains="widget", max_price="abc")
        )

    def test_list_products_none_found(self, client, mock_store):
        mock_store.list_products.side_effect = EmptyResult()

        response = client.get("/products")

        assert response.status_code == 404
        assert response.json() == {"message": "Aucun produit trouvé"}

    def test_list_products_database_error(self, client, mock_store):
        mock_store.list_products.side_effect = StoreError("Error listing products", detail="boom")

        response = client.get("/products")

        assert response.status_code == 500
        assert "boom" not in response.text

    def test_get_product_not_found(self, client, mock_store):
        mock_store.get_product.side_effect = NotFound(5)

        response = client.get("/products/5")

        assert response.status_code == 404

    def test_create_product(self, client, mock_store, sample_product):
        mock_store.create_product.return_value = sample_product

        response = client.post("/products", json={"name": "Widget", "about": "A widget", "price": 9.99})

        assert response.status_code == 201
        assert response.json()["id"] == 1

    def test_create_product_non_positive_price(self, client, mock_store):
        """Test that a price <= 0 is rejected before the store."""
        response = client.post("/products", json={"name": "Widget", "about": "A widget", "price": 0})

        assert response.status_code == 400
        mock_store.create_product.assert_not_called()

    @pytest.mark.parametrize("price", [b"Infinity", b"-Infinity", b"NaN"])
    def test_create_product_non_finite_price(self, client, mock_store, price):
        """Test that a non-finite JSON price is rejected before the store."""
        response = client.post(
            "/products",
            content=b'{"name": "Widget", "about": "A widget", "price": ' + price + b"}",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        mock_store.create_product.assert_not_called()

    def test_patch_product_infinite_price(self, client, mock_store):
        response = client.patch(
            "/products/1", content=b'{"price": Infinity}', headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        mock_store.patch_product.assert_not_called()

    def test_patch_product_only_sent_fields(self, client, mock_store, sample_product):
        mock_store.patch_product.return_value = {**sample_product, "name": "Widget v2"}

        response = client.patch("/products/1", json={"name": "Widget v2"})

        assert response.status_code == 200
        product_id, update = mock_store.patch_product.call_args[0]
        assert product_id == 1
        assert isinstance(update, ProductUpdate)
        assert update.present_fields() == {"name": "Widget v2"}

    def test_patch_product_null_field_rejected(self, client, mock_store):
        response = client.patch("/products/1", json={"price": None})

        assert response.status_code == 400
        mock_store.patch_product.assert_not_called()

    def test_patch_product_no_fields(self, client, mock_store):
        mock_store.patch_product.side_effect = NoFieldsToUpdate()

        response = client.patch("/products/1", json={})

        assert response.status_code == 400

    def test_patch_product_not_found(self, client, mock_store):
        mock_store.patch_product.side_effect = NotFound(1)

        response = client.patch("/products/1", json={"name": "x"})

        assert response.status_code == 404

    def test_delete_product(self, client, mock_store, sample_product):
        mock_store.delete_product.return_value = sample_product

        response = client.delete("/products/1")

        assert response.status_code == 200
        assert response.json() == {"message": "Produit supprimé avec succès."}

    def test_delete_product_not_found(self, client, mock_store):
        mock_store.delete_product.side_effect = NotFound(1)

        response = client.delete("/products/1")

        assert response.status_code == 404


class TestUserAndReviewRoutes:
    @pytest.fixture
    def client(self):
        return TestClient(app)

    @pytest.fixture
    def mock_store(self):
        with patch("src.main.catalog_store") as mock_store:
            yield mock_store

    def test_create_user(self, client, mock_store):
        """Test that the response carries id, username and email only."""
        mock_store.create_user.return_value = {"id": 7, "username": "ada", "email": "ada@example.com"}

        response = client.post(
            "/users", json={"username": "ada", "email": "ada@example.com", "password": "s3cret!"}
        )

        assert response.status_code == 201
        assert response.json() == {"id": 7, "username": "ada", "email": "ada@example.com"}

    def test_create_user_short_password(self, client, mock_store):
        response = client.post("/users", json={"username": "ada", "email": "ada@example.com", "password": "123"})

        assert response.status_code == 400
        mock_store.create_user.assert_not_called()

    def test_create_user_invalid_email(self, client, mock_store):
        response = client.post("/users", json={"username": "ada", "email": "not-an-email", "password": "s3cret!"})

        assert response.status_code == 400

    def test_create_user_database_error(self, client, mock_store):
        mock_store.create_user.side_effect = StoreError("Error creating user", detail="duplicate key")

        response = client.post(
            "/users", json={"username": "ada", "email": "ada@example.com", "password": "s3cret!"}
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Erreur lors de la création de l'utilisateur"}

    def test_create_review(self, client, mock_store):
        row = {"id": 3, "product_id": 1, "user_id": 7, "score": 4, "content": "Solid"}
        mock_store.create_review.return_value = row

        response = client.post("/reviews", json={"product_id": 1, "user_id": 7, "score": 4, "content": "Solid"})

        assert response.status_code == 201
        assert response.json() == row

    @pytest.mark.parametrize("score", [0, 6])
    def test_create_review_score_out_of_range(self, client, mock_store, score):
        response = client.post("/reviews", json={"product_id": 1, "user_id": 7, "score": score})

        assert response.status_code == 400
        mock_store.create_review.assert_not_called()
