"""FastAPI application for the catalog service: JSON routes and the SOAP endpoint."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from src.config import LOG_LEVEL
from src.schemas import Product, ProductCreate, ProductFilters, ProductUpdate, Review, ReviewCreate, User, UserCreate
from src.services.catalog_store import catalog_store
from src.services.errors import EmptyResult, NoFieldsToUpdate, NotFound, StoreError
from src.soap.envelope import EnvelopeError, build_fault, build_response, parse_request
from src.soap.service import PRODUCT_DELETED, SoapFault, products_service

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="API de produits et commandes",
    description="Product catalog with JSON and SOAP front ends",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Invalid payloads are client errors: 400 rather than FastAPI's 422."""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may hold exception objects and input may hold inf/nan, neither is valid JSON
    return [{key: value for key, value in error.items() if key not in ("ctx", "input")} for error in exc.errors()]


# Health check endpoint
@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "Catalog API"}


# Product Endpoints
@app.get("/products", response_model=list[Product])
def list_products(
    name: Optional[str] = Query(None),
    about: Optional[str] = Query(None),
    price: Optional[str] = Query(None, description="Maximum price; ignored when not a number"),
):
    """List products, optionally filtered by name, description and maximum price."""
    filters = ProductFilters(name_contains=name, about_contains=about, max_price=price)
    try:
        return catalog_store.list_products(filters)
    except EmptyResult:
        return JSONResponse(status_code=404, content={"message": "Aucun produit trouvé"})
    except StoreError:
        raise HTTPException(status_code=500, detail="Erreur lors de la récupération des produits")


@app.get("/products/{product_id}", response_model=Product)
def get_product(product_id: int):
    """Get one product."""
    try:
        return catalog_store.get_product(product_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Produit non trouvé.")
    except StoreError:
        raise HTTPException(status_code=500, detail="Erreur lors de la récupération du produit")


@app.post("/products", response_model=Product, status_code=201)
def create_product(request: ProductCreate):
    """Create a product."""
    try:
        return catalog_store.create_product(request)
    except StoreError:
        raise HTTPException(status_code=500, detail="Erreur lors de la création du produit")


@app.patch("/products/{product_id}", response_model=Product)
def patch_product(product_id: int, request: ProductUpdate):
    """Update only the fields present in the body."""
    try:
        return catalog_store.patch_product(product_id, request)
    except NoFieldsToUpdate:
        raise HTTPException(status_code=400, detail="Aucune donnée fournie pour la mise à jour.")
    except NotFound:
        raise HTTPException(status_code=404, detail="Produit non trouvé.")
    except StoreError:
        raise HTTPException(status_code=500, detail="Erreur lors de la mise à jour du produit")


@app.delete("/products/{product_id}")
def delete_product(product_id: int):
    """Delete a product."""
    try:
        catalog_store.delete_product(product_id)
        return {"message": PRODUCT_DELETED}
    except NotFound:
        raise HTTPException(status_code=404, detail="Produit non trouvé.")
    except StoreError:
        raise HTTPException(status_code=500, detail="Erreur lors de la suppression du produit")


# User Endpoints
@app.post("/users", response_model=User, status_code=201)
def create_user(request: UserCreate):
    """Create a user. The password is stored hashed and never returned."""
    try:
        return catalog_store.create_user(request)
    except StoreError:
        raise HTTPException(status_code=500, detail="Erreur lors de la création de l'utilisateur")


# Review Endpoints
@app.post("/reviews", response_model=Review, status_code=201)
def create_review(request: ReviewCreate):
    """Submit a review for a product."""
    try:
        return catalog_store.create_review(request)
    except StoreError:
        raise HTTPException(status_code=500, detail="Erreur lors de la création de l'avis")


# SOAP Endpoint
@app.post("/soap/products")
async def soap_products(request: Request):
    """Products SOAP service: CreateProduct, GetProducts, PatchProduct, DeleteProduct."""
    payload = await request.body()
    try:
        operation, args = parse_request(payload)
        result = await run_in_threadpool(products_service.dispatch, operation, args)
    except EnvelopeError as e:
        logger.warning(f"Rejected SOAP request: {e}")
        return _xml_response(build_fault("Malformed SOAP request", detail=str(e), code="Client"), 500)
    except SoapFault as fault:
        return _xml_response(build_fault(fault.fault_string, detail=fault.detail, code=fault.code), 500)

    return _xml_response(build_response(operation, result), 200)


def _xml_response(content: bytes, status_code: int) -> Response:
    return Response(content=content, status_code=status_code, media_type="text/xml; charset=utf-8")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
