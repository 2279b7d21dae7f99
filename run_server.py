#!/usr/bin/env python3
"""
Catalog Backend Startup Script
This script starts the FastAPI server with the JSON and SOAP front ends.
"""

import logging

import uvicorn

from src.config import API_HOST, API_PORT, LOG_LEVEL

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("Starting Catalog Backend...")
    logger.info("Available endpoints:")
    logger.info("  - Health Check: GET /health")
    logger.info("  - Products: GET/POST /products, GET/PATCH/DELETE /products/{product_id}")
    logger.info("  - Users: POST /users")
    logger.info("  - Reviews: POST /reviews")
    logger.info("  - SOAP Products Service: POST /soap/products")
    logger.info(f"  - API Docs: http://localhost:{API_PORT}/docs")

    uvicorn.run(
        "src.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
        log_level=LOG_LEVEL.lower()
    )
