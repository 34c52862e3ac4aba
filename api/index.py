"""
Storefront Cart API - FastAPI Application

Single entry point for the cart endpoints the storefront pages call.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.db import close_redis
from storefront.logging import get_logger
from storefront.routers import cart_router
from storefront.services.catalog import close_catalog, init_catalog

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    await init_catalog()
    logger.info("Cart API started")
    yield
    # Shutdown
    close_catalog()
    await close_redis()


app = FastAPI(
    title="Storefront Cart",
    description="Shopping cart API backed by Redis",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(cart_router, prefix="/api")


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront-cart"}
