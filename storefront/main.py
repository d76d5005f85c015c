"""
Storefront - Backend API
Multi-vendor marketplace: catalog, cart, checkout with PayFast, vendor and
admin tooling
"""
import logging
import time
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

# Import API routers
from storefront.api import (
    products, categories, stores, cart, wishlist, checkout, orders, auth,
    vendor, admin_wefullfil, admin_shipping_rates, seo,
)
from storefront.core.config import settings
from storefront.core.database import get_db_connection_dict_with_retry

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(products.router, prefix="/api/v1/products", tags=["Products"])
app.include_router(categories.router, prefix="/api/v1/categories", tags=["Categories"])
app.include_router(stores.router, prefix="/api/v1/stores", tags=["Stores"])
app.include_router(cart.router, prefix="/api/v1/cart", tags=["Cart"])
app.include_router(wishlist.router, prefix="/api/v1/wishlist", tags=["Wishlist"])
app.include_router(checkout.router, prefix="/api/v1/checkout", tags=["Checkout"])
app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(vendor.router, prefix="/api/v1/vendor", tags=["Vendor"])
app.include_router(admin_wefullfil.router, prefix="/api/v1/admin/wefullfil", tags=["Admin - WeFulFil"])
app.include_router(admin_shipping_rates.router, prefix="/api/v1/admin/shipping-rates", tags=["Admin - Shipping"])
app.include_router(seo.router, prefix="/api/v1/seo", tags=["SEO"])


@app.get("/")
async def root():
    """Root endpoint - API status"""
    return {
        "message": f"{settings.SITE_NAME} API",
        "status": "online",
        "version": settings.API_VERSION
    }


@app.get("/health")
async def health():
    """Health check endpoint for monitoring - tests database connectivity"""
    start_time = time.time()

    db_status = "unknown"
    db_latency_ms = None
    db_error = None

    try:
        # Minimal retry keeps the check fast
        conn = get_db_connection_dict_with_retry(max_retries=1, retry_delay=0.5)
        cursor = conn.cursor()

        db_start = time.time()
        cursor.execute("SELECT 1")
        cursor.fetchone()
        db_latency_ms = round((time.time() - db_start) * 1000, 2)

        cursor.close()
        conn.close()
        db_status = "connected"
    except Exception as e:
        logger.error(f"Health check database error: {e}")
        db_status = "disconnected"
        db_error = str(e)

    total_latency_ms = round((time.time() - start_time) * 1000, 2)

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "service": "storefront-api",
        "version": settings.API_VERSION,
        "database": {
            "status": db_status,
            "latency_ms": db_latency_ms,
            "error": db_error
        },
        "total_latency_ms": total_latency_ms
    }
