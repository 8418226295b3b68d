"""
WA Storefront Backend API
FastAPI + MongoDB + Cloudinary
"""
import logging
from contextlib import asynccontextmanager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(levelname)s:     %(message)s'
)

logger = logging.getLogger(__name__)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from storefront.database import connect_db, close_db
from storefront.config import settings
from storefront.exceptions import StorefrontError, StorageError
from storefront.background_tasks import background_tasks

# Import routers (separately to avoid circular imports)
from storefront.routers import api_key_router
from storefront.routers import cloudinary_router
from storefront.routers import notification_router
from storefront.routers import product_router
from storefront.routers import storefront_router
from storefront.routers import post_router
from storefront.routers import analytics_router
from storefront.routers import settings_router


# ============================================================================
# Lifespan Context Manager
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    Handles startup and shutdown events
    """
    # ========== STARTUP ==========
    logger.info("🚀 Starting WA Storefront...")

    # 1. Connect to database (creates indexes)
    await connect_db()
    logger.info("💾 Database connected")

    # 2. Start the hourly quota check
    if settings.QUOTA_CHECK_ENABLED:
        await background_tasks.start()
        logger.info("⚙️  Background tasks started")
    else:
        logger.info("ℹ️  Quota check disabled")

    logger.info("✅ WA Storefront API ready!")

    yield

    # ========== SHUTDOWN ==========
    logger.info("👋 Shutting down WA Storefront...")

    await background_tasks.stop()
    await close_db()

    logger.info("✅ WA Storefront API stopped")


# ============================================================================
# Create FastAPI App
# ============================================================================

app = FastAPI(
    title="WA Storefront API",
    description="Catalog, posts and WhatsApp ordering with Cloudinary images",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__}
    )

@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.error(f"❌ Database error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=StorageError.status_code,
        content={"detail": "Database unavailable", "error": StorageError.__name__}
    )


# ============================================================================
# Health Check Endpoints
# ============================================================================

@app.get("/")
async def root():
    """API health check"""
    return {
        "service": "WA Storefront API",
        "version": "1.0.0",
        "status": "healthy",
        "docs": "/api/docs"
    }

@app.get("/health")
async def health_check():
    """Detailed health check"""
    return {
        "status": "healthy",
        "database": "connected",
        "environment": settings.ENVIRONMENT,
        "cloudinary_configured": bool(
            settings.CLOUDINARY_CLOUD_NAME
            and settings.CLOUDINARY_API_KEY
            and settings.CLOUDINARY_API_SECRET
        ),
        "quota_check_enabled": settings.QUOTA_CHECK_ENABLED
    }


# ============================================================================
# Include Routers
# ============================================================================

# Admin
app.include_router(api_key_router.router, prefix="/api/keys", tags=["API Keys"])
app.include_router(cloudinary_router.router, prefix="/api")
app.include_router(notification_router.router, prefix="/api", tags=["Notifications"])
app.include_router(product_router.router, prefix="/api")
app.include_router(post_router.router, prefix="/api")
app.include_router(analytics_router.router, prefix="/api")
app.include_router(settings_router.router, prefix="/api")

# Public
app.include_router(storefront_router.router, prefix="/api")
