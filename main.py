"""
Image Transform Service - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import build_storage_gateway
from api.exceptions import register_exception_handlers
from api.routers import transform
from config import get_settings
from core.enums import TransformKind
from services.transform_service import TransformService

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Quiet down the AWS SDK
logging.getLogger("botocore").setLevel(logging.WARNING)
logging.getLogger("boto3").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info("Starting Image Transform service...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Storage backend: {settings.storage.backend}")

    # Tests may pre-populate state with their own service
    if getattr(app.state, "transform_service", None) is None:
        storage = build_storage_gateway(settings.storage)
        app.state.transform_service = TransformService(storage=storage)
    app.state.config = settings.to_dict()

    yield

    logger.info("Image Transform service shut down")


# Create FastAPI app
app = FastAPI(
    title="Image Transform Service",
    description="Grayscale, resize and rotate images held in object storage",
    version="1.0.0",
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(transform.router, prefix="/api/transform", tags=["Transform"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Image Transform Service",
        "status": "running",
        "version": "1.0.0",
        "transforms": [kind.value for kind in TransformKind],
        "endpoints": {
            "transform": "/api/transform",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "transform_service": getattr(app.state, "transform_service", None) is not None,
        },
    }


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": f"Internal server error: {str(exc)}"})


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host=settings.api.host,
            port=settings.api.port,
            reload=settings.system.debug,
            log_level=settings.system.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
