"""
Backend main application file for the emotion frames service.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from app.api.api import api_router
from app.core.config import settings


# Configure comprehensive logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(),  # Console output for Docker
    ]
)

# Set up loggers for different components
logger = logging.getLogger(__name__)
httpcore_logger = logging.getLogger("httpcore")
httpx_logger = logging.getLogger("httpx")

httpcore_logger.setLevel(logging.ERROR)
httpx_logger.setLevel(logging.ERROR)


@asynccontextmanager
# pylint: disable=unused-argument
async def lifespan(fastapi_app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("🚀 Starting %s v%s", settings.app_name, settings.version)
    logger.info("🔧 Environment: %s", "development" if settings.debug else "production")
    logger.info("🌐 Server: %s:%d", settings.host, settings.port)
    logger.info("📊 Database: %s", settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url)
    logger.info("🧠 Analysis worker: %s", settings.analysis_worker_url)
    if not settings.ingestion_api_key:
        logger.warning("⚠️ INGESTION_API_KEY is not set; frame ingestion will reject every request")
    yield
    # Shutdown
    logger.info("🛑 Shutting down %s", settings.app_name)


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Emotion analysis frame ingestion and analytics backend",
    openapi_url="/api/openapi.json" if settings.debug else None,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api")


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Middleware to log requests and responses"""
    start_time = time.time()
    # Log incoming request
    logger.debug(
        "📥 Incoming request: %s %s from %s:%s",
        request.method,
        request.url.path,
        request.client.host if request.client else "unknown",
        request.client.port if request.client else "unknown"
    )
    response = await call_next(request)
    # Calculate processing time
    process_time = time.time() - start_time
    # Log response
    logger.debug(
        "📤 Response: %s %s -> %d (%dms)",
        request.method,
        request.url.path,
        response.status_code,
        int(process_time * 1000)
    )
    return response


@app.middleware("http")
async def redirect_middleware(request: Request, call_next):
    """Middleware to handle API health check redirect"""
    path = request.url.path
    if path == "/health":
        return RedirectResponse(url="/api/health")
    response = await call_next(request)
    return response


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": f"{settings.app_name} API", "version": settings.version}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info"
    )
