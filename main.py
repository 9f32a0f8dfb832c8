"""
SaaS Admin Console API - Main Application
Multi-tenant console with super-admin and company workspaces
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from saas_console.core.config import settings
from saas_console.api.v1.router import api_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Multi-tenant SaaS admin console with schema-per-company isolation",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.on_event("startup")
async def startup_event():
    """Run on application startup - keeps serving when the database is down"""
    logger.info("=" * 60)
    logger.info("Starting %s", settings.APP_NAME)
    logger.info("Version: %s", settings.VERSION)
    logger.info("Environment: %s", settings.ENVIRONMENT)
    logger.info("Platform schema: %s", settings.PLATFORM_SCHEMA)

    try:
        from saas_console.core.database import init_db, test_connection

        if test_connection():
            logger.info("Database connection successful")
            try:
                init_db()
            except Exception as e:
                logger.error("Database initialization failed: %s", e)
                logger.warning("App will continue but database operations may fail")
        else:
            logger.warning("APP STARTED IN DEGRADED MODE: database is not accessible")
            logger.warning("Check DATABASE_URL in .env")
    except Exception as e:
        logger.error("Startup error: %s", e)

    logger.info("Application ready, API docs at /docs")
    logger.info("=" * 60)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "running",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with database status"""
    try:
        from saas_console.core.database import test_connection
        db_status = "connected" if test_connection() else "disconnected"
    except Exception:
        db_status = "error"

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "version": settings.VERSION,
        "database": db_status,
        "message": "API is running" if db_status == "connected" else "API running but database unavailable"
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
