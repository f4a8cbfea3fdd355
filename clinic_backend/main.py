from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import time
import logging

from .api.v1.appointments import router as appointments_router
from .api.v1.auth import router as auth_router
from .api.v1.clinics import router as clinics_router
from .api.v1.doctors import router as doctors_router
from .api.v1.locations import router as locations_router
from .api.v1.users import router as users_router
from .core.config import Settings, settings as default_settings
from .core.crypto import FieldCipher
from .core.database import Database, create_redis_client
from .core.exceptions import ClinicError, ValidationError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or ValidationError.message


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Clinic management backend with role-scoped access and field-level encryption",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings

    # Middleware setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Only add TrustedHostMiddleware in production, not in testing
    if not settings.TESTING:
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=settings.ALLOWED_HOSTS
        )

    # Custom middleware for request logging and timing
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        # Log request
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

    # Exception handlers
    @app.exception_handler(ClinicError)
    async def clinic_error_handler(request: Request, exc: ClinicError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = ValidationError(_format_validation_errors(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "code": "not_found",
                "path": str(request.url.path)
            }
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception(f"Internal server error: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "code": "internal_error"
            }
        )

    # Include routers
    for router in (
        auth_router, users_router, doctors_router,
        locations_router, clinics_router, appointments_router,
    ):
        app.include_router(router, prefix=settings.API_PREFIX)

    # Startup and shutdown events
    @app.on_event("startup")
    async def startup_event():
        """Initialize application on startup."""
        logger.info("Starting Clinic Management Backend...")

        # Missing or malformed encryption key aborts startup
        app.state.cipher = FieldCipher.from_settings(settings)

        database = Database(settings.get_database_url)
        logger.info(f"Using {database.dialect} database")
        try:
            database.open()
            database.create_all()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {str(e)}")
            database.close()
            raise
        app.state.database = database

        app.state.redis = create_redis_client(settings.REDIS_URL)

        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on application shutdown."""
        logger.info("Shutting down Clinic Management Backend...")
        database = getattr(app.state, "database", None)
        if database is not None:
            database.close()
        redis_client = getattr(app.state, "redis", None)
        if redis_client is not None:
            redis_client.close()

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": settings.VERSION
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": "Welcome to the Clinic Management Backend API",
            "version": settings.VERSION,
            "docs": "/docs",
            "redoc": "/redoc",
            "health": "/health"
        }

    # API Info endpoint
    @app.get("/api/info")
    async def api_info():
        """API information endpoint."""
        prefix = settings.API_PREFIX
        return {
            "name": settings.APP_NAME,
            "version": settings.VERSION,
            "endpoints": {
                "authentication": f"{prefix}/auth",
                "users": f"{prefix}/users",
                "doctors": f"{prefix}/doctors",
                "locations": f"{prefix}/locations",
                "clinics": f"{prefix}/clinics",
                "appointments": f"{prefix}/appointments",
                "docs": "/docs",
            }
        }

    return app


# Create FastAPI application
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clinic_backend.main:app",
        host="0.0.0.0",
        port=5000,
        reload=default_settings.DEBUG,
        log_level="info"
    )
