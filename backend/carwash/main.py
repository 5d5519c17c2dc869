"""
CarWash Booking - FastAPI Main Application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from carwash.api.v1.router import api_router
from carwash.core.config import settings
from carwash.core.errors import STATUS_BAD_REQUEST, STATUS_INTERNAL_ERROR, CarWashError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(
        f"Booking rules: {settings.min_weekly_hours:g}h/week minimum, "
        f"{settings.block_capacity} bookings per block, timezone {settings.service_timezone}"
    )

    yield

    logger.info(f"Shutting down {settings.app_name}")


async def carwash_error_handler(request: Request, exc: CarWashError) -> JSONResponse:
    if exc.status_code >= STATUS_INTERNAL_ERROR:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.code, exc.details)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("type") == "missing_washer_id" for err in errors):
        error = CarWashError(
            "washer_id is required when mode=specific",
            code="missing_washer_id",
        )
    else:
        error = CarWashError(
            "Required fields are missing or invalid",
            code="missing_required_fields",
            details=[
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in errors
            ],
        )
    return JSONResponse(status_code=STATUS_BAD_REQUEST, content=error.to_dict())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=STATUS_INTERNAL_ERROR,
        content={"error": "unexpected_error", "message": "Unexpected server error"},
    )


def create_application() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title=settings.app_name,
        description="Car wash scheduling, availability and booking API",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list or ["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CarWashError, carwash_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Include API router
    app.include_router(api_router, prefix="/api/v1")

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_application()
