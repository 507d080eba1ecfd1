"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
import logging

from estatehub.config import settings
from estatehub.database import check_database_connection, create_tables, close_db_connection
from estatehub.routers import (
    auth_router,
    users_router,
    properties_router,
    wishlist_router,
    offers_router,
    reviews_router,
    payments_router,
    dashboard_router,
)
from estatehub.utils.exceptions import APIException
from estatehub.services.error_handler import ErrorHandlerService
from estatehub.middleware import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    if settings.auto_create_tables:
        await create_tables()

    db_connected = await check_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    REST backend for a real-estate marketplace.

    ## Features

    * **Properties**: Agents list properties, admins verify, reject and advertise them
    * **Offers**: Buyers make offers, agents accept one per property, buyers pay for it
    * **Wishlists and Reviews**: Saved properties and buyer reviews
    * **Payments**: Card payment intents through Stripe
    * **Admin Dashboard**: Live user, property and review counts

    ## Authentication

    Exchange a signed-in identity for a token with `POST /jwt`, then include it in
    the Authorization header as `Bearer <token>`. Admin and agent endpoints check
    the role stored on the user account.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Session token issuance"},
        {"name": "Users", "description": "User accounts and roles"},
        {"name": "Properties", "description": "Property listings, verification and advertising"},
        {"name": "Wishlist", "description": "Saved properties"},
        {"name": "Offers", "description": "Purchase offers and their lifecycle"},
        {"name": "Reviews", "description": "Property reviews"},
        {"name": "Payments", "description": "Payment intents"},
        {"name": "Dashboard", "description": "Admin dashboard summary"},
        {"name": "Health", "description": "Service health"},
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

app.add_middleware(
    RequestLoggingMiddleware,
    enable_request_logging=settings.debug,
    slow_request_threshold=2.0,  # Log requests slower than 2 seconds
)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(properties_router)
app.include_router(wishlist_router)
app.include_router(offers_router)
app.include_router(reviews_router)
app.include_router(payments_router)
app.include_router(dashboard_router)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc.errors(), request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    """Handle Pydantic validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc.errors(), request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors with appropriate error responses."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with structured error responses."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint providing basic API information.
    """
    return {
        "message": "Server is running!",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        }
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    Used by container health checks and load balancers.
    """
    db_healthy = await check_database_connection()

    if not db_healthy:
        raise HTTPException(
            status_code=503,
            detail="Database connection failed"
        )

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected"
    }


def run():
    """Console entry point."""
    import uvicorn
    uvicorn.run(
        "estatehub.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )


if __name__ == "__main__":
    run()
