"""
SubmitTrx Backend - FastAPI Application

Partner transaction submission service: authenticates partners, checks
request freshness and signatures, reconciles line items and applies the
tiered discount.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from . import __version__
from .config import settings
from .exceptions import SubmitTrxError, MalformedRequestError
from .services.validation_service import get_request_validator
from .api.transactions import router as transactions_router


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: Build the partner registry and request validator
    - Shutdown: Log only, the service holds no resources
    """
    # Startup
    logger.info("Starting SubmitTrx backend server...")

    validator = get_request_validator()
    logger.info(f"Registered partners: {len(validator.registry)}")
    logger.info(f"Timestamp tolerance: {settings.timestamp_tolerance_seconds}s")

    logger.info("Server startup complete")

    yield

    # Shutdown
    logger.info("Shutting down SubmitTrx backend server...")


# Initialize FastAPI application
app = FastAPI(
    title="SubmitTrx API",
    description="Partner transaction validation with signed requests and tiered discounts",
    version=__version__,
    lifespan=lifespan,
)


# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers for transaction rejections
@app.exception_handler(SubmitTrxError)
async def submittrx_error_handler(request: Request, exc: SubmitTrxError):
    """
    Handle transaction rejections with the partner-facing response format.

    Status is 400 for malformed/inconsistent content and 401 for
    authentication, timestamp and signature failures.
    """
    # Rejections are already logged at WARNING by the validator
    logger.debug(
        f"Transaction rejected: {exc.error_code} - {exc.message}",
        extra={"details": exc.details}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handle undecodable request bodies (bad JSON, wrong field types).

    These are reported as a malformed request rather than FastAPI's 422.
    """
    logger.warning(f"Malformed request body: {exc.errors()}")

    error = MalformedRequestError()
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unexpected errors.

    Logs full exception for debugging but returns generic message to client.
    """
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "result": 0,
            "resultmessage": "An unexpected error occurred."
        }
    )


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        Server status and version information
    """
    return {
        "status": "healthy",
        "version": __version__,
    }


# Include API routers
app.include_router(transactions_router, prefix="/api", tags=["Transactions"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "submittrx.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug_reload,
        log_level=settings.log_level.lower()
    )
