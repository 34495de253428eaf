"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contract_studio import __version__
from contract_studio.api.middleware import RequestLoggingMiddleware
from contract_studio.api.v1.router import router as v1_router
from contract_studio.config import settings
from contract_studio.core.exceptions import ContractStudioError
from contract_studio.models.errors import ErrorKind
from contract_studio.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    configure_logging()
    logger.info(
        "application.starting",
        version=__version__,
        environment=settings.app_env,
        network=settings.network_name,
        compiler_backends=settings.compiler_backends,
        custodial_key_configured=bool(settings.private_key),
    )

    yield

    # Shutdown
    logger.info("application.shutdown")


def failure_body(message: str, kind: ErrorKind) -> dict[str, object]:
    """Uniform ``success: false`` payload."""
    return {"success": False, "error": message, "errorKind": kind.value}


def describe_validation_error(exc: RequestValidationError) -> str:
    """Short message naming the first offending request field."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if first.get("type") == "missing":
        return f"Missing {field}" if field else "Missing request body"
    if not field:
        return "Invalid request body"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Contract Studio API",
        description="Compile smart contracts and deploy them to an EVM test network",
        version=__version__,
        docs_url="/docs" if settings.app_debug else None,
        redoc_url="/redoc" if settings.app_debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Reject malformed request bodies before any backend runs."""
        message = describe_validation_error(exc)
        logger.info("request.invalid", path=request.url.path, error=message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=failure_body(message, ErrorKind.INVALID_INPUT),
        )

    @app.exception_handler(ContractStudioError)
    async def contract_studio_error_handler(
        request: Request, exc: ContractStudioError
    ) -> JSONResponse:
        """Handle application-specific errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content=failure_body(exc.message, exc.kind),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure_body("An unexpected error occurred", ErrorKind.UNKNOWN),
        )

    # Include routers
    app.include_router(v1_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "contract_studio.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
