"""Main FastAPI application module."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.core.config import Settings
from jobboard.core.context import AppContext
from jobboard.core.errors import JobBoardError
from jobboard.core.logging import setup_logging

from .routers import applications, auth, jobs

logger = setup_logging('api')


def error_response(
    status_code: int,
    message: str,
    detail: Optional[str],
    expose_details: bool,
) -> JSONResponse:
    """Render the ``{success, message, error}`` failure envelope."""
    content = {"success": False, "message": message}
    if expose_details and detail:
        content["error"] = detail
    return JSONResponse(status_code=status_code, content=content)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    return f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Map domain errors, schema errors and crashes onto the failure envelope."""
    expose = settings.expose_error_details

    @app.exception_handler(JobBoardError)
    async def jobboard_error_handler(request: Request, exc: JobBoardError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.detail})")
        return error_response(exc.status_code, exc.message, exc.detail, expose)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(400, _validation_message(exc), str(exc.errors()), expose)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), None, expose)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return error_response(500, "Internal server error", str(exc), expose)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Build the API around an application context.

    Args:
        context: Pre-built context; defaults to one built from the environment
    """
    if context is None:
        context = AppContext.from_settings(Settings.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        context.startup()
        try:
            yield
        finally:
            context.shutdown()

    app = FastAPI(
        title="Job Board API",
        description="""
    REST API for a job board providing:

    * Account signup and login for job seekers and companies
    * Job postings owned by company accounts
    * Job applications with résumé upload and a status workflow

    ## Authentication

    Most endpoints require a JWT bearer token issued by signup or login:
    ```
    Authorization: Bearer <your_token>
    ```
    """,
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.context = context

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app, context.settings)

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
    app.include_router(applications.router, prefix="/api/applications", tags=["applications"])

    def custom_openapi():
        """Generate OpenAPI schema with the bearer security scheme."""
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "bearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
            }
        }
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    @app.get("/api/health", tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "Job Board API",
            "version": "1.0.0"
        }

    return app


def run():
    """Console entry point: serve the API with uvicorn."""
    import os
    import uvicorn

    uvicorn.run(
        "jobboard.app.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
    )
