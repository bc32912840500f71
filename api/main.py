from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import asyncpg
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import config, db, logs
from properties import router as property_router
from properties import schema
from properties.errors import PropertyError

logger = logging.getLogger(__name__)


def _error_response(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request."


def create_app(database: db.Database | None = None) -> FastAPI:
    """
    Build the API. Pass `database` to reuse an existing handle; otherwise a
    pool is opened on startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logs.configure_logging()
        owns_database = app.state.database is None
        if owns_database:
            app.state.database = await db.connect()
        try:
            result = await schema.ensure_schema(app.state.database)
            logger.info(
                "schema_reconciled table=%s created=%s added=%s failed=%s",
                result.table,
                result.created,
                ",".join(result.added) or "-",
                ",".join(result.failed) or "-",
            )
            yield
        finally:
            if owns_database:
                await app.state.database.close()
                app.state.database = None

    app = FastAPI(title="property-data-api", lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Every failure on this API is reported as 500 {"error": ...}.
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(PropertyError)
    async def property_error_handler(request: Request, exc: PropertyError) -> JSONResponse:
        logger.warning("property_request_rejected path=%s error=%s", request.url.path, exc)
        return _error_response(exc)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.warning("property_value_rejected path=%s error=%s", request.url.path, exc)
        return _error_response(exc)

    @app.exception_handler(asyncpg.PostgresError)
    async def database_error_handler(request: Request, exc: asyncpg.PostgresError) -> JSONResponse:
        logger.exception("database_error path=%s", request.url.path, exc_info=exc)
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_failed path=%s", request.url.path, exc_info=exc)
        return _error_response(exc)

    app.include_router(property_router.router, prefix="/api/property", tags=["property"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "property-data-api"}

    return app


app = create_app()


def run() -> None:
    logs.configure_logging()
    uvicorn.run(app, host=config.listen_host(), port=config.listen_port(), log_config=None)


if __name__ == "__main__":
    run()
