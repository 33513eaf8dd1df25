import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from school_admin.api.academic_year.router import router as academic_year_router
from school_admin.api.books.router import router as books_router
from school_admin.api.class_books.router import router as class_books_router
from school_admin.api.dashboard.router import router as dashboard_router
from school_admin.api.fee_structure.router import router as fee_structure_router
from school_admin.api.fees.router import router as fees_router
from school_admin.api.health.router import router as health_router
from school_admin.api.learner_archives.router import router as learner_archives_router
from school_admin.api.learners.router import router as learners_router
from school_admin.api.term_settings.router import router as term_settings_router
from school_admin.core.config import settings
from school_admin.core.logging_config import configure_logging
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    connection: ConnectionManager = app.state.connection
    await connection.start()
    yield
    await connection.stop()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.error("Validation failed for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Validation failed", "details": jsonable_encoder(exc.errors())},
    )


async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Record store error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(connection: Optional[ConnectionManager] = None) -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title="School Administration Backend", lifespan=lifespan)
    app.state.connection = connection or ConnectionManager(
        engine,
        max_retries=settings.store_max_retries,
        retry_backoff=settings.store_retry_backoff_seconds,
        reconnect_interval=settings.store_reconnect_interval_seconds,
    )

    # No server-side authentication; access is gated by the front end only.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)

    # Routers
    app.include_router(health_router)
    app.include_router(dashboard_router)
    app.include_router(learners_router)
    app.include_router(fees_router)
    app.include_router(books_router)
    app.include_router(class_books_router)
    app.include_router(fee_structure_router)
    app.include_router(term_settings_router)
    app.include_router(learner_archives_router)
    app.include_router(academic_year_router)

    return app


app = create_app()
