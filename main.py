# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import IntegrityError

from app.routers import (
    company_router,
    employee_router,
    product_category_router,
    product_router,
    quotation_router,
    supplier_quotation_router,
)

from app.core.config import APP_ENV, APP_VERSION, CORS_ORIGINS
from app.core.db import Database, init_models
from app.core.exceptions import AppException
from app.core.logging import setup_logging
from app.middleware.request_logging import request_logging_middleware
from app.core.error_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    integrity_error_handler,
    unhandled_exception_handler,
)

# ------------------------------------------------------------------------------
# ENV CONFIG
# ------------------------------------------------------------------------------
APP_NAME = "Operations Dashboard: Quotation Requests API"

# ------------------------------------------------------------------------------
# LOGGING
# ------------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# LIFESPAN
# ------------------------------------------------------------------------------
def _lifespan(database: Database):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting application")

        database.connect()
        app.state.db = database

        if APP_ENV == "development":
            await init_models(database)
            logger.info("Database models initialized (development)")
        else:
            logger.info("%s mode: init_models() skipped", APP_ENV)

        yield

        logger.info("Shutting down application")
        await database.dispose()

    return lifespan


# ------------------------------------------------------------------------------
# APP INIT
# ------------------------------------------------------------------------------
def create_app(database: Database | None = None) -> FastAPI:
    database = database or Database()

    app = FastAPI(
        title=APP_NAME,
        description="Backend API for quotation requests and their master data",
        version=APP_VERSION,
        docs_url="/docs" if APP_ENV != "production" else None,
        redoc_url=None,
        lifespan=_lifespan(database),
    )
    # Available before startup so an in-process test client can use it.
    app.state.db = database

    # --------------------------------------------------------------------------
    # EXCEPTION HANDLERS
    # --------------------------------------------------------------------------
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------------------
    # MIDDLEWARE
    # --------------------------------------------------------------------------
    app.middleware("http")(request_logging_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --------------------------------------------------------------------------
    # HEALTH CHECK
    # --------------------------------------------------------------------------
    @app.get("/", tags=["Health"])
    async def health_check():
        return {
            "status": "ok",
            "service": "quotation-requests-api",
            "environment": APP_ENV,
            "version": APP_VERSION,
        }

    # --------------------------------------------------------------------------
    # ROUTERS
    # --------------------------------------------------------------------------
    app.include_router(company_router)
    app.include_router(employee_router)
    app.include_router(product_category_router)
    app.include_router(product_router)
    app.include_router(quotation_router)
    app.include_router(supplier_quotation_router)

    return app


app = create_app()
