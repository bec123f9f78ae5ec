"""
Reference Data service entry point.

Routers stay thin and delegate to services; services raise domain exceptions
which core.handlers turns into JSON error bodies.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from referencedata.config import settings
from referencedata.core.handlers import register_exception_handlers
from referencedata.database import create_tables
from referencedata.middleware import RequestContextMiddleware
from referencedata.routers import (
    data_transfer,
    facility_type_approved_products,
    health,
    orderables,
    product_categories,
    supported_programs,
)
from referencedata.utils.logging import configure_logging

configure_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
API_ROUTERS = (
    orderables.router,
    product_categories.router,
    facility_type_approved_products.router,
    supported_programs.router,
    data_transfer.router,
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("service_starting app=%s version=%s environment=%s",
                settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    create_tables()
    yield
    logger.info("service_stopped app=%s", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Orderables, product categories, facility type approved products and supported programs",
    lifespan=lifespan,
)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

for api_router in API_ROUTERS:
    app.include_router(api_router, prefix=API_PREFIX)
app.include_router(health.router)
