import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.router.error_handlers import register_exception_handlers
from app.router.routes_health import router as health_router
from app.router.routes_payments import router as payments_router
from app.utils.config import settings
from app.utils.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    logger.info("Starting payment instruction service. strict_anchor=%s", settings.instruction_strict_anchor)
    yield
    logger.info("Payment instruction service stopped")


app = FastAPI(title=settings.app_title, lifespan=lifespan)
register_exception_handlers(app)
app.include_router(health_router)
app.include_router(payments_router)
