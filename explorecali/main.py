import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager
from . import db
from . import router
from .core import config
from .core.logging import configure_logging

logger = logging.getLogger(__name__)


# สร้างตารางตอนเริ่มแอป และปิด engine ตอนจบ
def make_lifespan(settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.CREATE_TABLES_ON_STARTUP:
            await db.create_tables()
        yield
        if db.engine is not None:
            await db.close_session()
    return lifespan


def create_app(settings=None):
    if not settings:
        settings = config.get_settings()

    configure_logging(settings)
    app = FastAPI(title="Explore California", lifespan=make_lifespan(settings))
    app.state.settings = settings

    db.init_db(settings)
    app.include_router(router.get_router(), prefix="/api")
    logger.info("Explore California API ready on %s", config.safe_database_url(settings.DATABASE_URL))

    return app
