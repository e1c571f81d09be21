import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from companies import router as companies_router
from core import settings
from core.db import Database
from core.errors import install_exception_handlers
from invoices import router as invoices_router

logging.basicConfig(
    level=settings.log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process, handed to routes through core.db.get_db.
    app.state.db = await Database.connect()
    logger.info("db_pool_ready env=%s", settings.app_env())
    try:
        yield
    finally:
        await app.state.db.close()
        app.state.db = None


app = FastAPI(title="BizTime API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_exception_handlers(app)

app.include_router(companies_router.router, tags=["companies"])
app.include_router(invoices_router.router, tags=["invoices"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
