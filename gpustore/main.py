# gpustore/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi import FastAPI

from gpustore.core.config import get_settings
from gpustore.core.storage_utils import images_dir
from gpustore.database import create_db_and_tables, dispose_engine

# Import models so SQLModel metadata is populated before create_all()
from gpustore.models import user as _user_models  # noqa: F401
from gpustore.models import catalog as _catalog_models  # noqa: F401
from gpustore.models import cart as _cart_models  # noqa: F401
from gpustore.models import order as _order_models  # noqa: F401
from gpustore.models import comment as _comment_models  # noqa: F401

# Routers
from gpustore.routers.users import router as users_router
from gpustore.routers.video_cards import router as video_cards_router
from gpustore.routers.manufacturers import router as manufacturers_router
from gpustore.routers.technologies import router as technologies_router
from gpustore.routers.cart import router as cart_router
from gpustore.routers.orders import router as orders_router
from gpustore.routers.admin import router as admin_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.

    Shutdown:
      - Dispose the connection pool.
    """
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield
    dispose_engine()
    logger.info("Shutdown: connection pool disposed.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded card images: /static/images/<filename>
images_dir()
app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

# Versioned API prefix, e.g. /api/v1
app.include_router(users_router, prefix=settings.API_V1_STR)
app.include_router(video_cards_router, prefix=settings.API_V1_STR)
app.include_router(manufacturers_router, prefix=settings.API_V1_STR)
app.include_router(technologies_router, prefix=settings.API_V1_STR)
app.include_router(cart_router, prefix=settings.API_V1_STR)
app.include_router(orders_router, prefix=settings.API_V1_STR)
app.include_router(admin_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Home view / health check endpoint."""
    return {"status": "ok", "service": "gpustore-backend"}
