# shop/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from shop.api.deps import session_middleware
from shop.api.routers import admin, carts, catalog, health, managers, orders
from shop.data.database import Base, engine
from shop.data.seed import seed
from shop.utils.logging import get_logger

# import wszystkich modeli przed create_all
import shop.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    seed()
    logger.info("Database ready")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app(use_lifespan: bool = True) -> FastAPI:
    app = FastAPI(
        title="Shop",
        version="1.0.0",
        lifespan=lifespan if use_lifespan else None,
    )

    app.middleware("http")(session_middleware)

    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(managers.router)
    app.include_router(admin.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
