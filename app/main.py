# app/main.py
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
import uvicorn

from app.api import register_error_handlers
from app.api.routers import health, products, carts, orders
from app.data.database import Base, engine
from app.utils.settings import CREATE_TABLES_ON_STARTUP, CART_TOKEN_HEADER, CART_COOKIE_NAME
from app.utils.logging import get_logger, mask_token

# import modeli zeby zarejestrowaly sie w Base.metadata
from app.data import models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # na produkcji schemat jest zarzadzany osobno
    if CREATE_TABLES_ON_STARTUP:
        logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
        Base.metadata.create_all(bind=engine)
    yield


async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    token = getattr(request.state, "cart_token", None) or request.headers.get(
        CART_TOKEN_HEADER
    ) or request.cookies.get(CART_COOKIE_NAME)

    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"in {duration_ms:.1f}ms cart={mask_token(token)}"
    )
    return response


def create_app() -> FastAPI:
    app = FastAPI(
        title="Guest Cart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)
    app.middleware("http")(log_requests)

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
