"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from food_ordering.api.admin import router as admin_router
from food_ordering.api.auth import router as auth_router
from food_ordering.api.cart import router as cart_router
from food_ordering.api.chef import router as chef_router
from food_ordering.api.food import router as food_router
from food_ordering.api.orders import router as order_router
from food_ordering.app_logging import configure_logging
from food_ordering.config import parse_endpoints
from food_ordering.containers import AppContainer
from food_ordering.domain.errors import OrderingError

_STATUS_BY_KIND = {
    "invalid_input": status.HTTP_400_BAD_REQUEST,
    "out_of_region": status.HTTP_400_BAD_REQUEST,
    "empty_cart": status.HTTP_400_BAD_REQUEST,
    "insufficient_stock": status.HTTP_400_BAD_REQUEST,
    "no_chefs_available": status.HTTP_400_BAD_REQUEST,
    "invalid_state": status.HTTP_400_BAD_REQUEST,
    "unauthenticated": status.HTTP_401_UNAUTHORIZED,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "upstream_unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Spoke food ordering API", lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_endpoints(container.settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(OrderingError)
    async def ordering_error_handler(
        request: Request, exc: OrderingError
    ) -> JSONResponse:
        status_code = _STATUS_BY_KIND.get(
            exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status_code,
            content={"kind": exc.kind, "detail": exc.detail},
        )

    app.include_router(auth_router)
    app.include_router(food_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(chef_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
