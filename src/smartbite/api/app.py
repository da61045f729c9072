"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Query, Request, status

from smartbite.api.foods import router as foods_router
from smartbite.api.notifications import router as notifications_router
from smartbite.app_logging import configure_logging
from smartbite.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "SmartBite API starting: environment=%s", container.settings.environment
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="SmartBite", lifespan=lifespan)
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(notifications_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/nutrition/search")
    async def nutrition_search(
        request: Request,
        query: str = Query(min_length=1),
        limit: int = Query(default=5, ge=1, le=25),
    ) -> dict[str, object]:
        """Search USDA FoodData Central by name."""
        state_container: AppContainer = request.app.state.container
        try:
            foods = await state_container.nutrition_service.search(query, limit=limit)
        except httpx.HTTPError as exc:
            logger.exception("Nutrition search failed", extra={"query": query})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Nutrition provider unavailable",
            ) from exc
        return {
            "foods": [
                {
                    "fdc_id": food.fdc_id,
                    "description": food.description,
                    "brand_owner": food.brand_owner,
                    "brand_name": food.brand_name,
                    "data_type": food.data_type,
                }
                for food in foods
            ]
        }

    return app
