from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from product_dashboard.adapters.http_product_source import HttpProductSource
from product_dashboard.adapters.latest_view_display import LatestViewDisplay
from product_dashboard.entrypoints.http.exception_handlers import register_exception_handlers
from product_dashboard.entrypoints.http.routes.dashboard import router as dashboard_router
from product_dashboard.entrypoints.http.routes.health import router as health_router
from product_dashboard.ports.product_source import ProductSource
from product_dashboard.use_cases.dashboard_controller import DashboardController


def build_app(
    product_source: ProductSource | None = None,
    *,
    load_on_startup: bool = True,
) -> FastAPI:
    """
    Build the dashboard application around a single controller.

    Args:
        product_source: Catalog source; defaults to the remote products API
        load_on_startup: Fetch the catalog when the app starts

    Returns:
        FastAPI app with the controller and display on app.state
    """
    source = product_source if product_source is not None else HttpProductSource()
    display = LatestViewDisplay()
    controller = DashboardController(product_source=source, display=display)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            if load_on_startup:
                await controller.init()
            yield
        finally:
            await source.aclose()

    app = FastAPI(
        title="Product Dashboard API",
        description="""
        Product catalog dashboard: search, sort and paginate the catalog
        fetched from the products API.

        ## Features
        - Case-insensitive title search
        - Sort by price or name, toggling direction
        - Pages of 5, 10 or 20 products

        ## Session
        One dashboard per running app. Every event returns the view it
        produced.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        A failed catalog fetch is reported in the view (status `error`).
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        lifespan=lifespan,
    )

    app.state.display = display
    app.state.dashboard_controller = controller

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(dashboard_router, prefix="/v1")

    return app
