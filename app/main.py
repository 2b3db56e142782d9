from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api import pages
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.handlers import register_exception_handlers
from app.core.logging import logger
from app.services.analytics.metrics import MetricSource, RandomMetricSource
from app.services.store.base import Store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the SQL store unless one was injected, and release it on shutdown."""
    logger.info(f"Starting {settings.PROJECT_NAME}...")
    owns_store = app.state.store is None
    if owns_store:
        from app.services.store.sql import SQLStore
        app.state.store = SQLStore.from_url(settings.DATABASE_URL, create_tables=settings.AUTO_CREATE_TABLES)
    try:
        yield
    finally:
        logger.info(f"Shutting down {settings.PROJECT_NAME}...")
        if owns_store:
            app.state.store.close()
            app.state.store = None


def create_app(
    store: Optional[Store] = None,
    metrics: Optional[MetricSource] = None,
    frontend_dir: Optional[str] = None,
) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.metrics = metrics or RandomMetricSource()
    app.state.frontend_dir = frontend_dir or settings.FRONTEND_DIR

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(pages.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
