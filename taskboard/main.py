"""FastAPI application entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from taskboard.api import health, tasks
from taskboard.core.config import Settings, settings
from taskboard.core.errors import register_exception_handlers
from taskboard.services.task_store import TaskStore

logger = logging.getLogger(__name__)


def _normalize_route(route: str) -> str:
    route = route.strip()
    if not route:
        return "/"
    if not route.startswith("/"):
        route = f"/{route}"
    if len(route) > 1 and route.endswith("/"):
        route = route.rstrip("/")
    return route


def _mount_frontend(app: FastAPI, app_settings: Settings) -> str | None:
    """Mount the static browser client using StaticFiles."""
    if not app_settings.SERVE_FRONTEND:
        return None

    frontend_path = Path(app_settings.FRONTEND_DIST_PATH).resolve()
    if not frontend_path.is_dir():
        raise RuntimeError(
            f"Configured frontend path '{frontend_path}' does not exist. "
            "Point FRONTEND_DIST_PATH at the browser client or disable SERVE_FRONTEND."
        )

    index_file = frontend_path / "index.html"
    if not index_file.is_file():
        raise RuntimeError(f"Frontend path '{frontend_path}' is missing index.html.")

    route = _normalize_route(app_settings.FRONTEND_ROUTE)
    app.mount(route, StaticFiles(directory=str(frontend_path), html=True), name="frontend")
    logger.info("Mounted frontend assets from %s at route '%s'", frontend_path, route)
    return route


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_settings: Settings = app.state.settings
    logger.info("Starting %s %s...", app_settings.PROJECT_NAME, app_settings.VERSION)
    if app.state.frontend_route:
        ui_url = f"{app_settings.APP_BASE_URL.rstrip('/')}{app.state.frontend_route}"
        logger.info("Browser client available at %s", ui_url)
    yield
    # Tasks are not persisted; whatever is left goes away with the process.
    logger.info(
        "Shutting down %s, discarding %d task(s)",
        app_settings.PROJECT_NAME,
        app.state.task_store.count(),
    )


def create_app(app_settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Build the application around a single task store.

    Args:
        app_settings: Settings to use; defaults to the environment-derived ones
        store: Store instance to serve; a fresh empty one when omitted
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="Task tracking API",
        version=app_settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.task_store = store if store is not None else TaskStore()

    # Wildcard origins cannot be combined with credentials.
    allow_credentials = "*" not in app_settings.CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    prefix = app_settings.API_PREFIX.rstrip("/")
    app.include_router(health.router, prefix=prefix, tags=["health"])
    app.include_router(tasks.router, prefix=f"{prefix}/tasks", tags=["tasks"])

    frontend_route = _mount_frontend(app, app_settings)
    app.state.frontend_route = frontend_route

    @app.get("/", include_in_schema=False, response_model=None)
    async def root() -> RedirectResponse | dict[str, str]:
        """Redirect to the browser client when it is served, else describe the API."""
        if frontend_route:
            return RedirectResponse(url=frontend_route)
        return {"message": f"{app_settings.PROJECT_NAME} API", "version": app_settings.VERSION}

    return app


app = create_app()
