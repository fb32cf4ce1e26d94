"""tasklist - Task list with priorities, filters and weather hints for outdoor tasks."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from tasklist.core.config import settings
from tasklist.core.local_storage import KeyValueStorage, LocalStorage
from tasklist.core.logging import configure_logfire, instrument_fastapi
from tasklist.core.store import Store
from tasklist.interface.task_router import router as task_router
from tasklist.modules.tasks.persistence import load_auth_flag
from tasklist.modules.tasks.view import TaskListView
from tasklist.services.confirmation_service import StaticConfirmer
from tasklist.services.notification_service import NotificationService
from tasklist.services.weather_service import WeatherService


logger = logging.getLogger(__name__)


def validate_startup_configuration() -> None:
    """Log which optional integrations are available.

    The weather panel is optional, so a missing key only disables it.
    """
    try:
        settings.require_credential("weather_api_key", "Weather API")
        logger.info("startup_validation", extra={"service": "weather", "status": "ok"})
    except ValueError as e:
        logger.warning("startup_validation", extra={"service": "weather", "status": "disabled", "error": str(e)})


def create_app(
    *,
    storage: KeyValueStorage | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        storage: Storage to mirror tasks into; a SQLite `LocalStorage` is opened when omitted
        transport: Optional httpx transport for the weather client, used by tests
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan context manager."""
        # Startup
        configure_logfire()
        validate_startup_configuration()

        owned_storage: LocalStorage | None = None
        active_storage = storage
        if active_storage is None:
            owned_storage = LocalStorage(path=settings.storage_path)
            await owned_storage.open()
            active_storage = owned_storage

        store = Store()
        store.set_auth(
            is_authenticated=await load_auth_flag(storage=active_storage),
            city=settings.default_city,
        )
        view = TaskListView(
            store=store,
            weather_service=WeatherService(store=store, transport=transport),
            storage=active_storage,
            confirmer=StaticConfirmer(answer=False),
            notifier=NotificationService(),
        )
        restored = await view.start()
        logger.info("Task list ready", extra={"restored": restored})
        app.state.task_list_view = view

        yield

        # Shutdown
        await view.close()
        if owned_storage is not None:
            await owned_storage.close()

    app = FastAPI(
        title="tasklist",
        description="Task list with priorities, filters and weather hints for outdoor tasks",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI with Logfire
    instrument_fastapi(app)

    # Register routers
    app.include_router(task_router)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "healthy"}, status_code=200)

    return app


app = create_app()
