"""FastAPI application factory."""

from fastapi import FastAPI

from feeding_tracker.api.feeds import router as feeds_router
from feeding_tracker.api.pages import router as pages_router
from feeding_tracker.app_logging import configure_logging
from feeding_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    app = FastAPI(title="Baby Feeding Tracker")
    app.state.container = container

    app.include_router(pages_router)
    app.include_router(feeds_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
