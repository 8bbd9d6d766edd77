"""Entry point for running the reservation service with uvicorn."""

from app.application import create_app
from app.config import get_settings
from app.utils.logging import setup_logging

setup_logging()

# Storage backend is selected during application startup
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
