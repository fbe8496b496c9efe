"""FastAPI application entry point."""
from fastapi import FastAPI

from app.logging_config import configure_logging
from app.routers import health, strength


configure_logging()

app = FastAPI(title="Strength Metrics API")


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}


# Include routers
app.include_router(health.router)
app.include_router(strength.router)


if __name__ == "__main__":
    import uvicorn

    from app.config import get_settings

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.app_host, port=settings.app_port, reload=settings.debug)
