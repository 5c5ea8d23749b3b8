"""FastAPI application factory and configuration."""

from fastapi import FastAPI

from tt_class import __version__
from tt_class.api.routes import catalog, classify, configurations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="tt-class API",
        description="Time-trial vehicle classification calculator API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.include_router(catalog.router, prefix="/api/catalog", tags=["catalog"])
    app.include_router(classify.router, prefix="/api/classify", tags=["classify"])
    app.include_router(
        configurations.router, prefix="/api/configurations", tags=["configurations"]
    )

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Create app instance for uvicorn
app = create_app()
