"""
FastAPI App Factory - Creates and configures the app
"""

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""

    app = FastAPI(
        title="Rotator Control API",
        description="HTTP front-end for the two-axis rotator driver",
        version="0.1.0",
    )

    @app.get("/", response_class=PlainTextResponse)
    def index() -> str:
        """Health check"""
        return "The server is running!"

    return app
